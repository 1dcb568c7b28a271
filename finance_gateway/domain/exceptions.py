"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AuthenticationError(DomainException):
    """Bearer token is missing, malformed, expired, or names an unknown user"""

    pass
