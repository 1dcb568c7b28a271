"""JWT access/refresh token issuance and verification"""

import time
from typing import Any, Dict

import jwt

from finance_gateway.config import settings
from finance_gateway.domain.exceptions import AuthenticationError

ACCESS = "access"
REFRESH = "refresh"


def _encode(user_id: str, email: str, token_type: str, secret: str, ttl_seconds: int) -> str:
    now = int(time.time())
    payload = {
        "sub": user_id,
        "email": email,
        "type": token_type,
        "iat": now,
        "exp": now + ttl_seconds,
    }
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def _decode(token: str, secret: str, token_type: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {e}") from e

    if payload.get("type") != token_type:
        raise AuthenticationError(f"Expected {token_type} token")

    return payload


def create_access_token(user_id: str, email: str) -> str:
    return _encode(user_id, email, ACCESS, settings.jwt_secret, settings.access_token_expires_minutes * 60)


def create_refresh_token(user_id: str, email: str) -> str:
    return _encode(
        user_id, email, REFRESH, settings.jwt_refresh_secret, settings.refresh_token_expires_days * 86400
    )


def create_token_pair(user_id: str, email: str) -> Dict[str, str]:
    return {
        "access_token": create_access_token(user_id, email),
        "refresh_token": create_refresh_token(user_id, email),
    }


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify an access token and return its claims.

    Raises:
        AuthenticationError: On bad signature, expiry, or a refresh token
    """
    return _decode(token, settings.jwt_secret, ACCESS)


def decode_refresh_token(token: str) -> Dict[str, Any]:
    return _decode(token, settings.jwt_refresh_secret, REFRESH)
