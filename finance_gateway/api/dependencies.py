"""Dependency injection for FastAPI endpoints"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from finance_gateway.config import settings
from finance_gateway.domain.exceptions import AuthenticationError
from finance_gateway.infrastructure.database.repositories import (
    BankRepository,
    CreditCardBillRepository,
    TransactionRepository,
    UserRepository,
)
from finance_gateway.infrastructure.database.session import get_db
from finance_gateway.security import decode_access_token
from finance_gateway.utils.date_utils import local_now
from finance_gateway.services.projection import (
    BalanceAggregator,
    CreditCardBillResolver,
    ProjectedBalanceService,
    TransactionWindowSelector,
)

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> str:
    """Resolve the bearer access token to the id of an existing user"""
    if credentials is None:
        raise unauthorized()

    try:
        payload = decode_access_token(credentials.credentials)
        user_id = payload["sub"]
        if UserRepository(db).get_by_id(user_id) is None:
            raise AuthenticationError("Unknown user")
    except AuthenticationError as e:
        logging.info(f"Rejected bearer token: {e}")
        raise unauthorized("Invalid or expired token")

    return user_id


def get_balance_aggregator(db: Session = Depends(get_db)) -> BalanceAggregator:
    return BalanceAggregator(BankRepository(db))


def get_bill_resolver(db: Session = Depends(get_db)) -> CreditCardBillResolver:
    return CreditCardBillResolver(
        CreditCardBillRepository(db),
        TransactionRepository(db),
        fallback_days=settings.bill_cycle_fallback_days,
    )


def get_projection_service(
    db: Session = Depends(get_db),
    aggregator: BalanceAggregator = Depends(get_balance_aggregator),
    bill_resolver: CreditCardBillResolver = Depends(get_bill_resolver),
) -> ProjectedBalanceService:
    """Wire the projection service onto the request's session"""
    return ProjectedBalanceService(
        aggregator=aggregator,
        window_selector=TransactionWindowSelector(TransactionRepository(db)),
        bill_resolver=bill_resolver,
    )


def get_now() -> datetime:
    """Request clock: wall-clock time in the configured zone, read once per request"""
    return local_now(settings.tzinfo)
