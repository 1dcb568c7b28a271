"""POST /auth/refresh - Exchange a refresh token for a new token pair"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_gateway.api.v1.schemas import RefreshRequest, TokenResponse
from finance_gateway.api.dependencies import unauthorized
from finance_gateway.domain.exceptions import AuthenticationError
from finance_gateway.infrastructure.database.repositories import UserRepository
from finance_gateway.infrastructure.database.session import get_db
from finance_gateway.security import create_token_pair, decode_refresh_token

router = APIRouter()


@router.post("/auth/refresh", response_model=TokenResponse)
def refresh_tokens(request_body: RefreshRequest, db: Session = Depends(get_db)):
    try:
        payload = decode_refresh_token(request_body.refresh_token)
    except AuthenticationError as e:
        logging.info(f"Rejected refresh token: {e}")
        raise unauthorized("Invalid refresh token")

    user = UserRepository(db).get_by_id(payload["sub"])
    if user is None:
        raise unauthorized("Invalid refresh token")

    return TokenResponse(**create_token_pair(user.id, user.email))
