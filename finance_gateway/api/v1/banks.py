"""GET /banks/total-balance - Sum of the user's bank balances"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError

from finance_gateway.api.v1.schemas import TotalBalanceResponse
from finance_gateway.api.dependencies import get_balance_aggregator, get_current_user_id, get_request_id
from finance_gateway.services.projection import BalanceAggregator

router = APIRouter()


@router.get("/banks/total-balance", response_model=TotalBalanceResponse)
def get_total_balance(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    aggregator: BalanceAggregator = Depends(get_balance_aggregator),
):
    try:
        total = aggregator.total_balance(user_id)
    except SQLAlchemyError as e:
        logging.error(f"Balance query failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return TotalBalanceResponse(total=total)
