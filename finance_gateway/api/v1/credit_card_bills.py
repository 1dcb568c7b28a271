"""GET /credit-card-bills/current-month - Bill of the running billing cycle"""

import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError

from finance_gateway.api.v1.schemas import CreditCardBillSchema
from finance_gateway.api.dependencies import get_bill_resolver, get_current_user_id, get_now, get_request_id
from finance_gateway.services.projection import CreditCardBillResolver

router = APIRouter()


@router.get("/credit-card-bills/current-month", response_model=Optional[CreditCardBillSchema])
def get_current_bill(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    now: datetime = Depends(get_now),
    resolver: CreditCardBillResolver = Depends(get_bill_resolver),
):
    """
    Returns:
        The current bill, or null when no bill's cycle contains today
    """
    try:
        summary = resolver.resolve(user_id, now)
    except SQLAlchemyError as e:
        logging.error(f"Bill query failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    if summary.bill is None:
        return None
    return CreditCardBillSchema.from_bill(summary.bill)
