"""GET /dashboard/projected-balance - Four phase projected balance"""

import time
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finance_gateway.api.v1.schemas import ProjectedBalanceResponse
from finance_gateway.api.dependencies import get_current_user_id, get_now, get_projection_service, get_request_id
from finance_gateway.infrastructure.database.session import get_db
from finance_gateway.services.projection import ProjectedBalanceService
from finance_gateway.infrastructure.observability.metrics import record_projection, projection_failure_counter
from finance_gateway.infrastructure.observability.logging import log_projection

router = APIRouter()


@router.get("/dashboard/projected-balance", response_model=ProjectedBalanceResponse)
def get_projected_balance(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
    service: ProjectedBalanceService = Depends(get_projection_service),
):
    """
    Project the user's balance through the rest of the month.

    Flow:
    1. Sum current bank balances
    2. Load this month's receipts and non-credit expenses, split at "now"
    3. Resolve the current credit card bill and its purchases
    4. Fold into four phases and return them with the breakdown lists
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        projection = service.get_projected_balance(user_id, now)
    except SQLAlchemyError as e:
        projection_failure_counter.inc()
        db.rollback()
        logging.error(f"Projection query failed: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    has_bill = projection.credit.bill is not None
    duration_ms = (time.time() - start_time) * 1000
    record_projection(has_bill, projection.projected_balance < 0)
    log_projection(request_id, user_id, projection.projected_balance, has_bill, duration_ms)

    return ProjectedBalanceResponse.from_projection(projection)
