"""Projected balance - the four phase fold behind the dashboard"""

from datetime import datetime
from decimal import Decimal
from typing import List, Tuple

from finance_gateway.domain.models import (
    CreditCardSummary,
    Phase,
    ProjectedBalance,
    TransactionLine,
    TransactionWindow,
)
from finance_gateway.utils.date_utils import day_start


def split_by_instant(lines: List[TransactionLine], now: datetime) -> Tuple[List[TransactionLine], List[TransactionLine]]:
    """
    Partition transactions into (past, future) around ``now``.

    A transaction dated exactly at ``now`` is future.
    """
    past = [line for line in lines if line.date < now]
    future = [line for line in lines if line.date >= now]
    return past, future


def project_balance(
    current_balance: Decimal,
    window: TransactionWindow,
    credit: CreditCardSummary,
    now: datetime,
) -> ProjectedBalance:
    """
    Fold bank balances, pending transactions and the current bill into phases.

    Phases:
    1. Current balance: stored bank balances, trusted as-is
    2. After receipts: + receipts still expected this month
    3. After monthly expenses: - non-credit expenses still due this month
    4. After credit card bill: - unpaid part of the current bill

    Past transactions are assumed to be reflected in the bank balances already,
    so only future ones move the projection. Without a current bill phase 4
    repeats phase 3.

    Example:
        balance 1000.00, receipt 500.00, expense 200.00, unpaid bill 150.00
        → 1000.00, 1500.00, 1300.00, 1150.00
    """
    future_receipts_total = window.future_receipts_total
    future_expenses_total = window.future_expenses_total

    phase1 = current_balance
    phase2 = phase1 + future_receipts_total
    phase3 = phase2 - future_expenses_total
    phase4 = phase3 - credit.unpaid_total if credit.bill is not None else phase3

    if credit.bill is not None:
        bill_description = f"Once the credit card bill is paid (due {credit.bill.due_date.isoformat()})"
        bill_date = day_start(credit.bill.due_date)
    else:
        bill_description = "Once the credit card bill is paid"
        bill_date = window.month_end

    phases = [
        Phase(
            name="Current balance",
            description="What you have today",
            balance=phase1,
            date=day_start(now.date()),
        ),
        Phase(
            name="After receipts",
            description="Once this month's remaining receipts come in",
            balance=phase2,
            date=window.month_end,
        ),
        Phase(
            name="After monthly expenses",
            description="Once this month's remaining expenses are paid (credit card excluded)",
            balance=phase3,
            date=window.month_end,
        ),
        Phase(
            name="After credit card bill",
            description=bill_description,
            balance=phase4,
            date=bill_date,
        ),
    ]

    # Full-month figures, independent of the phase chain
    total_receipts = window.past_receipts_total + future_receipts_total
    total_expenses = window.past_expenses_total + future_expenses_total
    monthly_balance = total_receipts - total_expenses - credit.credit_card_total

    return ProjectedBalance(
        current_balance=current_balance,
        total_receipts=total_receipts,
        total_expenses=total_expenses,
        future_receipts_total=future_receipts_total,
        future_expenses_total=future_expenses_total,
        monthly_balance=monthly_balance,
        phases=phases,
        window=window,
        credit=credit,
    )
