"""Credit card billing cycle rules"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from finance_gateway.domain.models import BillCycle, CreditCardBill, CreditCardSummary, TransactionLine, sum_amounts


def build_cycles(bills: List[CreditCardBill], fallback_days: int = 30) -> List[BillCycle]:
    """
    Attach a cycle window to every bill.

    A bill's predecessor is the bill of the same bank with the latest closing
    date strictly before its own. The cycle starts on the predecessor's closing
    date; purchases accrue from the day after it. Without a predecessor both
    start ``fallback_days`` before the bill's own closing date.
    """
    by_bank: Dict[Optional[str], List[CreditCardBill]] = defaultdict(list)
    for bill in bills:
        by_bank[bill.bank_id].append(bill)

    cycles = []
    for bank_bills in by_bank.values():
        bank_bills.sort(key=lambda b: (b.closing_date, b.id))
        for bill in bank_bills:
            previous = [b for b in bank_bills if b.closing_date < bill.closing_date]
            if previous:
                prev_closing = previous[-1].closing_date
                cycles.append(
                    BillCycle(
                        bill=bill,
                        cycle_start=prev_closing,
                        accrual_start=prev_closing + timedelta(days=1),
                    )
                )
            else:
                start = bill.closing_date - timedelta(days=fallback_days)
                cycles.append(BillCycle(bill=bill, cycle_start=start, accrual_start=start))

    return cycles


def select_current_bill(
    bills: List[CreditCardBill],
    today: date,
    fallback_days: int = 30,
) -> Optional[BillCycle]:
    """
    Pick the bill whose cycle contains ``today``.

    Rule: ``cycle_start <= today <= due_date`` (both inclusive). When several
    bills qualify the one due soonest wins, then the earlier closing date, then
    the lower id. Returns None when no bill qualifies.
    """
    candidates = [
        cycle
        for cycle in build_cycles(bills, fallback_days)
        if cycle.cycle_start <= today <= cycle.bill.due_date
    ]
    if not candidates:
        return None

    return min(candidates, key=lambda c: (c.bill.due_date, c.bill.closing_date, c.bill.id))


def split_paid(bill: Optional[CreditCardBill], expenses: List[TransactionLine]) -> Tuple[Decimal, Decimal]:
    """
    Return (paid_total, unpaid_total) for the expenses charged to ``bill``.

    Payment is tracked on the bill only: a paid bill settles every expense on
    it. Without a bill nothing has been settled yet.
    """
    total = sum_amounts(expenses)
    if bill is not None and bill.is_paid:
        return total, Decimal("0")
    return Decimal("0"), total


def summarize_credit(bill: Optional[CreditCardBill], expenses: List[TransactionLine]) -> CreditCardSummary:
    paid, unpaid = split_paid(bill, expenses)
    return CreditCardSummary(bill=bill, expenses=expenses, paid_total=paid, unpaid_total=unpaid)
