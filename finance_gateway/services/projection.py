"""Data gathering for the projected balance and the orchestrating service"""

import logging
from datetime import datetime
from decimal import Decimal

from finance_gateway.domain.billing import select_current_bill, summarize_credit
from finance_gateway.domain.models import CreditCardSummary, ProjectedBalance, TransactionWindow
from finance_gateway.domain.projection import project_balance, split_by_instant
from finance_gateway.infrastructure.database.repositories import (
    BankRepository,
    CreditCardBillRepository,
    TransactionRepository,
)
from finance_gateway.utils.date_utils import day_end, day_start, month_bounds


class BalanceAggregator:
    """Sums the stored balance of every bank a user owns"""

    def __init__(self, banks: BankRepository):
        self.banks = banks

    def total_balance(self, user_id: str) -> Decimal:
        return sum(self.banks.get_balances(user_id), Decimal("0"))


class TransactionWindowSelector:
    """Current month's receipts and non-credit expenses, split around "now" """

    def __init__(self, transactions: TransactionRepository):
        self.transactions = transactions

    def select(self, user_id: str, now: datetime) -> TransactionWindow:
        month_start, month_end = month_bounds(now)

        receipts = self.transactions.get_receipts_between(user_id, month_start, month_end)
        expenses = self.transactions.get_cash_expenses_between(user_id, month_start, month_end)

        past_receipts, future_receipts = split_by_instant(receipts, now)
        past_expenses, future_expenses = split_by_instant(expenses, now)

        return TransactionWindow(
            month_start=month_start,
            month_end=month_end,
            past_receipts=past_receipts,
            future_receipts=future_receipts,
            past_expenses=past_expenses,
            future_expenses=future_expenses,
        )


class CreditCardBillResolver:
    """Finds the bill of the running cycle and the purchases charged to it"""

    def __init__(
        self,
        bills: CreditCardBillRepository,
        transactions: TransactionRepository,
        fallback_days: int = 30,
    ):
        self.bills = bills
        self.transactions = transactions
        self.fallback_days = fallback_days

    def resolve(self, user_id: str, now: datetime) -> CreditCardSummary:
        """
        Resolve the current bill and sum its credit purchases.

        Only purchases on the bill's own card count toward it. With no current
        bill the purchases of the calendar month on every card are reported
        instead, all of them unpaid.
        """
        cycle = select_current_bill(self.bills.get_bills_by_user(user_id), now.date(), self.fallback_days)

        if cycle is None:
            start, end = month_bounds(now)
            expenses = self.transactions.get_credit_expenses_between(user_id, start, end)
            return summarize_credit(None, expenses)

        expenses = self.transactions.get_card_expenses_between(
            user_id,
            cycle.bill.bank_id,
            day_start(cycle.accrual_start),
            day_end(cycle.bill.closing_date),
        )
        return summarize_credit(cycle.bill, expenses)


class ProjectedBalanceService:
    """Runs the three collaborators for one user and instant, then folds the result"""

    def __init__(
        self,
        aggregator: BalanceAggregator,
        window_selector: TransactionWindowSelector,
        bill_resolver: CreditCardBillResolver,
    ):
        self.aggregator = aggregator
        self.window_selector = window_selector
        self.bill_resolver = bill_resolver

    def get_projected_balance(self, user_id: str, now: datetime) -> ProjectedBalance:
        """
        Build the projection as of ``now``.

        ``now`` is read once by the caller so every query agrees on "today".
        Any collaborator failure propagates; there is no partial result.
        """
        current_balance = self.aggregator.total_balance(user_id)
        window = self.window_selector.select(user_id, now)
        credit = self.bill_resolver.resolve(user_id, now)

        logging.debug(
            "Projection inputs gathered",
            extra={
                "user_id": user_id,
                "future_receipts": len(window.future_receipts),
                "future_expenses": len(window.future_expenses),
                "credit_expenses": len(credit.expenses),
                "has_bill": credit.bill is not None,
            },
        )

        return project_balance(current_balance, window, credit, now)
