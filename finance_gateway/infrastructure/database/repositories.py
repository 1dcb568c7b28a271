"""Data access layer for finance entities"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from finance_gateway.infrastructure.database.models import (
    Bank,
    Category,
    CreditCardBill as DBCreditCardBill,
    Expense,
    Receipt,
    User,
)
from finance_gateway.domain.models import CREDIT, BankRef, CategoryRef, CreditCardBill, TransactionLine


def _category_ref(name: Optional[str], color: Optional[str]) -> Optional[CategoryRef]:
    return CategoryRef(name=name, color=color) if name is not None else None


def _bank_ref(name: Optional[str]) -> Optional[BankRef]:
    return BankRef(name=name) if name is not None else None


class UserRepository:
    """Repository for account holders"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()


class BankRepository:
    """Repository for bank accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_balances(self, user_id: str) -> List[Decimal]:
        """Current balance of each of the user's banks"""
        rows = self.db.query(Bank.balance).filter(Bank.user_id == user_id).all()
        return [row.balance for row in rows]


class TransactionRepository:
    """Repository for receipts and expenses, joined with category and bank names"""

    def __init__(self, db: Session):
        self.db = db

    def get_receipts_between(self, user_id: str, start: datetime, end: datetime) -> List[TransactionLine]:
        """Receipts dated within [start, end]"""
        rows = (
            self.db.query(Receipt, Category.name, Category.color, Bank.name)
            .outerjoin(Category, Receipt.category_id == Category.id)
            .outerjoin(Bank, Receipt.bank_id == Bank.id)
            .filter(Receipt.user_id == user_id)
            .filter(Receipt.date >= start, Receipt.date <= end)
            .order_by(Receipt.date.asc(), Receipt.id.asc())
            .all()
        )
        return [
            TransactionLine(
                id=receipt.id,
                description=receipt.description,
                amount=receipt.amount,
                date=receipt.date,
                category=_category_ref(category_name, category_color),
                bank=_bank_ref(bank_name),
            )
            for receipt, category_name, category_color, bank_name in rows
        ]

    def get_cash_expenses_between(self, user_id: str, start: datetime, end: datetime) -> List[TransactionLine]:
        """
        Non-credit expenses whose effective date falls within [start, end].

        The effective date is the payment date when one is set, otherwise the
        expense date.
        """
        effective_date = func.coalesce(Expense.payment_date, Expense.date)
        rows = (
            self.db.query(Expense, Category.name, Category.color, Bank.name)
            .outerjoin(Category, Expense.category_id == Category.id)
            .outerjoin(Bank, Expense.bank_id == Bank.id)
            .filter(Expense.user_id == user_id)
            .filter(Expense.payment_method != CREDIT)
            .filter(effective_date >= start, effective_date <= end)
            .order_by(effective_date.asc(), Expense.id.asc())
            .all()
        )
        return [
            self._expense_line(expense, expense.payment_date or expense.date, category_name, category_color, bank_name)
            for expense, category_name, category_color, bank_name in rows
        ]

    def get_credit_expenses_between(self, user_id: str, start: datetime, end: datetime) -> List[TransactionLine]:
        """Credit card purchases dated within [start, end], on any card"""
        return self._credit_lines(self._credit_query(user_id, start, end))

    def get_card_expenses_between(
        self, user_id: str, bank_id: Optional[str], start: datetime, end: datetime
    ) -> List[TransactionLine]:
        """Credit card purchases on one bank's card dated within [start, end]"""
        query = self._credit_query(user_id, start, end)
        if bank_id is None:
            query = query.filter(Expense.bank_id.is_(None))
        else:
            query = query.filter(Expense.bank_id == bank_id)
        return self._credit_lines(query)

    def _credit_query(self, user_id: str, start: datetime, end: datetime):
        return (
            self.db.query(Expense, Category.name, Category.color, Bank.name)
            .outerjoin(Category, Expense.category_id == Category.id)
            .outerjoin(Bank, Expense.bank_id == Bank.id)
            .filter(Expense.user_id == user_id)
            .filter(Expense.payment_method == CREDIT)
            .filter(Expense.date >= start, Expense.date <= end)
        )

    def _credit_lines(self, query) -> List[TransactionLine]:
        rows = query.order_by(Expense.date.asc(), Expense.id.asc()).all()
        return [
            self._expense_line(expense, expense.date, category_name, category_color, bank_name)
            for expense, category_name, category_color, bank_name in rows
        ]

    @staticmethod
    def _expense_line(expense, when, category_name, category_color, bank_name) -> TransactionLine:
        return TransactionLine(
            id=expense.id,
            description=expense.description,
            amount=expense.amount,
            date=when,
            category=_category_ref(category_name, category_color),
            bank=_bank_ref(bank_name),
            payment_method=expense.payment_method,
        )


class CreditCardBillRepository:
    """Repository for credit card bills"""

    def __init__(self, db: Session):
        self.db = db

    def get_bills_by_user(self, user_id: str) -> List[CreditCardBill]:
        """All of the user's bills, oldest closing date first"""
        rows = (
            self.db.query(DBCreditCardBill, Bank.name)
            .outerjoin(Bank, DBCreditCardBill.bank_id == Bank.id)
            .filter(DBCreditCardBill.user_id == user_id)
            .order_by(DBCreditCardBill.closing_date.asc())
            .all()
        )
        return [
            CreditCardBill(
                id=bill.id,
                description=bill.description,
                closing_date=bill.closing_date,
                due_date=bill.due_date,
                total_amount=bill.total_amount,
                is_paid=bill.is_paid,
                bank_id=bill.bank_id,
                best_purchase_date=bill.best_purchase_date,
                bank=_bank_ref(bank_name),
            )
            for bill, bank_name in rows
        ]
