"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from finance_gateway.domain.models import CreditCardBill, Phase, ProjectedBalance, TransactionLine


class CamelModel(BaseModel):
    """Serialised with camelCase keys, populated by field name"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategorySchema(CamelModel):
    name: str
    color: Optional[str] = None


class BankNameSchema(CamelModel):
    name: str


class TransactionSchema(CamelModel):
    """Receipt or expense line shown in the breakdown lists"""

    id: str
    description: str
    amount: Decimal
    date: datetime
    category: Optional[CategorySchema] = None
    bank: Optional[BankNameSchema] = None
    payment_method: Optional[str] = None

    @classmethod
    def from_line(cls, line: TransactionLine) -> "TransactionSchema":
        return cls(
            id=line.id,
            description=line.description,
            amount=line.amount,
            date=line.date,
            category=CategorySchema(name=line.category.name, color=line.category.color) if line.category else None,
            bank=BankNameSchema(name=line.bank.name) if line.bank else None,
            payment_method=line.payment_method,
        )


class CreditCardBillSchema(CamelModel):
    """Summary of the current credit card bill"""

    id: str
    description: str
    closing_date: date
    due_date: date
    best_purchase_date: Optional[date] = None
    total_amount: Decimal
    is_paid: bool
    bank: Optional[BankNameSchema] = None

    @classmethod
    def from_bill(cls, bill: CreditCardBill) -> "CreditCardBillSchema":
        return cls(
            id=bill.id,
            description=bill.description,
            closing_date=bill.closing_date,
            due_date=bill.due_date,
            best_purchase_date=bill.best_purchase_date,
            total_amount=bill.total_amount,
            is_paid=bill.is_paid,
            bank=BankNameSchema(name=bill.bank.name) if bill.bank else None,
        )


class PhaseSchema(CamelModel):
    name: str
    description: str
    balance: Decimal
    date: datetime

    @classmethod
    def from_phase(cls, phase: Phase) -> "PhaseSchema":
        return cls(name=phase.name, description=phase.description, balance=phase.balance, date=phase.date)


class PhasesSchema(CamelModel):
    phase1: PhaseSchema
    phase2: PhaseSchema
    phase3: PhaseSchema
    phase4: PhaseSchema


class CountsSchema(CamelModel):
    future_receipts: int
    future_expenses: int
    past_receipts: int
    past_expenses: int


class ProjectedBalanceResponse(CamelModel):
    """Response for GET /dashboard/projected-balance"""

    current_balance: Decimal
    total_receipts: Decimal
    total_expenses: Decimal
    credit_card_total: Decimal
    paid_credit_card_total: Decimal
    unpaid_credit_card_total: Decimal
    monthly_balance: Decimal
    future_receipts_total: Decimal
    future_expenses_total: Decimal
    projected_balance: Decimal
    counts: CountsSchema
    phases: PhasesSchema
    credit_card_bill: Optional[CreditCardBillSchema] = None
    future_receipts: List[TransactionSchema]
    future_expenses: List[TransactionSchema]
    monthly_expenses: List[TransactionSchema]
    credit_card_expenses_details: List[TransactionSchema]

    @classmethod
    def from_projection(cls, projection: ProjectedBalance) -> "ProjectedBalanceResponse":
        window = projection.window
        credit = projection.credit
        phase1, phase2, phase3, phase4 = (PhaseSchema.from_phase(p) for p in projection.phases)

        return cls(
            current_balance=projection.current_balance,
            total_receipts=projection.total_receipts,
            total_expenses=projection.total_expenses,
            credit_card_total=credit.credit_card_total,
            paid_credit_card_total=credit.paid_total,
            unpaid_credit_card_total=credit.unpaid_total,
            monthly_balance=projection.monthly_balance,
            future_receipts_total=projection.future_receipts_total,
            future_expenses_total=projection.future_expenses_total,
            projected_balance=projection.projected_balance,
            counts=CountsSchema(
                future_receipts=len(window.future_receipts),
                future_expenses=len(window.future_expenses),
                past_receipts=len(window.past_receipts),
                past_expenses=len(window.past_expenses),
            ),
            phases=PhasesSchema(phase1=phase1, phase2=phase2, phase3=phase3, phase4=phase4),
            credit_card_bill=CreditCardBillSchema.from_bill(credit.bill) if credit.bill else None,
            future_receipts=[TransactionSchema.from_line(line) for line in window.future_receipts],
            future_expenses=[TransactionSchema.from_line(line) for line in window.future_expenses],
            monthly_expenses=[TransactionSchema.from_line(line) for line in window.monthly_expenses],
            credit_card_expenses_details=[TransactionSchema.from_line(line) for line in credit.expenses],
        )


class TotalBalanceResponse(CamelModel):
    """Response for GET /banks/total-balance"""

    total: Decimal


class RefreshRequest(CamelModel):
    """Request body for POST /auth/refresh"""

    refresh_token: str = Field(..., min_length=1, description="Refresh token issued at login")


class TokenResponse(CamelModel):
    """Response for POST /auth/refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
