"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

CREDIT = "CREDIT"


@dataclass
class CategoryRef:
    """Category fields needed for display"""

    name: str
    color: Optional[str] = None


@dataclass
class BankRef:
    """Bank fields needed for display"""

    name: str


@dataclass
class TransactionLine:
    """Receipt or expense, denormalised with its category and bank names"""

    id: str
    description: str
    amount: Decimal
    date: datetime  # effective date: payment date for expenses when set
    category: Optional[CategoryRef] = None
    bank: Optional[BankRef] = None
    payment_method: Optional[str] = None  # None for receipts


@dataclass
class CreditCardBill:
    """One credit card billing cycle"""

    id: str
    description: str
    closing_date: date
    due_date: date
    total_amount: Decimal
    is_paid: bool
    bank_id: Optional[str] = None
    best_purchase_date: Optional[date] = None
    bank: Optional[BankRef] = None


@dataclass
class BillCycle:
    """A bill together with the window its purchases accrue in"""

    bill: CreditCardBill
    cycle_start: date  # first day the bill can be "current"
    accrual_start: date  # first purchase day counted on the bill


@dataclass
class TransactionWindow:
    """Current month's receipts and non-credit expenses split around "now" """

    month_start: datetime
    month_end: datetime
    past_receipts: List[TransactionLine] = field(default_factory=list)
    future_receipts: List[TransactionLine] = field(default_factory=list)
    past_expenses: List[TransactionLine] = field(default_factory=list)
    future_expenses: List[TransactionLine] = field(default_factory=list)

    @property
    def past_receipts_total(self) -> Decimal:
        return sum_amounts(self.past_receipts)

    @property
    def future_receipts_total(self) -> Decimal:
        return sum_amounts(self.future_receipts)

    @property
    def past_expenses_total(self) -> Decimal:
        return sum_amounts(self.past_expenses)

    @property
    def future_expenses_total(self) -> Decimal:
        return sum_amounts(self.future_expenses)

    @property
    def monthly_expenses(self) -> List[TransactionLine]:
        return sorted(self.past_expenses + self.future_expenses, key=lambda line: line.date)


@dataclass
class CreditCardSummary:
    """Current bill (if any) and the credit purchases charged to it"""

    bill: Optional[CreditCardBill]
    expenses: List[TransactionLine] = field(default_factory=list)
    paid_total: Decimal = Decimal("0")
    unpaid_total: Decimal = Decimal("0")

    @property
    def credit_card_total(self) -> Decimal:
        return self.paid_total + self.unpaid_total


@dataclass
class Phase:
    """One snapshot in the projected balance trajectory"""

    name: str
    description: str
    balance: Decimal
    date: datetime


@dataclass
class ProjectedBalance:
    """Output of the phase projection plus the inputs it was folded from"""

    current_balance: Decimal
    total_receipts: Decimal
    total_expenses: Decimal
    future_receipts_total: Decimal
    future_expenses_total: Decimal
    monthly_balance: Decimal
    phases: List[Phase]
    window: TransactionWindow
    credit: CreditCardSummary

    @property
    def projected_balance(self) -> Decimal:
        return self.phases[-1].balance


def sum_amounts(lines: List[TransactionLine]) -> Decimal:
    return sum((line.amount for line in lines), Decimal("0"))
