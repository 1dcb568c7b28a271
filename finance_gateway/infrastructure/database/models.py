"""SQLAlchemy ORM models for the finance schema"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Date, Numeric, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# Money columns: 12 digits, 2 decimal places, read back as Decimal
Money = Numeric(12, 2)


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Account holder; every other record belongs to one"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class Bank(Base):
    """Bank account with its running cash balance"""

    __tablename__ = "banks"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False, default="CHECKING")
    balance = Column(Money, nullable=False, default=0)
    is_primary = Column(Boolean, nullable=False, default=False)
    color = Column(Text, nullable=True)
    icon = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class Category(Base):
    """Two-level category used to label receipts and expenses"""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    color = Column(Text, nullable=True)
    parent_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)

    parent = relationship("Category", remote_side=[id])


class Receipt(Base):
    """Income event"""

    __tablename__ = "receipts"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Money, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    bank_id = Column(String(36), ForeignKey("banks.id", ondelete="SET NULL"), nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurring_type = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class Expense(Base):
    """Outflow; payment_method CREDIT charges it to a credit card bill"""

    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Money, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    payment_date = Column(DateTime, nullable=True)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    bank_id = Column(String(36), ForeignKey("banks.id", ondelete="SET NULL"), nullable=True)
    payment_method = Column(Text, nullable=False, default="DEBIT")
    is_fixed = Column(Boolean, nullable=False, default=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class CreditCardBill(Base):
    """One billing cycle of a credit card"""

    __tablename__ = "credit_card_bills"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    bank_id = Column(String(36), ForeignKey("banks.id", ondelete="SET NULL"), nullable=True)
    description = Column(Text, nullable=False)
    closing_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    best_purchase_date = Column(Date, nullable=True)
    total_amount = Column(Money, nullable=False, default=0)
    is_paid = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
