"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date, datetime
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finance_gateway.api.main import create_app
from finance_gateway.api.dependencies import get_now
from finance_gateway.infrastructure.database import models
from finance_gateway.infrastructure.database.models import Base
from finance_gateway.infrastructure.database.session import get_db
from finance_gateway.security import create_access_token


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Mid-month, mid-day reference clock used by every test
NOW = datetime(2026, 3, 15, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a frozen clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    return TestClient(app)


class Factory:
    """Inserts records owned by one user"""

    def __init__(self, db: Session, user: models.User):
        self.db = db
        self.user = user

    def _add(self, record):
        self.db.add(record)
        self.db.commit()
        return record

    def category(self, name: str = "Food", color: str = "#ff0000") -> models.Category:
        return self._add(models.Category(user_id=self.user.id, name=name, color=color))

    def bank(self, balance: str = "0.00", name: str = "Main Bank", **kwargs) -> models.Bank:
        return self._add(models.Bank(user_id=self.user.id, name=name, balance=Decimal(balance), **kwargs))

    def receipt(self, amount: str, when: datetime, description: str = "Salary", **kwargs) -> models.Receipt:
        return self._add(
            models.Receipt(user_id=self.user.id, description=description, amount=Decimal(amount), date=when, **kwargs)
        )

    def expense(
        self,
        amount: str,
        when: datetime,
        description: str = "Groceries",
        payment_method: str = "DEBIT",
        **kwargs,
    ) -> models.Expense:
        return self._add(
            models.Expense(
                user_id=self.user.id,
                description=description,
                amount=Decimal(amount),
                date=when,
                payment_method=payment_method,
                **kwargs,
            )
        )

    def bill(
        self,
        closing: date,
        due: date,
        total: str = "0.00",
        is_paid: bool = False,
        description: str = "Card bill",
        **kwargs,
    ) -> models.CreditCardBill:
        return self._add(
            models.CreditCardBill(
                user_id=self.user.id,
                description=description,
                closing_date=closing,
                due_date=due,
                total_amount=Decimal(total),
                is_paid=is_paid,
                **kwargs,
            )
        )


@pytest.fixture
def user(db: Session) -> models.User:
    record = models.User(name="Ana", email="ana@example.com")
    db.add(record)
    db.commit()
    return record


@pytest.fixture
def other_user(db: Session) -> models.User:
    record = models.User(name="Bruno", email="bruno@example.com")
    db.add(record)
    db.commit()
    return record


@pytest.fixture
def factory(db: Session, user: models.User) -> Factory:
    return Factory(db, user)


@pytest.fixture
def auth_headers(user: models.User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}
