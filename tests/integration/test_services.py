"""Service tests against the SQLite test database"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from sqlalchemy.orm import Session
from finance_gateway.infrastructure.database.models import Bank, Receipt
from finance_gateway.infrastructure.database.repositories import (
    BankRepository,
    CreditCardBillRepository,
    TransactionRepository,
)
from finance_gateway.services.projection import (
    BalanceAggregator,
    CreditCardBillResolver,
    ProjectedBalanceService,
    TransactionWindowSelector,
)


def build_service(db: Session) -> ProjectedBalanceService:
    transactions = TransactionRepository(db)
    return ProjectedBalanceService(
        aggregator=BalanceAggregator(BankRepository(db)),
        window_selector=TransactionWindowSelector(transactions),
        bill_resolver=CreditCardBillResolver(CreditCardBillRepository(db), transactions),
    )


def test_total_balance_sums_banks(db, factory, user):
    factory.bank("1000.10")
    factory.bank("-200.05", name="Overdrawn")

    assert BalanceAggregator(BankRepository(db)).total_balance(user.id) == Decimal("800.05")


def test_total_balance_zero_without_banks(db, user):
    assert BalanceAggregator(BankRepository(db)).total_balance(user.id) == Decimal("0")


def test_total_balance_ignores_other_users(db, factory, user, other_user):
    factory.bank("100.00")
    db.add(Bank(user_id=other_user.id, name="Theirs", balance=Decimal("999.00")))
    db.commit()

    assert BalanceAggregator(BankRepository(db)).total_balance(user.id) == Decimal("100.00")


def test_window_splits_past_and_future(db, factory, user, now):
    factory.receipt("3000.00", datetime(2026, 3, 5))
    factory.receipt("500.00", datetime(2026, 3, 25))
    factory.expense("40.00", datetime(2026, 3, 15))  # midnight today: past at noon
    factory.expense("60.00", now)  # exactly now: future
    factory.receipt("999.00", datetime(2026, 2, 28, 23, 59))  # previous month
    factory.receipt("999.00", datetime(2026, 4, 1))  # next month

    window = TransactionWindowSelector(TransactionRepository(db)).select(user.id, now)

    assert window.past_receipts_total == Decimal("3000.00")
    assert window.future_receipts_total == Decimal("500.00")
    assert window.past_expenses_total == Decimal("40.00")
    assert window.future_expenses_total == Decimal("60.00")
    assert [line.amount for line in window.monthly_expenses] == [Decimal("40.00"), Decimal("60.00")]


def test_window_excludes_credit_expenses(db, factory, user, now):
    factory.expense("75.00", now + timedelta(days=2), payment_method="CREDIT")
    factory.expense("25.00", now + timedelta(days=2), payment_method="PIX")

    window = TransactionWindowSelector(TransactionRepository(db)).select(user.id, now)

    assert window.future_expenses_total == Decimal("25.00")
    assert all(line.payment_method != "CREDIT" for line in window.monthly_expenses)


def test_window_uses_payment_date_for_expenses(db, factory, user, now):
    """An expense bought last month but paid this month belongs to this month"""
    factory.expense("120.00", datetime(2026, 2, 20), payment_date=datetime(2026, 3, 28))
    factory.expense("80.00", datetime(2026, 3, 20), payment_date=datetime(2026, 4, 2))

    window = TransactionWindowSelector(TransactionRepository(db)).select(user.id, now)

    assert window.future_expenses_total == Decimal("120.00")
    assert window.future_expenses[0].date == datetime(2026, 3, 28)


def test_window_lines_carry_category_and_bank(db, factory, user, now):
    category = factory.category("Salary", "#00ff00")
    bank = factory.bank("0.00", name="Nubank")
    factory.receipt("500.00", now + timedelta(days=1), category_id=category.id, bank_id=bank.id)
    factory.receipt("10.00", now + timedelta(days=2))

    window = TransactionWindowSelector(TransactionRepository(db)).select(user.id, now)
    labelled, bare = window.future_receipts

    assert labelled.category.name == "Salary"
    assert labelled.category.color == "#00ff00"
    assert labelled.bank.name == "Nubank"
    assert bare.category is None
    assert bare.bank is None


def test_resolver_sums_expenses_in_accrual_window(db, factory, user, now):
    factory.bill(date(2026, 2, 10), date(2026, 2, 20), description="February")
    factory.bill(date(2026, 3, 10), date(2026, 3, 20), total="150.00", description="March")
    factory.expense("999.00", datetime(2026, 2, 10, 18, 0), payment_method="CREDIT")  # February bill
    factory.expense("100.00", datetime(2026, 2, 11, 9, 0), payment_method="CREDIT")
    factory.expense("50.00", datetime(2026, 3, 10, 22, 0), payment_method="CREDIT")
    factory.expense("70.00", datetime(2026, 3, 11), payment_method="CREDIT")  # next bill

    summary = CreditCardBillResolver(CreditCardBillRepository(db), TransactionRepository(db)).resolve(user.id, now)

    assert summary.bill.description == "March"
    assert summary.credit_card_total == Decimal("150.00")
    assert summary.unpaid_total == Decimal("150.00")
    assert summary.paid_total == Decimal("0")


def test_resolver_paid_bill(db, factory, user, now):
    factory.bill(date(2026, 3, 10), date(2026, 3, 20), is_paid=True)
    factory.expense("150.00", datetime(2026, 3, 1), payment_method="CREDIT")

    summary = CreditCardBillResolver(CreditCardBillRepository(db), TransactionRepository(db)).resolve(user.id, now)

    assert summary.paid_total == Decimal("150.00")
    assert summary.unpaid_total == Decimal("0")


def test_resolver_counts_only_the_bill_cards_purchases(db, factory, user, now):
    card_a = factory.bank("0.00", name="Card A")
    card_b = factory.bank("0.00", name="Card B")
    factory.bill(date(2026, 3, 10), date(2026, 3, 20), is_paid=True, bank_id=card_a.id, description="A March")
    factory.bill(date(2026, 3, 25), date(2026, 4, 5), bank_id=card_b.id, description="B March")
    factory.expense("100.00", datetime(2026, 3, 1), payment_method="CREDIT", bank_id=card_a.id)
    factory.expense("300.00", datetime(2026, 3, 5), payment_method="CREDIT", bank_id=card_b.id)

    summary = CreditCardBillResolver(CreditCardBillRepository(db), TransactionRepository(db)).resolve(user.id, now)

    assert summary.bill.description == "A March"
    assert summary.paid_total == Decimal("100.00")
    assert summary.unpaid_total == Decimal("0")
    assert [line.bank.name for line in summary.expenses] == ["Card A"]


def test_resolver_bill_without_bank_ignores_card_purchases(db, factory, user, now):
    card = factory.bank("0.00", name="Card")
    factory.bill(date(2026, 3, 10), date(2026, 3, 20))
    factory.expense("20.00", datetime(2026, 3, 2), payment_method="CREDIT")
    factory.expense("55.00", datetime(2026, 3, 2), payment_method="CREDIT", bank_id=card.id)

    summary = CreditCardBillResolver(CreditCardBillRepository(db), TransactionRepository(db)).resolve(user.id, now)

    assert summary.credit_card_total == Decimal("20.00")


def test_resolver_without_bill_falls_back_to_month(db, factory, user, now):
    factory.bill(date(2026, 1, 10), date(2026, 1, 20))  # long gone
    factory.expense("30.00", datetime(2026, 3, 2), payment_method="CREDIT")
    factory.expense("45.00", datetime(2026, 2, 27), payment_method="CREDIT")

    summary = CreditCardBillResolver(CreditCardBillRepository(db), TransactionRepository(db)).resolve(user.id, now)

    assert summary.bill is None
    assert summary.credit_card_total == Decimal("30.00")
    assert summary.unpaid_total == Decimal("30.00")


def test_concrete_scenario_end_to_end(db, factory, user, now):
    factory.bank("1000.00")
    factory.receipt("500.00", now + timedelta(days=5))
    factory.expense("200.00", now + timedelta(days=3), payment_method="DEBIT")
    factory.bill(date(2026, 3, 10), date(2026, 3, 20), total="150.00")
    factory.expense("150.00", datetime(2026, 3, 3), payment_method="CREDIT")

    projection = build_service(db).get_projected_balance(user.id, now)

    assert [p.balance for p in projection.phases] == [
        Decimal("1000.00"),
        Decimal("1500.00"),
        Decimal("1300.00"),
        Decimal("1150.00"),
    ]


def test_no_bill_keeps_phase4_equal_to_phase3(db, factory, user, now):
    factory.bank("400.00")
    factory.expense("90.00", now + timedelta(days=1), payment_method="CREDIT")

    projection = build_service(db).get_projected_balance(user.id, now)

    assert projection.credit.bill is None
    assert projection.phases[3].balance == projection.phases[2].balance == Decimal("400.00")
    assert projection.credit.unpaid_total == Decimal("90.00")


def test_other_users_data_is_invisible(db, factory, user, other_user, now):
    db.add(Receipt(user_id=other_user.id, description="Not mine", amount=Decimal("50.00"), date=now + timedelta(days=1)))
    db.commit()

    projection = build_service(db).get_projected_balance(user.id, now)

    assert projection.window.future_receipts == []
    assert projection.projected_balance == Decimal("0")
