"""
Pytest configuration and fixtures for the finance ledger tests.

This module provides:
- In-memory SQLite database fixtures (shared connection via StaticPool)
- Unit-of-work factory and service fixtures
- Factory helpers for accounts, categories and transactions
- FastAPI test client with the unit-of-work factory overridden
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import StaticPool
from fastapi.testclient import TestClient

from finledger.main import app
from finledger.api.deps import get_uow_factory
from finledger.config.settings import Settings, set_settings, reset_settings
from finledger.repositories.sqlalchemy.database import (
    Base,
    create_ledger_engine,
    reset_database,
)
# Import ORM models to register them with Base before creating tables
from finledger.repositories.sqlalchemy import orm_models  # noqa: F401
from finledger.repositories.sqlalchemy import SqlAlchemyUnitOfWorkFactory
from finledger.services import (
    AccountService,
    BudgetService,
    CategoryService,
    ExpenseCreate,
    IncomeCreate,
    LedgerService,
    ReportService,
    SavingsGoalService,
    TransferService,
)
from finledger.domain.models import (
    Account,
    AccountType,
    Category,
    CategoryType,
    Transaction,
)

OWNER = "user-1"
OTHER_OWNER = "user-2"


# =============================================================================
# TIME HELPERS
# =============================================================================


def at(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    """Naive local datetime, the form the services compare against."""
    return datetime(year, month, day, hour, minute)


@pytest.fixture
def fixed_today() -> date:
    """Fixed 'today' for deterministic report windows."""
    return date(2024, 6, 15)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


def make_test_settings(**overrides) -> Settings:
    """Settings for tests: in-memory database and no back-off between retries."""
    values = dict(
        database_url="sqlite://",
        conflict_backoff_seconds=0.0,
        timezone="UTC",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()
    set_settings(make_test_settings())
    reset_database()

    engine = create_ledger_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    reset_database()
    reset_settings()


@pytest.fixture
def uow_factory(test_engine) -> SqlAlchemyUnitOfWorkFactory:
    """Unit-of-work factory bound to the test engine."""
    return SqlAlchemyUnitOfWorkFactory(test_engine)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(uow_factory) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(uow_factory)


@pytest.fixture
def transfer_service(uow_factory, ledger_service) -> TransferService:
    """Provide test TransferService."""
    return TransferService(uow_factory, ledger=ledger_service)


@pytest.fixture
def account_service(uow_factory) -> AccountService:
    return AccountService(uow_factory)


@pytest.fixture
def category_service(uow_factory) -> CategoryService:
    return CategoryService(uow_factory)


@pytest.fixture
def budget_service(uow_factory) -> BudgetService:
    return BudgetService(uow_factory)


@pytest.fixture
def report_service(uow_factory) -> ReportService:
    return ReportService(uow_factory)


@pytest.fixture
def savings_goal_service(uow_factory) -> SavingsGoalService:
    return SavingsGoalService(uow_factory)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(
        name: Optional[str] = None,
        opening_balance: str = "0",
        account_type: AccountType = AccountType.BANK_ACCOUNT,
        owner_id: str = OWNER,
    ) -> Account:
        if name is None:
            name = f"Account {uuid.uuid4().hex[:8]}"
        return account_service.create_account(
            owner_id,
            name=name,
            account_type=account_type,
            opening_balance=Decimal(opening_balance),
        )

    return _create_account


@pytest.fixture
def category_factory(category_service) -> Callable[..., Category]:
    """Factory for creating test categories."""

    def _create_category(
        name: Optional[str] = None,
        category_type: CategoryType = CategoryType.EXPENSE,
        color: Optional[str] = None,
        owner_id: str = OWNER,
    ) -> Category:
        if name is None:
            name = f"Category {uuid.uuid4().hex[:8]}"
        return category_service.create_category(owner_id, name, category_type, color=color)

    return _create_category


@pytest.fixture
def income_factory(ledger_service) -> Callable[..., Transaction]:
    """Factory for recording INCOME transactions."""

    def _record_income(
        account: Account,
        category: Category,
        amount: str,
        txn_date: Optional[date] = None,
        description: str = "Income",
        owner_id: str = OWNER,
    ) -> Transaction:
        return ledger_service.create_transaction(
            owner_id,
            IncomeCreate(
                account_id=account.account_id,
                amount=Decimal(amount),
                category_id=category.category_id,
                description=description,
                txn_date=txn_date,
            ),
        )

    return _record_income


@pytest.fixture
def expense_factory(ledger_service) -> Callable[..., Transaction]:
    """Factory for recording EXPENSE transactions."""

    def _record_expense(
        account: Account,
        category: Category,
        amount: str,
        txn_date: Optional[date] = None,
        description: str = "Expense",
        owner_id: str = OWNER,
    ) -> Transaction:
        return ledger_service.create_transaction(
            owner_id,
            ExpenseCreate(
                account_id=account.account_id,
                amount=Decimal(amount),
                category_id=category.category_id,
                description=description,
                txn_date=txn_date,
            ),
        )

    return _record_expense


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def checking(account_factory) -> Account:
    """Checking account opened with 1000.00."""
    return account_factory(name="Checking", opening_balance="1000.00")


@pytest.fixture
def savings(account_factory) -> Account:
    """Savings account opened with 500.00."""
    return account_factory(
        name="Savings",
        opening_balance="500.00",
        account_type=AccountType.SAVINGS_ACCOUNT,
    )


@pytest.fixture
def groceries(category_factory) -> Category:
    return category_factory(name="Groceries", category_type=CategoryType.EXPENSE, color="#22aa44")


@pytest.fixture
def rent(category_factory) -> Category:
    return category_factory(name="Rent", category_type=CategoryType.EXPENSE)


@pytest.fixture
def salary(category_factory) -> Category:
    return category_factory(name="Salary", category_type=CategoryType.INCOME)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(uow_factory) -> TestClient:
    """Provide FastAPI test client with test database and a default owner header."""
    app.dependency_overrides[get_uow_factory] = lambda: uow_factory
    with TestClient(app, headers={"X-Owner-Id": OWNER}) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def balance_of(account_service: AccountService, account: Account, owner_id: str = OWNER) -> Decimal:
    """Current stored balance of an account."""
    return account_service.get_account(owner_id, account.account_id).balance
