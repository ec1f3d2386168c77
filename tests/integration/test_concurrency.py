"""
Concurrency tests against a file-backed SQLite database.

Several threads post to the same accounts at once; the final balances must
equal the opening balance plus every committed effect, and transfers must
never overdraw their source. A writer that cannot get the lock in time gives
up without side effects.
"""

import sqlite3
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from finledger.config.settings import reset_settings, set_settings
from finledger.core.exceptions import ConflictError, InsufficientFundsError
from finledger.domain.models import CategoryType
from finledger.repositories.sqlalchemy import (
    Base,
    SqlAlchemyUnitOfWorkFactory,
    create_ledger_engine,
    reset_database,
)
from finledger.services import (
    AccountService,
    CategoryService,
    ExpenseCreate,
    LedgerService,
    TransactionPatch,
    TransferService,
)

from tests.conftest import OWNER, make_test_settings

WORKERS = 8


@pytest.fixture
def file_uow_factory(tmp_path):
    """Unit-of-work factory over a real database file shared by many connections."""
    reset_settings()
    set_settings(
        make_test_settings(
            conflict_retries=20,
            conflict_backoff_seconds=0.01,
            db_lock_timeout_seconds=10.0,
        )
    )
    engine = create_ledger_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    Base.metadata.create_all(bind=engine)
    yield SqlAlchemyUnitOfWorkFactory(engine)
    engine.dispose()
    reset_database()
    reset_settings()


@pytest.fixture
def short_lock_database(tmp_path):
    """A database file whose lock waits give up after a fraction of a second."""
    reset_settings()
    set_settings(
        make_test_settings(
            conflict_retries=1,
            conflict_backoff_seconds=0.0,
            db_lock_timeout_seconds=0.2,
        )
    )
    db_path = tmp_path / "ledger.db"
    engine = create_ledger_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(bind=engine)
    yield db_path, SqlAlchemyUnitOfWorkFactory(engine)
    engine.dispose()
    reset_database()
    reset_settings()


class TestConcurrentPostings:
    """Parallel writers on shared accounts."""

    def test_parallel_expenses_on_one_account(self, file_uow_factory):
        """
        GIVEN an account opened with 1000.00
        WHEN 40 expenses of 2.50 are recorded from 8 threads
        THEN the balance is exactly 900.00 and reconciles with the ledger
        """
        accounts = AccountService(file_uow_factory)
        ledger = LedgerService(file_uow_factory)
        account = accounts.create_account(OWNER, "Shared", opening_balance=Decimal("1000.00"))
        category = CategoryService(file_uow_factory).create_category(OWNER, "Coffee", CategoryType.EXPENSE)

        def spend(n: int):
            return ledger.create_transaction(
                OWNER,
                ExpenseCreate(
                    account_id=account.account_id,
                    amount=Decimal("2.50"),
                    category_id=category.category_id,
                    description=f"Coffee {n}",
                ),
            )

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            results = list(pool.map(spend, range(40)))

        assert len(results) == 40
        assert accounts.get_account(OWNER, account.account_id).balance == Decimal("900.00")
        assert accounts.reconcile(OWNER, account.account_id).is_consistent

    def test_parallel_transfers_never_overdraw(self, file_uow_factory):
        """
        GIVEN a source account holding 100.00
        WHEN 25 transfers of 10.00 race from 8 threads
        THEN exactly 10 succeed, the rest fail with insufficient funds, and no money is created
        """
        accounts = AccountService(file_uow_factory)
        transfers = TransferService(file_uow_factory)
        source = accounts.create_account(OWNER, "Source", opening_balance=Decimal("100.00"))
        target = accounts.create_account(OWNER, "Target", opening_balance=Decimal("0.00"))

        def move(_):
            try:
                transfers.transfer(OWNER, source.account_id, target.account_id, Decimal("10.00"))
                return True
            except InsufficientFundsError:
                return False

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            outcomes = list(pool.map(move, range(25)))

        assert outcomes.count(True) == 10
        assert accounts.get_account(OWNER, source.account_id).balance == Decimal("0.00")
        assert accounts.get_account(OWNER, target.account_id).balance == Decimal("100.00")

    def test_parallel_edits_and_transfers_in_both_directions(self, file_uow_factory):
        """
        GIVEN two accounts and opposite-direction transfers being edited concurrently
        WHEN all operations finish
        THEN both accounts reconcile and the combined balance is unchanged
        """
        accounts = AccountService(file_uow_factory)
        ledger = LedgerService(file_uow_factory)
        transfers = TransferService(file_uow_factory, ledger=ledger)
        a = accounts.create_account(OWNER, "A", opening_balance=Decimal("500.00"))
        b = accounts.create_account(OWNER, "B", opening_balance=Decimal("500.00"))

        seeded = [
            transfers.transfer(OWNER, a.account_id, b.account_id, Decimal("5.00")),
            transfers.transfer(OWNER, b.account_id, a.account_id, Decimal("5.00")),
        ]

        def work(n: int):
            if n % 3 == 0:
                txn = seeded[n % 2]
                ledger.update_transaction(OWNER, txn.txn_id, TransactionPatch(amount=Decimal(f"{n % 7 + 1}.00")))
            elif n % 2:
                transfers.transfer(OWNER, a.account_id, b.account_id, Decimal("1.00"))
            else:
                transfers.transfer(OWNER, b.account_id, a.account_id, Decimal("1.00"))

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(work, range(30)))

        balance_a = accounts.get_account(OWNER, a.account_id).balance
        balance_b = accounts.get_account(OWNER, b.account_id).balance
        assert balance_a + balance_b == Decimal("1000.00")
        assert accounts.reconcile(OWNER, a.account_id).is_consistent
        assert accounts.reconcile(OWNER, b.account_id).is_consistent


class TestLockTimeout:
    """A writer that cannot get the database lock in time."""

    def test_timeout_rolls_back_and_leaves_balance(self, short_lock_database):
        """
        GIVEN another connection holding the write lock
        WHEN an expense is recorded with a 0.2s lock timeout
        THEN ConflictError is raised, the balance is untouched and nothing is stored
        AND the same expense succeeds once the lock is released
        """
        db_path, uow_factory = short_lock_database
        accounts = AccountService(uow_factory)
        ledger = LedgerService(uow_factory)
        account = accounts.create_account(OWNER, "Checking", opening_balance=Decimal("100.00"))
        category = CategoryService(uow_factory).create_category(OWNER, "Rent", CategoryType.EXPENSE)
        expense = ExpenseCreate(
            account_id=account.account_id,
            amount=Decimal("40.00"),
            category_id=category.category_id,
            description="Rent",
        )

        blocker = sqlite3.connect(db_path, isolation_level=None)
        try:
            blocker.execute("BEGIN IMMEDIATE")
            with pytest.raises(ConflictError):
                ledger.create_transaction(OWNER, expense)
        finally:
            blocker.execute("ROLLBACK")
            blocker.close()

        assert accounts.get_account(OWNER, account.account_id).balance == Decimal("100.00")
        stored, total = ledger.list_transactions(OWNER)
        assert stored == []
        assert total == 0

        ledger.create_transaction(OWNER, expense)
        assert accounts.get_account(OWNER, account.account_id).balance == Decimal("60.00")
