"""Unit-of-work protocol: the atomic boundary for every mutation."""

from typing import Protocol

from finledger.repositories.protocols.account_repo import AccountRepository
from finledger.repositories.protocols.category_repo import CategoryRepository
from finledger.repositories.protocols.transaction_repo import TransactionRepository
from finledger.repositories.protocols.budget_repo import BudgetRepository
from finledger.repositories.protocols.savings_goal_repo import SavingsGoalRepository


class UnitOfWork(Protocol):
    """
    One all-or-nothing database transaction.

    Repositories exposed here share the unit's connection. Leaving the
    context without commit() rolls everything back.
    """

    accounts: AccountRepository
    categories: CategoryRepository
    transactions: TransactionRepository
    budgets: BudgetRepository
    goals: SavingsGoalRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def begin(self) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


class UnitOfWorkFactory(Protocol):
    """Callable producing a fresh unit of work; read_only units never write."""

    def __call__(self, read_only: bool = False) -> UnitOfWork:
        ...
