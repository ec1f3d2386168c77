"""Repository layer - data access abstractions and implementations."""

from finledger.repositories.protocols import (
    AccountRepository,
    CategoryRepository,
    TransactionRepository,
    TransactionFilter,
    BudgetRepository,
    SavingsGoalRepository,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "AccountRepository",
    "CategoryRepository",
    "TransactionRepository",
    "TransactionFilter",
    "BudgetRepository",
    "SavingsGoalRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
