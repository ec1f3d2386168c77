"""Repository protocol definitions (interfaces)."""

from finledger.repositories.protocols.account_repo import AccountRepository
from finledger.repositories.protocols.category_repo import CategoryRepository
from finledger.repositories.protocols.transaction_repo import (
    TransactionRepository,
    TransactionFilter,
)
from finledger.repositories.protocols.budget_repo import BudgetRepository
from finledger.repositories.protocols.savings_goal_repo import SavingsGoalRepository
from finledger.repositories.protocols.unit_of_work import UnitOfWork, UnitOfWorkFactory

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
