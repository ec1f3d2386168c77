"""Domain models package."""

from finledger.domain.models.enums import (
    TransactionType,
    CategoryType,
    AccountType,
    BudgetPeriod,
    ReportType,
    GoalStatus,
)
from finledger.domain.models.account import Account
from finledger.domain.models.category import Category
from finledger.domain.models.transaction import Transaction, BalanceEffect
from finledger.domain.models.budget import Budget
from finledger.domain.models.savings_goal import SavingsGoal

__all__ = [
    "TransactionType",
    "CategoryType",
    "AccountType",
    "BudgetPeriod",
    "ReportType",
    "GoalStatus",
    "Account",
    "Category",
    "Transaction",
    "BalanceEffect",
    "Budget",
    "SavingsGoal",
]
