"""Domain layer - pure business models with no external dependencies."""

from finledger.domain.models import (
    Account,
    Category,
    Transaction,
    BalanceEffect,
    Budget,
    SavingsGoal,
    TransactionType,
    CategoryType,
    AccountType,
    BudgetPeriod,
    ReportType,
    GoalStatus,
)

__all__ = [
    "Account",
    "Category",
    "Transaction",
    "BalanceEffect",
    "Budget",
    "SavingsGoal",
    "TransactionType",
    "CategoryType",
    "AccountType",
    "BudgetPeriod",
    "ReportType",
    "GoalStatus",
]
