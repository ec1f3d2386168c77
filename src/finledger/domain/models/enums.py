"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


class CategoryType(str, Enum):
    """Categories classify either income or expenses; transfers carry none."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class AccountType(str, Enum):
    """Kinds of financial accounts."""

    BANK_ACCOUNT = "BANK_ACCOUNT"
    SAVINGS_ACCOUNT = "SAVINGS_ACCOUNT"
    CREDIT_CARD = "CREDIT_CARD"
    INVESTMENT = "INVESTMENT"
    CRYPTO = "CRYPTO"
    CASH = "CASH"
    OTHER = "OTHER"


class BudgetPeriod(str, Enum):
    """Budget window lengths."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ReportType(str, Enum):
    """Report shapes produced by the report aggregator."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"
    NET_WORTH = "networth"
    CATEGORY_BREAKDOWN = "breakdown"
    CATEGORY = "category"


class GoalStatus(str, Enum):
    """Filter for listing savings goals."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"
