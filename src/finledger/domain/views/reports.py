"""View models for report outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


def _zero() -> Decimal:
    return Decimal("0.00")


@dataclass
class CategoryAmount:
    """One category's share of an expense total."""

    name: str
    amount: Decimal
    percentage: Decimal
    category_id: Optional[str] = None
    color: Optional[str] = None


@dataclass
class PeriodBucket:
    """Income and expenses over one sub-period of a report window."""

    label: str
    start: date
    end: date
    income: Decimal = field(default_factory=_zero)
    expenses: Decimal = field(default_factory=_zero)

    @property
    def savings(self) -> Decimal:
        return self.income - self.expenses


@dataclass
class PeriodComparison:
    """Percentage change against the preceding window."""

    income_change: Decimal
    expenses_change: Decimal
    savings_change: Decimal


@dataclass
class PeriodReport:
    """Weekly or monthly report."""

    start: date
    end: date
    total_income: Decimal
    total_expenses: Decimal
    savings: Decimal
    transactions_count: int
    top_categories: list[CategoryAmount]
    buckets: list[PeriodBucket]
    comparison: PeriodComparison


@dataclass
class BalancePoint:
    """Total balance as of a given day."""

    label: str
    as_of: date
    balance: Decimal


@dataclass
class AnnualReport:
    """Calendar-year report."""

    year: int
    total_income: Decimal
    total_expenses: Decimal
    savings: Decimal
    transactions_count: int
    monthly: list[PeriodBucket]
    top_expense_category: Optional[CategoryAmount]
    net_worth_evolution: list[BalancePoint]
    average_monthly_income: Decimal
    average_monthly_expenses: Decimal


@dataclass
class AccountShare:
    """One account's share of total balance."""

    account_id: str
    name: str
    account_type: str
    balance: Decimal
    percentage: Decimal


@dataclass
class AccountGrowth:
    """Net-flow change of an account: last 3 months vs the 3 before."""

    account_id: str
    name: str
    growth: Decimal


@dataclass
class NetWorthReport:
    """Current net worth, distribution and trailing evolution."""

    as_of: date
    current_balance: Decimal
    accounts: list[AccountShare]
    evolution: list[BalancePoint]
    accounts_growth: list[AccountGrowth]


@dataclass
class CategoryBreakdown:
    """Expenses grouped by category, optionally collapsed to top-N plus Other."""

    start: Optional[date]
    end: Optional[date]
    total: Decimal
    items: list[CategoryAmount]


@dataclass
class CategoryTransactionLine:
    txn_id: str
    description: str
    amount: Decimal
    txn_date: date
    account_name: str


@dataclass
class CategoryReport:
    """Activity of a single category over a window."""

    category_id: str
    category_name: str
    color: Optional[str]
    start: date
    end: date
    total_amount: Decimal
    transactions_count: int
    average_transaction: Decimal
    monthly: list[PeriodBucket]
    transactions: list[CategoryTransactionLine]


@dataclass
class DashboardSummary:
    """Figures for the landing dashboard."""

    as_of: date
    total_balance: Decimal
    month_income: Decimal
    month_expenses: Decimal
    month_savings: Decimal
    comparison: PeriodComparison
    expenses_by_category: CategoryBreakdown
    income_vs_expenses: list[PeriodBucket]
