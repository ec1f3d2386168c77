"""View models for service outputs."""

from finledger.domain.views.budget import BudgetProgress
from finledger.domain.views.accounts import AccountTypeTotal, AccountsSummary, Reconciliation
from finledger.domain.views.reports import (
    CategoryAmount,
    PeriodBucket,
    PeriodComparison,
    PeriodReport,
    BalancePoint,
    AnnualReport,
    AccountShare,
    AccountGrowth,
    NetWorthReport,
    CategoryBreakdown,
    CategoryTransactionLine,
    CategoryReport,
    DashboardSummary,
)

__all__ = [
    "BudgetProgress",
    "AccountTypeTotal",
    "AccountsSummary",
    "Reconciliation",
    "CategoryAmount",
    "PeriodBucket",
    "PeriodComparison",
    "PeriodReport",
    "BalancePoint",
    "AnnualReport",
    "AccountShare",
    "AccountGrowth",
    "NetWorthReport",
    "CategoryBreakdown",
    "CategoryTransactionLine",
    "CategoryReport",
    "DashboardSummary",
]
