"""API request/response schemas."""

from finledger.api.schemas.account import (
    AccountCreateRequest,
    AccountResponse,
    AccountListResponse,
    AccountsSummaryResponse,
    ReconciliationResponse,
)
from finledger.api.schemas.category import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryListResponse,
)
from finledger.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransferRequest,
    TransactionResponse,
    TransactionListResponse,
)
from finledger.api.schemas.budget import (
    BudgetCreateRequest,
    BudgetUpdateRequest,
    BudgetResponse,
    BudgetProgressResponse,
    BudgetProgressListResponse,
)
from finledger.api.schemas.savings_goal import (
    SavingsGoalCreateRequest,
    SavingsGoalUpdateRequest,
    ContributeRequest,
    SavingsGoalResponse,
    SavingsGoalListResponse,
)
from finledger.api.schemas.report import (
    PeriodReportResponse,
    AnnualReportResponse,
    NetWorthReportResponse,
    CategoryBreakdownResponse,
    CategoryReportResponse,
    DashboardSummaryResponse,
    ReportResponse,
)

__all__ = [
    "AccountCreateRequest",
    "AccountResponse",
    "AccountListResponse",
    "AccountsSummaryResponse",
    "ReconciliationResponse",
    "CategoryCreateRequest",
    "CategoryResponse",
    "CategoryListResponse",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransferRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "BudgetCreateRequest",
    "BudgetUpdateRequest",
    "BudgetResponse",
    "BudgetProgressResponse",
    "BudgetProgressListResponse",
    "SavingsGoalCreateRequest",
    "SavingsGoalUpdateRequest",
    "ContributeRequest",
    "SavingsGoalResponse",
    "SavingsGoalListResponse",
    "PeriodReportResponse",
    "AnnualReportResponse",
    "NetWorthReportResponse",
    "CategoryBreakdownResponse",
    "CategoryReportResponse",
    "DashboardSummaryResponse",
    "ReportResponse",
]
