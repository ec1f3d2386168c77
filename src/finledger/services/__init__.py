"""Service layer - business logic."""

from finledger.services.posting import post_effects, run_atomic, run_read
from finledger.services.ledger_service import (
    LedgerService,
    IncomeCreate,
    ExpenseCreate,
    TransferCreate,
    TransactionInput,
    TransactionPatch,
)
from finledger.services.transfer_service import TransferService
from finledger.services.budget_service import BudgetService, BudgetCreate, BudgetPatch
from finledger.services.report_service import ReportService, ReportQuery
from finledger.services.savings_goal_service import (
    SavingsGoalService,
    SavingsGoalCreate,
    SavingsGoalPatch,
)
from finledger.services.account_service import AccountService
from finledger.services.category_service import CategoryService

__all__ = [
    "post_effects",
    "run_atomic",
    "run_read",
    "LedgerService",
    "IncomeCreate",
    "ExpenseCreate",
    "TransferCreate",
    "TransactionInput",
    "TransactionPatch",
    "TransferService",
    "BudgetService",
    "BudgetCreate",
    "BudgetPatch",
    "ReportService",
    "ReportQuery",
    "SavingsGoalService",
    "SavingsGoalCreate",
    "SavingsGoalPatch",
    "AccountService",
    "CategoryService",
]
