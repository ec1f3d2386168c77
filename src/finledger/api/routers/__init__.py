"""API routers package."""

from finledger.api.routers.accounts import router as accounts_router
from finledger.api.routers.categories import router as categories_router
from finledger.api.routers.transactions import router as transactions_router
from finledger.api.routers.budgets import router as budgets_router
from finledger.api.routers.reports import router as reports_router
from finledger.api.routers.savings_goals import router as savings_goals_router

__all__ = [
    "accounts_router",
    "categories_router",
    "transactions_router",
    "budgets_router",
    "reports_router",
    "savings_goals_router",
]
