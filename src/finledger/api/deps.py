"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header

from finledger.repositories.protocols import UnitOfWorkFactory
from finledger.repositories.sqlalchemy.database import get_engine
from finledger.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWorkFactory
from finledger.services import (
    AccountService,
    BudgetService,
    CategoryService,
    LedgerService,
    ReportService,
    SavingsGoalService,
    TransferService,
)

_uow_factory: Optional[SqlAlchemyUnitOfWorkFactory] = None


def get_uow_factory() -> UnitOfWorkFactory:
    """Provide the unit-of-work factory bound to the configured engine."""
    global _uow_factory
    engine = get_engine()
    if _uow_factory is None or _uow_factory.engine is not engine:
        _uow_factory = SqlAlchemyUnitOfWorkFactory(engine)
    return _uow_factory


def get_owner_id(x_owner_id: str = Header(..., min_length=1, max_length=64)) -> str:
    """Authenticated owner id, supplied by the fronting auth layer in X-Owner-Id."""
    return x_owner_id


def get_ledger_service(uow_factory: UnitOfWorkFactory = Depends(get_uow_factory)) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(uow_factory)


def get_transfer_service(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransferService:
    """Provide TransferService instance."""
    return TransferService(uow_factory, ledger=ledger)


def get_account_service(uow_factory: UnitOfWorkFactory = Depends(get_uow_factory)) -> AccountService:
    return AccountService(uow_factory)


def get_category_service(uow_factory: UnitOfWorkFactory = Depends(get_uow_factory)) -> CategoryService:
    return CategoryService(uow_factory)


def get_budget_service(uow_factory: UnitOfWorkFactory = Depends(get_uow_factory)) -> BudgetService:
    return BudgetService(uow_factory)


def get_report_service(uow_factory: UnitOfWorkFactory = Depends(get_uow_factory)) -> ReportService:
    return ReportService(uow_factory)


def get_savings_goal_service(
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
) -> SavingsGoalService:
    return SavingsGoalService(uow_factory)
