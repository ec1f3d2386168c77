"""Application context for in-process service management.

Provides a centralized way to access all services without HTTP, e.g. from
scripts, notebooks or a CLI.
"""

from pathlib import Path
from typing import Optional

from finledger.config.settings import Settings, set_settings, get_settings
from finledger.repositories.sqlalchemy.database import (
    get_engine,
    init_db_with_path,
    reset_database,
)
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


class AppContext:
    """
    Application context providing in-process access to all services.

    Services share one unit-of-work factory; each call opens its own
    unit of work, so the context holds no long-lived session.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize application context.

        Args:
            data_dir: Optional data directory. If not provided, uses default.
        """
        self._data_dir = data_dir
        self._initialized = False
        self._uow_factory: Optional[SqlAlchemyUnitOfWorkFactory] = None

        # Service instances (lazy initialized)
        self._ledger_service: Optional[LedgerService] = None
        self._transfer_service: Optional[TransferService] = None
        self._account_service: Optional[AccountService] = None
        self._category_service: Optional[CategoryService] = None
        self._budget_service: Optional[BudgetService] = None
        self._report_service: Optional[ReportService] = None
        self._savings_goal_service: Optional[SavingsGoalService] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Args:
            data_dir: Data directory path. Uses default if not provided.
        """
        if data_dir:
            self._data_dir = data_dir

        # Update global settings
        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)

        # Reset and reinitialize database
        reset_database()
        db_path = settings.get_data_dir() / "finledger.db"
        init_db_with_path(db_path)

        # Reset service instances to force recreation
        self._uow_factory = None
        self._ledger_service = None
        self._transfer_service = None
        self._account_service = None
        self._category_service = None
        self._budget_service = None
        self._report_service = None
        self._savings_goal_service = None

        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Get the current data directory."""
        return get_settings().get_data_dir()

    @property
    def uow_factory(self) -> SqlAlchemyUnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = SqlAlchemyUnitOfWorkFactory(get_engine())
        return self._uow_factory

    # Service accessors
    @property
    def ledger(self) -> LedgerService:
        """Get the LedgerService instance."""
        if self._ledger_service is None:
            self._ledger_service = LedgerService(self.uow_factory)
        return self._ledger_service

    @property
    def transfers(self) -> TransferService:
        if self._transfer_service is None:
            self._transfer_service = TransferService(self.uow_factory, ledger=self.ledger)
        return self._transfer_service

    @property
    def accounts(self) -> AccountService:
        if self._account_service is None:
            self._account_service = AccountService(self.uow_factory)
        return self._account_service

    @property
    def categories(self) -> CategoryService:
        if self._category_service is None:
            self._category_service = CategoryService(self.uow_factory)
        return self._category_service

    @property
    def budgets(self) -> BudgetService:
        if self._budget_service is None:
            self._budget_service = BudgetService(self.uow_factory)
        return self._budget_service

    @property
    def reports(self) -> ReportService:
        if self._report_service is None:
            self._report_service = ReportService(self.uow_factory)
        return self._report_service

    @property
    def goals(self) -> SavingsGoalService:
        if self._savings_goal_service is None:
            self._savings_goal_service = SavingsGoalService(self.uow_factory)
        return self._savings_goal_service

    def close(self) -> None:
        """Clean up resources."""
        reset_database()
        self._uow_factory = None
        self._initialized = False


# Global application context (singleton for in-process use)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: AppContext) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
