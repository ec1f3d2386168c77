"""SQLAlchemy repository implementations."""

from finledger.repositories.sqlalchemy.database import (
    create_ledger_engine,
    get_engine,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from finledger.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from finledger.repositories.sqlalchemy.category_repo import SqlAlchemyCategoryRepository
from finledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from finledger.repositories.sqlalchemy.budget_repo import SqlAlchemyBudgetRepository
from finledger.repositories.sqlalchemy.savings_goal_repo import SqlAlchemySavingsGoalRepository
from finledger.repositories.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    SqlAlchemyUnitOfWorkFactory,
    translate_error,
)

__all__ = [
    "create_ledger_engine",
    "get_engine",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyBudgetRepository",
    "SqlAlchemySavingsGoalRepository",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUnitOfWorkFactory",
    "translate_error",
]
