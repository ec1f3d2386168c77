"""SQLAlchemy unit of work: one session, one database transaction."""

import logging
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from finledger.core.exceptions import AppError, ConflictError, PersistenceError, ValidationError
from finledger.repositories.sqlalchemy.database import read_only_bind
from finledger.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from finledger.repositories.sqlalchemy.category_repo import SqlAlchemyCategoryRepository
from finledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from finledger.repositories.sqlalchemy.budget_repo import SqlAlchemyBudgetRepository
from finledger.repositories.sqlalchemy.savings_goal_repo import SqlAlchemySavingsGoalRepository

logger = logging.getLogger(__name__)

# Serialization failure and deadlock on PostgreSQL
_RETRYABLE_PGCODES = {"40001", "40P01"}
# Unique violation: a concurrent insert of the same key won the race
_UNIQUE_PGCODE = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "pgcode", None) == _UNIQUE_PGCODE:
        return True
    return "unique constraint" in str(exc.orig).lower()


def translate_error(exc: SQLAlchemyError) -> AppError:
    """Map a driver/ORM failure onto the application error hierarchy."""
    if isinstance(exc, OperationalError):
        text = str(exc.orig).lower()
        if "locked" in text or "busy" in text:
            return ConflictError("Database is busy, please retry")
    if isinstance(exc, DBAPIError) and getattr(exc.orig, "pgcode", None) in _RETRYABLE_PGCODES:
        return ConflictError("Concurrent update detected, please retry")
    if isinstance(exc, IntegrityError):
        if _is_unique_violation(exc):
            return ConflictError(f"Conflicting write: {exc.orig}")
        return ValidationError(
            f"Write rejected by a database constraint: {exc.orig}",
            code="CONSTRAINT_VIOLATION",
        )
    logger.error("Persistence failure: %s", exc)
    return PersistenceError(f"Database error: {exc.__class__.__name__}")


class SqlAlchemyUnitOfWork:
    """
    All-or-nothing database transaction exposing the ledger repositories.

    Usage:
        with uow_factory() as uow:
            uow.accounts.lock([...])
            ...
            uow.commit()

    Leaving the block without commit() rolls back. SQLAlchemy errors are
    re-raised as ConflictError or PersistenceError after the rollback.
    """

    def __init__(self, session_factory: sessionmaker, read_only: bool = False):
        self._session_factory = session_factory
        self.read_only = read_only
        self._session: Optional[Session] = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work has not begun")
        return self._session

    def begin(self) -> None:
        self._session = self._session_factory()
        self.accounts = SqlAlchemyAccountRepository(self._session)
        self.categories = SqlAlchemyCategoryRepository(self._session)
        self.transactions = SqlAlchemyTransactionRepository(self._session)
        self.budgets = SqlAlchemyBudgetRepository(self._session)
        self.goals = SqlAlchemySavingsGoalRepository(self._session)

    def commit(self) -> None:
        if self.read_only:
            # Nothing to persist; end the snapshot.
            self.session.rollback()
            return
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise translate_error(exc) from exc

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        session = self._session
        self._session = None
        if session is not None:
            try:
                session.rollback()
            finally:
                session.close()
        if isinstance(exc, SQLAlchemyError):
            raise translate_error(exc) from exc


class SqlAlchemyUnitOfWorkFactory:
    """Builds units of work bound to one engine; read-only units use deferred transactions."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._write_sessions = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        self._read_sessions = sessionmaker(
            bind=read_only_bind(engine),
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def __call__(self, read_only: bool = False) -> SqlAlchemyUnitOfWork:
        sessions = self._read_sessions if read_only else self._write_sessions
        return SqlAlchemyUnitOfWork(sessions, read_only=read_only)

