"""Database connection and engine configuration."""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import declarative_base

from finledger.config.settings import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Module-level database state (can be reconfigured at runtime)
_engine: Optional[Engine] = None

# Execution option consulted when SQLite opens a transaction
SQLITE_BEGIN_OPTION = "sqlite_begin"


def _install_sqlite_locking(engine: Engine) -> None:
    """
    Take over transaction control from pysqlite.

    Write units open with BEGIN IMMEDIATE so concurrent writers serialize on
    the database lock instead of interleaving read-modify-write cycles.
    Read units open a deferred transaction, which still gives a consistent
    snapshot for the duration of the unit.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get(SQLITE_BEGIN_OPTION, "IMMEDIATE")
        conn.exec_driver_sql(f"BEGIN {mode}")


def create_ledger_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine with the locking discipline the ledger relies on."""
    settings = get_settings()
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", settings.db_lock_timeout_seconds)
        kwargs["connect_args"] = connect_args
    engine = create_engine(database_url, echo=False, **kwargs)
    if is_sqlite:
        _install_sqlite_locking(engine)
    return engine


def read_only_bind(engine: Engine) -> Engine:
    """Engine view whose transactions are opened for reading only."""
    if engine.dialect.name == "sqlite":
        return engine.execution_options(**{SQLITE_BEGIN_OPTION: "DEFERRED"})
    return engine


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        _engine = create_ledger_engine(get_settings().get_database_url())
    return _engine


def init_db() -> None:
    """Initialize database tables."""
    from finledger.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def init_db_with_path(db_path: Path) -> None:
    """Initialize database at a specific path."""
    global _engine

    reset_database()
    _engine = create_ledger_engine(f"sqlite:///{db_path}")

    from finledger.repositories.sqlalchemy import orm_models  # noqa: F401
    Base.metadata.create_all(bind=_engine)
    logger.info("Database initialized at %s", db_path)


def reset_database() -> None:
    """Reset database state (for reconfiguration)."""
    global _engine

    if _engine is not None:
        _engine.dispose()

    _engine = None
