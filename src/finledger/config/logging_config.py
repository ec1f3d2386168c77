"""Logging configuration."""

import logging
import sys

from finledger.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that emit one record per statement or per pooled connection
SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def setup_logging() -> None:
    """
    Configure application logging.

    Records go to stdout. The ``finledger`` package logs at ``log_level``;
    SQLAlchemy's statement and pool loggers follow ``sql_log_level`` so that
    posting retries and conflicts are not buried under SQL echo.
    """
    settings = get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    sql_level = logging.getLevelName(settings.sql_log_level.upper())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("finledger").setLevel(level)
    for name in SQL_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
