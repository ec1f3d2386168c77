"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from finledger.config.settings import get_settings
from finledger.config.logging_config import setup_logging
from finledger.repositories.sqlalchemy.database import init_db
from finledger.api.routers import (
    accounts_router,
    categories_router,
    transactions_router,
    budgets_router,
    reports_router,
    savings_goals_router,
)
from finledger.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal finance ledger: accounts, transactions, budgets, goals and reports",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(transactions_router)
app.include_router(budgets_router)
app.include_router(reports_router)
app.include_router(savings_goals_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
