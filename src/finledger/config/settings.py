"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".finledger"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Personal Finance Ledger"
    app_version: str = "0.1.0"

    # Data directory (the SQLite file lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"
    sql_log_level: str = "WARNING"

    # Calendar (weekday numbers as in date.weekday(): 0 = Monday, 6 = Sunday)
    timezone: str = "UTC"
    week_start: int = 0
    budget_week_start: int = 6
    default_currency: str = "USD"

    # Concurrency
    conflict_retries: int = 3
    conflict_backoff_seconds: float = 0.05
    db_lock_timeout_seconds: float = 5.0

    # Reports
    top_categories_limit: int = 5

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "finledger.db"
        return f"sqlite:///{db_path}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
