"""Clock helpers bound to the configured timezone."""

from datetime import date, datetime

import pytz

from finledger.config.settings import get_settings


def get_timezone() -> pytz.BaseTzInfo:
    """Return the configured pytz timezone."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Current wall-clock time in the configured zone, as a naive datetime."""
    return datetime.now(get_timezone()).replace(tzinfo=None)


def today_local() -> date:
    """Current calendar date in the configured zone."""
    return now_local().date()


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(get_timezone()).replace(tzinfo=None)
