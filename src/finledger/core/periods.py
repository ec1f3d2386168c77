"""Calendar windows and end-of-period arithmetic."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from finledger.core.exceptions import ValidationError


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of calendar days [start, end]."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValidationError(
                f"Window end {self.end.isoformat()} is before start {self.start.isoformat()}"
            )

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def previous(self) -> "DateWindow":
        """The immediately preceding window of equal length."""
        length = timedelta(days=self.days)
        return DateWindow(start=self.start - length, end=self.end - length)

    def iter_days(self) -> Iterator[date]:
        day = self.start
        while day <= self.end:
            yield day
            day += timedelta(days=1)


def start_of_week(day: date, week_start: int = 0) -> date:
    """First day of the week containing day; week_start uses date.weekday() numbering."""
    offset = (day.weekday() - week_start) % 7
    return day - timedelta(days=offset)


def end_of_week(day: date, week_start: int = 0) -> date:
    return start_of_week(day, week_start) + timedelta(days=6)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def start_of_year(day: date) -> date:
    return date(day.year, 1, 1)


def end_of_year(day: date) -> date:
    return date(day.year, 12, 31)


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    total = day.year * 12 + (day.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def week_window(day: date, week_start: int = 0) -> DateWindow:
    return DateWindow(start_of_week(day, week_start), end_of_week(day, week_start))


def month_window(year: int, month: int) -> DateWindow:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    first = date(year, month, 1)
    return DateWindow(first, end_of_month(first))


def year_window(year: int) -> DateWindow:
    return DateWindow(date(year, 1, 1), date(year, 12, 31))


def trailing_month_ends(anchor: date, count: int) -> list[date]:
    """Month-end dates of the `count` months ending with anchor's month, oldest first."""
    return [end_of_month(add_months(anchor, -offset)) for offset in range(count - 1, -1, -1)]
