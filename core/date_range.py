"""
Calendar filters for task listing.

A DateFilter (mode + optional year/month/day) resolves to a DateRange over
due dates, or to None when the fields the mode needs are missing:

- day:   [date, date + 1 day)           half-open
- month: [first day, last day of month] closed
- year:  [Jan 1, Dec 31]                closed

The day interval is half-open while month and year are closed. Both select
the same set of calendar dates; the asymmetry is kept as-is.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from core.exceptions import ValidationError


class FilterMode(str, Enum):
    """Calendar granularity selected in the client."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class DateFilter:
    """Requested calendar window. Missing parts disable filtering."""

    mode: FilterMode = FilterMode.DAY
    year: int | None = None
    month: int | None = None
    day: int | None = None


@dataclass(frozen=True)
class DateRange:
    """Interval of calendar dates, closed at start."""

    start: date
    end: date
    end_inclusive: bool

    def contains(self, value: date) -> bool:
        if value < self.start:
            return False
        return value <= self.end if self.end_inclusive else value < self.end

    def sql_condition(self, column: str) -> tuple[str, tuple[date, date]]:
        """Parameterized predicate for this range on column."""
        upper = "<=" if self.end_inclusive else "<"
        return f"{column} >= %s AND {column} {upper} %s", (self.start, self.end)


def last_day_of_month(year: int, month: int) -> date:
    """True last calendar day, accounting for month length and leap years."""
    return date(year, month, calendar.monthrange(year, month)[1])


def resolve_date_range(date_filter: DateFilter) -> DateRange | None:
    """
    Translate a filter into a due-date range.

    Returns:
        DateRange for the mode, or None if the mode's required fields are
        absent (caller then applies no date filter).

    Raises:
        ValidationError: Fields are present but do not name a real date.
    """
    year, month, day = date_filter.year, date_filter.month, date_filter.day

    try:
        if date_filter.mode == FilterMode.DAY and None not in (year, month, day):
            start = date(year, month, day)
            return DateRange(start, start + timedelta(days=1), end_inclusive=False)

        if date_filter.mode == FilterMode.MONTH and None not in (year, month):
            return DateRange(
                date(year, month, 1),
                last_day_of_month(year, month),
                end_inclusive=True,
            )

        if date_filter.mode == FilterMode.YEAR and year is not None:
            return DateRange(date(year, 1, 1), date(year, 12, 31), end_inclusive=True)
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Invalid date filter: {e}")

    return None
