from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Half-open datetime range [start 00:00, end+1 00:00) covering both dates."""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def is_weekday(day: date) -> bool:
    return day.weekday() < 5


def count_weekdays(start: date, end: date) -> int:
    """Mon-Fri days in the inclusive range; 0 when end < start."""
    return sum(1 for d in iter_days(start, end) if is_weekday(d))


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0
