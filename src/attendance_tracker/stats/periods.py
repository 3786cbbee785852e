from __future__ import annotations

import calendar
from datetime import date, timedelta

from ..core.enums import Period


def period_bounds(period: Period, anchor: date) -> tuple[date, date]:
    """Inclusive [start, end] of the day, Monday-based week or month containing anchor."""
    period = Period(period)
    if period == Period.DAY:
        return anchor, anchor
    if period == Period.WEEK:
        start = anchor - timedelta(days=anchor.weekday())
        return start, start + timedelta(days=6)
    last_day = calendar.monthrange(anchor.year, anchor.month)[1]
    return anchor.replace(day=1), anchor.replace(day=last_day)
