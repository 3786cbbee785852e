from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from ...common.datetime_utils import hours_between
from ...core.constants import DEFAULT_DAILY_HOUR_CAP, DEFAULT_MISSING_CHECKOUT_HOURS
from ...sessions.breaks import BreakTracker
from ...sessions.model import AttendanceSession, BreakInterval
from .base import HoursCalculator


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (end - in) - breaks, clamped to [0, daily cap].

    A missing checkout ends at "now" for today's session and at
    check-in + default hours for older ones.
    """

    def __init__(
        self,
        *,
        break_tracker: BreakTracker | None = None,
        default_missing_checkout_hours: float = DEFAULT_MISSING_CHECKOUT_HOURS,
        daily_hour_cap: float = DEFAULT_DAILY_HOUR_CAP,
    ):
        self._breaks = break_tracker or BreakTracker()
        self._missing_checkout = timedelta(hours=float(default_missing_checkout_hours))
        self._cap = float(daily_hour_cap)

    def effective_end(self, session: AttendanceSession, *, now: datetime) -> tuple[datetime, bool]:
        if session.check_out is not None:
            return session.check_out, False
        if session.work_date == now.date():
            return max(now, session.check_in), True
        return session.check_in + self._missing_checkout, True

    def gross_hours(self, session: AttendanceSession, *, now: datetime) -> float:
        end, _ = self.effective_end(session, now=now)
        return hours_between(session.check_in, end)

    def net_hours(self, session: AttendanceSession, breaks: Sequence[BreakInterval], *, now: datetime) -> float:
        hours = self.gross_hours(session, now=now) - self._breaks.total_break_hours(breaks)
        return min(max(hours, 0.0), self._cap)
