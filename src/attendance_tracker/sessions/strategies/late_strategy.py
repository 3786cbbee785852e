from __future__ import annotations

from datetime import datetime, time

from ...core.enums import BreakStatus, SessionStatus
from .base import StatusDecision, StatusStrategy


class LateStrategy(StatusStrategy):
    """Past the cutoff."""

    def decide_checkin(self, *, now: datetime, cutoff: time) -> StatusDecision:
        return StatusDecision(
            session_status=SessionStatus.LATE,
            break_status=BreakStatus.ON_TIME,
            note=f"checked in after {cutoff.strftime('%H:%M')}",
        )

    def decide_break_end(self, *, now: datetime, cutoff: time) -> StatusDecision:
        return StatusDecision(
            session_status=SessionStatus.PRESENT,
            break_status=BreakStatus.LATE,
            note=f"break ended after {cutoff.strftime('%H:%M')}",
        )
