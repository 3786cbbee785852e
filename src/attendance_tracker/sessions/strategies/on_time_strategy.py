from __future__ import annotations

from datetime import datetime, time

from ...core.enums import BreakStatus, SessionStatus
from .base import StatusDecision, StatusStrategy


class OnTimeStrategy(StatusStrategy):
    """At or before the cutoff."""

    def decide_checkin(self, *, now: datetime, cutoff: time) -> StatusDecision:
        return StatusDecision(session_status=SessionStatus.PRESENT, break_status=BreakStatus.ON_TIME)

    def decide_break_end(self, *, now: datetime, cutoff: time) -> StatusDecision:
        return StatusDecision(session_status=SessionStatus.PRESENT, break_status=BreakStatus.ON_TIME)
