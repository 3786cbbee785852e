from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from .strategies.base import StatusStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class StatusStrategyFactory:
    """Factory Pattern: choose the status strategy from the time of day."""

    def for_checkin(self, *, now: datetime, cutoff: time) -> StatusStrategy:
        if now.time() > cutoff:
            return LateStrategy()
        return OnTimeStrategy()

    def for_break_end(self, *, now: datetime, cutoff: time) -> StatusStrategy:
        if now.time() > cutoff:
            return LateStrategy()
        return OnTimeStrategy()
