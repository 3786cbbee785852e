from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence

from ...sessions.model import AttendanceSession, BreakInterval


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def effective_end(self, session: AttendanceSession, *, now: datetime) -> tuple[datetime, bool]:
        """End timestamp used for the session and whether it was estimated."""

        raise NotImplementedError

    @abstractmethod
    def net_hours(self, session: AttendanceSession, breaks: Sequence[BreakInterval], *, now: datetime) -> float:
        raise NotImplementedError
