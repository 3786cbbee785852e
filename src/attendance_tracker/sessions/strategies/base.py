from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ...core.enums import BreakStatus, SessionStatus


@dataclass(frozen=True)
class StatusDecision:
    session_status: SessionStatus
    break_status: BreakStatus
    note: Optional[str] = None


class StatusStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a check-in/break status."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, cutoff: time) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_break_end(self, *, now: datetime, cutoff: time) -> StatusDecision:
        raise NotImplementedError
