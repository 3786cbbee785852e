from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import hours_between
from ..core.constants import DEFAULT_MISSING_BREAK_HOURS
from ..core.exceptions import InvalidStateError
from .model import BreakInterval


class BreakTracker:
    """Owns the "one open break per session" rule and break-duration defaults."""

    def __init__(self, *, default_missing_break_hours: float = DEFAULT_MISSING_BREAK_HOURS):
        self._default_missing_hours = float(default_missing_break_hours)

    @staticmethod
    def open_break(breaks: Iterable[BreakInterval]) -> Optional[BreakInterval]:
        open_ones = [b for b in breaks if b.is_open]
        if len(open_ones) > 1:
            # Storage let two through; the most recent one is the live break.
            open_ones.sort(key=lambda b: b.start_time)
        return open_ones[-1] if open_ones else None

    def ensure_can_start(self, breaks: Iterable[BreakInterval]) -> None:
        if self.open_break(breaks) is not None:
            raise InvalidStateError("A break is already in progress")

    def require_open(self, breaks: Iterable[BreakInterval]) -> BreakInterval:
        current = self.open_break(breaks)
        if current is None:
            raise InvalidStateError("No break in progress")
        return current

    def break_hours(self, item: BreakInterval) -> float:
        """Duration in hours; a break never closed counts the fixed default."""
        if item.end_time is None:
            return self._default_missing_hours
        return max(hours_between(item.start_time, item.end_time), 0.0)

    def total_break_hours(self, breaks: Iterable[BreakInterval]) -> float:
        return sum(self.break_hours(b) for b in breaks)

    @staticmethod
    def group_by_session(breaks: Iterable[BreakInterval]) -> Mapping[int, Sequence[BreakInterval]]:
        grouped: dict[int, list[BreakInterval]] = {}
        for b in breaks:
            grouped.setdefault(b.session_id, []).append(b)
        return grouped

    @staticmethod
    def within_session(start: datetime, check_in: datetime) -> bool:
        return start >= check_in
