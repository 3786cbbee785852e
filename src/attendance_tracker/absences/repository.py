from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AbsenceType
from .model import AbsenceRecord


class AbsenceRepository(Protocol):
    """Date ranges are inclusive on absence_date."""

    def query_absences(self, *, user_id: int, start: date, end: date) -> Sequence[AbsenceRecord]:
        raise NotImplementedError

    def query_all_absences(self, *, start: date, end: date) -> Sequence[AbsenceRecord]:
        raise NotImplementedError

    def has_absence_on(self, *, user_id: int, absence_date: date) -> bool:
        raise NotImplementedError

    def create_absence(
        self,
        *,
        user_id: int,
        absence_date: date,
        absence_type: AbsenceType,
        timing: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
