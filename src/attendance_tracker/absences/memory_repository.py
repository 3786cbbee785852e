from __future__ import annotations

import threading
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AbsenceType
from .model import AbsenceRecord
from .repository import AbsenceRepository


class InMemoryAbsenceRepository(AbsenceRepository):
    def __init__(self, records: Sequence[AbsenceRecord] = ()):
        self._lock = threading.Lock()
        self._records: dict[int, AbsenceRecord] = {r.absence_id: r for r in records}
        self._next_id = max(self._records, default=0) + 1

    def query_absences(self, *, user_id: int, start: date, end: date) -> Sequence[AbsenceRecord]:
        return [r for r in self.query_all_absences(start=start, end=end) if r.user_id == int(user_id)]

    def query_all_absences(self, *, start: date, end: date) -> Sequence[AbsenceRecord]:
        with self._lock:
            items = [r for r in self._records.values() if start <= r.absence_date <= end]
        items.sort(key=lambda r: (r.absence_date, r.absence_id))
        return items

    def has_absence_on(self, *, user_id: int, absence_date: date) -> bool:
        return bool(self.query_absences(user_id=user_id, start=absence_date, end=absence_date))

    def create_absence(
        self,
        *,
        user_id: int,
        absence_date: date,
        absence_type: AbsenceType,
        timing: Optional[str] = None,
    ) -> int:
        with self._lock:
            absence_id = self._next_id
            self._next_id += 1
            self._records[absence_id] = AbsenceRecord(
                absence_id=absence_id,
                user_id=int(user_id),
                absence_date=absence_date,
                absence_type=AbsenceType(absence_type),
                timing=timing,
            )
            return absence_id
