from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AbsenceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AbsenceRecord
from .repository import AbsenceRepository

_COLUMNS = "absence_id, user_id, absence_date, absence_type, timing"


def _to_record(r: dict) -> AbsenceRecord:
    return AbsenceRecord(
        absence_id=int(r["absence_id"]),
        user_id=int(r["user_id"]),
        absence_date=r["absence_date"],
        absence_type=AbsenceType(r["absence_type"]),
        timing=r.get("timing"),
    )


class MySQLAbsenceRepository(AbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def query_absences(self, *, user_id: int, start: date, end: date) -> Sequence[AbsenceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM absences
                WHERE user_id=%s AND absence_date BETWEEN %s AND %s
                ORDER BY absence_date ASC, absence_id ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def query_all_absences(self, *, start: date, end: date) -> Sequence[AbsenceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM absences
                WHERE absence_date BETWEEN %s AND %s
                ORDER BY user_id ASC, absence_date ASC, absence_id ASC
                """,
                (start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def has_absence_on(self, *, user_id: int, absence_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT absence_id FROM absences WHERE user_id=%s AND absence_date=%s LIMIT 1",
                (int(user_id), absence_date),
            )
            return fetchone(cur) is not None

    def create_absence(
        self,
        *,
        user_id: int,
        absence_date: date,
        absence_type: AbsenceType,
        timing: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO absences(user_id, absence_date, absence_type, timing)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), absence_date, AbsenceType(absence_type).value, timing),
            )
            return int(cur.lastrowid)
