from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import BreakEnding, BreakStatus, SessionKind, SessionStatus, WorkMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..geofence.model import Coordinate
from .model import AttendanceSession, BreakInterval, NewSession
from .repository import SessionRepository

_SESSION_COLUMNS = (
    "session_id, user_id, kind, check_in, check_out, work_mode, status, location_lat, location_lon"
)
_BREAK_COLUMNS = "break_id, session_id, start_time, end_time, status, ending"


def _to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        user_id=int(r["user_id"]),
        kind=SessionKind(r["kind"]),
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        work_mode=WorkMode(r["work_mode"]),
        status=SessionStatus(r["status"]),
        location=Coordinate(float(r["location_lat"]), float(r["location_lon"])),
    )


def _to_break(r: dict) -> BreakInterval:
    ending = r.get("ending")
    return BreakInterval(
        break_id=int(r["break_id"]),
        session_id=int(r["session_id"]),
        start_time=r["start_time"],
        end_time=r.get("end_time"),
        status=BreakStatus(r["status"]),
        ending=BreakEnding(ending) if ending else None,
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_session(self, session: NewSession) -> int:
        # Duplicate open_key surfaces as ConflictError from db_cursor.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(
                    user_id, kind, work_date, check_in, work_mode, status, location_lat, location_lon
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    session.user_id,
                    session.kind.value,
                    session.check_in.date(),
                    session.check_in,
                    session.work_mode.value,
                    session.status.value,
                    session.location.lat,
                    session.location.lon,
                ),
            )
            return int(cur.lastrowid)

    def get_session(self, session_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SESSION_COLUMNS} FROM attendance_sessions WHERE session_id=%s",
                (int(session_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def update_session_checkout(self, *, session_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET check_out=%s
                WHERE session_id=%s AND check_out IS NULL
                """,
                (check_out, int(session_id)),
            )
            return cur.rowcount > 0

    def insert_break(self, *, session_id: int, start_time: datetime, status: BreakStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_breaks(session_id, start_time, status)
                VALUES(%s,%s,%s)
                """,
                (int(session_id), start_time, status.value),
            )
            return int(cur.lastrowid)

    def update_break_end(
        self,
        *,
        break_id: int,
        end_time: datetime,
        status: BreakStatus,
        ending: BreakEnding,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_breaks
                SET end_time=%s, status=%s, ending=%s
                WHERE break_id=%s AND end_time IS NULL
                """,
                (end_time, status.value, ending.value, int(break_id)),
            )
            return cur.rowcount > 0

    def get_break(self, break_id: int) -> Optional[BreakInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_BREAK_COLUMNS} FROM attendance_breaks WHERE break_id=%s", (int(break_id),))
            r = fetchone(cur)
            return _to_break(r) if r else None

    def find_open_session(
        self,
        *,
        user_id: int,
        kind: SessionKind,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s AND kind=%s AND check_out IS NULL
                  AND check_in >= %s AND check_in < %s
                ORDER BY check_in DESC
                LIMIT 1
                """,
                (int(user_id), kind.value, start, end),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def query_sessions(
        self,
        *,
        user_id: int,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        return self._query(start=start, end=end, kind=kind, user_id=int(user_id))

    def query_all_sessions(
        self,
        *,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind] = None,
    ) -> Sequence[AttendanceSession]:
        return self._query(start=start, end=end, kind=kind)

    def _query(
        self,
        *,
        start: datetime,
        end: datetime,
        kind: Optional[SessionKind],
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceSession]:
        clauses = ["check_in >= %s", "check_in < %s"]
        params: list[object] = [start, end]

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)
        if kind is not None:
            clauses.append("kind=%s")
            params.append(kind.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS}
                FROM attendance_sessions
                WHERE {where}
                ORDER BY check_in ASC, session_id ASC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def query_breaks(self, session_ids: Iterable[int]) -> Sequence[BreakInterval]:
        ids = sorted({int(i) for i in session_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BREAK_COLUMNS}
                FROM attendance_breaks
                WHERE session_id IN ({in_clause(ids)})
                ORDER BY start_time ASC, break_id ASC
                """,
                tuple(ids),
            )
            return [_to_break(r) for r in fetchall(cur)]
