from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .absences.memory_repository import InMemoryAbsenceRepository
from .absences.mysql_absence_repository import MySQLAbsenceRepository
from .absences.repository import AbsenceRepository
from .absences.retrying_repository import RetryingAbsenceRepository
from .core.settings import TrackerSettings
from .database.connection import DatabaseConnection, DBConfig
from .database.retry import RetryPolicy
from .sessions.factory import StatusStrategyFactory
from .sessions.memory_repository import InMemorySessionRepository
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.retrying_repository import RetryingSessionRepository
from .sessions.service import SessionService
from .stats.service import StatsService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    settings: TrackerSettings

    sessions_repo: SessionRepository
    absences_repo: AbsenceRepository

    session_service: SessionService
    stats_service: StatsService


def build_container(*, settings: Any) -> Container:
    """Wire repositories and services from a settings module."""
    tracker_settings = TrackerSettings.from_module(settings)
    policy = RetryPolicy(
        max_attempts=int(getattr(settings, "RETRY_MAX_ATTEMPTS", 3)),
        backoff_seconds=float(getattr(settings, "RETRY_BACKOFF_SECONDS", 0.5)),
    )

    conn: Optional[DatabaseConnection] = None
    if getattr(settings, "STORAGE_BACKEND", "mysql") == "memory":
        sessions_repo: SessionRepository = InMemorySessionRepository()
        absences_repo: AbsenceRepository = InMemoryAbsenceRepository()
    else:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        sessions_repo = MySQLSessionRepository(conn)
        absences_repo = MySQLAbsenceRepository(conn)

    sessions_repo = RetryingSessionRepository(sessions_repo, policy)
    absences_repo = RetryingAbsenceRepository(absences_repo, policy)

    session_service = SessionService(
        sessions_repo,
        settings=tracker_settings,
        absences=absences_repo,
        strategy_factory=StatusStrategyFactory(),
    )
    stats_service = StatsService(sessions_repo, absences_repo, settings=tracker_settings)

    return Container(
        conn=conn,
        settings=tracker_settings,
        sessions_repo=sessions_repo,
        absences_repo=absences_repo,
        session_service=session_service,
        stats_service=stats_service,
    )
