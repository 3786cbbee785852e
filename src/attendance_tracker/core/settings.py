from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Any

from ..common.datetime_utils import parse_hhmm
from ..geofence.model import Coordinate
from . import constants


@dataclass(frozen=True)
class TrackerSettings:
    """Policy values consumed by the session state machine and aggregation."""

    office: Coordinate = field(default_factory=lambda: Coordinate(0.0, 0.0))
    geofence_radius_km: float = constants.DEFAULT_GEOFENCE_RADIUS_KM
    late_checkin_cutoff: time = constants.DEFAULT_LATE_CHECKIN_CUTOFF
    late_break_end_cutoff: time = constants.DEFAULT_LATE_BREAK_END_CUTOFF
    default_missing_break_hours: float = constants.DEFAULT_MISSING_BREAK_HOURS
    default_missing_checkout_hours: float = constants.DEFAULT_MISSING_CHECKOUT_HOURS
    daily_hour_cap: float = constants.DEFAULT_DAILY_HOUR_CAP
    expected_hours_per_workday: float = constants.DEFAULT_EXPECTED_HOURS_PER_WORKDAY
    half_day_threshold_hours: float = constants.DEFAULT_HALF_DAY_THRESHOLD_HOURS
    geo_timeout_seconds: float = constants.DEFAULT_GEO_TIMEOUT_SECONDS

    @classmethod
    def from_module(cls, settings: Any) -> "TrackerSettings":
        """Build from a settings module; missing attributes keep the defaults."""

        def _get(name: str, default):
            return getattr(settings, name, default)

        def _cutoff(name: str, default: time) -> time:
            value = _get(name, default)
            return parse_hhmm(value) if isinstance(value, str) else value

        return cls(
            office=Coordinate(float(_get("OFFICE_LAT", 0.0)), float(_get("OFFICE_LON", 0.0))),
            geofence_radius_km=float(_get("GEOFENCE_RADIUS_KM", constants.DEFAULT_GEOFENCE_RADIUS_KM)),
            late_checkin_cutoff=_cutoff("LATE_CHECKIN_CUTOFF", constants.DEFAULT_LATE_CHECKIN_CUTOFF),
            late_break_end_cutoff=_cutoff("LATE_BREAK_END_CUTOFF", constants.DEFAULT_LATE_BREAK_END_CUTOFF),
            default_missing_break_hours=float(
                _get("DEFAULT_MISSING_BREAK_HOURS", constants.DEFAULT_MISSING_BREAK_HOURS)
            ),
            default_missing_checkout_hours=float(
                _get("DEFAULT_MISSING_CHECKOUT_HOURS", constants.DEFAULT_MISSING_CHECKOUT_HOURS)
            ),
            daily_hour_cap=float(_get("DAILY_HOUR_CAP", constants.DEFAULT_DAILY_HOUR_CAP)),
            expected_hours_per_workday=float(
                _get("EXPECTED_HOURS_PER_WORKDAY", constants.DEFAULT_EXPECTED_HOURS_PER_WORKDAY)
            ),
            half_day_threshold_hours=float(
                _get("HALF_DAY_THRESHOLD_HOURS", constants.DEFAULT_HALF_DAY_THRESHOLD_HOURS)
            ),
            geo_timeout_seconds=float(_get("GEO_TIMEOUT_SECONDS", constants.DEFAULT_GEO_TIMEOUT_SECONDS)),
        )
