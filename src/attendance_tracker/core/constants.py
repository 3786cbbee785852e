"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

EARTH_RADIUS_KM = 6371.0

DEFAULT_GEOFENCE_RADIUS_KM = 0.5
DEFAULT_LATE_CHECKIN_CUTOFF = time(9, 30)
DEFAULT_LATE_BREAK_END_CUTOFF = time(14, 10)
DEFAULT_MISSING_BREAK_HOURS = 1.0
DEFAULT_MISSING_CHECKOUT_HOURS = 4.0
DEFAULT_DAILY_HOUR_CAP = 12.0
DEFAULT_EXPECTED_HOURS_PER_WORKDAY = 8.0
DEFAULT_HALF_DAY_THRESHOLD_HOURS = 4.0

DEFAULT_GEO_TIMEOUT_SECONDS = 10.0
DEFAULT_RETRY_MAX_ATTEMPTS = 3
DEFAULT_RETRY_BACKOFF_SECONDS = 0.5

HALF_DAY_TIMING = "Half Day"
