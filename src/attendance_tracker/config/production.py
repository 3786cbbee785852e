import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_BACKEND = "mysql"
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

OFFICE_LAT = float(os.getenv("OFFICE_LAT", "0"))
OFFICE_LON = float(os.getenv("OFFICE_LON", "0"))
GEOFENCE_RADIUS_KM = float(os.getenv("GEOFENCE_RADIUS_KM", "0.5"))
LATE_CHECKIN_CUTOFF = os.getenv("LATE_CHECKIN_CUTOFF", "09:30")
LATE_BREAK_END_CUTOFF = os.getenv("LATE_BREAK_END_CUTOFF", "14:10")
DEFAULT_MISSING_BREAK_HOURS = float(os.getenv("DEFAULT_MISSING_BREAK_HOURS", "1"))
DEFAULT_MISSING_CHECKOUT_HOURS = float(os.getenv("DEFAULT_MISSING_CHECKOUT_HOURS", "4"))
DAILY_HOUR_CAP = float(os.getenv("DAILY_HOUR_CAP", "12"))
EXPECTED_HOURS_PER_WORKDAY = float(os.getenv("EXPECTED_HOURS_PER_WORKDAY", "8"))
HALF_DAY_THRESHOLD_HOURS = float(os.getenv("HALF_DAY_THRESHOLD_HOURS", "4"))
GEO_TIMEOUT_SECONDS = float(os.getenv("GEO_TIMEOUT_SECONDS", "10"))

RETRY_MAX_ATTEMPTS = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))
RETRY_BACKOFF_SECONDS = float(os.getenv("RETRY_BACKOFF_SECONDS", "0.5"))
