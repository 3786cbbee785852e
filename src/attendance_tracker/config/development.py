import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

OFFICE_LAT = float(os.getenv("OFFICE_LAT", "31.4504"))
OFFICE_LON = float(os.getenv("OFFICE_LON", "73.1350"))
GEOFENCE_RADIUS_KM = float(os.getenv("GEOFENCE_RADIUS_KM", "0.5"))
LATE_CHECKIN_CUTOFF = os.getenv("LATE_CHECKIN_CUTOFF", "09:30")
LATE_BREAK_END_CUTOFF = os.getenv("LATE_BREAK_END_CUTOFF", "14:10")
GEO_TIMEOUT_SECONDS = float(os.getenv("GEO_TIMEOUT_SECONDS", "10"))

RETRY_MAX_ATTEMPTS = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))
RETRY_BACKOFF_SECONDS = float(os.getenv("RETRY_BACKOFF_SECONDS", "0.5"))
