SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendance_tracker_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "memory"
AUTO_INIT_DB = False

OFFICE_LAT = 31.4504
OFFICE_LON = 73.1350
GEOFENCE_RADIUS_KM = 0.5

RETRY_MAX_ATTEMPTS = 1
RETRY_BACKOFF_SECONDS = 0.0
