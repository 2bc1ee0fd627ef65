import os
import tempfile

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE_BACKEND = "json"
DATA_DIR = os.getenv("DATA_DIR", tempfile.mkdtemp(prefix="timesheet-test-"))
WORK_ENTRIES_FILE = "work-entries.data.json"
USERS_FILE = "users.data.json"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheet_test"),
}

AUTO_INIT_DB = False
AUTO_SEED_DB = False

DEFAULT_HOURLY_RATE = (10, 0)
ADMIN_TOKEN_TTL_MINUTES = 15
DEFAULT_LOCALE = "en"
SINGLE_OPEN_ENTRY = False
MAX_PHOTO_BYTES = 5 * 1024 * 1024

SEED_ADMIN_EMAIL = "admin"
SEED_ADMIN_PASSWORD = "admin"
