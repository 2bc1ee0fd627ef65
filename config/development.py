import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# "json" (files under DATA_DIR) or "mysql" (DB_CONFIG)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
DATA_DIR = os.getenv("DATA_DIR", "./data")
WORK_ENTRIES_FILE = os.getenv("WORK_ENTRIES_FILE", "work-entries.data.json")
USERS_FILE = os.getenv("USERS_FILE", "users.data.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheet_db"),
}

# If enabled (mysql only), schema.sql is applied on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

# (euros, cents)
DEFAULT_HOURLY_RATE = (int(os.getenv("DEFAULT_RATE_EUROS", "10")), int(os.getenv("DEFAULT_RATE_CENTS", "0")))
ADMIN_TOKEN_TTL_MINUTES = int(os.getenv("ADMIN_TOKEN_TTL_MINUTES", "15"))
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "en")
SINGLE_OPEN_ENTRY = bool(int(os.getenv("SINGLE_OPEN_ENTRY", "0")))
MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(5 * 1024 * 1024)))

SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin")
SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin")
