import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "campus_portal_test"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "0")),
}

FIREBASE_CONFIG = {
    "credentials_file": os.getenv("FIREBASE_CREDENTIALS_FILE"),
    "project_id": os.getenv("FIREBASE_PROJECT_ID"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

LEGACY_DOB_PASSWORDS = False

SUMMARY_WINDOW_DAYS = 180

MAX_CONTENT_LENGTH = 12 * 1024 * 1024
