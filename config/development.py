import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "campus_portal"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "0")),
}

# Service-account fields, or a path to the JSON key in FIREBASE_CREDENTIALS_FILE.
FIREBASE_CONFIG = {
    "credentials_file": os.getenv("FIREBASE_CREDENTIALS_FILE"),
    "project_id": os.getenv("FIREBASE_PROJECT_ID"),
    "private_key_id": os.getenv("FIREBASE_PRIVATE_KEY_ID"),
    "private_key": os.getenv("FIREBASE_PRIVATE_KEY"),
    "client_email": os.getenv("FIREBASE_CLIENT_EMAIL"),
    "client_id": os.getenv("FIREBASE_CLIENT_ID"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Initial password = date of birth (old behaviour). Off: random password + setup link.
LEGACY_DOB_PASSWORDS = bool(int(os.getenv("LEGACY_DOB_PASSWORDS", "0")))

SUMMARY_WINDOW_DAYS = int(os.getenv("SUMMARY_WINDOW_DAYS", "180"))

# Hard ceiling for any request body; per-upload limits are checked by the services.
MAX_CONTENT_LENGTH = 12 * 1024 * 1024
