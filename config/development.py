import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "json" (users.json + db.json under DATA_DIR) or "mysql" (documents table)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
DATA_DIR = os.getenv("DATA_DIR", "data")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "project_tracker"),
}

# Frontend dev server runs on another port.
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

DEBUG = True

# If enabled (mysql backend only), app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create the demo accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
