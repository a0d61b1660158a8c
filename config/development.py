import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Bearer tokens are signed with JWT_SECRET (falls back to SECRET_KEY).
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)
TOKEN_TTL_MINUTES = int(os.getenv("TOKEN_TTL_MINUTES", str(60 * 24)))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create the demo admin/employee accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
