"""Shared settings read from the environment.

Every value has a fallback so the app boots on a fresh checkout. The fallback
secret and bootstrap admin credentials are for local use only.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]


def _flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


JWT_SECRET = os.getenv("JWT_SECRET", "replace_this_secret")
TOKEN_TTL_DAYS = int(os.getenv("TOKEN_TTL_DAYS", "7"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "123456"),
    "database": os.getenv("DB_NAME", "attendance_portal"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
}

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))

UPLOAD_FOLDER = Path(os.getenv("UPLOAD_FOLDER", str(BASE_DIR / "uploads")))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(5 * 1024 * 1024)))
ALLOWED_PHOTO_EXTENSIONS = frozenset(
    ext.strip().lower() for ext in os.getenv("ALLOWED_PHOTO_EXTENSIONS", "png,jpg,jpeg,gif,webp").split(",") if ext.strip()
)

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

SEED_DEFAULT_ADMIN = _flag("SEED_DEFAULT_ADMIN", "1")
DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@example.com")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "adminpass")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
TESTING = False
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
