import os
from datetime import timedelta

from dotenv import load_dotenv

# load .env from backend folder
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(basedir, ".env"))


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


class Config:

    # -------------------------
    # Flask core
    # -------------------------
    SECRET_KEY = os.getenv("SECRET_KEY", "fallback-secret-change-me-in-production")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # -------------------------
    # Storage
    # -------------------------
    # memory | sql
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").lower()

    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    DB_HOST = os.getenv("DB_HOST")
    DB_PORT = os.getenv("DB_PORT")
    DB_NAME = os.getenv("DB_NAME")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI")
    if not SQLALCHEMY_DATABASE_URI:
        if all([DB_USER, DB_PASSWORD, DB_HOST, DB_PORT, DB_NAME]):
            SQLALCHEMY_DATABASE_URI = (
                f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}"
                f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
            )
        else:
            SQLALCHEMY_DATABASE_URI = f"sqlite:///{os.path.join(basedir, 'fintrack.db')}"

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # -------------------------
    # Sessions (JWT in a cookie)
    # -------------------------
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("SESSION_HOURS", "24")))
    JWT_ACCESS_COOKIE_NAME = "fintrack_session"
    JWT_COOKIE_SECURE = _env_bool("JWT_COOKIE_SECURE", False)
    JWT_COOKIE_CSRF_PROTECT = _env_bool("JWT_COOKIE_CSRF_PROTECT", False)
    JWT_SESSION_COOKIE = False

    # -------------------------
    # CORS
    # -------------------------
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # -------------------------
    # Notifications
    # -------------------------
    LARGE_EXPENSE_THRESHOLD = float(os.getenv("LARGE_EXPENSE_THRESHOLD", "100"))
