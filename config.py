"""Application configuration module."""

import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _normalize_database_url(url: str) -> str:
    """Rewrite legacy ``postgres://`` URLs into the scheme SQLAlchemy accepts."""

    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    PORT = int(os.getenv("PORT", "5000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Database
    DATABASE_URL = _normalize_database_url(os.getenv("DATABASE_URL", "sqlite:///app.db"))
    DATABASE_SSLMODE = os.getenv("DATABASE_SSLMODE")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Tokens
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_HEADER_TYPE = os.getenv("JWT_HEADER_TYPE", "")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    JWT_TOKEN_LOCATION = ["headers"]

    # Passwords
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # GET /api/users has always returned the stored hash; keep it switchable.
    USERS_INCLUDE_PASSWORD_HASH = _env_flag("USERS_INCLUDE_PASSWORD_HASH", True)

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]
