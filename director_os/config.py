"""
Director OS
Configuration classes for the Flask App Factory and the client data layer.

Usage:
    config_name = os.getenv("APP_ENV", "development")
    app.config.from_object(config[config_name])

    settings = ClientSettings.from_env()
"""

import os
import secrets
from dataclasses import dataclass

basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

# Default SQLite path for local dev when PostgreSQL is not running
_SQLITE_DEV = f"sqlite:///{os.path.join(basedir, 'instance', 'director_os_dev.db')}"
_SQLITE_TEST = "sqlite:///:memory:"

# Generate a random key for development; production MUST use a stable env var
_DEV_SECRET = secrets.token_hex(32)


def _env_flag(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Base configuration shared across all environments."""

    SECRET_KEY = os.getenv("SECRET_KEY", _DEV_SECRET)
    DEBUG = False
    TESTING = False

    # SQLAlchemy
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CORS: the dashboard client is served from another origin
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Seed the demo dataset into an empty database on startup
    SEED_ON_STARTUP = _env_flag("SEED_ON_STARTUP", "true")

    # Session tokens issued by POST /api/login
    JWT_ACCESS_EXPIRES = int(os.getenv("JWT_ACCESS_EXPIRES", "43200"))  # 12 h

    RATELIMIT_ENABLED = True
    LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "20/minute")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    _raw_db_url = os.getenv("DATABASE_URL", "")
    SQLALCHEMY_DATABASE_URI = (
        _raw_db_url.replace("postgres://", "postgresql://", 1) if _raw_db_url else _SQLITE_DEV
    )


class TestingConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", _SQLITE_TEST)
    SEED_ON_STARTUP = False
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    # Railway/Heroku use postgres:// but SQLAlchemy 2.0 requires postgresql://
    _raw_db_url = os.getenv("DATABASE_URL", "")
    SQLALCHEMY_DATABASE_URI = _raw_db_url.replace("postgres://", "postgresql://", 1) if _raw_db_url else None
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")  # Must be set explicitly in production
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 300,
        "pool_timeout": 20,
    }

    def __init__(self):
        if not self.SQLALCHEMY_DATABASE_URI:
            raise RuntimeError("DATABASE_URL environment variable is required in production")
        if not os.getenv("SECRET_KEY"):
            raise RuntimeError("SECRET_KEY environment variable must be set in production")


# Configuration mapping: environment name -> config class
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


# ── Client data layer ─────────────────────────────────────────────────────

DEFAULT_API_BASE = "http://localhost:3001/api"
DEFAULT_STORE_PATH = os.path.join(os.path.expanduser("~"), ".director_os", "local_store.json")
DEFAULT_FALLBACK_DELAY = 0.3
DEFAULT_HTTP_TIMEOUT = 10.0


@dataclass
class ClientSettings:
    """Settings for the client-side data access layer.

    Attributes:
        api_base:        Base URL of the remote REST API (no trailing slash).
        store_path:      JSON file backing the persisted local store.
        fallback_delay:  Seconds to wait before serving a request locally.
        http_timeout:    Per-request timeout handed to requests.
        gemini_api_key:  Text-generation credential ("" when not configured).
    """

    api_base: str = DEFAULT_API_BASE
    store_path: str = DEFAULT_STORE_PATH
    fallback_delay: float = DEFAULT_FALLBACK_DELAY
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    gemini_api_key: str = ""

    @classmethod
    def from_env(cls) -> "ClientSettings":
        return cls(
            api_base=os.getenv("DIRECTOR_OS_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            store_path=os.getenv("DIRECTOR_OS_STORE_PATH", DEFAULT_STORE_PATH),
            fallback_delay=float(os.getenv("DIRECTOR_OS_FALLBACK_DELAY", DEFAULT_FALLBACK_DELAY)),
            http_timeout=float(os.getenv("DIRECTOR_OS_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", ""),
        )
