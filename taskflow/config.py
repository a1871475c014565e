"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults, so the same code can
run against a local SQLite file or a managed PostgreSQL instance.
"""

import os
from pathlib import Path

from sqlalchemy.engine import URL

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to *default*."""
    raw_value = os.environ.get(name, "").strip()
    if not raw_value:
        return default
    return int(raw_value)


def build_database_uri() -> str:
    """
    Build the PostgreSQL connection string from the ``DB_*`` variables.

    ``DATABASE_URL`` wins when it is set.

    Returns:
        SQLAlchemy database URL string.
    """
    database_url = os.environ.get("DATABASE_URL", "").strip()
    if database_url:
        return database_url

    url = URL.create(
        drivername="postgresql+psycopg2",
        username=os.environ.get("DB_USER", "postgres"),
        password=os.environ.get("DB_PASSWORD", "password"),
        host=os.environ.get("DB_HOST", "localhost"),
        port=_env_int("DB_PORT", 5432),
        database=os.environ.get("DB_NAME", "taskflow_db"),
    )
    return url.render_as_string(hide_password=False)


def build_engine_options(database_uri: str) -> dict:
    """
    Build SQLAlchemy engine options for the configured database.

    PostgreSQL connections get pool bounds and the libpq ``sslmode``.
    ``require`` encrypts the connection without validating the server
    certificate; ``verify-full`` validates it.

    Args:
        database_uri: The database URL the engine will connect to.

    Returns:
        Keyword arguments for ``create_engine``.
    """
    options: dict = {"pool_pre_ping": True}
    if database_uri.startswith("postgresql"):
        options["pool_size"] = _env_int("DB_POOL_SIZE", 5)
        options["max_overflow"] = _env_int("DB_MAX_OVERFLOW", 10)
        options["connect_args"] = {"sslmode": os.environ.get("DB_SSLMODE", "require")}
    return options


class Config:
    """Base configuration with default settings."""

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    SQLALCHEMY_DATABASE_URI: str = build_database_uri()
    SQLALCHEMY_ENGINE_OPTIONS: dict = build_engine_options(SQLALCHEMY_DATABASE_URI)

    HOST: str = os.environ.get("HOST", "0.0.0.0")
    PORT: int = _env_int("PORT", 5000)

    # Reported by /health
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    # Where the UI reaches the JSON API
    API_URL: str = os.environ.get("API_URL", f"http://localhost:{PORT}/api")
    API_TIMEOUT: int = _env_int("API_TIMEOUT", 5)


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    ENVIRONMENT: str = "testing"

    # Use separate test database with check_same_thread=False for multi-threaded access
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "TEST_DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'test_tasks.db'}?check_same_thread=False"
    )
    SQLALCHEMY_ENGINE_OPTIONS: dict = build_engine_options(SQLALCHEMY_DATABASE_URI)

    API_URL: str = os.environ.get("TEST_API_URL", "http://task-api/api")
    API_TIMEOUT: int = 1


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False

    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "production")


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
