"""
Flask application factory module.

This module creates and configures the TaskFlow application using
the factory pattern, allowing for different configurations
(development, testing, production) and an injected data access layer.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify
from flask_sqlalchemy import SQLAlchemy
from werkzeug.exceptions import HTTPException

from taskflow.config import get_config

if TYPE_CHECKING:
    from taskflow.repository import TaskRepository

__version__ = "1.0.0"

# Initialize SQLAlchemy without binding to app
db = SQLAlchemy()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def create_app(
    config_name: str | None = None,
    repository: TaskRepository | None = None,
) -> Flask:
    """
    Create and configure the Flask application.

    The tasks table is created before the application is returned, so a
    database that cannot be reached aborts startup instead of producing a
    service that fails every request.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.
        repository: Data access layer to use. Defaults to a
                    :class:`~taskflow.repository.TaskRepository` over ``db``.

    Returns:
        Configured Flask application instance.

    Raises:
        SchemaInitializationError: If the tasks table cannot be created.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.config["STARTED_AT"] = time.monotonic()

    logger.info("Creating app with config: %s", config_class.__name__)

    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    # Initialize extensions
    db.init_app(app)

    from taskflow.repository import EXTENSION_KEY, TaskRepository

    if repository is None:
        repository = TaskRepository(db)
    app.extensions[EXTENSION_KEY] = repository

    # Register blueprints
    from taskflow.routes.api import api_bp
    from taskflow.routes.health import health_bp
    from taskflow.routes.views import views_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(views_bp)

    _register_error_handlers(app)

    # Create database tables
    with app.app_context():
        repository.ensure_schema()

    return app


def _register_error_handlers(app: Flask) -> None:
    """Install the JSON error boundary shared by every route."""

    @app.errorhandler(404)
    @app.errorhandler(405)
    def route_not_found(error: HTTPException) -> tuple[Response, int]:
        """Unknown paths and unsupported methods are both unmatched routes."""
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(Exception)
    def unhandled_error(error: Exception) -> Response | tuple[Response, int]:
        """Return a generic 500 for anything a handler did not deal with."""
        if isinstance(error, HTTPException):
            return error.get_response()
        logger.exception("Unhandled error: %s", error)
        return jsonify({"error": "Something went wrong!"}), 500
