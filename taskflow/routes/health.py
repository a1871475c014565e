"""
Health check endpoint.

Mounted at the application root (``/health``), outside the ``/api``
prefix. It never touches the database.
"""

from datetime import datetime, timezone

from flask import Blueprint, Response, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": current_app.config.get("ENVIRONMENT", "development"),
    }), 200
