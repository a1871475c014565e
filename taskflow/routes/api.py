"""
REST API endpoints for Task management.

This module provides CRUD operations for tasks via HTTP methods plus a
small statistics endpoint. All endpoints return JSON responses and
delegate persistence to the injected :class:`~taskflow.repository.TaskRepository`.

Endpoints:
    GET    /api/tasks          - List all tasks, newest first
    GET    /api/tasks/<id>     - Get a single task by ID
    POST   /api/tasks          - Create a new task
    PUT    /api/tasks/<id>     - Replace title and description of a task
    DELETE /api/tasks/<id>     - Delete a task
    GET    /api/stats          - Task count, database and backend versions, uptime
"""

import logging
import time

from flask import Blueprint, Response, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

import taskflow
from taskflow.repository import get_repository
from taskflow.schemas import parse_task_input

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List all tasks.

    Returns:
        JSON array of tasks ordered by creation time, newest first.
    """
    logger.info("GET /api/tasks - Fetching all tasks")

    tasks = get_repository().list_tasks()
    logger.info("Found %d tasks", len(tasks))

    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks/<int:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        JSON response with task data and 200 status code,
        or error message and 404 if not found.
    """
    logger.info("GET /api/tasks/%s - Fetching task", task_id)

    task = get_repository().get_task(task_id)
    if task is None:
        logger.warning("Task %s not found", task_id)
        return jsonify({"error": "Task not found"}), 404

    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        title: Task title (required, non-empty)
        description: Task description (required, non-empty)

    Returns:
        JSON response with created task and 201 status code,
        or error message and 400 if validation fails.
    """
    logger.info("POST /api/tasks - Creating new task")

    task_input, error = parse_task_input(request.get_json(silent=True))
    if task_input is None:
        logger.warning("Validation failed: %s", error)
        return jsonify({"error": error}), 400

    task = get_repository().create_task(task_input)

    logger.info("Created task with ID: %s", task.id)
    return jsonify(task.to_dict()), 201


@api_bp.route("/tasks/<int:task_id>", methods=["PUT"])
def update_task(task_id: int) -> tuple[Response, int]:
    """
    Update an existing task.

    Both fields are required; there is no partial update.

    Args:
        task_id: The unique identifier of the task.

    Request Body (JSON):
        title: Task title (required, non-empty)
        description: Task description (required, non-empty)

    Returns:
        JSON response with updated task and 200 status code,
        or error message and 400/404 if validation fails or not found.
    """
    logger.info("PUT /api/tasks/%s - Updating task", task_id)

    task_input, error = parse_task_input(request.get_json(silent=True))
    if task_input is None:
        logger.warning("Validation failed: %s", error)
        return jsonify({"error": error}), 400

    task = get_repository().update_task(task_id, task_input)
    if task is None:
        logger.warning("Task %s not found", task_id)
        return jsonify({"error": "Task not found"}), 404

    logger.info("Updated task %s", task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    """
    Delete a task.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        JSON response with success message and 200 status code,
        or error message and 404 if not found.
    """
    logger.info("DELETE /api/tasks/%s - Deleting task", task_id)

    if not get_repository().delete_task(task_id):
        logger.warning("Task %s not found", task_id)
        return jsonify({"error": "Task not found"}), 404

    logger.info("Deleted task %s", task_id)
    return jsonify({"message": "Task deleted successfully"}), 200


@api_bp.route("/stats", methods=["GET"])
def get_stats() -> tuple[Response, int]:
    """
    Report database statistics and process information.

    Returns:
        JSON object with ``task_count``, ``database_version``,
        ``backend_version`` and ``uptime`` (seconds).
    """
    logger.info("GET /api/stats - Fetching stats")

    repository = get_repository()
    return jsonify({
        "task_count": repository.count_tasks(),
        "database_version": repository.database_version(),
        "backend_version": taskflow.__version__,
        "uptime": round(time.monotonic() - current_app.config["STARTED_AT"], 3),
    }), 200


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(SQLAlchemyError)
def storage_error(error: SQLAlchemyError) -> tuple[Response, int]:
    """Roll back the request's session and hide driver details from the caller."""
    logger.exception("Database error while handling %s %s", request.method, request.path)
    get_repository().rollback()
    return jsonify({"error": "Internal server error"}), 500
