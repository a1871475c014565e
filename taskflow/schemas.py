"""
Request body schema for task writes.

Both ``POST /api/tasks`` and ``PUT /api/tasks/<id>`` accept the same body,
so there is a single validator and a single typed value that the
repository consumes. Validation runs before any storage call.
"""

from dataclasses import dataclass
from typing import Any

REQUIRED_FIELDS_MESSAGE = "Title and description are required"

# Matches the tasks.title column
TITLE_MAX_LENGTH = 255
TITLE_TOO_LONG_MESSAGE = f"Title must be {TITLE_MAX_LENGTH} characters or less"


@dataclass(frozen=True)
class TaskInput:
    """Validated title/description pair for create and update."""

    title: str
    description: str


def validate_task_data(data: Any) -> tuple[bool, str | None]:
    """
    Validate a task payload from a request.

    Both fields must be present, be strings and be non-empty, and the
    title must fit the ``tasks.title`` column. Whitespace is kept as
    given; there is no partial update, so ``PUT`` has the same
    requirements as ``POST``.

    Args:
        data: Decoded JSON request body (may be None or a non-dict).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not isinstance(data, dict):
        return False, REQUIRED_FIELDS_MESSAGE

    for field in ("title", "description"):
        value = data.get(field)
        if not isinstance(value, str) or not value:
            return False, REQUIRED_FIELDS_MESSAGE

    if len(data["title"]) > TITLE_MAX_LENGTH:
        return False, TITLE_TOO_LONG_MESSAGE

    return True, None


def parse_task_input(data: Any) -> tuple[TaskInput | None, str | None]:
    """
    Validate *data* and build a :class:`TaskInput` from it.

    Returns:
        ``(TaskInput, None)`` on success, ``(None, error_message)`` otherwise.
    """
    is_valid, error = validate_task_data(data)
    if not is_valid:
        return None, error
    return TaskInput(title=data["title"], description=data["description"]), None
