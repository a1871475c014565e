"""
Data access layer for tasks.

``TaskRepository`` is the only code that talks to the database. It wraps
the Flask-SQLAlchemy extension (which owns the pooled engine), issues
parameterised statements through SQLAlchemy constructs, and reports
missing rows with ``None``/``False`` instead of raising.

The repository is constructed by :func:`taskflow.create_app` and stored on
the application, so tests can hand in a double and the server can dispose
of the pool on shutdown.
"""

import logging

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from taskflow.models import Task
from taskflow.schemas import TaskInput

logger = logging.getLogger(__name__)

EXTENSION_KEY = "taskflow"

# Upper bound of the SERIAL primary key
MAX_TASK_ID = 2**31 - 1


class SchemaInitializationError(RuntimeError):
    """Raised when the tasks table cannot be created at startup."""


class TaskRepository:
    """CRUD operations for :class:`~taskflow.models.Task` rows."""

    def __init__(self, database: SQLAlchemy):
        self._db = database

    @property
    def session(self):
        return self._db.session

    def ensure_schema(self) -> None:
        """
        Create the ``tasks`` table if it does not exist.

        Must run inside an application context.

        Raises:
            SchemaInitializationError: If the DDL cannot be executed.
        """
        try:
            self._db.create_all()
        except SQLAlchemyError as exc:
            logger.error("Database initialization error: %s", exc)
            raise SchemaInitializationError("Unable to create the tasks table") from exc
        logger.info("Database initialized successfully with tasks table")

    def list_tasks(self) -> list[Task]:
        """Return every task, newest first."""
        stmt = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        return list(self.session.scalars(stmt).all())

    def get_task(self, task_id: int) -> Task | None:
        """
        Return the task with *task_id*, or None when it does not exist.

        Ids outside the primary key range cannot exist and are answered
        without a query.
        """
        if not 1 <= task_id <= MAX_TASK_ID:
            return None
        return self.session.get(Task, task_id)

    def create_task(self, task_input: TaskInput) -> Task:
        """Insert a task and return it with its generated id and timestamp."""
        task = Task(title=task_input.title, description=task_input.description)
        self.session.add(task)
        self._commit()
        return task

    def update_task(self, task_id: int, task_input: TaskInput) -> Task | None:
        """
        Replace title and description of an existing task.

        Returns:
            The updated task, or None if no task has *task_id*.
        """
        task = self.get_task(task_id)
        if task is None:
            return None

        task.title = task_input.title
        task.description = task_input.description
        self._commit()
        return task

    def delete_task(self, task_id: int) -> bool:
        """
        Hard-delete a task.

        Returns:
            True if a row was removed, False if no task has *task_id*.
        """
        task = self.get_task(task_id)
        if task is None:
            return False

        self.session.delete(task)
        self._commit()
        return True

    def count_tasks(self) -> int:
        return self.session.scalar(select(func.count()).select_from(Task)) or 0

    def database_version(self) -> str:
        """Return the storage engine's version banner."""
        if self._db.engine.dialect.name == "sqlite":
            query = text("SELECT 'SQLite ' || sqlite_version()")
        else:
            query = text("SELECT version()")
        return str(self.session.execute(query).scalar_one())

    def dispose(self) -> None:
        """Close every pooled connection. Requires an application context."""
        self.session.remove()
        self._db.engine.dispose()
        logger.info("Database pool closed")

    def rollback(self) -> None:
        self.session.rollback()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise


def get_repository() -> TaskRepository:
    """Return the repository registered on the current application."""
    return current_app.extensions[EXTENSION_KEY]
