"""
Database models for the TaskFlow application.

This module defines the SQLAlchemy model representing the single
``tasks`` table. The model is the storage contract; all reads and
writes go through :mod:`taskflow.repository`.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func

from taskflow import db


class Task(db.Model):
    """
    Task model representing a unit of work.

    Attributes:
        id: Unique identifier for the task.
        title: Short title describing the task.
        description: Detailed description of the task.
        created_at: Timestamp when the task was created.
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(255), nullable=False)
    description: str = db.Column(db.Text, nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now()
    )

    @staticmethod
    def _to_utc_iso(value: datetime | None) -> str | None:
        """
        Convert datetime to an ISO-8601 UTC string.

        SQLite commonly returns naive datetime values even when timezone-aware
        columns are declared. For API contracts, always normalize to UTC.
        """
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.isoformat()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to a dictionary representation.

        Returns:
            Dictionary containing all task fields.
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "created_at": self._to_utc_iso(self.created_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"
