"""
View model for the task board page.

``TaskBoard`` owns everything the page shows: the task list as last
returned by the API, the add/edit form draft, the in-flight flag and the
error/success messages. Every mutation is followed by a full refetch of
the list; local state is never patched optimistically.

Overlapping requests are not guarded against. Each action reports its own
failure with a generic "Failed to ..." message regardless of whether the
API answered 400, 404, 500 or not at all.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Protocol

import requests

logger = logging.getLogger(__name__)


class TaskApi(Protocol):
    """The subset of :class:`~taskflow.client.api.TaskApiClient` the board uses."""

    def list_tasks(self) -> list[dict[str, Any]]: ...

    def create_task(self, title: str, description: str) -> dict[str, Any]: ...

    def update_task(self, task_id: int, title: str, description: str) -> dict[str, Any]: ...

    def delete_task(self, task_id: int) -> dict[str, Any]: ...


@dataclass
class TaskDraft:
    """Contents of the add/edit form."""

    title: str = ""
    description: str = ""

    def is_complete(self) -> bool:
        return bool(self.title) and bool(self.description)


class TaskBoard:
    """
    State and actions behind the task page.

    Attributes:
        tasks: Tasks from the most recent successful fetch.
        new_task: The form draft.
        loading: True while an API call is in flight.
        error: Message describing the last failure, or "".
        success: Message describing the last completed mutation, or "".
        editing_task: Task currently being edited, or None when adding.
    """

    def __init__(
        self,
        api: TaskApi,
        *,
        new_task: TaskDraft | None = None,
        editing_task: dict[str, Any] | None = None,
        error: str = "",
        success: str = "",
    ):
        self.api = api
        self.tasks: list[dict[str, Any]] = []
        self.new_task = new_task or TaskDraft()
        self.loading = False
        self.error = error
        self.success = success
        self.editing_task = editing_task

    @property
    def is_editing(self) -> bool:
        return self.editing_task is not None

    @contextmanager
    def _in_flight(self) -> Iterator[None]:
        self.loading = True
        try:
            yield
        finally:
            self.loading = False

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def fetch_tasks(self) -> bool:
        """Replace ``tasks`` with the server's list. Returns True on success."""
        with self._in_flight():
            try:
                self.tasks = self.api.list_tasks()
            except requests.RequestException as exc:
                self.error = "Failed to fetch tasks"
                logger.error("Error fetching tasks: %s", exc)
                return False
            self.error = ""
            return True

    def submit(self) -> bool:
        """
        Create a task from the draft, or update the task being edited.

        On success the draft and edit mode are cleared and the list is
        refetched. On failure the draft is kept so the user can retry.

        Returns:
            True if the create/update call succeeded.
        """
        if not self.new_task.is_complete():
            self.error = "Please fill in all fields"
            return False

        action, progressive = ("update", "updating") if self.is_editing else ("add", "adding")
        with self._in_flight():
            try:
                if self.editing_task is not None:
                    self.api.update_task(
                        self.editing_task["id"],
                        self.new_task.title,
                        self.new_task.description,
                    )
                    self.success = "Task updated successfully!"
                    self.editing_task = None
                else:
                    self.api.create_task(self.new_task.title, self.new_task.description)
                    self.success = "Task added successfully!"
            except requests.RequestException as exc:
                self.error = f"Failed to {action} task"
                logger.error("Error %s task: %s", progressive, exc)
                return False

            self.new_task = TaskDraft()
            self.error = ""

        self.fetch_tasks()
        return True

    def delete(self, task_id: int) -> bool:
        """Delete a task and refetch the list. Returns True on success."""
        with self._in_flight():
            try:
                self.api.delete_task(task_id)
            except requests.RequestException as exc:
                self.error = "Failed to delete task"
                logger.error("Error deleting task: %s", exc)
                return False
            self.success = "Task deleted successfully!"
            self.error = ""

        self.fetch_tasks()
        return True

    def start_edit(self, task: dict[str, Any]) -> None:
        """Load *task* into the form and switch to edit mode."""
        self.editing_task = task
        self.new_task = TaskDraft(
            title=task.get("title", ""),
            description=task.get("description", ""),
        )
        self.error = ""
        self.success = ""

    def resume_edit(self) -> None:
        """
        Refill the draft of the task being edited from the fetched list.

        Leaves edit mode when the task is no longer listed. Messages are
        kept.
        """
        if self.editing_task is None:
            return

        task_id = self.editing_task["id"]
        task = next((listed for listed in self.tasks if listed["id"] == task_id), None)
        if task is None:
            logger.warning("Task %s being edited is no longer listed", task_id)
            self.editing_task = None
            self.new_task = TaskDraft()
            return

        self.editing_task = task
        self.new_task = TaskDraft(title=task["title"], description=task["description"])

    def cancel_edit(self) -> None:
        """Leave edit mode and clear the form."""
        self.editing_task = None
        self.new_task = TaskDraft()
        self.error = ""
        self.success = ""

    # -------------------------------------------------------------------------
    # Persistence between page loads
    # -------------------------------------------------------------------------

    def to_state(self) -> dict[str, Any]:
        """
        Return the part of the board that must survive a page reload.

        Only bounded values are kept, since the state travels in a cookie.
        The draft and the edited task are rebuilt from the refetched list
        by :meth:`resume_edit`.
        """
        return {
            "editing_task_id": self.editing_task["id"] if self.editing_task else None,
            "error": self.error,
            "success": self.success,
        }

    @classmethod
    def from_state(cls, api: TaskApi, state: dict[str, Any] | None) -> TaskBoard:
        """Rebuild a board from :meth:`to_state` output (or start empty)."""
        state = state or {}
        editing_task_id = state.get("editing_task_id")
        return cls(
            api,
            editing_task={"id": editing_task_id} if editing_task_id is not None else None,
            error=state.get("error", ""),
            success=state.get("success", ""),
        )
