"""
Client side of TaskFlow.

``TaskApiClient`` speaks HTTP to the JSON API and ``TaskBoard`` is the view
model behind the task page: it keeps the fetched list, the form draft and
the transient status messages in sync with the server.
"""

from taskflow.client.api import TaskApiClient
from taskflow.client.board import TaskBoard, TaskDraft

__all__ = ["TaskApiClient", "TaskBoard", "TaskDraft"]
