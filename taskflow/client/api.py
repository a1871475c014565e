"""
HTTP client for the TaskFlow JSON API.

Centralises communication with ``/api/tasks`` so that every call uses the
configured base URL and timeout. Non-2xx responses are raised as
:class:`requests.HTTPError`, which means callers only have to handle
:class:`requests.RequestException` to cover network failures, timeouts
and API errors alike.
"""

from typing import Any

import requests


class TaskApiClient:
    """Thin wrapper around :func:`requests.request` for the task endpoints."""

    def __init__(self, base_url: str, timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, path: str) -> str:
        """Join the base URL with *path* without doubling slashes."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """
        Send a request and raise for non-2xx statuses.

        Raises:
            requests.Timeout: If the API does not answer within ``timeout``.
            requests.HTTPError: If the API answers with a 4xx/5xx status.
            requests.RequestException: For other network-level failures.
        """
        response = requests.request(
            method=method,
            url=self._url(path),
            headers={"Accept": "application/json"},
            timeout=self.timeout,
            **kwargs,
        )
        response.raise_for_status()
        return response

    def list_tasks(self) -> list[dict[str, Any]]:
        return self._request("GET", "/tasks").json()

    def create_task(self, title: str, description: str) -> dict[str, Any]:
        return self._request(
            "POST", "/tasks", json={"title": title, "description": description}
        ).json()

    def update_task(self, task_id: int, title: str, description: str) -> dict[str, Any]:
        return self._request(
            "PUT", f"/tasks/{task_id}", json={"title": title, "description": description}
        ).json()

    def delete_task(self, task_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}").json()
