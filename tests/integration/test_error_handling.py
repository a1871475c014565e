"""
Error boundary tests for the API.

Storage failures are simulated by injecting a repository whose queries
raise, the same way a dropped database connection would surface. The
service must answer every such request with a generic 500 and keep
serving the next one.

Key Concepts Demonstrated:
- Dependency injection of a failing test double
- Verifying that internal error detail is not leaked
- Routing errors (unknown paths and methods)
"""

import json

import pytest
from sqlalchemy.exc import OperationalError

from taskflow import create_app, db
from taskflow.repository import SchemaInitializationError, TaskRepository

pytestmark = pytest.mark.integration


def _connection_refused() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused at db.internal:5432"))


class _UnreachableDatabaseRepository(TaskRepository):
    """Repository whose every query fails like a lost connection."""

    def list_tasks(self):
        raise _connection_refused()

    def get_task(self, task_id):
        raise _connection_refused()

    def create_task(self, task_input):
        raise _connection_refused()

    def update_task(self, task_id, task_input):
        raise _connection_refused()

    def delete_task(self, task_id):
        raise _connection_refused()

    def count_tasks(self):
        raise _connection_refused()


class _BrokenRepository(TaskRepository):
    """Repository that fails with a non-database error."""

    def list_tasks(self):
        raise RuntimeError("unexpected bug")


@pytest.fixture(scope="module")
def failing_client():
    application = create_app("testing", repository=_UnreachableDatabaseRepository(db))
    with application.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="module")
def broken_client():
    application = create_app("testing", repository=_BrokenRepository(db))
    with application.test_client() as test_client:
        yield test_client


class TestStorageErrors:
    """Database failures map to 500 with a generic body."""

    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("get", "/api/tasks", None),
            ("get", "/api/tasks/1", None),
            ("post", "/api/tasks", {"title": "t", "description": "d"}),
            ("put", "/api/tasks/1", {"title": "t", "description": "d"}),
            ("delete", "/api/tasks/1", None),
            ("get", "/api/stats", None),
        ],
    )
    def test_storage_error_returns_500(self, failing_client, api_headers, method, path, body):
        """Every endpoint that touches storage reports a generic 500."""
        # Act
        kwargs = {"headers": api_headers}
        if body is not None:
            kwargs["data"] = json.dumps(body)
        response = getattr(failing_client, method)(path, **kwargs)

        # Assert
        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error"}
        assert b"db.internal" not in response.data

    def test_validation_still_runs_before_storage(self, failing_client, api_headers):
        """An invalid body is rejected with 400 without reaching storage."""
        # Act
        response = failing_client.post(
            "/api/tasks",
            data=json.dumps({"title": "", "description": "x"}),
            headers=api_headers,
        )

        # Assert
        assert response.status_code == 400

    def test_health_unaffected_by_storage_errors(self, failing_client):
        """The health probe never touches storage."""
        # Act
        response = failing_client.get("/health")

        # Assert
        assert response.status_code == 200

    def test_service_keeps_serving_after_failure(self, failing_client):
        """A failed request does not take the service down."""
        # Act
        first = failing_client.get("/api/tasks")
        second = failing_client.get("/api/tasks")

        # Assert
        assert first.status_code == second.status_code == 500


class TestUnexpectedErrors:
    """Non-database exceptions hit the application-wide boundary."""

    def test_unexpected_exception_returns_generic_500(self, broken_client):
        # Act
        response = broken_client.get("/api/tasks")

        # Assert
        assert response.status_code == 500
        assert response.get_json() == {"error": "Something went wrong!"}
        assert b"unexpected bug" not in response.data


class TestRoutingErrors:
    """Unmatched routes return 404 with a JSON body."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("get", "/api/unknown"),
            ("get", "/api/tasks/not-a-number"),
            ("patch", "/api/tasks/1"),
            ("post", "/api/tasks/1"),
            ("delete", "/api/tasks"),
        ],
    )
    def test_unmatched_route_returns_404(self, client, method, path):
        # Act
        response = getattr(client, method)(path)

        # Assert
        assert response.status_code == 404
        assert response.get_json() == {"error": "Route not found"}


class TestStartupFaults:
    """Schema creation failure aborts application startup."""

    def test_create_app_raises_when_schema_cannot_be_created(self, monkeypatch):
        # Arrange
        def _refuse_ddl(*args, **kwargs):
            raise _connection_refused()

        monkeypatch.setattr(db, "create_all", _refuse_ddl)

        # Act / Assert
        with pytest.raises(SchemaInitializationError):
            create_app("testing")
