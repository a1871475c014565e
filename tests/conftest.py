"""
Shared pytest fixtures for the TaskFlow test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Test client creation
"""

import os
import pytest
from datetime import datetime, timedelta, timezone
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from taskflow import create_app, db
from taskflow.models import Task


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests, improving performance.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Creates all tables before the test and drops them afterwards, so
    generated ids and row counts never leak between tests.

    Args:
        app: Flask application fixture.

    Yields:
        SQLAlchemy extension bound to the test database.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for creating Task rows directly in the database.

    Args:
        db_session: Database session fixture.

    Returns:
        Function that creates and returns Task instances.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task")
            assert task.id is not None
    """

    def _create_task(
        title: str | None = None,
        description: str | None = None,
        created_at: datetime | None = None
    ) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
        )
        if created_at is not None:
            task.created_at = created_at
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single task with known values."""
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
    )


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """
    Create three tasks with creation times one hour apart.

    Returns:
        Tasks in insertion order (oldest first).
    """
    base_time = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)
    return [
        task_factory(title="Oldest task", created_at=base_time),
        task_factory(title="Middle task", created_at=base_time + timedelta(hours=1)),
        task_factory(title="Newest task", created_at=base_time + timedelta(hours=2)),
    ]


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """Provide a valid body for POST/PUT requests."""
    return {
        "title": "Buy milk",
        "description": "2% lactose-free",
    }


@pytest.fixture
def api_headers() -> dict[str, str]:
    """Provide common headers for API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
