"""
Smoke-test fixtures.

Provides the ``smoke_base_url`` session-scoped fixture that yields the URL
of a running TaskFlow server. The suite is skipped when nothing answers
the health probe, so it can live beside the in-process tests.
"""

from __future__ import annotations

import os

import pytest
import requests


@pytest.fixture(scope="session")
def smoke_base_url() -> str:
    """Return a healthy server URL for smoke tests."""
    base_url = os.getenv("TEST_BASE_URL", "http://localhost:5000").rstrip("/")
    try:
        response = requests.get(f"{base_url}/health", timeout=2)
    except requests.RequestException as exc:
        pytest.skip(f"No TaskFlow server reachable at {base_url}: {exc}")
    if response.status_code != 200:
        pytest.skip(f"TaskFlow server at {base_url} is not healthy ({response.status_code})")
    return base_url
