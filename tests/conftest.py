"""Shared pytest fixtures for all tests."""
import pytest
from fastapi.testclient import TestClient
from puma_stats.core.config import settings
from puma_stats.main import app
from puma_stats.services.transport import parse_control_url


@pytest.fixture
def test_client():
    """Provide a FastAPI TestClient instance."""
    return TestClient(app)


@pytest.fixture
def control_base_url():
    """HTTP base URL behind the configured control URL."""
    return parse_control_url(settings.control_url).base_url


@pytest.fixture
def mock_puma_stats_response():
    """Mock Puma control app /stats response, nested the way Puma sends it."""
    return {
        "started_at": "2025-01-01T00:00:00Z",
        "workers": 2,
        "phase": 1,
        "booted_workers": 2,
        "old_workers": 0,
        "worker_status": [
            {
                "started_at": "2025-01-01T00:00:00Z",
                "pid": 4101,
                "index": 0,
                "phase": 1,
                "booted": True,
                "last_checkin": "2025-01-01T00:05:00Z",
                "last_status": {
                    "backlog": 0,
                    "running": 2,
                    "pool_capacity": 3,
                    "max_threads": 5,
                    "requests_count": 120,
                },
            },
            {
                "started_at": "2025-01-01T00:00:00Z",
                "pid": 4102,
                "index": 1,
                "phase": 1,
                "booted": True,
                "last_checkin": "2025-01-01T00:05:00Z",
                "last_status": {
                    "backlog": 3,
                    "running": 5,
                    "pool_capacity": 0,
                    "max_threads": 5,
                    "requests_count": 340,
                    "oldest_request_start": "2025-01-01T00:00:00Z",
                },
            },
        ],
    }


@pytest.fixture
def flat_worker_entries():
    """The same two workers with counters at the top level."""
    return [
        {
            "index": 0,
            "running": 2,
            "max_threads": 5,
            "backlog": 0,
            "pool_capacity": 3,
            "requests_count": 120,
            "oldest_request_start": None,
        },
        {
            "index": 1,
            "running": 5,
            "max_threads": 5,
            "backlog": 3,
            "pool_capacity": 0,
            "requests_count": 340,
            "oldest_request_start": "2025-01-01T00:00:00Z",
        },
    ]
