"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment variables before importing config
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_TO_FILE"] = "false"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ.pop("SENTRY_DSN", None)

from helpers.rate_limiter import share_limiter  # noqa: E402
from repositories.share_event_store import share_event_store  # noqa: E402


@pytest.fixture(autouse=True)
def reset_share_state():
    """Start every test with empty rate limit counters and no share events."""
    share_limiter.reset()
    share_event_store.clear()
    yield
    share_limiter.reset()
    share_event_store.clear()


@pytest.fixture(scope="function")
def client():
    """Create a test client for the application."""
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def share_payload() -> dict:
    """A valid share event body."""
    return {
        "contentId": "blog-1",
        "contentType": "blog",
        "platform": "twitter",
        "url": "https://example.com/blog/1",
    }
