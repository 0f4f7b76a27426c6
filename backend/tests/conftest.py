"""
Shared fixtures.

Outbound Strava calls are faked with httpx.MockTransport; nothing
leaves the process.
"""

from typing import Callable

import httpx
import pytest

from app.config import settings
from app.features.segments import clear_stores
from app.features.strava import StravaClient, StravaOAuth, StravaRateLimiter


@pytest.fixture(autouse=True)
def _fresh_segment_cache():
    """Segment caches are process-wide; isolate every test."""
    clear_stores()
    yield
    clear_stores()


@pytest.fixture
def strava_credentials(monkeypatch):
    """Pretend Strava is configured."""
    monkeypatch.setattr(settings, "strava_client_id", "12345")
    monkeypatch.setattr(settings, "strava_client_secret", "s3cret")


@pytest.fixture
def make_strava_client() -> Callable[..., StravaClient]:
    """Build a StravaClient whose requests go to a handler function."""
    def _make(handler, token: str = "test-token", limiter=None) -> StravaClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return StravaClient(
            token,
            http_client=http_client,
            limiter=limiter or StravaRateLimiter(),
        )
    return _make


@pytest.fixture
def make_oauth() -> Callable[..., StravaOAuth]:
    """Build a StravaOAuth whose requests go to a handler function."""
    def _make(handler) -> StravaOAuth:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return StravaOAuth(http_client=http_client)
    return _make
