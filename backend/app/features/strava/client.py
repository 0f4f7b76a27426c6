"""
Strava API client.

Segment endpoints only:
- GET /segments/explore  (max 10 segments per call)
- GET /segments/{id}

Strava API Limits:
- 200 requests per 15 minutes
- 2,000 requests per day

Requests are not retried; errors are raised to the caller.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import AsyncIterator, Callable, Optional

import httpx

from app.config import settings
from app.shared.constants import ActivityType, STRAVA_API_URL
from app.shared.geo import Bounds

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class StravaError(Exception):
    """Base Strava error."""
    pass


class StravaAPIError(StravaError):
    """Strava API error."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(f"API error: {status_code} {message}".strip())


class StravaAuthError(StravaError):
    """Authentication/authorization error."""
    pass


class StravaRateLimitError(StravaError):
    """Rate limit exceeded."""
    pass


# =============================================================================
# Rate Limiter
# =============================================================================

@dataclass
class _Usage:
    window_start: Optional[datetime] = None
    day: Optional[date] = None
    short: int = 0
    daily: int = 0


class StravaRateLimiter:
    """
    Request budget that counts the way Strava does.

    Strava uses fixed windows: the short-term count resets on the quarter
    hour (:00, :15, :30, :45), the daily count at midnight UTC. Once a
    budget is used up, further calls are refused locally instead of
    burning a 429 on Strava's side.

    Args:
        short_limit: Requests per window (Strava default 200)
        daily_limit: Requests per UTC day (Strava default 2000)
        window_minutes: Window length, must divide 60
        clock: Returns the current aware UTC datetime (tests pass a fake)
    """

    def __init__(
        self,
        short_limit: int = 200,
        daily_limit: int = 2000,
        window_minutes: int = 15,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.short_limit = short_limit
        self.daily_limit = daily_limit
        self.window_minutes = window_minutes
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._usage: dict[str, _Usage] = {}
        self._lock = asyncio.Lock()

    def _current(self, key: str) -> _Usage:
        now = self._clock()
        window_start = now.replace(
            minute=now.minute - now.minute % self.window_minutes,
            second=0,
            microsecond=0,
        )
        usage = self._usage.setdefault(key, _Usage())
        if usage.window_start != window_start:
            usage.window_start = window_start
            usage.short = 0
        if usage.day != now.date():
            if usage.day is not None:
                logger.info(f"Daily Strava budget reset for {key}")
            usage.day = now.date()
            usage.daily = 0
        return usage

    async def check_and_increment(self, key: str = "global") -> bool:
        """Count one request. False (and nothing counted) if over budget."""
        async with self._lock:
            usage = self._current(key)

            if usage.short >= self.short_limit:
                logger.warning(
                    f"Strava {self.window_minutes} min budget used up for {key}: "
                    f"{usage.short}/{self.short_limit}"
                )
                return False
            if usage.daily >= self.daily_limit:
                logger.warning(
                    f"Strava daily budget used up for {key}: "
                    f"{usage.daily}/{self.daily_limit}"
                )
                return False

            usage.short += 1
            usage.daily += 1
            return True

    def get_usage(self, key: str = "global") -> dict:
        """Requests counted in the current window and day."""
        usage = self._current(key)
        return {
            "short_term": {
                "used": usage.short,
                "limit": self.short_limit,
                "window_minutes": self.window_minutes,
            },
            "daily": {
                "used": usage.daily,
                "limit": self.daily_limit,
            },
        }


# Shared by all clients of this process
rate_limiter = StravaRateLimiter()


# =============================================================================
# Strava Client
# =============================================================================

class StravaClient:
    """
    Async client for Strava segment endpoints.

    Usage:
        client = StravaClient(access_token)
        summaries = await client.explore_segments(bounds, ActivityType.RIDING)
        details = await client.get_segment(summaries[0]["id"])
    """

    API_URL = STRAVA_API_URL

    def __init__(
        self,
        access_token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        limiter: Optional[StravaRateLimiter] = None
    ):
        self.access_token = access_token
        self._http_client = http_client
        self._limiter = limiter or rate_limiter

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            yield client

    async def _api_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None
    ) -> dict:
        """
        Make an authenticated API request with rate limiting.

        Raises:
            StravaRateLimitError: If rate limit exceeded
            StravaAuthError: If authentication fails
            StravaAPIError: If API returns error
        """
        if not await self._limiter.check_and_increment():
            raise StravaRateLimitError("Rate limit exceeded")

        async with self._client() as client:
            response = await client.request(
                method=method,
                url=f"{self.API_URL}{endpoint}",
                headers={"Authorization": f"Bearer {self.access_token}"},
                params=params
            )

        if "X-RateLimit-Limit" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        if response.status_code == 401:
            raise StravaAuthError("Invalid or expired token")
        elif response.status_code == 429:
            raise StravaRateLimitError("Strava rate limit exceeded")
        elif response.status_code != 200:
            raise StravaAPIError(response.status_code, response.text)

        return response.json()

    async def explore_segments(
        self,
        bounds: Bounds,
        activity_type: ActivityType = ActivityType.RIDING
    ) -> list[dict]:
        """
        Explore popular segments within bounds.

        Returns:
            Segment summaries (id, name, distance, avg_grade,
            elev_difference, start_latlng, points, ...). Empty list if none.
        """
        data = await self._api_request(
            "GET",
            "/segments/explore",
            params={
                "bounds": bounds.to_strava_param(),
                "activity_type": ActivityType(activity_type).value,
            }
        )
        return data.get("segments") or []

    async def get_segment(self, segment_id: int) -> dict:
        """
        Get detailed segment (distance, total_elevation_gain, xoms, map).
        """
        return await self._api_request("GET", f"/segments/{segment_id}")
