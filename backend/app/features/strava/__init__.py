"""
Strava integration module.

Usage:
    from app.features.strava import StravaOAuth, StravaClient

Components:
- StravaOAuth: OAuth flow (auth URL, token exchange, refresh)
- StravaClient: Segment API client (explore, details)
- StravaRateLimiter: In-memory request budget
"""

from .oauth import (
    StravaOAuth,
    StravaOAuthError,
    TOKEN_FIELDS,
)
from .client import (
    StravaClient,
    StravaError,
    StravaAPIError,
    StravaAuthError,
    StravaRateLimitError,
    StravaRateLimiter,
    rate_limiter,
)

__all__ = [
    # OAuth
    "StravaOAuth",
    "StravaOAuthError",
    "TOKEN_FIELDS",
    # Client
    "StravaClient",
    "StravaError",
    "StravaAPIError",
    "StravaAuthError",
    "StravaRateLimitError",
    "StravaRateLimiter",
    "rate_limiter",
]
