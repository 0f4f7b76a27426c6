"""
Unified constants for segment exploring.
"""

from enum import Enum


class ActivityType(str, Enum):
    """
    Activity types accepted by Strava's segment explore endpoint.
    """
    RIDING = "riding"
    RUNNING = "running"


# Strava's explore endpoint never returns more than this many segments
EXPLORE_PAGE_LIMIT = 10

STRAVA_API_URL = "https://www.strava.com/api/v3"
STRAVA_AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
STRAVA_TOKEN_URL = "https://www.strava.com/oauth/token"
