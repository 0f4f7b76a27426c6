"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import Bounds, decode_polyline
    from app.shared.formatters import format_distance
"""
from .geo import Bounds
from .polyline import decode_polyline, encode_polyline
from .formatters import (
    PLACEHOLDER,
    format_distance,
    format_grade,
    format_elevation,
    format_power,
    format_score,
    format_duration,
    grade_class,
)
from .constants import (
    ActivityType,
    EXPLORE_PAGE_LIMIT,
    STRAVA_API_URL,
    STRAVA_AUTHORIZE_URL,
    STRAVA_TOKEN_URL,
)

__all__ = [
    # geo
    "Bounds",
    # polyline
    "decode_polyline",
    "encode_polyline",
    # formatters
    "PLACEHOLDER",
    "format_distance",
    "format_grade",
    "format_elevation",
    "format_power",
    "format_score",
    "format_duration",
    "grade_class",
    # constants
    "ActivityType",
    "EXPLORE_PAGE_LIMIT",
    "STRAVA_API_URL",
    "STRAVA_AUTHORIZE_URL",
    "STRAVA_TOKEN_URL",
]
