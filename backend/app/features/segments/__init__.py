"""
Segments feature: loading, caching and presenting Strava segments.

Components:
- SegmentStore: in-memory cache by segment id
- SegmentLoader: viewport exploring with quadrant subdivision
- presenter: SegmentView building, visibility filter, difficulty sort
"""

from .store import (
    SegmentEntry,
    SegmentStore,
    clear_stores,
    get_store,
    summary_from_details,
)
from .loader import SegmentLoader
from .presenter import (
    build_badge,
    build_segment_view,
    list_segment_views,
    score_entry,
    sort_by_difficulty,
    visible_segments,
)
from .schemas import (
    DifficultyBadge,
    DifficultyClassSchema,
    DifficultyRequest,
    DifficultyResponse,
    SegmentListResponse,
    SegmentView,
)

__all__ = [
    "SegmentEntry",
    "SegmentStore",
    "get_store",
    "clear_stores",
    "summary_from_details",
    "SegmentLoader",
    "build_badge",
    "build_segment_view",
    "list_segment_views",
    "score_entry",
    "sort_by_difficulty",
    "visible_segments",
    "DifficultyBadge",
    "DifficultyClassSchema",
    "DifficultyRequest",
    "DifficultyResponse",
    "SegmentListResponse",
    "SegmentView",
]
