"""
Segment Routes

Endpoints for the map frontend:
- GET    /segments/explore - load viewport, return visible segments
- GET    /segments/{id}    - single segment
- DELETE /segments/cache   - drop cached segments (activity type switch)

The caller passes its Strava access token as a Bearer header.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from app.config import settings
from app.features.difficulty import DifficultyCalculator, DifficultyConfig
from app.features.segments import (
    SegmentListResponse,
    SegmentLoader,
    SegmentView,
    build_segment_view,
    get_store,
    list_segment_views,
)
from app.features.strava import (
    StravaAPIError,
    StravaAuthError,
    StravaClient,
    StravaError,
    StravaRateLimitError,
)
from app.shared.constants import ActivityType
from app.shared.geo import Bounds

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Dependencies
# =============================================================================

def get_access_token(authorization: Optional[str] = Header(None)) -> str:
    """Extract the Strava token from 'Authorization: Bearer <token>'."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Expected Bearer token")
    return token.strip()


def get_strava_client(token: str = Depends(get_access_token)) -> StravaClient:
    return StravaClient(token)


def _calculator(rider_mass: Optional[float]) -> DifficultyCalculator:
    mass = rider_mass if rider_mass is not None else settings.default_rider_mass_kg
    return DifficultyCalculator(DifficultyConfig(rider_mass_kg=mass))


def _raise_for_strava(e: StravaError) -> None:
    if isinstance(e, StravaAuthError):
        raise HTTPException(status_code=401, detail="Token abgelaufen. Bitte neu verbinden.")
    if isinstance(e, StravaRateLimitError):
        raise HTTPException(
            status_code=429,
            detail="Rate Limit erreicht. Bitte ein paar Minuten warten."
        )
    logger.error(f"Segment load error: {e}")
    raise HTTPException(status_code=502, detail="Fehler beim Laden der Segmente.")


# =============================================================================
# Routes
# =============================================================================

@router.get("/explore", response_model=SegmentListResponse)
async def explore_segments(
    bounds: str = Query(..., description="sw_lat,sw_lng,ne_lat,ne_lng"),
    activity_type: ActivityType = Query(ActivityType.RIDING),
    rider_mass: Optional[float] = Query(None, gt=0, description="Rider mass in kg"),
    client: StravaClient = Depends(get_strava_client)
):
    """
    Load segments for a map viewport.

    Returns all cached segments starting inside the viewport,
    sorted by difficulty (easiest first, unscoreable last).
    """
    try:
        viewport = Bounds.parse(bounds)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    store = get_store(activity_type)
    loader = SegmentLoader(client, store)

    try:
        await loader.load_for_bounds(viewport, activity_type)
    except StravaError as e:
        _raise_for_strava(e)

    calculator = _calculator(rider_mass)
    return SegmentListResponse(
        bounds=viewport.as_list(),
        activity_type=activity_type.value,
        rider_mass_kg=calculator.rider_mass_kg,
        total_cached=len(store),
        segments=list_segment_views(store, viewport, calculator),
    )


@router.delete("/cache")
async def clear_cache(activity_type: ActivityType = Query(ActivityType.RIDING)):
    """Drop cached segments of an activity type."""
    store = get_store(activity_type)
    removed = len(store)
    store.clear()
    logger.info(f"Cleared {removed} cached {activity_type.value} segments")
    return {"cleared": removed}


@router.get("/{segment_id}", response_model=SegmentView)
async def get_segment(
    segment_id: int,
    activity_type: ActivityType = Query(ActivityType.RIDING),
    rider_mass: Optional[float] = Query(None, gt=0),
    client: StravaClient = Depends(get_strava_client)
):
    """Get one segment, loading it from Strava if it is not cached."""
    store = get_store(activity_type)
    entry = store.get(segment_id)

    if entry is None or entry.details is None:
        try:
            details = await client.get_segment(segment_id)
        except StravaError as e:
            if isinstance(e, StravaAPIError) and e.status_code == 404:
                raise HTTPException(status_code=404, detail="Segment not found")
            _raise_for_strava(e)
        store.add_detailed(details)
        entry = store.get(segment_id)

    return build_segment_view(entry, _calculator(rider_mass))
