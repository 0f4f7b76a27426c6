"""
Segment loading from Strava.

The explore endpoint returns at most 10 segments per call. When a
viewport hits that cap it is split into quadrants and each quadrant is
explored again, up to settings.explore_max_depth levels.

New segments get their details fetched once. Details are optional:
a failed detail request is logged and the summary is kept.
"""

import asyncio
import logging
from typing import Optional

from app.config import settings
from app.features.strava import StravaClient, StravaError
from app.shared.constants import ActivityType, EXPLORE_PAGE_LIMIT
from app.shared.geo import Bounds

from .store import SegmentStore

logger = logging.getLogger(__name__)


class SegmentLoader:
    """
    Loads segments for map viewports into a SegmentStore.

    Usage:
        loader = SegmentLoader(StravaClient(token), store)
        new_ids = await loader.load_for_bounds(bounds, ActivityType.RIDING)
    """

    def __init__(
        self,
        client: StravaClient,
        store: Optional[SegmentStore] = None,
        max_depth: Optional[int] = None
    ):
        self.client = client
        self.store = store if store is not None else SegmentStore()
        self.max_depth = settings.explore_max_depth if max_depth is None else max_depth

    async def load_for_bounds(
        self,
        bounds: Bounds,
        activity_type: ActivityType = ActivityType.RIDING
    ) -> list[int]:
        """
        Explore a viewport and load details for new segments.

        Returns:
            Ids added to the store by this call

        Raises:
            StravaError: If exploring fails (detail failures are swallowed)
        """
        activity_type = ActivityType(activity_type)
        summaries = await self._explore(bounds, activity_type, depth=0)
        new_ids = self.store.add_summaries(summaries)

        logger.info(
            f"Explored {bounds.to_strava_param()} ({activity_type.value}): "
            f"{len(summaries)} found, {len(new_ids)} new, {len(self.store)} cached"
        )

        await self.load_details(new_ids)
        return new_ids

    async def _explore(
        self,
        bounds: Bounds,
        activity_type: ActivityType,
        depth: int
    ) -> list[dict]:
        segments = await self.client.explore_segments(bounds, activity_type)

        if len(segments) < EXPLORE_PAGE_LIMIT or depth >= self.max_depth:
            return segments

        logger.debug(f"Explore cap reached at depth {depth}, subdividing")
        results = list(segments)
        for quadrant in bounds.subdivide():
            results.extend(await self._explore(quadrant, activity_type, depth + 1))
        return results

    async def load_details(self, segment_ids: list[int]) -> None:
        """Fetch details for ids not fetched before."""
        pending = self.store.claim_details(segment_ids)
        if pending:
            await asyncio.gather(*(self._fetch_details(sid) for sid in pending))

    async def _fetch_details(self, segment_id: int) -> None:
        try:
            details = await self.client.get_segment(segment_id)
        except StravaError as e:
            logger.warning(f"Failed to load details for segment {segment_id}: {e}")
            return
        self.store.set_details(segment_id, details)
