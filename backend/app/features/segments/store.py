"""
In-memory segment cache.

Segments are keyed by Strava id. Each entry holds the explore summary
and, once loaded, the detailed segment.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


@dataclass
class SegmentEntry:
    """A loaded segment: explore summary plus optional details."""
    summary: dict[str, Any]
    details: Optional[dict[str, Any]] = None

    @property
    def id(self) -> int:
        return self.summary["id"]


def summary_from_details(details: dict[str, Any]) -> dict[str, Any]:
    """Explore-style summary for a detailed segment record."""
    summary = dict(details)
    # detail records name the grade differently than explore results
    if summary.get("avg_grade") is None:
        summary["avg_grade"] = details.get("average_grade")
    return summary


@dataclass
class SegmentStore:
    """Segments by id, deduplicated across viewport loads."""
    entries: dict[int, SegmentEntry] = field(default_factory=dict)
    details_fetched: set[int] = field(default_factory=set)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, segment_id: int) -> bool:
        return segment_id in self.entries

    def get(self, segment_id: int) -> Optional[SegmentEntry]:
        return self.entries.get(segment_id)

    def add_summaries(self, summaries: Iterable[dict[str, Any]]) -> list[int]:
        """
        Add explore results, skipping ids already known.

        Returns:
            Ids that were new to the store (in input order)
        """
        new_ids = []
        for summary in summaries:
            segment_id = summary.get("id")
            if segment_id is None or segment_id in self.entries:
                continue
            self.entries[segment_id] = SegmentEntry(summary=summary)
            new_ids.append(segment_id)
        return new_ids

    def add_detailed(self, details: dict[str, Any]) -> int:
        """
        Cache a segment fetched by id (no explore summary available).

        Unknown segments get a summary seeded from the detail record.
        Details are marked as fetched either way.

        Returns:
            The segment id
        """
        segment_id = details["id"]
        if segment_id not in self.entries:
            self.entries[segment_id] = SegmentEntry(summary=summary_from_details(details))
        self.details_fetched.add(segment_id)
        self.entries[segment_id].details = details
        return segment_id

    def set_details(self, segment_id: int, details: dict[str, Any]) -> bool:
        """Attach details to a known segment. Returns False if unknown."""
        entry = self.entries.get(segment_id)
        if entry is None:
            return False
        entry.details = details
        return True

    def claim_details(self, segment_ids: Iterable[int]) -> list[int]:
        """Mark ids as being fetched, return those not fetched before."""
        claimed = []
        for segment_id in segment_ids:
            if segment_id not in self.details_fetched:
                self.details_fetched.add(segment_id)
                claimed.append(segment_id)
        return claimed

    def clear(self) -> None:
        """Drop everything (e.g. on activity type switch)."""
        self.entries.clear()
        self.details_fetched.clear()


# Process-wide caches, one per activity type
_stores: dict[str, SegmentStore] = {}


def get_store(activity_type: str) -> SegmentStore:
    """Get (or create) the shared store for an activity type."""
    key = getattr(activity_type, "value", activity_type)
    if key not in _stores:
        _stores[key] = SegmentStore()
    return _stores[key]


def clear_stores() -> None:
    """Drop all cached segments."""
    _stores.clear()
