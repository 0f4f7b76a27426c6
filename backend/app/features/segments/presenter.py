"""
Segment presentation.

Turns cached Strava records into SegmentView objects: decoded geometry,
formatted stats and the difficulty badge. Scoring happens on every
call; results are not memoized here.
"""

from typing import Iterable, Optional

from app.features.difficulty import (
    DifficultyCalculator,
    DifficultyClass,
    DifficultyResult,
    difficulty_sort_key,
    profile_from_strava,
)
from app.shared.formatters import (
    PLACEHOLDER,
    format_distance,
    format_elevation,
    format_grade,
    format_power,
    format_score,
    grade_class,
)
from app.shared.geo import Bounds
from app.shared.polyline import decode_polyline

from .schemas import DifficultyBadge, DifficultyClassSchema, SegmentView
from .store import SegmentEntry, SegmentStore


def difficulty_class_schema(difficulty_class: DifficultyClass) -> DifficultyClassSchema:
    return DifficultyClassSchema.model_validate(difficulty_class.to_dict())


def build_badge(result: DifficultyResult) -> DifficultyBadge:
    """Badge for a difficulty result; no power readout when invalid."""
    badge = DifficultyBadge(
        is_valid=result.is_valid,
        score=result.difficulty_score,
        score_label=format_score(result.difficulty_score),
        difficulty_class=difficulty_class_schema(result.difficulty_class),
    )
    if result.is_valid:
        badge.power_w = result.required_power
        badge.power_w_per_kg = result.required_power_per_kg
        badge.power_label = format_power(result.required_power)
    return badge


def score_entry(entry: SegmentEntry, calculator: DifficultyCalculator) -> DifficultyResult:
    """Score one cached segment."""
    profile = profile_from_strava(entry.summary, entry.details, calculator.rider_mass_kg)
    return calculator.calculate(profile)


def _elevation_label(entry: SegmentEntry) -> str:
    elevation = entry.summary.get("elev_difference")
    if elevation is None and entry.details:
        elevation = entry.details.get("total_elevation_gain")
    return format_elevation(elevation)


def _points(entry: SegmentEntry) -> list[tuple[float, float]]:
    encoded = entry.summary.get("points")
    if not encoded and entry.details:
        encoded = (entry.details.get("map") or {}).get("polyline")
    if not encoded:
        return []
    try:
        return decode_polyline(encoded)
    except ValueError:
        return []


def _start_latlng(entry: SegmentEntry) -> Optional[tuple[float, float]]:
    start = entry.summary.get("start_latlng")
    if start and len(start) == 2:
        return (start[0], start[1])
    return None


def build_segment_view(
    entry: SegmentEntry,
    calculator: DifficultyCalculator,
    result: Optional[DifficultyResult] = None
) -> SegmentView:
    """
    Build the card/map view of a segment.

    Args:
        entry: Cached segment
        calculator: Difficulty calculator (carries rider mass)
        result: Pre-computed difficulty, scored here if None
    """
    if result is None:
        result = score_entry(entry, calculator)

    summary = entry.summary
    details = entry.details or {}

    distance = details.get("distance") or summary.get("distance")
    avg_grade = summary.get("avg_grade")
    xoms = details.get("xoms") or {}

    return SegmentView(
        id=entry.id,
        name=summary.get("name") or "",
        points=_points(entry),
        start_latlng=_start_latlng(entry),
        distance_m=distance,
        distance_label=format_distance(distance),
        avg_grade=avg_grade,
        grade_label=format_grade(avg_grade),
        grade_class=grade_class(avg_grade),
        elevation_label=_elevation_label(entry),
        best_time_label=xoms.get("kom") or PLACEHOLDER,
        details_loaded=entry.details is not None,
        difficulty=build_badge(result),
    )


def visible_segments(
    entries: Iterable[SegmentEntry],
    bounds: Optional[Bounds]
) -> list[SegmentEntry]:
    """Segments whose start point lies in the viewport (all if no bounds)."""
    if bounds is None:
        return list(entries)
    visible = []
    for entry in entries:
        start = _start_latlng(entry)
        if start and bounds.contains(*start):
            visible.append(entry)
    return visible


def sort_by_difficulty(
    entries: Iterable[SegmentEntry],
    calculator: DifficultyCalculator
) -> list[SegmentView]:
    """Views sorted by ascending difficulty, unscoreable segments last."""
    scored = [(entry, score_entry(entry, calculator)) for entry in entries]
    scored.sort(key=lambda pair: difficulty_sort_key(pair[1]))
    return [build_segment_view(entry, calculator, result) for entry, result in scored]


def list_segment_views(
    store: SegmentStore,
    bounds: Optional[Bounds],
    calculator: DifficultyCalculator
) -> list[SegmentView]:
    """Visible segments of a store, sorted by difficulty."""
    return sort_by_difficulty(visible_segments(store.entries.values(), bounds), calculator)
