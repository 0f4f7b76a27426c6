"""
Segment physical profile.

Strava returns two loosely structured records per segment: the explore
summary and (optionally) the detailed segment. This module maps them to
the strongly typed input of the difficulty engine, so fallback rules
live at the boundary and not inside the engine.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class SegmentPhysicalProfile:
    """Inputs of the difficulty model."""
    distance_m: Optional[float]
    elevation_gain_m: Optional[float]
    best_time: Union[str, int, float, None]
    rider_mass_kg: Optional[float]


def profile_from_strava(
    summary: Optional[dict[str, Any]],
    details: Optional[dict[str, Any]],
    rider_mass_kg: Optional[float],
    prefer_qom: bool = False
) -> SegmentPhysicalProfile:
    """
    Build a profile from Strava segment records.

    Fallback rules:
    - distance: detailed distance, else summary distance
    - elevation: summary elev_difference, else detailed
      total_elevation_gain, else 0
    - best time: details.xoms.kom (or qom when prefer_qom)

    Args:
        summary: Segment from /segments/explore (may be None)
        details: Segment from /segments/{id} (may be None)
        rider_mass_kg: Rider mass
        prefer_qom: Use the QOM time instead of the KOM time

    Returns:
        SegmentPhysicalProfile (possibly not scoreable)
    """
    summary = summary or {}
    details = details or {}

    distance = details.get("distance") or summary.get("distance")

    elevation = summary.get("elev_difference")
    if elevation is None:
        elevation = details.get("total_elevation_gain")
    if elevation is None:
        elevation = 0

    xoms = details.get("xoms") or {}
    best_time = xoms.get("qom") if prefer_qom else xoms.get("kom")

    return SegmentPhysicalProfile(
        distance_m=distance,
        elevation_gain_m=elevation,
        best_time=best_time,
        rider_mass_kg=rider_mass_kg,
    )
