"""
Segment schemas.

Pydantic models for API request/response.
"""
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class DifficultyClassSchema(BaseModel):
    """Classification band as sent to the UI (tag goes out as "class")."""
    model_config = ConfigDict(populate_by_name=True)

    tag: str = Field(..., alias="class", description="Class tag, e.g. 'hard' or 'unknown'")
    label: str
    color: str


class DifficultyBadge(BaseModel):
    """Difficulty readout of a segment card."""
    is_valid: bool
    score: Optional[float] = None
    score_label: str = "—"
    difficulty_class: DifficultyClassSchema
    power_w: Optional[float] = None
    power_w_per_kg: Optional[float] = None
    power_label: Optional[str] = None  # omitted for invalid results


class SegmentView(BaseModel):
    """A segment ready for the map and the card panel."""
    id: int
    name: str
    points: List[Tuple[float, float]] = []
    start_latlng: Optional[Tuple[float, float]] = None
    distance_m: Optional[float] = None
    distance_label: str
    avg_grade: Optional[float] = None
    grade_label: str
    grade_class: str
    elevation_label: str
    best_time_label: str
    details_loaded: bool = False
    difficulty: DifficultyBadge


class SegmentListResponse(BaseModel):
    """Segments visible in the requested viewport."""
    bounds: List[float]
    activity_type: str
    rider_mass_kg: float
    total_cached: int
    segments: List[SegmentView]


class DifficultyRequest(BaseModel):
    """Raw segment attributes to score."""
    distance: Optional[float] = Field(None, description="Segment length in meters")
    elevation_gain: Optional[float] = Field(None, description="Net elevation in meters")
    best_time: Union[int, float, str, None] = Field(
        None, description="KOM/QOM time, e.g. '5:30', or seconds"
    )
    rider_mass: Optional[float] = Field(None, description="Rider mass in kg")


class DifficultyResponse(BaseModel):
    """Full DifficultyResult."""
    required_power: Optional[float] = None
    required_power_per_kg: Optional[float] = None
    difficulty_score: Optional[float] = None
    difficulty_class: DifficultyClassSchema
    is_valid: bool
    reference_power: Optional[float] = None
    best_time_seconds: Optional[int] = None
