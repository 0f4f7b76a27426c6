"""
Difficulty Routes

Scores raw segment attributes. Unscoreable input is answered with
is_valid=false, not with an error status.
"""

from fastapi import APIRouter

from app.config import settings
from app.features.difficulty import calculate_segment_difficulty
from app.features.segments import DifficultyRequest, DifficultyResponse

router = APIRouter()


@router.post("", response_model=DifficultyResponse)
async def score_difficulty(request: DifficultyRequest):
    """
    Estimate the power needed for a best-known time and map it to a
    difficulty score and class.

    rider_mass defaults to the configured rider mass when omitted.
    """
    rider_mass = request.rider_mass
    if rider_mass is None:
        rider_mass = settings.default_rider_mass_kg

    result = calculate_segment_difficulty(
        request.distance,
        request.elevation_gain,
        request.best_time,
        rider_mass,
    )

    return DifficultyResponse.model_validate(result.to_dict())
