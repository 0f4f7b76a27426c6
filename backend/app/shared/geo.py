"""
Map viewport geometry.

Bounds follow Strava's explore convention:
[south-west lat, south-west lng, north-east lat, north-east lng].
"""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Bounds:
    """Rectangular lat/lng viewport."""
    sw_lat: float
    sw_lng: float
    ne_lat: float
    ne_lng: float

    def __post_init__(self):
        if not (-90 <= self.sw_lat <= 90 and -90 <= self.ne_lat <= 90):
            raise ValueError("Latitude out of range")
        if not (-180 <= self.sw_lng <= 180 and -180 <= self.ne_lng <= 180):
            raise ValueError("Longitude out of range")
        if self.sw_lat >= self.ne_lat or self.sw_lng >= self.ne_lng:
            raise ValueError("South-west corner must be below and left of north-east corner")

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Bounds":
        """Build from [sw_lat, sw_lng, ne_lat, ne_lng]."""
        if len(values) != 4:
            raise ValueError(f"Bounds need 4 values, got {len(values)}")
        return cls(*(float(v) for v in values))

    @classmethod
    def parse(cls, text: str) -> "Bounds":
        """
        Parse "sw_lat,sw_lng,ne_lat,ne_lng".

        Raises:
            ValueError: On wrong arity, non-numeric values or inverted corners
        """
        parts = [p.strip() for p in text.split(",")]
        try:
            values = [float(p) for p in parts]
        except ValueError:
            raise ValueError(f"Invalid bounds: {text!r}") from None
        return cls.from_sequence(values)

    def to_strava_param(self) -> str:
        """Format for the explore endpoint (6 decimals)."""
        return ",".join(
            f"{v:.6f}" for v in (self.sw_lat, self.sw_lng, self.ne_lat, self.ne_lng)
        )

    def as_list(self) -> list[float]:
        return [self.sw_lat, self.sw_lng, self.ne_lat, self.ne_lng]

    def contains(self, lat: float, lng: float) -> bool:
        """True if the point lies inside (edges included)."""
        return (
            self.sw_lat <= lat <= self.ne_lat
            and self.sw_lng <= lng <= self.ne_lng
        )

    def subdivide(self) -> list["Bounds"]:
        """Split into four quadrants: SW, SE, NW, NE."""
        mid_lat = (self.sw_lat + self.ne_lat) / 2
        mid_lng = (self.sw_lng + self.ne_lng) / 2
        return [
            Bounds(self.sw_lat, self.sw_lng, mid_lat, mid_lng),
            Bounds(self.sw_lat, mid_lng, mid_lat, self.ne_lng),
            Bounds(mid_lat, self.sw_lng, self.ne_lat, mid_lng),
            Bounds(mid_lat, mid_lng, self.ne_lat, self.ne_lng),
        ]
