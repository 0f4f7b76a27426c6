"""
Google Encoded Polyline codec.

Strava returns segment geometry as encoded polylines. Each coordinate
is a delta from the previous point, zig-zag encoded and split into
5-bit chunks with an ASCII offset of 63.

Format: https://developers.google.com/maps/documentation/utilities/polylinealgorithm
"""

from typing import Iterable


def _decode_value(encoded: str, index: int) -> tuple[int, int]:
    """Decode one signed value starting at index, return (value, next_index)."""
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise ValueError("Truncated polyline")
        chunk = ord(encoded[index]) - 63
        index += 1
        result |= (chunk & 0x1F) << shift
        shift += 5
        if chunk < 0x20:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(encoded: str, precision: int = 5) -> list[tuple[float, float]]:
    """
    Decode an encoded polyline into (lat, lng) pairs.

    Args:
        encoded: Encoded polyline string
        precision: Decimal places used when encoding (5 for Strava)

    Returns:
        List of (latitude, longitude) tuples, empty for an empty string

    Raises:
        ValueError: If the string ends in the middle of a coordinate
    """
    factor = 10 ** precision
    coords = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        delta_lat, index = _decode_value(encoded, index)
        delta_lng, index = _decode_value(encoded, index)
        lat += delta_lat
        lng += delta_lng
        coords.append((lat / factor, lng / factor))

    return coords


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def encode_polyline(
    coords: Iterable[tuple[float, float]],
    precision: int = 5
) -> str:
    """Encode (lat, lng) pairs into a polyline string."""
    factor = 10 ** precision
    parts = []
    prev_lat = 0
    prev_lng = 0

    for lat, lng in coords:
        lat_i = int(round(lat * factor))
        lng_i = int(round(lng * factor))
        parts.append(_encode_value(lat_i - prev_lat))
        parts.append(_encode_value(lng_i - prev_lng))
        prev_lat, prev_lng = lat_i, lng_i

    return "".join(parts)
