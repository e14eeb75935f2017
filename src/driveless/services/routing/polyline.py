"""Decoder for the Google encoded polyline format."""

from __future__ import annotations


def _read_delta(encoded: str, index: int) -> tuple[int, int]:
    """Read one zig-zag encoded delta starting at ``index``; return (delta, next_index)."""
    shift = 0
    result = 0
    while True:
        if index >= len(encoded):
            raise ValueError("Truncated polyline string.")
        b = ord(encoded[index]) - 63
        index += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break
    delta = ~(result >> 1) if (result & 1) else (result >> 1)
    return delta, index


def decode_polyline(encoded: str, precision: int = 5) -> list[tuple[float, float]]:
    """Decode an encoded polyline into (latitude, longitude) pairs.

    Args:
        encoded: Polyline string as returned in ``overview_polyline.points``.
        precision: Number of decimal places encoded (5 for the Directions API).

    Returns:
        List of (lat, lng) tuples in path order.
    """
    factor = 10**precision
    coordinates: list[tuple[float, float]] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        d_lat, index = _read_delta(encoded, index)
        d_lng, index = _read_delta(encoded, index)
        lat += d_lat
        lng += d_lng
        coordinates.append((lat / factor, lng / factor))

    return coordinates
