"""Human-readable distance and duration strings."""

from __future__ import annotations

from ...config import UnitSystem

METERS_TO_MILES = 0.000621371
METERS_TO_FEET = 3.28084


def format_distance(meters: int, units: UnitSystem) -> str:
    """Format a distance for the given unit system.

    Imperial shows feet below 0.1 mi, otherwise miles to one decimal. Metric shows
    meters below 1 km, otherwise kilometers to one decimal.
    """
    if units == "imperial":
        miles = meters * METERS_TO_MILES
        if miles < 0.1:
            return f"{round(meters * METERS_TO_FEET)} ft"
        return f"{miles:.1f} mi"
    if meters < 1000:
        return f"{meters} m"
    return f"{meters / 1000.0:.1f} km"


def format_duration(seconds: int) -> str:
    hours, remainder = divmod(seconds, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
