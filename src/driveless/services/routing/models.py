"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .polyline import decode_polyline


@dataclass(frozen=True, slots=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class EngineLeg:
    """One engine-computed segment between two consecutive stops."""

    start_address: str
    end_address: str
    start_location: LatLng
    end_location: LatLng
    distance_meters: int
    duration_seconds: int
    traffic_duration_seconds: Optional[int] = None
    distance_text: str = ""
    duration_text: str = ""
    traffic_duration_text: Optional[str] = None

    @property
    def effective_duration_seconds(self) -> int:
        if self.traffic_duration_seconds is not None:
            return self.traffic_duration_seconds
        return self.duration_seconds


@dataclass(frozen=True, slots=True)
class EngineRoute:
    legs: Tuple[EngineLeg, ...]
    polyline: Optional[str] = None
    waypoint_order: Optional[Tuple[int, ...]] = None


@dataclass(frozen=True, slots=True)
class RouteStop:
    address: str
    display_name: str
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class OptimizedRoute:
    total_distance: str
    total_distance_meters: int
    total_time: str
    total_time_seconds: int
    stops: Tuple[RouteStop, ...]
    polyline: Optional[str] = None
    waypoint_order: Tuple[int, ...] = ()
    legs: Tuple[EngineLeg, ...] = ()

    def path(self) -> list[tuple[float, float]]:
        """Decoded overview geometry, or the stop coordinates when no polyline was returned."""
        if self.polyline:
            return decode_polyline(self.polyline)
        return [(stop.latitude, stop.longitude) for stop in self.stops]
