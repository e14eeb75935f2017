"""Turn an engine route into an ordered, labeled OptimizedRoute."""

from __future__ import annotations

from typing import Sequence

from ...config import UnitSystem
from ...schemas.routing import RouteRequest
from .formatting import format_distance, format_duration
from .models import EngineLeg, EngineRoute, OptimizedRoute, RouteStop


def sum_legs(legs: Sequence[EngineLeg]) -> tuple[int, int]:
    """Total meters and seconds, preferring traffic-aware durations per leg."""
    total_meters = 0
    total_seconds = 0
    for leg in legs:
        total_meters += leg.distance_meters
        total_seconds += leg.effective_duration_seconds
    return total_meters, total_seconds


def build_stops(legs: Sequence[EngineLeg], request: RouteRequest) -> tuple[RouteStop, ...]:
    """Build origin, intermediate and destination stops from the legs.

    Intermediate labels are taken positionally from ``request.stop_display_names``
    and are not permuted by the engine's ``waypoint_order``; after optimization a
    label may belong to a different stop than the one it is shown on.
    """
    if not legs:
        return ()

    first, last = legs[0], legs[-1]
    stops = [
        RouteStop(
            address=first.start_address,
            display_name=request.origin_display_name or first.start_address,
            latitude=first.start_location.lat,
            longitude=first.start_location.lng,
        )
    ]
    for index, leg in enumerate(legs[:-1]):
        display_name = leg.end_address
        if index < len(request.stop_display_names):
            display_name = request.stop_display_names[index]
        stops.append(
            RouteStop(
                address=leg.end_address,
                display_name=display_name,
                latitude=leg.end_location.lat,
                longitude=leg.end_location.lng,
            )
        )
    stops.append(
        RouteStop(
            address=last.end_address,
            display_name=request.destination_display_name or last.end_address,
            latitude=last.end_location.lat,
            longitude=last.end_location.lng,
        )
    )
    return tuple(stops)


def assemble(engine_route: EngineRoute, request: RouteRequest, units: UnitSystem | None = None) -> OptimizedRoute:
    """Aggregate totals and reconcile stop labels for one engine route.

    ``units`` overrides the request's unit system for the formatted totals.
    """
    unit_system = units or request.units
    total_meters, total_seconds = sum_legs(engine_route.legs)
    return OptimizedRoute(
        total_distance=format_distance(total_meters, unit_system),
        total_distance_meters=total_meters,
        total_time=format_duration(total_seconds),
        total_time_seconds=total_seconds,
        stops=build_stops(engine_route.legs, request),
        polyline=engine_route.polyline,
        waypoint_order=tuple(engine_route.waypoint_order or ()),
        legs=tuple(engine_route.legs),
    )
