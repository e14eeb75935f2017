"""Serializers between routing domain values and their persisted schemas."""

from __future__ import annotations

from ...schemas.routing import LegModel, OptimizedRouteModel, RouteStopModel
from ..routing.models import EngineLeg, LatLng, OptimizedRoute, RouteStop


def leg_to_model(leg: EngineLeg) -> LegModel:
    return LegModel(
        start_address=leg.start_address,
        end_address=leg.end_address,
        start_lat=leg.start_location.lat,
        start_lng=leg.start_location.lng,
        end_lat=leg.end_location.lat,
        end_lng=leg.end_location.lng,
        distance_meters=leg.distance_meters,
        distance_text=leg.distance_text,
        duration_seconds=leg.duration_seconds,
        duration_text=leg.duration_text,
        traffic_duration_seconds=leg.traffic_duration_seconds,
        traffic_duration_text=leg.traffic_duration_text,
    )


def leg_from_model(model: LegModel) -> EngineLeg:
    return EngineLeg(
        start_address=model.start_address,
        end_address=model.end_address,
        start_location=LatLng(model.start_lat, model.start_lng),
        end_location=LatLng(model.end_lat, model.end_lng),
        distance_meters=model.distance_meters,
        duration_seconds=model.duration_seconds,
        traffic_duration_seconds=model.traffic_duration_seconds,
        distance_text=model.distance_text,
        duration_text=model.duration_text,
        traffic_duration_text=model.traffic_duration_text,
    )


def optimized_route_to_model(route: OptimizedRoute) -> OptimizedRouteModel:
    return OptimizedRouteModel(
        total_distance=route.total_distance,
        total_distance_meters=route.total_distance_meters,
        total_time=route.total_time,
        total_time_seconds=route.total_time_seconds,
        stops=[
            RouteStopModel(
                address=stop.address,
                display_name=stop.display_name,
                latitude=stop.latitude,
                longitude=stop.longitude,
            )
            for stop in route.stops
        ],
        polyline=route.polyline,
        waypoint_order=list(route.waypoint_order),
        legs=[leg_to_model(leg) for leg in route.legs],
    )


def optimized_route_from_model(model: OptimizedRouteModel) -> OptimizedRoute:
    return OptimizedRoute(
        total_distance=model.total_distance,
        total_distance_meters=model.total_distance_meters,
        total_time=model.total_time,
        total_time_seconds=model.total_time_seconds,
        stops=tuple(
            RouteStop(
                address=stop.address,
                display_name=stop.display_name,
                latitude=stop.latitude,
                longitude=stop.longitude,
            )
            for stop in model.stops
        ),
        polyline=model.polyline,
        waypoint_order=tuple(model.waypoint_order),
        legs=tuple(leg_from_model(leg) for leg in model.legs),
    )
