"""Route planning request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ..config import TravelMode, UnitSystem


class RouteRequest(BaseModel):
    """User-supplied locations for one route calculation.

    Location limits (empty origin/destination, too many stops) are checked by the
    directions client rather than here, so that an oversized request can still be
    built, persisted alongside a saved route, and rejected with a domain error.
    """

    origin: str
    destination: str
    stops: List[str] = Field(default_factory=list, description="Intermediate stops in user order.")
    origin_display_name: Optional[str] = Field(
        default=None, description="Business or user label for the origin. Defaults to the origin text."
    )
    destination_display_name: Optional[str] = Field(
        default=None, description="Business or user label for the destination. Defaults to the destination text."
    )
    stop_display_names: List[str] = Field(
        default_factory=list,
        description="Labels for the intermediate stops, parallel to `stops`.",
    )
    travel_mode: TravelMode = "driving"
    units: UnitSystem = "imperial"
    optimize_waypoints: bool = True

    @model_validator(mode="after")
    def _default_display_names(self) -> "RouteRequest":
        if not self.origin_display_name:
            self.origin_display_name = self.origin.strip()
        if not self.destination_display_name:
            self.destination_display_name = self.destination.strip()
        return self


class LegModel(BaseModel):
    start_address: str
    end_address: str
    start_lat: float
    start_lng: float
    end_lat: float
    end_lng: float
    distance_meters: int
    distance_text: str = ""
    duration_seconds: int
    duration_text: str = ""
    traffic_duration_seconds: Optional[int] = None
    traffic_duration_text: Optional[str] = None


class RouteStopModel(BaseModel):
    address: str
    display_name: str
    latitude: float
    longitude: float


class OptimizedRouteModel(BaseModel):
    total_distance: str
    total_distance_meters: int
    total_time: str
    total_time_seconds: int
    stops: List[RouteStopModel]
    polyline: Optional[str] = None
    waypoint_order: List[int] = Field(default_factory=list)
    legs: List[LegModel] = Field(default_factory=list)


class RoutePlanRequest(RouteRequest):
    save: bool = Field(default=False, description="Persist the route to history, skipping near-duplicates.")


class RoutePlanResponse(BaseModel):
    route: OptimizedRouteModel
    saved_route_id: Optional[str] = None
