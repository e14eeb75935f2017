"""Wire schemas for the Google Directions JSON response."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TextValue(BaseModel):
    """Distance (meters) or duration (seconds) paired with the engine's display text."""

    text: str = ""
    value: int = 0


class LatLngModel(BaseModel):
    lat: float = 0.0
    lng: float = 0.0


class OverviewPolyline(BaseModel):
    points: str = ""


class DirectionsLeg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    distance: TextValue = Field(default_factory=TextValue)
    duration: TextValue = Field(default_factory=TextValue)
    duration_in_traffic: Optional[TextValue] = None
    start_address: str = ""
    end_address: str = ""
    start_location: LatLngModel = Field(default_factory=LatLngModel)
    end_location: LatLngModel = Field(default_factory=LatLngModel)


class DirectionsRoute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    legs: List[DirectionsLeg] = Field(default_factory=list)
    overview_polyline: Optional[OverviewPolyline] = None
    waypoint_order: Optional[List[int]] = None


class DirectionsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str = ""
    error_message: Optional[str] = None
    routes: List[DirectionsRoute] = Field(default_factory=list)
