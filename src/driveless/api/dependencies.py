"""Request-scoped access to the services wired in ``create_app``."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from ..services.export.exporter import NavigationExporter
from ..services.history.store import RouteStore
from ..services.routing.service import RoutePlanner


def get_planner(request: Request) -> RoutePlanner:
    planner = request.app.state.planner
    if planner is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Route planning is not configured. Please set DRIVELESS_GOOGLE_API_KEY.",
        )
    return planner


def get_store(request: Request) -> RouteStore:
    return request.app.state.store


def get_exporter(request: Request) -> NavigationExporter:
    return request.app.state.exporter
