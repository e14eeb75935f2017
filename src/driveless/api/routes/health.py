"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...services.routing.service import RoutePlanner
from ..dependencies import get_planner

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/directions", status_code=status.HTTP_200_OK)
def health_directions(planner: RoutePlanner = Depends(get_planner)) -> dict:
    """Check that the directions engine answers."""
    try:
        return {"service": "directions", "healthy": planner.client.check_health()}
    except Exception as e:
        return {"service": "directions", "healthy": False, "error": str(e)}
