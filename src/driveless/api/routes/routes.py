"""Route planning and history endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...errors import ApiError, NetworkError, NoDataError, RoutePlanningError, ValidationError
from ...schemas.history import SavedRoute, SavedRouteUpdate
from ...schemas.routing import RoutePlanRequest, RoutePlanResponse, RouteRequest
from ...services.history.store import RouteStore
from ...services.outputs.route_formatter import optimized_route_to_model
from ...services.routing.service import RoutePlanner
from ..dependencies import get_planner, get_store

router = APIRouter(prefix="/routes", tags=["routes"])

_ERROR_STATUS = {
    ValidationError: 422,
    NoDataError: status.HTTP_404_NOT_FOUND,
    ApiError: status.HTTP_502_BAD_GATEWAY,
    NetworkError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _status_for(exc: RoutePlanningError) -> int:
    for error_type, code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post("/plan", response_model=RoutePlanResponse, status_code=status.HTTP_200_OK)
def plan_route(payload: RoutePlanRequest, planner: RoutePlanner = Depends(get_planner)) -> RoutePlanResponse:
    request = RouteRequest.model_validate(payload.model_dump(exclude={"save"}))
    try:
        planned = planner.plan(request, save=payload.save)
    except RoutePlanningError as exc:
        logging.warning(f"Route planning failed: {exc}")
        raise HTTPException(status_code=_status_for(exc), detail=exc.message) from exc
    return RoutePlanResponse(
        route=optimized_route_to_model(planned.route),
        saved_route_id=planned.saved.id if planned.saved else None,
    )


@router.get("/history", response_model=list[SavedRoute])
def list_history(favorites_only: bool = False, store: RouteStore = Depends(get_store)) -> list[SavedRoute]:
    if favorites_only:
        return store.favorites()
    return store.list_all()


@router.get("/history/{route_id}", response_model=SavedRoute)
def get_saved_route(route_id: str, store: RouteStore = Depends(get_store)) -> SavedRoute:
    saved = store.get(route_id)
    if saved is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Saved route {route_id} not found")
    return saved


@router.patch("/history/{route_id}", response_model=SavedRoute)
def update_saved_route(
    route_id: str,
    payload: SavedRouteUpdate,
    store: RouteStore = Depends(get_store),
) -> SavedRoute:
    """Rename a saved route and/or toggle its favorite flag."""
    updated = store.edit(route_id, name=payload.name, is_favorite=payload.is_favorite)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Saved route {route_id} not found")
    return updated


@router.delete("/history/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_saved_route(route_id: str, store: RouteStore = Depends(get_store)) -> Response:
    if not store.delete(route_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Saved route {route_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
