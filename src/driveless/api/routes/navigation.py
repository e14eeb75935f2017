"""Navigation app endpoints.

Launching happens on the client device, so the API only hands out the URL chain
the device should try.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ...services.export.exporter import NavigationExporter
from ...services.export.targets import get_target
from ...services.history.store import RouteStore
from ...services.outputs.route_formatter import optimized_route_from_model
from ..dependencies import get_exporter, get_store

router = APIRouter(tags=["navigation"])


class NavigationTargetModel(BaseModel):
    key: str
    display_name: str
    icon_name: str
    multi_waypoint: bool


class NavigationLinks(BaseModel):
    target: str
    display_name: str
    urls: list[str]
    shareable_url: str


@router.get("/navigation/targets", response_model=list[NavigationTargetModel])
def list_targets(exporter: NavigationExporter = Depends(get_exporter)) -> list[NavigationTargetModel]:
    return [
        NavigationTargetModel(
            key=target.key,
            display_name=target.display_name,
            icon_name=target.icon_name,
            multi_waypoint=target.multi_waypoint,
        )
        for target in exporter.get_available_targets()
    ]


@router.get("/routes/history/{route_id}/navigation/{target_key}", response_model=NavigationLinks)
def navigation_links(
    route_id: str,
    target_key: str,
    store: RouteStore = Depends(get_store),
    exporter: NavigationExporter = Depends(get_exporter),
) -> NavigationLinks:
    try:
        target = get_target(target_key)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    saved = store.get(route_id)
    if saved is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Saved route {route_id} not found")

    route = optimized_route_from_model(saved.route)
    return NavigationLinks(
        target=target.key,
        display_name=target.display_name,
        urls=exporter.build_urls(target, route),
        shareable_url=exporter.shareable_url(route.stops),
    )
