"""Route planning orchestration service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ...schemas.history import SavedRoute
from ...schemas.routing import RouteRequest
from ..history.auto_save import AutoSaver
from .assembler import assemble
from .directions_client import DirectionsClient
from .models import OptimizedRoute

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlannedRoute:
    route: OptimizedRoute
    saved: Optional[SavedRoute] = None


class RoutePlanner:
    """Computes a route, assembles it, and optionally records it in history."""

    def __init__(self, client: DirectionsClient, auto_saver: AutoSaver | None = None) -> None:
        self.client = client
        self.auto_saver = auto_saver

    def plan(self, request: RouteRequest, *, save: bool = False) -> PlannedRoute:
        """Run one calculation.

        Directions errors propagate unchanged. Saving is best-effort: a history
        failure is logged by the store and leaves ``saved`` as None.
        """
        engine_route = self.client.compute_route(request)
        route = assemble(engine_route, request)
        logger.info(
            f"Route planned: {route.total_distance}, {route.total_time}, {len(route.stops)} stops"
        )

        saved = None
        if save and self.auto_saver is not None:
            saved = self.auto_saver.auto_save(route, request)
        return PlannedRoute(route=route, saved=saved)
