"""Automatic saving of freshly computed routes."""

from __future__ import annotations

import logging
from typing import Optional

from ...schemas.history import SavedRoute
from ...schemas.routing import RouteRequest
from ..routing.models import OptimizedRoute
from .store import RouteStore

logger = logging.getLogger(__name__)


class AutoSaver:
    """Saves computed routes unless disabled or a near-identical route already exists."""

    def __init__(self, store: RouteStore, enabled: bool = True) -> None:
        self.store = store
        self.enabled = enabled

    def auto_save(self, route: OptimizedRoute, request: RouteRequest) -> Optional[SavedRoute]:
        if not self.enabled:
            logger.debug("Auto-save disabled, skipping route save")
            return None

        existing = self.store.find_similar(route)
        if existing is not None:
            logger.debug(f"Similar route already saved as '{existing.name}', skipping auto-save")
            return None

        saved = self.store.save(route, request)
        if saved is not None:
            logger.info(f"Auto-saved route: {saved.name}")
        return saved
