"""Bounded, de-duplicating local history of computed routes."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, TypeVar, Union

from pydantic import TypeAdapter

from ...config import Settings, settings as default_settings
from ...persistence.kv import KeyValueStore
from ...schemas.history import SavedRoute
from ...schemas.routing import OptimizedRouteModel, RouteRequest
from ..outputs.route_formatter import optimized_route_to_model
from ..routing.models import OptimizedRoute
from .naming import generate_route_name

MAX_WRITE_ATTEMPTS = 32

logger = logging.getLogger(__name__)

T = TypeVar("T")
RouteLike = Union[OptimizedRoute, OptimizedRouteModel]

_history_adapter = TypeAdapter(list[SavedRoute])


class HistoryConflictError(RuntimeError):
    """Concurrent writers kept invalidating the stored history."""


def stops_similar(first: Sequence, second: Sequence, tolerance: float) -> bool:
    """Equal stop counts and every stop pair within ``tolerance`` degrees on both axes."""
    if len(first) != len(second):
        return False
    for a, b in zip(first, second):
        if abs(a.latitude - b.latitude) > tolerance or abs(a.longitude - b.longitude) > tolerance:
            return False
    return True


class RouteStore:
    """Most-recent-first history of saved routes.

    Every mutation is a single optimistic read-modify-write: the raw stored value is
    read, the change applied in memory, and the result written back only if the
    stored value is unchanged. On conflict the change is replayed on the fresh value.
    Public operations never raise; failures are logged and reported as ``None``,
    ``False`` or an empty list.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        max_entries: int | None = None,
        tolerance: float | None = None,
        storage_key: str | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        config: Settings | None = None,
    ) -> None:
        config = config or default_settings
        self.backend = backend
        self.max_entries = max_entries if max_entries is not None else config.history_max_entries
        self.tolerance = tolerance if tolerance is not None else config.duplicate_tolerance_degrees
        self.storage_key = storage_key or config.history_storage_key
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

    # Reads

    def _decode(self, raw: Optional[str]) -> list[SavedRoute]:
        if not raw:
            return []
        return _history_adapter.validate_json(raw)

    def list_all(self) -> list[SavedRoute]:
        try:
            routes = self._decode(self.backend.get(self.storage_key))
        except Exception as exc:
            logger.error(f"Error loading saved routes: {exc}")
            return []
        logger.debug(f"Loaded {len(routes)} saved routes")
        return routes

    def get(self, route_id: str) -> Optional[SavedRoute]:
        for route in self.list_all():
            if route.id == route_id:
                return route
        return None

    def count(self) -> int:
        return len(self.list_all())

    def favorites(self) -> list[SavedRoute]:
        return [route for route in self.list_all() if route.is_favorite]

    def find_similar(self, route: RouteLike) -> Optional[SavedRoute]:
        for saved in self.list_all():
            if stops_similar(route.stops, saved.route.stops, self.tolerance):
                return saved
        return None

    # Writes

    def _mutate(self, mutation: Callable[[list[SavedRoute]], tuple[Optional[list[SavedRoute]], T]]) -> T:
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            raw = self.backend.get(self.storage_key)
            try:
                current = self._decode(raw)
            except ValueError as exc:
                logger.warning(f"Discarding unreadable route history: {exc}")
                current = []
            updated, result = mutation(current)
            if updated is None:
                return result
            payload = _history_adapter.dump_json(updated).decode("utf-8")
            if self.backend.compare_and_set(self.storage_key, raw, payload):
                return result
            logger.debug(f"Route history changed during write, retrying (attempt {attempt}/{MAX_WRITE_ATTEMPTS})")
        raise HistoryConflictError(f"Route history write lost {MAX_WRITE_ATTEMPTS} races in a row.")

    def save(
        self,
        route: OptimizedRoute,
        request: RouteRequest,
        name: str | None = None,
    ) -> Optional[SavedRoute]:
        """Insert a route at the head of the history, evicting the oldest beyond the cap."""
        now = self._clock()
        saved = SavedRoute(
            id=self._id_factory(),
            name=name or generate_route_name(route.stops, now.date()),
            saved_at=now,
            route=optimized_route_to_model(route),
            request=request,
        )

        def insert(routes: list[SavedRoute]) -> tuple[list[SavedRoute], SavedRoute]:
            return [saved, *routes][: self.max_entries], saved

        try:
            self._mutate(insert)
        except Exception as exc:
            logger.error(f"Error saving route '{saved.name}': {exc}")
            return None
        logger.info(f"Route saved: {saved.name} ({saved.id})")
        return saved

    def delete(self, route_id: str) -> bool:
        def remove(routes: list[SavedRoute]) -> tuple[Optional[list[SavedRoute]], bool]:
            remaining = [route for route in routes if route.id != route_id]
            if len(remaining) == len(routes):
                return None, False
            return remaining, True

        try:
            deleted = self._mutate(remove)
        except Exception as exc:
            logger.error(f"Error deleting route {route_id}: {exc}")
            return False
        if deleted:
            logger.info(f"Route deleted: {route_id}")
        else:
            logger.warning(f"Route not found for deletion: {route_id}")
        return deleted

    def update(self, updated_route: SavedRoute) -> bool:
        def replace(routes: list[SavedRoute]) -> tuple[Optional[list[SavedRoute]], bool]:
            for index, route in enumerate(routes):
                if route.id == updated_route.id:
                    return [*routes[:index], updated_route, *routes[index + 1 :]], True
            return None, False

        try:
            updated = self._mutate(replace)
        except Exception as exc:
            logger.error(f"Error updating route {updated_route.id}: {exc}")
            return False
        if updated:
            logger.info(f"Route updated: {updated_route.name}")
        else:
            logger.warning(f"Route not found for update: {updated_route.id}")
        return updated

    def edit(
        self,
        route_id: str,
        *,
        name: str | None = None,
        is_favorite: bool | None = None,
    ) -> Optional[SavedRoute]:
        """Apply the given field changes to the stored copy of a route in one write.

        Fields left as None keep whatever value is stored at write time.
        """
        changes = {}
        if name is not None:
            changes["name"] = name
        if is_favorite is not None:
            changes["is_favorite"] = is_favorite

        def apply(routes: list[SavedRoute]) -> tuple[Optional[list[SavedRoute]], Optional[SavedRoute]]:
            for index, route in enumerate(routes):
                if route.id == route_id:
                    if not changes:
                        return None, route
                    changed = route.model_copy(update=changes)
                    return [*routes[:index], changed, *routes[index + 1 :]], changed
            return None, None

        try:
            return self._mutate(apply)
        except Exception as exc:
            logger.error(f"Error updating route {route_id}: {exc}")
            return None

    def rename(self, route_id: str, name: str) -> Optional[SavedRoute]:
        return self.edit(route_id, name=name)

    def set_favorite(self, route_id: str, is_favorite: bool) -> Optional[SavedRoute]:
        return self.edit(route_id, is_favorite=is_favorite)

    def clear(self) -> bool:
        try:
            self.backend.delete(self.storage_key)
        except Exception as exc:
            logger.error(f"Error clearing routes: {exc}")
            return False
        logger.info("All saved routes cleared")
        return True
