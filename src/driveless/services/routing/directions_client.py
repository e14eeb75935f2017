"""HTTP client for the Google Directions API."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError as SchemaValidationError

from ...config import Settings, settings as default_settings
from ...errors import ApiError, NetworkError, NoDataError, ValidationError
from ...schemas.directions import DirectionsLeg, DirectionsResponse, DirectionsRoute
from ...schemas.routing import RouteRequest
from .models import EngineLeg, EngineRoute, LatLng

OPTIMIZE_PREFIX = "optimize:true|"
WAYPOINT_SEPARATOR = "|"

ERROR_NO_CONNECTION = "No internet connection. Please check your network and try again."
ERROR_TIMEOUT = "The directions service took too long to respond. Please try again."
ERROR_NO_ROUTE = "No route could be calculated for the provided addresses."
ERROR_INVALID_RESPONSE = "Invalid response format from the directions service."

logger = logging.getLogger(__name__)


class DirectionsClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        include_traffic: bool | None = None,
        max_waypoints: int | None = None,
        transport: httpx.BaseTransport | None = None,
        config: Settings | None = None,
    ) -> None:
        config = config or default_settings
        self.api_key = api_key or config.google_api_key
        if not self.api_key:
            raise ValueError("Google Directions API key is not configured.")
        self.base_url = base_url or config.directions_base_url
        self.timeout = timeout if timeout is not None else config.request_timeout_seconds
        self.include_traffic = include_traffic if include_traffic is not None else config.include_traffic
        self.max_waypoints = max_waypoints if max_waypoints is not None else config.max_waypoints
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout), transport=self._transport)

    def validate(self, request: RouteRequest) -> None:
        """Reject requests the engine should never see."""
        if not request.origin.strip():
            raise ValidationError("Start location cannot be empty.")
        if not request.destination.strip():
            raise ValidationError("End location cannot be empty.")
        if len(request.stops) > self.max_waypoints:
            raise ValidationError(
                f"Too many stops. Maximum allowed is {self.max_waypoints} stops.",
                detail=f"{len(request.stops)} stops supplied",
            )

    def build_params(self, request: RouteRequest) -> dict[str, str]:
        params = {
            "origin": request.origin.strip(),
            "destination": request.destination.strip(),
            "mode": request.travel_mode,
            "units": request.units,
            "key": self.api_key,
        }
        waypoints = WAYPOINT_SEPARATOR.join(stop.strip() for stop in request.stops if stop.strip())
        if waypoints:
            prefix = OPTIMIZE_PREFIX if request.optimize_waypoints else ""
            params["waypoints"] = f"{prefix}{waypoints}"
        if self.include_traffic:
            params["departure_time"] = "now"
        return params

    def compute_route(self, request: RouteRequest) -> EngineRoute:
        """Request directions and return the engine's best route.

        Raises:
            ValidationError: empty origin/destination or too many stops.
            NetworkError: the engine is unreachable or the call timed out.
            ApiError: non-200 HTTP status or a non-OK engine status.
            NoDataError: the engine returned no usable route.
        """
        self.validate(request)
        params = self.build_params(request)
        logger.debug(
            f"Requesting directions with {len(request.stops)} stops "
            f"(optimize={request.optimize_waypoints}, traffic={self.include_traffic})"
        )
        response = self._fetch(params)

        if response.status != "OK":
            logger.warning(f"Directions API returned status {response.status}: {response.error_message}")
            raise ApiError(
                f"API Error: {response.status}",
                detail=response.error_message,
                status=response.status,
            )
        if not response.routes:
            raise NoDataError(ERROR_NO_ROUTE)

        best = response.routes[0]
        if not best.legs:
            raise NoDataError(ERROR_NO_ROUTE, detail="Best route contained no legs")
        engine_route = _to_engine_route(best)
        logger.info(
            f"Directions computed: {len(engine_route.legs)} legs, "
            f"waypoint order {list(engine_route.waypoint_order or ())}"
        )
        return engine_route

    def _fetch(self, params: dict[str, str]) -> DirectionsResponse:
        client = self._get_client()
        try:
            try:
                response = client.get(self.base_url, params=params)
            except httpx.TimeoutException as exc:
                logger.warning(f"Directions request timed out after {self.timeout}s: {exc}")
                raise NetworkError(ERROR_TIMEOUT, detail=str(exc)) from exc
            except (httpx.TransportError, OSError) as exc:
                logger.warning(f"Directions request failed to connect: {exc}")
                raise NetworkError(ERROR_NO_CONNECTION, detail=str(exc)) from exc

            logger.debug(f"Directions API response status: {response.status_code}")
            if response.status_code != 200:
                raise ApiError(
                    f"HTTP Error: {response.status_code}",
                    status_code=response.status_code,
                )
            try:
                return DirectionsResponse.model_validate(response.json())
            except (ValueError, SchemaValidationError) as exc:
                logger.error(f"Could not parse directions response: {exc}")
                raise NoDataError(ERROR_INVALID_RESPONSE, detail=str(exc)) from exc
        finally:
            client.close()

    def check_health(self) -> bool:
        """Return True when the engine answers with a parseable directions payload."""
        client = self._get_client()
        try:
            response = client.get(
                self.base_url,
                params={"origin": "0,0", "destination": "0,0", "key": self.api_key},
                timeout=5.0,
            )
            response.raise_for_status()
            return "status" in response.json()
        except (httpx.HTTPError, ValueError):
            return False
        finally:
            client.close()


def _to_engine_leg(leg: DirectionsLeg) -> EngineLeg:
    traffic = leg.duration_in_traffic
    return EngineLeg(
        start_address=leg.start_address,
        end_address=leg.end_address,
        start_location=LatLng(leg.start_location.lat, leg.start_location.lng),
        end_location=LatLng(leg.end_location.lat, leg.end_location.lng),
        distance_meters=leg.distance.value,
        duration_seconds=leg.duration.value,
        traffic_duration_seconds=traffic.value if traffic is not None else None,
        distance_text=leg.distance.text,
        duration_text=leg.duration.text,
        traffic_duration_text=traffic.text if traffic is not None else None,
    )


def _to_engine_route(route: DirectionsRoute) -> EngineRoute:
    polyline: Optional[str] = route.overview_polyline.points if route.overview_polyline else None
    return EngineRoute(
        legs=tuple(_to_engine_leg(leg) for leg in route.legs),
        polyline=polyline or None,
        waypoint_order=tuple(route.waypoint_order) if route.waypoint_order is not None else None,
    )
