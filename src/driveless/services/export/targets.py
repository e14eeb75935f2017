"""Deep-link builders for the supported navigation apps.

Every URL parameter is a ``lat,lng`` pair taken from the route's stops; free-text
addresses are never sent so the receiving app cannot geocode them differently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional, Protocol, Sequence


class StopLike(Protocol):
    latitude: float
    longitude: float


UrlBuilder = Callable[[Sequence[StopLike]], str]


def encode_location(stop: StopLike) -> str:
    return f"{stop.latitude},{stop.longitude}"


def navigation_stop(stops: Sequence[StopLike]) -> StopLike:
    """Stop a single-destination app should navigate to.

    Such apps always route from the device's live location and accept one
    destination, so multi-stop routes are handed over as their first intermediate
    stop rather than the final destination.
    """
    if len(stops) == 1:
        return stops[0]
    return stops[1]


def _directions_path(stops: Sequence[StopLike]) -> str:
    return "https://www.google.com/maps/dir/" + "/".join(encode_location(stop) for stop in stops)


def google_maps_app_url(stops: Sequence[StopLike]) -> str:
    if len(stops) == 1:
        return f"google.navigation:q={encode_location(stops[0])}"
    origin = stops[0]
    return f"{_directions_path(stops)}/@{origin.latitude},{origin.longitude},12z/data=!3m1!4b1!4m2!4m1!3e0"


def google_maps_web_url(stops: Sequence[StopLike]) -> str:
    if len(stops) == 1:
        return f"https://www.google.com/maps/search/?api=1&query={encode_location(stops[0])}"
    return _directions_path(stops)


def waze_universal_url(stops: Sequence[StopLike]) -> str:
    return f"https://waze.com/ul?ll={encode_location(navigation_stop(stops))}&navigate=yes"


def waze_native_url(stops: Sequence[StopLike]) -> str:
    return f"waze://?ll={encode_location(navigation_stop(stops))}&navigate=yes"


def apple_maps_url(stops: Sequence[StopLike]) -> str:
    if len(stops) == 1:
        return f"maps://?daddr={encode_location(stops[0])}&dirflg=d"
    origin, destination = stops[0], stops[-1]
    url = f"maps://?saddr={encode_location(origin)}&daddr={encode_location(destination)}"
    for waypoint in stops[1:-1]:
        url += f"+to:{encode_location(waypoint)}"
    return url + "&dirflg=d"


@dataclass(frozen=True, slots=True)
class NavigationTarget:
    """Capabilities and URL builders for one external navigation app."""

    key: str
    display_name: str
    icon_name: str
    multi_waypoint: bool
    root_url: str
    build_primary_url: UrlBuilder
    probe_url: str
    failure_message: str
    platforms: Optional[FrozenSet[str]] = None
    build_fallback_url: Optional[UrlBuilder] = None
    build_web_url: Optional[UrlBuilder] = None

    def is_available(self, platform: str) -> bool:
        return self.platforms is None or platform in self.platforms

    def launch_chain(self, stops: Sequence[StopLike]) -> list[str]:
        """URLs to try in order: primary, fallback native scheme, then web."""
        if not stops:
            return [self.root_url]
        urls = [self.build_primary_url(stops)]
        for builder in (self.build_fallback_url, self.build_web_url):
            if builder is not None:
                urls.append(builder(stops))
        return urls


GOOGLE_MAPS = NavigationTarget(
    key="google_maps",
    display_name="Google Maps",
    icon_name="google_maps",
    multi_waypoint=True,
    root_url="https://maps.google.com/",
    build_primary_url=google_maps_app_url,
    build_web_url=google_maps_web_url,
    probe_url="google.navigation:q=0,0",
    failure_message="Could not open Google Maps. Please make sure Google Maps or a web browser is available.",
)

WAZE = NavigationTarget(
    key="waze",
    display_name="Waze",
    icon_name="waze",
    multi_waypoint=False,
    root_url="https://waze.com/",
    build_primary_url=waze_universal_url,
    build_fallback_url=waze_native_url,
    probe_url="https://waze.com/ul?ll=0,0&navigate=yes",
    failure_message="Could not open Waze. Please make sure Waze is installed.",
)

APPLE_MAPS = NavigationTarget(
    key="apple_maps",
    display_name="Apple Maps",
    icon_name="apple_maps",
    multi_waypoint=True,
    root_url="maps://",
    build_primary_url=apple_maps_url,
    probe_url="maps://?ll=0,0",
    failure_message="Failed to open Apple Maps.",
    platforms=frozenset({"ios"}),
)

NAVIGATION_TARGETS: dict[str, NavigationTarget] = {
    target.key: target for target in (GOOGLE_MAPS, WAZE, APPLE_MAPS)
}


def get_target(key: str) -> NavigationTarget:
    try:
        return NAVIGATION_TARGETS[key]
    except KeyError:
        raise ValueError(f"Unknown navigation target '{key}'.") from None
