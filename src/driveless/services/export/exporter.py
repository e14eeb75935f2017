"""Hand computed routes to external turn-by-turn navigation apps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...errors import ExportError
from ..routing.models import OptimizedRoute
from .launcher import UrlLauncher, detect_platform
from .targets import GOOGLE_MAPS, NAVIGATION_TARGETS, NavigationTarget, StopLike

PLATFORM_NAMES = {
    "ios": "iOS",
    "android": "Android",
    "macos": "macOS",
    "windows": "Windows",
    "linux": "Linux",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExportResult:
    success: bool
    message: str
    error_detail: Optional[str] = None
    url: Optional[str] = None

    def raise_for_failure(self) -> None:
        if not self.success:
            raise ExportError(self.message, detail=self.error_detail)


class NavigationExporter:
    """Builds deep links for a target and launches the first one that opens."""

    def __init__(
        self,
        launcher: UrlLauncher,
        platform: str | None = None,
        targets: Sequence[NavigationTarget] | None = None,
    ) -> None:
        self.launcher = launcher
        self.platform = (platform or detect_platform()).lower()
        self.targets = list(targets) if targets is not None else list(NAVIGATION_TARGETS.values())

    def is_app_available(self, target: NavigationTarget) -> bool:
        return target.is_available(self.platform)

    def get_available_targets(self) -> list[NavigationTarget]:
        return [target for target in self.targets if self.is_app_available(target)]

    def is_app_installed(self, target: NavigationTarget) -> bool:
        try:
            return self.launcher.can_launch(target.probe_url)
        except Exception as exc:
            logger.debug(f"Install probe for {target.display_name} failed: {exc}")
            return False

    def build_urls(self, target: NavigationTarget, route: OptimizedRoute) -> list[str]:
        return target.launch_chain(route.stops)

    def shareable_url(self, stops: Sequence[StopLike]) -> str:
        """Browser-friendly Google Maps directions URL for sharing by text or email."""
        if not stops or GOOGLE_MAPS.build_web_url is None:
            return GOOGLE_MAPS.root_url
        return GOOGLE_MAPS.build_web_url(stops)

    def export(self, target: NavigationTarget, route: OptimizedRoute) -> ExportResult:
        """Try the target's URLs in order and report the outcome; never raises."""
        if not self.is_app_available(target):
            allowed = ", ".join(sorted(PLATFORM_NAMES.get(p, p) for p in target.platforms or ()))
            return ExportResult(
                success=False,
                message=f"{target.display_name} is only available on {allowed}",
            )

        if not target.multi_waypoint and len(route.stops) > 2:
            logger.info(
                f"{target.display_name} accepts a single destination; "
                f"navigating to first stop: {route.stops[1].display_name}"
            )

        error_detail = None
        for url in self.build_urls(target, route):
            logger.info(f"Opening {target.display_name} with URL: {url}")
            try:
                launched = self.launcher.launch(url)
            except Exception as exc:
                logger.warning(f"Launching {url} raised: {exc}")
                error_detail = str(exc)
                continue
            if launched:
                return ExportResult(
                    success=True,
                    message=f"Route opened in {target.display_name}",
                    url=url,
                )

        logger.warning(f"Every launch attempt for {target.display_name} failed")
        return ExportResult(success=False, message=target.failure_message, error_detail=error_detail)
