"""Launching deep links on the host."""

from __future__ import annotations

import logging
import sys
import webbrowser
from typing import Protocol
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

WEB_SCHEMES = frozenset({"http", "https"})


class UrlLauncher(Protocol):
    def can_launch(self, url: str) -> bool:
        ...

    def launch(self, url: str) -> bool:
        ...


def detect_platform() -> str:
    """Normalized host platform name: ios, android, macos, windows or linux."""
    name = sys.platform
    if name == "ios":
        return "ios"
    if name == "android":
        return "android"
    if name == "darwin":
        return "macos"
    if name.startswith("win"):
        return "windows"
    return "linux"


class BrowserLauncher:
    """Opens web URLs in the default browser; custom app schemes are not launchable."""

    def can_launch(self, url: str) -> bool:
        return urlsplit(url).scheme.lower() in WEB_SCHEMES

    def launch(self, url: str) -> bool:
        if not self.can_launch(url):
            logger.debug(f"No handler for URL scheme in {url}")
            return False
        return webbrowser.open(url)
