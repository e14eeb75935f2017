"""Navigation app export helpers."""

from .exporter import ExportResult, NavigationExporter
from .targets import APPLE_MAPS, GOOGLE_MAPS, NAVIGATION_TARGETS, WAZE, NavigationTarget, get_target

__all__ = [
    "APPLE_MAPS",
    "ExportResult",
    "GOOGLE_MAPS",
    "NAVIGATION_TARGETS",
    "NavigationExporter",
    "NavigationTarget",
    "WAZE",
    "get_target",
]
