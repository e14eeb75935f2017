"""Automatic names for saved routes."""

from __future__ import annotations

import re
from datetime import date
from typing import Sequence

from ..routing.models import RouteStop

_AFTER_FIRST_COMMA = re.compile(r"\s*,.*$")
_BUSINESS_SUFFIX = re.compile(r"\s*(Inc|LLC|Corp|Ltd)\.?$", re.IGNORECASE)

MAX_SHORT_NAME = 15


def short_name(full_name: str) -> str:
    """Trim an address or business label to something that fits in a list row."""
    name = _AFTER_FIRST_COMMA.sub("", full_name)
    name = _BUSINESS_SUFFIX.sub("", name).strip()
    if len(name) > MAX_SHORT_NAME:
        name = f"{name[:12]}..."
    return name or "Unknown"


def generate_route_name(stops: Sequence[RouteStop], today: date) -> str:
    if not stops:
        return f"Route {today.month}/{today.day}"
    if len(stops) == 1:
        return f"To {short_name(stops[0].display_name)}"
    first = short_name(stops[0].display_name)
    last = short_name(stops[-1].display_name)
    if len(stops) == 2:
        return f"{first} → {last}"
    return f"{first} + {len(stops) - 2} stops → {last}"
