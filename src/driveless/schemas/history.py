"""Saved route history schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .routing import OptimizedRouteModel, RouteRequest


class SavedRoute(BaseModel):
    """A computed route persisted in the local history."""

    id: str
    name: str
    saved_at: datetime
    route: OptimizedRouteModel
    request: RouteRequest
    is_favorite: bool = False

    @property
    def summary(self) -> str:
        return f"{len(self.route.stops)} stops • {self.route.total_distance} • {self.route.total_time}"

    def formatted_date(self, now: datetime) -> str:
        """Relative save date: clock time today, 'Yesterday', 'N days ago', else M/D/YYYY."""
        saved_at = self.saved_at
        if (saved_at.tzinfo is None) != (now.tzinfo is None):
            # Naive values are local wall-clock time.
            saved_at = saved_at.astimezone()
            now = now.astimezone()
        if now.tzinfo is not None:
            saved_at = saved_at.astimezone(now.tzinfo)
        days = (now - saved_at).days
        if days <= 0:
            hour = saved_at.hour % 12 or 12
            am_pm = "PM" if saved_at.hour >= 12 else "AM"
            return f"{hour}:{saved_at.minute:02d} {am_pm}"
        if days == 1:
            return "Yesterday"
        if days < 7:
            return f"{days} days ago"
        return f"{saved_at.month}/{saved_at.day}/{saved_at.year}"


class SavedRouteUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    is_favorite: Optional[bool] = None
