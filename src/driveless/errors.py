"""Error taxonomy for route planning and navigation export."""

from __future__ import annotations

from typing import Optional


class RoutePlanningError(Exception):
    """Base error carrying a user-facing message and optional diagnostic detail."""

    retryable = False

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class ValidationError(RoutePlanningError):
    """The caller supplied an unusable request."""


class NetworkError(RoutePlanningError):
    """The directions engine could not be reached or timed out."""

    retryable = True


class ApiError(RoutePlanningError):
    """The directions engine rejected the request."""

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        *,
        status: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, detail)
        self.status = status
        self.status_code = status_code


class NoDataError(RoutePlanningError):
    """The engine accepted the request but produced no usable route."""


class ExportError(RoutePlanningError):
    """No navigation target could be launched."""
