"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

UnitSystem = Literal["imperial", "metric"]
TravelMode = Literal["driving", "walking", "bicycling", "transit"]


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DRIVELESS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "DriveLess Route API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for the local route history.")

    google_api_key: Optional[str] = Field(
        default=None,
        description="API key sent to the Google Directions API.",
    )
    directions_base_url: str = Field(
        default="https://maps.googleapis.com/maps/api/directions/json",
        description="Directions engine endpoint.",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)
    include_traffic: bool = Field(
        default=True,
        description="Request traffic-aware durations by departing now.",
    )
    max_waypoints: int = Field(default=25, ge=0)

    history_max_entries: int = Field(default=50, ge=1)
    history_storage_key: str = "saved_routes"
    duplicate_tolerance_degrees: float = Field(
        default=0.001,
        ge=0.0,
        description="Per-axis coordinate tolerance for treating two stops as the same place (~100 m).",
    )
    auto_save_enabled: bool = True

    platform: Optional[str] = Field(
        default=None,
        description="Override for the detected host platform (ios, android, macos, linux, windows).",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=("http://localhost:5173", "http://127.0.0.1:5173"),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("platform", mode="before")
    @classmethod
    def _normalize_platform(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        normalized = str(value).strip().lower()
        return normalized or None


settings = Settings()
