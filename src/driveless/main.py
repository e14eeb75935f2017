"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, navigation, routes
from .config import Settings, settings as default_settings
from .persistence.kv import FileKeyValueStore
from .services.export.exporter import NavigationExporter
from .services.export.launcher import BrowserLauncher
from .services.history.auto_save import AutoSaver
from .services.history.store import RouteStore
from .services.routing.directions_client import DirectionsClient
from .services.routing.service import RoutePlanner


def _default_planner(config: Settings, store: RouteStore) -> RoutePlanner | None:
    try:
        client = DirectionsClient(config=config)
    except ValueError as exc:
        logging.warning(f"Route planning disabled: {exc}")
        return None
    return RoutePlanner(client, AutoSaver(store, enabled=config.auto_save_enabled))


def create_app(
    config: Settings | None = None,
    *,
    planner: RoutePlanner | None = None,
    store: RouteStore | None = None,
    exporter: NavigationExporter | None = None,
) -> FastAPI:
    config = config or default_settings
    store = store or RouteStore(FileKeyValueStore(config.data_root), config=config)
    if planner is None:
        planner = _default_planner(config, store)
    exporter = exporter or NavigationExporter(BrowserLauncher(), platform=config.platform)

    app = FastAPI(title=config.app_name)
    app.state.settings = config
    app.state.planner = planner
    app.state.store = store
    app.state.exporter = exporter

    if config.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(config.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": config.app_name,
            "status": "running",
            "api_prefix": config.api_prefix,
            "health": f"{config.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=config.api_prefix)
    app.include_router(routes.router, prefix=config.api_prefix)
    app.include_router(navigation.router, prefix=config.api_prefix)
    return app
