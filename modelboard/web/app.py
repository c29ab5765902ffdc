#!/usr/bin/env python3
"""
modelboard FastAPI application factory
"""

import logging

from fastapi import FastAPI

from ..client.store import create_store
from ..core.config import DashboardConfig
from ..dashboard import build_dashboard
from .routes import create_dashboard_routes

logger = logging.getLogger("modelboard.web")


def create_app(config: DashboardConfig, store=None) -> FastAPI:
    """Create the dashboard web app; `store` defaults to the HTTP model store."""
    store = store if store is not None else create_store(config)
    coordinator = build_dashboard(
        store,
        is_admin=config.is_admin,
        discard_stale_fetches=config.discard_stale_fetches,
    )

    app = FastAPI(title="modelboard", docs_url=None, redoc_url=None)
    app.state.coordinator = coordinator
    app.include_router(create_dashboard_routes(coordinator))

    logger.info("dashboard app created for %s (admin=%s)", config.api_url, config.is_admin)
    return app
