"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scoutwatch.api.dependencies import set_engine_manager
from scoutwatch.api.engine_manager import EngineManager
from scoutwatch.api.routes import api_router
from scoutwatch.config import MonitorConfig
from scoutwatch.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: MonitorConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    With ``autostart=False`` the monitor is built but left stopped until a
    ``POST /control/start``.
    """
    if config is None:
        config = MonitorConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started, monitor %s.", "running" if autostart else "idle")
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Scoutwatch Monitor",
        description=(
            "Perception-to-notification monitor for agents in a simulated world.\n\n"
            "## API Groups\n\n"
            "- **State** — Tick, run state and performance counters\n"
            "- **Agents** — Tracked agents with history, latest snapshot and progress\n"
            "- **Notifications** — Messages delivered to agents\n"
            "- **Control** — Monitor lifecycle: start, pause, resume, step, reset\n"
            "- **Config** — Read-only monitor configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS: any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
