"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from battlers import __version__
from battlers.api.dependencies import set_engine_manager
from battlers.api.engine_manager import EngineManager
from battlers.api.routes import api_router
from battlers.config import SimulationConfig
from battlers.utils.logging import setup_logging

if TYPE_CHECKING:
    from battlers.core.models import Player

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, players: list[Player] | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config, players)
        set_engine_manager(manager)
        logger.info("API server started, battle ready in SETUP.")
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Battlers",
        description=(
            "Turn-based arena battle simulator — stepping API.\n\n"
            "## API Groups\n\n"
            "- **State** — Current battle: players, winner, recent log events\n"
            "- **Control** — Battle lifecycle: start, pause, resume, step, reset, quit, auto-advance\n"
            "- **Config** — Read-only simulation configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Battle state polled by a presentation client."},
            {"name": "Control", "description": "Lifecycle controls: start, pause, resume, single-step, reset, quit, auto-advance."},
            {"name": "Config", "description": "Read-only simulation configuration (turn cap, arena bounds, log size, tick rate)."},
        ],
    )

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
