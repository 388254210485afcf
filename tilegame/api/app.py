"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tilegame.api.dependencies import set_session
from tilegame.api.routes import api_router
from tilegame.api.session import GameSession
from tilegame.config import GameConfig
from tilegame.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, session: GameSession | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = session.config if session is not None else GameConfig()
    if session is None:
        session = GameSession(config)
    set_session(session)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(config.log_level)
        logger.info("API server started — saves go to %s.", getattr(session.store, "path", "memory"))
        yield
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Tile Game",
        description=(
            "Tile-grid game model — input and presentation API.\n\n"
            "## API Groups\n\n"
            "- **Board** — Create the board and scatter goodies\n"
            "- **Players** — Add players and pick the active one\n"
            "- **Moves** — Move the active player\n"
            "- **State** — Board contents and the change event feed\n"
            "- **Control** — Save, load and reset\n"
            "- **Config** — Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.session = session

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
