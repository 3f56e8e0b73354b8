"""FastAPI application factory for the tick-per-request driver."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_arcade.server.routes import router
from snake_arcade.server.session_manager import SessionManager

_DESCRIPTION = (
    "Drive single-player snake sessions over HTTP. Each "
    "`POST /sessions/{id}/tick` advances one session by exactly one step; "
    "clients pace ticks using the session's `tick_interval`."
)


def create_app(**manager_options) -> FastAPI:
    """Build the application.

    *manager_options* are passed to :class:`SessionManager` (for example
    ``max_active_sessions`` or ``idle_timeout``) when the app starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(**manager_options)
        yield

    app = FastAPI(
        title="Snake Arcade",
        description=_DESCRIPTION,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app
