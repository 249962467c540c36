"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from replayarr.api.routes import health, replay
from replayarr.core.errors import NetworkError
from replayarr.services.replay import ReplayService

logger = logging.getLogger(__name__)


def create_app(service: ReplayService | None = None) -> FastAPI:
    """Build the app.

    Args:
        service: ReplayService to serve (None = create one on startup
            and close it on shutdown)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.replay_service is None
        if owned:
            app.state.replay_service = ReplayService()
        logger.info(
            "Replayarr started (team=%s tz=%s)",
            app.state.replay_service.team_id,
            app.state.replay_service.tz,
        )
        yield
        if owned:
            await app.state.replay_service.close()
            app.state.replay_service = None

    app = FastAPI(title="Replayarr", lifespan=lifespan)
    app.state.replay_service = service

    @app.exception_handler(NetworkError)
    async def network_error_handler(request: Request, exc: NetworkError):
        logger.warning("Upstream failure serving %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc), "retryable": True},
        )

    app.include_router(health.router)
    app.include_router(replay.router)
    return app
