from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, playlists
from .core.config import get_settings
from .core.logging import setup_logging
from .spotify.client import SpotifyClient

logger = logging.getLogger("playlist_stats")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    client = SpotifyClient.from_settings(settings)
    app.state.spotify_client = client
    logger.debug("spotify client started")
    try:
        yield
    finally:
        await client.close()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.environment)
    app = FastAPI(
        title="Playlist Stats Backend",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(playlists.router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
