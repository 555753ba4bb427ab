"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from open_terrain.config import Settings
from open_terrain.terrain.routes import router
from open_terrain.terrain.service import TerrainService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown.

    Creates the terrain service from environment settings on startup and
    shuts down its thread pool on teardown.
    """
    settings = Settings.from_env()
    service = TerrainService(settings)
    app.state.terrain_service = service
    logger.info("Terrain service initialized", extra={"default_k": settings.default_k})
    yield
    service.shutdown()
    logger.info("Terrain service shut down")


app = FastAPI(title="Open Terrain API", lifespan=lifespan)
app.include_router(router)
