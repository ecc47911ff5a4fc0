"""Service metadata endpoints: GET /health, GET /info."""

from typing import Annotated

from fastapi import APIRouter, Depends

from gaia import __version__
from gaia.core.config import Settings, get_settings

health_router = APIRouter(tags=["health"])


@health_router.get("/health", status_code=200)
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@health_router.get("/info", status_code=200)
async def info(
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Return application version and environment."""
    return {
        "version": __version__,
        "environment": settings.environment,
    }
