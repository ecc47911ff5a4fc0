"""Root API router with /api/v0 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from gaia.api.middleware import SecurityHeadersMiddleware, setup_cors
from gaia.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from gaia.api.v0.geocode import geocode_router
    from gaia.api.v0.health import health_router

    root_router = APIRouter(prefix=settings.api_v0_prefix)
    root_router.include_router(health_router)
    root_router.include_router(geocode_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
