"""FastAPI dependency injection for database sessions and the reverse geocoder."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gaia.core.config import Settings, get_settings
from gaia.core.database import get_session_factory
from gaia.lib.geocoder import BaseReverseGeocoder, get_configured_geocoder


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_geocoder(
    settings: Annotated[Settings, Depends(get_settings)],
) -> BaseReverseGeocoder:
    """Return the configured reverse geocoding provider."""
    return get_configured_geocoder(settings)
