"""Reverse geocoding API endpoints: single coordinate, bulk, and cache statistics."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from gaia.core.config import Settings, get_settings
from gaia.core.dependencies import get_async_session, get_geocoder
from gaia.lib.geocoder import (
    BaseReverseGeocoder,
    GeocodingProviderError,
    InvalidCoordinateError,
    StoreUnavailableError,
    get_cache_stats,
)
from gaia.schemas.geocode import BulkReverseGeocodeRequest, CacheStatsResponse, ResolvedAddressResponse
from gaia.services.reverse_geocode_service import resolve_reverse, resolve_reverse_bulk

geocode_router = APIRouter(prefix="/geocode", tags=["geocode"])


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=message)


def _server_error(e: Exception) -> HTTPException:
    """Map a store or provider failure to a 5xx without echoing internal detail."""
    if isinstance(e, GeocodingProviderError):
        logger.bind(json_output=True, provider=e.provider_name, status_code=e.status_code).error(
            f"Reverse geocoding provider failure: {e}"
        )
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Geocoding provider is temporarily unavailable.",
        )
    logger.bind(json_output=True, store="geocode").error(f"Geocode cache failure: {e}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Geocode cache is temporarily unavailable.",
    )


@geocode_router.get(
    "/reverse",
    response_model=list[ResolvedAddressResponse],
)
async def reverse_geocode(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    geocoder: Annotated[BaseReverseGeocoder, Depends(get_geocoder)],
    settings: Annotated[Settings, Depends(get_settings)],
    lat: Annotated[str | None, Query(description="Latitude in decimal degrees")] = None,
    lon: Annotated[str | None, Query(description="Longitude in decimal degrees")] = None,
) -> list[ResolvedAddressResponse] | JSONResponse:
    """Resolve one coordinate to nearby addresses."""
    if lat is None:
        return _bad_request("missing lat")
    if lon is None:
        return _bad_request("missing lon")

    try:
        return await resolve_reverse(
            session,
            geocoder,
            lat,
            lon,
            radius_meters=settings.cache_hit_radius_meters,
        )
    except InvalidCoordinateError as e:
        return _bad_request(str(e))
    except (GeocodingProviderError, StoreUnavailableError) as e:
        raise _server_error(e) from e


@geocode_router.post(
    "/reverse/bulk",
    response_model=list[ResolvedAddressResponse],
)
async def reverse_geocode_bulk(
    requests: Annotated[list[BulkReverseGeocodeRequest], Body()],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    geocoder: Annotated[BaseReverseGeocoder, Depends(get_geocoder)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[ResolvedAddressResponse] | JSONResponse:
    """Resolve several coordinates and return one flattened list, in input order."""
    try:
        return await resolve_reverse_bulk(
            session,
            geocoder,
            [(req.lat, req.lon) for req in requests],
            radius_meters=settings.cache_hit_radius_meters,
        )
    except InvalidCoordinateError as e:
        return _bad_request(str(e))
    except (GeocodingProviderError, StoreUnavailableError) as e:
        raise _server_error(e) from e


@geocode_router.get(
    "/cache/stats",
    response_model=CacheStatsResponse,
)
async def cache_stats(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> CacheStatsResponse:
    """Return geocode cache statistics."""
    try:
        stats = await get_cache_stats(session)
    except StoreUnavailableError as e:
        raise _server_error(e) from e
    return CacheStatsResponse.model_validate(stats)
