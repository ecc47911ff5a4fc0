"""Database caching layer for reverse geocoding results.

Rows are keyed by the normalized query coordinate and looked up with a
set of string prefixes naming grid cells; distance filtering happens in the caller.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gaia.lib.geocoder.base import CacheEntry, ReverseGeocodeAddress, StoreUnavailableError
from gaia.models.geocode import Geocode


@dataclass
class CacheStats:
    """Aggregate statistics for the geocode cache."""

    cached_count: int
    distinct_coordinates: int
    oldest_entry: datetime | None = None
    newest_entry: datetime | None = None


async def cache_lookup(
    session: AsyncSession,
    lat_prefixes: Sequence[str] | None,
    lon_prefixes: Sequence[str] | None,
) -> list[CacheEntry]:
    """Return every cached entry whose query key starts with one of the given prefixes.

    Args:
        session: Database session.
        lat_prefixes: Latitude prefixes to match, or None to match any latitude.
        lon_prefixes: Longitude prefixes to match, or None to match any longitude.

    Returns:
        Matching cache entries, in no particular order.

    Raises:
        StoreUnavailableError: On any persistence-layer error.
    """
    conditions = [
        or_(*(column.like(f"{prefix}%") for prefix in prefixes))
        for column, prefixes in ((Geocode.lat, lat_prefixes), (Geocode.lon, lon_prefixes))
        if prefixes is not None
    ]
    try:
        result = await session.execute(select(Geocode).where(*conditions))
        rows = result.scalars().all()
    except SQLAlchemyError as e:
        msg = f"Geocode cache lookup failed: {e}"
        raise StoreUnavailableError(msg) from e

    try:
        return [
            CacheEntry(
                query_lat=row.lat,
                query_lon=row.lon,
                address=ReverseGeocodeAddress.from_dict(row.address),
            )
            for row in rows
        ]
    except (AttributeError, TypeError, ValueError) as e:
        msg = f"Corrupt geocode cache row: {e}"
        raise StoreUnavailableError(msg) from e


async def cache_store(
    session: AsyncSession,
    query_lat: str,
    query_lon: str,
    addresses: Sequence[ReverseGeocodeAddress],
) -> None:
    """Append one row per address and commit before returning.

    No deduplication is performed: storing the same coordinate twice
    accumulates rows.

    Args:
        session: Database session.
        query_lat: Five-decimal latitude key.
        query_lon: Five-decimal longitude key.
        addresses: Addresses returned by the provider.

    Raises:
        StoreUnavailableError: On any persistence-layer error. The session
            is rolled back first.
    """
    if not addresses:
        return

    session.add_all([Geocode(lat=query_lat, lon=query_lon, address=address.to_dict()) for address in addresses])
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        msg = f"Geocode cache write failed: {e}"
        raise StoreUnavailableError(msg) from e


async def get_cache_stats(session: AsyncSession) -> CacheStats:
    """Count cached rows and distinct query coordinates.

    Raises:
        StoreUnavailableError: On any persistence-layer error.
    """
    distinct_keys = select(Geocode.lat, Geocode.lon).distinct().subquery()
    try:
        row = (
            await session.execute(
                select(
                    func.count(Geocode.id).label("cached_count"),
                    func.min(Geocode.cached_at).label("oldest_entry"),
                    func.max(Geocode.cached_at).label("newest_entry"),
                )
            )
        ).one()
        distinct_count = (await session.execute(select(func.count()).select_from(distinct_keys))).scalar_one()
    except SQLAlchemyError as e:
        msg = f"Geocode cache statistics query failed: {e}"
        raise StoreUnavailableError(msg) from e

    return CacheStats(
        cached_count=row.cached_count,
        distinct_coordinates=distinct_count,
        oldest_entry=row.oldest_entry,
        newest_entry=row.newest_entry,
    )
