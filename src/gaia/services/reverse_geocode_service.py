"""Reverse geocoding service: proximity-aware cache resolution with write-through on miss."""

from collections.abc import Iterable
from dataclasses import asdict

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from gaia.lib.geocoder import (
    BaseReverseGeocoder,
    InvalidCoordinateError,
    NormalizedCoordinate,
    ReverseGeocodeAddress,
    cache_lookup,
    cache_store,
    normalize_coordinate,
)
from gaia.lib.geocoder.distance import address_distance_meters, search_prefixes
from gaia.schemas.geocode import AddressResponse, ResolvedAddressResponse

CACHE_HIT_RADIUS_METERS = 40.0


def _resolved(coordinate: NormalizedCoordinate, address: ReverseGeocodeAddress) -> ResolvedAddressResponse | None:
    """Annotate an address with its distance, or None if it has no coordinates."""
    try:
        distance = address_distance_meters(coordinate, address)
    except InvalidCoordinateError as e:
        logger.warning(f"Skipping address for {coordinate.query_lat},{coordinate.query_lon}: {e}")
        return None
    return ResolvedAddressResponse(
        lat=coordinate.query_lat,
        lon=coordinate.query_lon,
        distance=distance,
        address=AddressResponse(**asdict(address)),
    )


async def resolve_reverse(
    session: AsyncSession,
    geocoder: BaseReverseGeocoder,
    lat: str | float,
    lon: str | float,
    *,
    radius_meters: float = CACHE_HIT_RADIUS_METERS,
) -> list[ResolvedAddressResponse]:
    """Resolve a coordinate to addresses, serving from the cache when possible.

    A cached entry is a hit when its address lies strictly closer than
    ``radius_meters`` to the query coordinate, or when it was stored for
    exactly the same normalized coordinate. On a miss the provider is
    called once and every returned address is committed to the cache
    before the response is built.

    Args:
        session: Database session.
        geocoder: Provider used on a cache miss.
        lat: Raw latitude.
        lon: Raw longitude.
        radius_meters: Cache-hit distance threshold.

    Returns:
        Resolved addresses, possibly empty when the provider has none.

    Raises:
        InvalidCoordinateError: If lat or lon is not a finite number.
        StoreUnavailableError: If the cache cannot be read or written.
        GeocodingProviderError: If the provider call fails on a miss.
    """
    coordinate = normalize_coordinate(lat, lon)

    lat_prefixes, lon_prefixes = search_prefixes(coordinate, radius_meters)
    entries = await cache_lookup(session, lat_prefixes, lon_prefixes)
    hits: list[ResolvedAddressResponse] = []
    for entry in entries:
        resolved = _resolved(coordinate, entry.address)
        if resolved is None:
            continue
        same_query = entry.query_lat == coordinate.query_lat and entry.query_lon == coordinate.query_lon
        if resolved.distance < radius_meters or same_query:
            hits.append(resolved)

    log = logger.bind(json_output=True, lat=coordinate.query_lat, lon=coordinate.query_lon)
    if hits:
        log.bind(cache="hit", addresses=len(hits)).info(
            f"Cache hit for {coordinate.query_lat},{coordinate.query_lon}: {len(hits)} address(es)"
        )
        return hits

    log.bind(cache="miss", provider=geocoder.provider_name).info(
        f"Cache miss for {coordinate.query_lat},{coordinate.query_lon}; calling {geocoder.provider_name}"
    )
    addresses = await geocoder.reverse_geocode(coordinate.query_lat, coordinate.query_lon)
    await cache_store(session, coordinate.query_lat, coordinate.query_lon, addresses)

    return [resolved for address in addresses if (resolved := _resolved(coordinate, address)) is not None]


async def resolve_reverse_bulk(
    session: AsyncSession,
    geocoder: BaseReverseGeocoder,
    coordinates: Iterable[tuple[str | float, str | float]],
    *,
    radius_meters: float = CACHE_HIT_RADIUS_METERS,
) -> list[ResolvedAddressResponse]:
    """Resolve several coordinates in order and flatten the results.

    Results keep input order but carry no marker of which input produced
    them. The first failure aborts the whole batch; rows cached by earlier
    items stay cached.

    Raises:
        InvalidCoordinateError: If any coordinate is not a finite number.
        StoreUnavailableError: If the cache cannot be read or written.
        GeocodingProviderError: If a provider call fails on a miss.
    """
    results: list[ResolvedAddressResponse] = []
    for lat, lon in coordinates:
        results.extend(await resolve_reverse(session, geocoder, lat, lon, radius_meters=radius_meters))
    return results
