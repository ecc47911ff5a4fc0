"""Geocoder library: reverse geocoding with a proximity-aware cache.

Public API:
    - normalize_coordinate: Canonicalize raw lat/lon into key and prefix form
    - NormalizedCoordinate: Normalized query coordinate
    - distance_meters / address_distance_meters: Great-circle distance
    - search_prefixes: Grid cells a cache lookup must cover for a radius
    - BaseReverseGeocoder: Abstract provider interface
    - ReverseGeocodeAddress: Address record returned by providers
    - CacheEntry: Cached address keyed by query coordinate
    - RadarGeocoder: Radar provider
    - cache_lookup / cache_store / get_cache_stats: Database caching functions
    - get_reverse_geocoder: Provider factory/registry
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gaia.lib.geocoder.base import (
    BaseReverseGeocoder,
    CacheEntry,
    GeocodingProviderError,
    InvalidCoordinateError,
    ReverseGeocodeAddress,
    StoreUnavailableError,
)
from gaia.lib.geocoder.cache import CacheStats, cache_lookup, cache_store, get_cache_stats
from gaia.lib.geocoder.coordinates import NormalizedCoordinate, normalize_coordinate
from gaia.lib.geocoder.distance import address_distance_meters, distance_meters, search_prefixes
from gaia.lib.geocoder.radar import RadarGeocoder

if TYPE_CHECKING:
    from gaia.core.config import Settings

# Provider registry
_PROVIDERS: dict[str, type[BaseReverseGeocoder]] = {
    "radar": RadarGeocoder,
}


def get_available_providers() -> list[str]:
    """Return the names of all registered reverse geocoder providers."""
    return sorted(_PROVIDERS.keys())


def get_reverse_geocoder(provider: str = "radar", **kwargs: Any) -> BaseReverseGeocoder:
    """Get a reverse geocoder instance by provider name.

    Args:
        provider: Provider name (e.g., "radar").
        **kwargs: Additional arguments forwarded to the provider constructor
            (e.g., ``api_key="..."``).

    Returns:
        An instance of the requested provider.

    Raises:
        ValueError: If the provider is not registered.
    """
    cls = _PROVIDERS.get(provider)
    if cls is None:
        msg = f"Unknown geocoder provider: {provider!r}. Available: {list(_PROVIDERS.keys())}"
        raise ValueError(msg)
    return cls(**kwargs)


def get_configured_geocoder(settings: Settings) -> BaseReverseGeocoder:
    """Build the Radar geocoder from application settings."""
    return get_reverse_geocoder(
        "radar",
        api_key=settings.radar_api_key,
        base_url=settings.radar_base_url,
        timeout=settings.radar_timeout,
    )


__all__ = [
    "BaseReverseGeocoder",
    "CacheEntry",
    "CacheStats",
    "GeocodingProviderError",
    "InvalidCoordinateError",
    "NormalizedCoordinate",
    "RadarGeocoder",
    "ReverseGeocodeAddress",
    "StoreUnavailableError",
    "address_distance_meters",
    "cache_lookup",
    "cache_store",
    "distance_meters",
    "get_available_providers",
    "get_cache_stats",
    "get_configured_geocoder",
    "get_reverse_geocoder",
    "normalize_coordinate",
    "search_prefixes",
]
