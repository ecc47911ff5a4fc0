"""Radar reverse geocoding provider.

Uses the Radar reverse geocoding API
(https://radar.com/documentation/api#reverse-geocode)
to resolve a coordinate into address candidates. Requires an API key.
"""

import httpx
from loguru import logger

from gaia.lib.geocoder.base import BaseReverseGeocoder, GeocodingProviderError, ReverseGeocodeAddress

RADAR_API_URL = "https://api.radar.io/v1"
DEFAULT_TIMEOUT = 5.0


class RadarGeocoder(BaseReverseGeocoder):
    """Radar reverse geocoder. One outbound call per lookup, no retries."""

    def __init__(self, api_key: str, base_url: str = RADAR_API_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return "radar"

    @property
    def requires_api_key(self) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def reverse_geocode(self, lat: str, lon: str) -> list[ReverseGeocodeAddress]:
        """Reverse geocode a coordinate using the Radar API.

        Args:
            lat: Normalized latitude string.
            lon: Normalized longitude string.

        Returns:
            Address candidates in provider order, possibly empty.

        Raises:
            GeocodingProviderError: On transport, status, or parse failures.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(
                    f"{self._base_url}/geocode/reverse",
                    params={"coordinates": f"{lat},{lon}"},
                    headers={"Authorization": self._api_key},
                )
                response.raise_for_status()

            data = response.json()
            return self._parse_response(data)

        except httpx.TimeoutException as e:
            logger.warning("Radar reverse geocoder timeout")
            raise GeocodingProviderError("radar", "Reverse geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Radar reverse geocoder HTTP error {e.response.status_code}")
            raise GeocodingProviderError(
                "radar",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Radar reverse geocoder transport error: {type(e).__name__}")
            raise GeocodingProviderError("radar", "Connection to geocoding provider failed") from e
        except ValueError as e:
            logger.warning(f"Radar reverse geocoder returned a non-JSON body: {e}")
            raise GeocodingProviderError("radar", "Provider returned a malformed response") from e

    def _parse_response(self, data: object) -> list[ReverseGeocodeAddress]:
        """Parse a Radar ``{meta, addresses}`` body into address records."""
        if not isinstance(data, dict) or not isinstance(data.get("addresses"), list):
            raise GeocodingProviderError("radar", "Response body has no addresses list")

        addresses: list[ReverseGeocodeAddress] = []
        for item in data["addresses"]:
            if not isinstance(item, dict):
                raise GeocodingProviderError("radar", f"Malformed address entry: {item!r}")
            try:
                addresses.append(ReverseGeocodeAddress.from_dict(item))
            except (TypeError, ValueError) as e:
                logger.warning(f"Failed to parse Radar address: {e}")
                raise GeocodingProviderError("radar", f"Failed to parse response: {e}") from e
        return addresses
