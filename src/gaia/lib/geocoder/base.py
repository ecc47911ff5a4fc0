"""Abstract reverse geocoder interface, address record, and error types."""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, fields
from typing import Any

# snake_case attribute -> camelCase key used by the provider and the cache store
_WIRE_KEYS: dict[str, str] = {
    "address_label": "addressLabel",
    "street": "street",
    "number": "number",
    "city": "city",
    "county": "county",
    "state": "state",
    "state_code": "stateCode",
    "postal_code": "postalCode",
    "country": "country",
    "country_code": "countryCode",
    "formatted_address": "formattedAddress",
    "layer": "layer",
    "latitude": "latitude",
    "longitude": "longitude",
}


class InvalidCoordinateError(ValueError):
    """Raised when a coordinate cannot be resolved to a finite latitude/longitude pair."""


class StoreUnavailableError(Exception):
    """Raised when the geocode cache cannot be read or written.

    The underlying persistence error is chained as ``__cause__``.
    """


class GeocodingProviderError(Exception):
    """Raised when a geocoding provider experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error,
    malformed body) from a successful response with no addresses (which
    returns an empty list).

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


@dataclass(frozen=True)
class ReverseGeocodeAddress:
    """A single address candidate returned by a reverse geocoding provider."""

    address_label: str | None = None
    street: str | None = None
    number: str | None = None
    city: str | None = None
    county: str | None = None
    state: str | None = None
    state_code: str | None = None
    postal_code: str | None = None
    country: str | None = None
    country_code: str | None = None
    formatted_address: str | None = None
    layer: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_coordinates(self) -> bool:
        """Whether both latitude and longitude are present."""
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReverseGeocodeAddress":
        """Build an address from a camelCase mapping, ignoring unknown keys.

        Raises:
            ValueError: If latitude or longitude is present but not numeric.
        """
        values: dict[str, Any] = {}
        for field in fields(cls):
            value = data.get(_WIRE_KEYS[field.name])
            if value is None:
                continue
            if field.name in ("latitude", "longitude"):
                if isinstance(value, bool):
                    msg = f"{field.name} must be numeric, got {value!r}"
                    raise ValueError(msg)
                value = float(value)
            else:
                value = str(value)
            values[field.name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase mapping stored in the cache."""
        return {_WIRE_KEYS[name]: value for name, value in asdict(self).items()}


@dataclass(frozen=True)
class CacheEntry:
    """A cached address keyed by the normalized query coordinate that produced it."""

    query_lat: str
    query_lon: str
    address: ReverseGeocodeAddress


class BaseReverseGeocoder(ABC):
    """Abstract reverse geocoder interface. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @property
    def requires_api_key(self) -> bool:
        """Whether this provider requires an API key to function."""
        return False

    @property
    def is_configured(self) -> bool:
        """Whether this provider has all required configuration (e.g., API keys)."""
        return True

    @abstractmethod
    async def reverse_geocode(self, lat: str, lon: str) -> list[ReverseGeocodeAddress]:
        """Fetch address candidates for a coordinate.

        Args:
            lat: Normalized latitude string.
            lon: Normalized longitude string.

        Returns:
            Address candidates, possibly empty.

        Raises:
            GeocodingProviderError: On transport, status, or parse failures.
        """
