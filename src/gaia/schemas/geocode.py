"""Pydantic v2 schemas for reverse geocoding operations.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AddressResponse(BaseModel):
    """An address candidate as returned to clients."""

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    address_label: str | None = None
    city: str | None = None
    country: str | None = None
    country_code: str | None = None
    county: str | None = None
    formatted_address: str | None = None
    latitude: float | None = None
    layer: str | None = None
    longitude: float | None = None
    number: str | None = None
    postal_code: str | None = None
    state: str | None = None
    state_code: str | None = None
    street: str | None = None


class ResolvedAddressResponse(BaseModel):
    """An address annotated with its distance from the query coordinate."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    lat: str
    lon: str
    distance: float
    address: AddressResponse


class BulkReverseGeocodeRequest(BaseModel):
    """One coordinate in a bulk reverse geocoding request."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    lat: str
    lon: str


class CacheStatsResponse(BaseModel):
    """Response for geocode cache statistics."""

    model_config = ConfigDict(from_attributes=True)

    cached_count: int
    distinct_coordinates: int
    oldest_entry: datetime | None = None
    newest_entry: datetime | None = None
