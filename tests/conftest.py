"""Shared test fixtures for async database sessions, settings, and a fake reverse geocoder."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from gaia.core.config import Settings
from gaia.lib.geocoder.base import BaseReverseGeocoder, GeocodingProviderError, ReverseGeocodeAddress
from gaia.models.base import Base


class FakeGeocoder(BaseReverseGeocoder):
    """Test geocoder that returns pre-configured addresses and records its calls."""

    def __init__(
        self,
        addresses: list[ReverseGeocodeAddress] | None = None,
        *,
        error: bool = False,
        forbidden: bool = False,
    ) -> None:
        self.addresses = addresses or []
        self.error = error
        self.forbidden = forbidden
        self.calls: list[tuple[str, str]] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def reverse_geocode(self, lat: str, lon: str) -> list[ReverseGeocodeAddress]:
        if self.forbidden:
            pytest.fail(f"provider called for {lat},{lon} on what should be a cache hit")
        self.calls.append((lat, lon))
        if self.error:
            raise GeocodingProviderError("fake", "Test error", status_code=500)
        return list(self.addresses)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        radar_api_key="prj_test_sk_not_for_production",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_address():
    """Factory for provider addresses with San Francisco defaults."""

    def _make(latitude: float | None = 37.7750, longitude: float | None = -122.4190, **overrides):
        values = {
            "address_label": "1355 Market St",
            "number": "1355",
            "street": "Market St",
            "city": "San Francisco",
            "county": "San Francisco County",
            "state": "California",
            "state_code": "CA",
            "postal_code": "94103",
            "country": "United States",
            "country_code": "US",
            "formatted_address": "1355 Market St, San Francisco, CA 94103 US",
            "layer": "address",
            "latitude": latitude,
            "longitude": longitude,
        }
        values.update(overrides)
        return ReverseGeocodeAddress(**values)

    return _make


@pytest.fixture
def fake_geocoder_cls() -> type[FakeGeocoder]:
    """Expose FakeGeocoder to test modules without importing conftest."""
    return FakeGeocoder
