"""Reverse geocoding CLI command that resolves one coordinate through the cache."""

import asyncio
import json

import typer

geocode_app = typer.Typer()


@geocode_app.command("reverse")
def reverse(
    lat: str = typer.Option(..., "--lat", help="Latitude in decimal degrees"),  # noqa: B008
    lon: str = typer.Option(..., "--lon", help="Longitude in decimal degrees"),  # noqa: B008
) -> None:
    """Resolve a coordinate to addresses and print them as JSON."""
    from gaia.lib.geocoder import GeocodingProviderError, InvalidCoordinateError, StoreUnavailableError

    try:
        results = asyncio.run(_reverse(lat, lon))
    except InvalidCoordinateError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e
    except (GeocodingProviderError, StoreUnavailableError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(json.dumps(results, indent=2))


async def _reverse(lat: str, lon: str) -> list[dict]:
    """Async implementation of a single reverse lookup."""
    from gaia.core.config import get_settings
    from gaia.core.database import dispose_engine, get_session_factory, init_engine
    from gaia.lib.geocoder import get_configured_geocoder
    from gaia.services.reverse_geocode_service import resolve_reverse

    settings = get_settings()
    init_engine(settings.database_url)

    try:
        factory = get_session_factory()
        async with factory() as session:
            results = await resolve_reverse(
                session,
                get_configured_geocoder(settings),
                lat,
                lon,
                radius_meters=settings.cache_hit_radius_meters,
            )
        return [r.model_dump(mode="json", by_alias=True) for r in results]
    finally:
        await dispose_engine()
