"""Geocode cache inspection CLI commands."""

import asyncio

import typer

cache_app = typer.Typer()


@cache_app.command("stats")
def stats() -> None:
    """Show how many addresses and coordinates are cached."""
    asyncio.run(_stats())


async def _stats() -> None:
    from gaia.core.config import get_settings
    from gaia.core.database import dispose_engine, get_session_factory, init_engine
    from gaia.lib.geocoder import get_cache_stats

    settings = get_settings()
    init_engine(settings.database_url)

    try:
        factory = get_session_factory()
        async with factory() as session:
            result = await get_cache_stats(session)

        typer.echo(f"  Cached addresses:    {result.cached_count}")
        typer.echo(f"  Query coordinates:   {result.distinct_coordinates}")
        typer.echo(f"  Oldest entry:        {result.oldest_entry or '-'}")
        typer.echo(f"  Newest entry:        {result.newest_entry or '-'}")
    finally:
        await dispose_engine()
