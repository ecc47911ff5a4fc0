"""Typer CLI root application with serve and version commands."""

import typer

from gaia import __version__
from gaia.core.config import get_settings
from gaia.core.logging import setup_logging

app = typer.Typer(name="gaia", help="Reverse geocoding proxy-cache CLI")


@app.callback()
def _main_callback(ctx: typer.Context) -> None:
    """Initialize logging for all CLI commands."""
    if ctx.invoked_subcommand == "version":
        return
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),  # noqa: FBT001
    host: str | None = typer.Option(None, "--host", help="Bind host (defaults to BIND_ADDRESS)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (defaults to BIND_ADDRESS)"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "gaia.main:create_app",
        factory=True,
        host=host or settings.bind_host,
        port=port or settings.bind_port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from gaia.cli.cache_cmd import cache_app
    from gaia.cli.db_cmd import db_app
    from gaia.cli.geocode_cmd import geocode_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(geocode_app, name="geocode", help="Reverse geocoding commands")
    app.add_typer(cache_app, name="cache", help="Geocode cache commands")


_register_subcommands()
