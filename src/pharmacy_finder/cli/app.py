"""Typer CLI root application."""

import typer

from pharmacy_finder.core.config import get_settings
from pharmacy_finder.core.logging import setup_logging_from_settings

app = typer.Typer(name="pharmacy-finder", help="Find nearby pharmacies in Izmir")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    setup_logging_from_settings(get_settings())


def _register_subcommands() -> None:
    """Register all CLI commands and subcommand groups."""
    from pharmacy_finder.cli.cache_cmd import cache_app
    from pharmacy_finder.cli.nearby_cmd import address, nearby
    from pharmacy_finder.cli.session_cmd import session_app

    app.command("nearby")(nearby)
    app.command("address")(address)
    app.add_typer(session_app, name="session", help="Saved location commands")
    app.add_typer(cache_app, name="cache", help="Pharmacy roster cache commands")


_register_subcommands()
