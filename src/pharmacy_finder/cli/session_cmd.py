"""Saved location commands."""

import asyncio

import typer

session_app = typer.Typer()


@session_app.command("show")
def show_session() -> None:
    """Show the saved address and coordinates."""
    asyncio.run(_show_session())


@session_app.command("clear")
def clear_session() -> None:
    """Forget the saved address and coordinates."""
    asyncio.run(_clear_session())


async def _show_session() -> None:
    from pharmacy_finder.cli.common import database_store
    from pharmacy_finder.core.config import get_settings
    from pharmacy_finder.services.location_session import LocationSession

    async with database_store(get_settings()) as store:
        snapshot = await LocationSession(store).load()

    typer.echo(f"Address:     {snapshot.address or '-'}")
    if snapshot.coordinates is not None:
        typer.echo(f"Coordinates: {snapshot.coordinates.latitude}, {snapshot.coordinates.longitude}")
    else:
        typer.echo("Coordinates: -")


async def _clear_session() -> None:
    from pharmacy_finder.cli.common import database_store
    from pharmacy_finder.core.config import get_settings
    from pharmacy_finder.services.location_session import LocationSession

    async with database_store(get_settings()) as store:
        await LocationSession(store).clear()
    typer.echo("Saved location cleared.")
