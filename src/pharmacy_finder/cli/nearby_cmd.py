"""Nearby pharmacy lookup commands."""

import asyncio

import typer

from pharmacy_finder.lib.geocoder.base import Coordinate, GeocodeFailure
from pharmacy_finder.lib.geocoder.position import FixedPositionProvider
from pharmacy_finder.lib.pharmacy.display import format_distance, region_label
from pharmacy_finder.lib.pharmacy.models import Pharmacy
from pharmacy_finder.lib.pharmacy.resolver import UnsupportedRegionError
from pharmacy_finder.lib.pharmacy.source import FetchError


def nearby(
    lat: float | None = typer.Option(None, "--lat", help="Latitude (-90 to 90)"),
    lon: float | None = typer.Option(None, "--lon", help="Longitude (-180 to 180)"),
    duty_only: bool = typer.Option(False, "--duty-only", help="Only pharmacies on duty now"),  # noqa: FBT001
    limit: int = typer.Option(10, "--limit", min=1, help="Maximum pharmacies to list"),
) -> None:
    """List pharmacies near a position, or near the saved location when none is given."""
    if (lat is None) != (lon is None):
        typer.echo("Both --lat and --lon are required to give a position.", err=True)
        raise typer.Exit(code=1)
    coordinate = None
    if lat is not None and lon is not None:
        try:
            coordinate = Coordinate(latitude=lat, longitude=lon)
        except ValueError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=1) from e
    asyncio.run(_nearby(coordinate, duty_only, limit))


def address(
    text: str = typer.Argument(..., help="Address to search around"),
    duty_only: bool = typer.Option(False, "--duty-only", help="Only pharmacies on duty now"),  # noqa: FBT001
    limit: int = typer.Option(10, "--limit", min=1, help="Maximum pharmacies to list"),
) -> None:
    """Save an address as the current location and list pharmacies near it."""
    asyncio.run(_address(text, duty_only, limit))


async def _nearby(coordinate: Coordinate | None, duty_only: bool, limit: int) -> None:
    """Async implementation of the nearby command."""
    from pharmacy_finder.cli.common import database_store
    from pharmacy_finder.core.config import get_settings
    from pharmacy_finder.services.locator_service import create_locator

    settings = get_settings()
    async with database_store(settings) as store:
        positions = FixedPositionProvider(coordinate, granted=coordinate is not None)
        locator = create_locator(settings, store, positions)
        try:
            if coordinate is not None:
                pharmacies = await locator.locate_with_device(duty_only=duty_only)
            else:
                pharmacies = await locator.startup(duty_only=duty_only)
        except (UnsupportedRegionError, FetchError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e

        if pharmacies is None:
            message = locator.state.state.error or "No saved location. Pass --lat/--lon or use the address command."
            typer.echo(message, err=True)
            raise typer.Exit(code=1)
        _print_pharmacies(pharmacies[:limit])


async def _address(text: str, duty_only: bool, limit: int) -> None:
    """Async implementation of the address command."""
    from pharmacy_finder.cli.common import database_store
    from pharmacy_finder.core.config import get_settings
    from pharmacy_finder.services.locator_service import create_locator

    settings = get_settings()
    async with database_store(settings) as store:
        locator = create_locator(settings, store, FixedPositionProvider(None, granted=False))
        try:
            pharmacies = await locator.locate_by_address(text, duty_only=duty_only)
        except (GeocodeFailure, UnsupportedRegionError, FetchError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e
        _print_pharmacies(pharmacies[:limit])


def _print_pharmacies(pharmacies: list[Pharmacy]) -> None:
    if not pharmacies:
        typer.echo("No pharmacies found.")
        return
    for index, pharmacy in enumerate(pharmacies, start=1):
        duty = "  [on duty]" if pharmacy.is_on_duty else ""
        typer.echo(f"{index:>2}. {pharmacy.name} ({format_distance(pharmacy.distance_in_meters)}){duty}")
        typer.echo(f"    {region_label(pharmacy)}")
        typer.echo(f"    {pharmacy.address}")
        typer.echo(f"    Tel: {pharmacy.phone}")
