"""Pharmacy roster cache commands."""

import asyncio
import time

import typer

cache_app = typer.Typer()


@cache_app.command("status")
def cache_status() -> None:
    """Show what the roster cache holds and whether it is fresh."""
    asyncio.run(_cache_status())


@cache_app.command("clear")
def cache_clear() -> None:
    """Delete the cached roster so the next lookup fetches it again."""
    asyncio.run(_cache_clear())


async def _cache_status() -> None:
    from pharmacy_finder.cli.common import database_store
    from pharmacy_finder.core.config import get_settings
    from pharmacy_finder.lib.pharmacy.cache import PharmacyCache
    from pharmacy_finder.services.locator_service import create_pharmacy_source

    settings = get_settings()
    async with database_store(settings) as store:
        cache = PharmacyCache(store, create_pharmacy_source(settings), ttl_seconds=settings.pharmacy_cache_ttl_seconds)
        entry = await cache.read_entry()
        fresh = await cache.is_fresh(settings.supported_region)

    if entry is None:
        typer.echo("Cache is empty.")
        return
    age_minutes = (time.time() * 1000 - entry.fetched_at_epoch_millis) / 60_000
    typer.echo(f"Region:      {entry.region_tag}")
    typer.echo(f"Pharmacies:  {len(entry.pharmacies)}")
    typer.echo(f"Age:         {age_minutes:.0f} min")
    typer.echo(f"Fresh:       {'yes' if fresh else 'no'}")


async def _cache_clear() -> None:
    from pharmacy_finder.cli.common import database_store
    from pharmacy_finder.core.config import get_settings
    from pharmacy_finder.lib.pharmacy.cache import PharmacyCache
    from pharmacy_finder.services.locator_service import create_pharmacy_source

    settings = get_settings()
    async with database_store(settings) as store:
        await PharmacyCache(store, create_pharmacy_source(settings)).invalidate()
    typer.echo("Pharmacy cache cleared.")
