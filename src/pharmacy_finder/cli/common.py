"""Helpers shared by CLI commands."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pharmacy_finder.core.config import Settings
from pharmacy_finder.core.database import create_tables, dispose_engine, get_session_factory, init_engine
from pharmacy_finder.lib.storage.database import DatabaseKeyValueStore


@asynccontextmanager
async def database_store(settings: Settings) -> AsyncIterator[DatabaseKeyValueStore]:
    """Open the persistent key-value store for the duration of a command."""
    init_engine(settings.database_url)
    try:
        await create_tables()
        yield DatabaseKeyValueStore(get_session_factory())
    finally:
        await dispose_engine()
