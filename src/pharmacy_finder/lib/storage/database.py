"""Key-value store persisted in a SQL table through SQLAlchemy."""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pharmacy_finder.lib.storage.base import BaseKeyValueStore, StorageError
from pharmacy_finder.models.key_value_entry import KeyValueEntry


class DatabaseKeyValueStore(BaseKeyValueStore):
    """Store backed by the ``key_value_entries`` table.

    Each operation runs in its own session and commits immediately, so values
    survive a process restart when the database is file-backed.

    Args:
        session_factory: Async session factory bound to the target database.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(KeyValueEntry.value).where(KeyValueEntry.key == key))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(key, f"Read failed: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(key, f"Write failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(key, f"Delete failed: {e}") from e
