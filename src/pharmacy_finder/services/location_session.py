"""User location session persistence.

Keeps the last address and coordinates under fixed keys so a restart can
resume from the previous location. Writes report success as a boolean and
reads fall back to None, so storage trouble never surfaces as an exception.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from pharmacy_finder.lib.geocoder.base import Coordinate
from pharmacy_finder.lib.storage import keys
from pharmacy_finder.lib.storage.base import BaseKeyValueStore, StorageError


@dataclass(frozen=True)
class SessionSnapshot:
    """Saved address and coordinates, either of which may be missing."""

    address: str | None = None
    coordinates: Coordinate | None = None


class LocationSession:
    """Saved user location backed by a key-value store."""

    def __init__(self, store: BaseKeyValueStore) -> None:
        self._store = store

    async def save_address(self, address: str) -> bool:
        try:
            await self._store.set(keys.USER_ADDRESS, address)
        except StorageError as e:
            logger.warning(f"Error saving address: {e}")
            return False
        return True

    async def save_coordinates(self, coordinate: Coordinate) -> bool:
        try:
            await self._store.set(keys.USER_COORDS, coordinate.to_json())
        except StorageError as e:
            logger.warning(f"Error saving coordinates: {e}")
            return False
        return True

    async def get_address(self) -> str | None:
        try:
            return await self._store.get(keys.USER_ADDRESS)
        except StorageError as e:
            logger.warning(f"Error getting address: {e}")
            return None

    async def get_coordinates(self) -> Coordinate | None:
        try:
            raw = await self._store.get(keys.USER_COORDS)
        except StorageError as e:
            logger.warning(f"Error getting saved coordinates: {e}")
            return None
        if raw is None:
            return None
        try:
            return Coordinate.from_json(raw)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable saved coordinates: {e}")
            return None

    async def load(self) -> SessionSnapshot:
        """Read address and coordinates concurrently."""
        address, coordinates = await asyncio.gather(self.get_address(), self.get_coordinates())
        return SessionSnapshot(address=address, coordinates=coordinates)

    async def clear(self) -> None:
        for key in (keys.USER_ADDRESS, keys.USER_COORDS):
            try:
                await self._store.delete(key)
            except StorageError as e:
                logger.warning(f"Error clearing {key}: {e}")
