"""Staleness-bounded pharmacy roster cache.

The roster, the fetch timestamp and the region tag it was fetched for are
persisted as three keys of a key-value store. A roster is served from cache
while it is younger than the TTL and tagged with the requested region; an
entry for a different region is deleted before anything is fetched.
"""

import asyncio
import json
import time
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from pharmacy_finder.lib.pharmacy.models import Pharmacy
from pharmacy_finder.lib.pharmacy.source import BasePharmacySource, FetchError
from pharmacy_finder.lib.storage import keys
from pharmacy_finder.lib.storage.base import BaseKeyValueStore, StorageError

DEFAULT_TTL_SECONDS = 3 * 60 * 60


@dataclass(frozen=True)
class PharmacyCacheEntry:
    """A persisted roster with its fetch time and region tag."""

    pharmacies: tuple[Pharmacy, ...]
    fetched_at_epoch_millis: int
    region_tag: str

    def is_fresh(self, now_epoch_millis: int, ttl_millis: int, region_tag: str) -> bool:
        return now_epoch_millis - self.fetched_at_epoch_millis < ttl_millis and self.region_tag == region_tag


class PharmacyCache:
    """Serves the pharmacy roster from storage while fresh, else from the source.

    Args:
        store: Key-value store holding the cache entry.
        source: Roster source used on a miss.
        ttl_seconds: Freshness window.
        clock: Returns the current time as epoch seconds.
    """

    def __init__(
        self,
        store: BaseKeyValueStore,
        source: BasePharmacySource,
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            msg = f"ttl_seconds must be positive, got {ttl_seconds}"
            raise ValueError(msg)
        self._store = store
        self._source = source
        self._ttl_millis = ttl_seconds * 1000
        self._clock = clock
        self._lock = asyncio.Lock()

    def _now_millis(self) -> int:
        return int(self._clock() * 1000)

    async def read_entry(self) -> PharmacyCacheEntry | None:
        """Read the persisted entry; unreadable or partial entries count as absent."""
        try:
            blob = await self._store.get(keys.PHARMACY_CACHE_DATA)
            timestamp = await self._store.get(keys.PHARMACY_CACHE_TIMESTAMP)
            region_tag = await self._store.get(keys.PHARMACY_CACHE_REGION)
        except StorageError as e:
            logger.warning(f"Pharmacy cache read failed: {e}")
            return None

        if blob is None or timestamp is None or region_tag is None:
            return None

        try:
            records = json.loads(blob)
            pharmacies = tuple(Pharmacy.from_record(record) for record in records)
            fetched_at = int(timestamp)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Discarding corrupt pharmacy cache entry: {e}")
            return None

        return PharmacyCacheEntry(pharmacies=pharmacies, fetched_at_epoch_millis=fetched_at, region_tag=region_tag)

    async def is_fresh(self, region_tag: str) -> bool:
        """Whether a cached roster for ``region_tag`` can be served without fetching."""
        entry = await self.read_entry()
        return entry is not None and entry.is_fresh(self._now_millis(), self._ttl_millis, region_tag)

    async def invalidate(self) -> None:
        """Delete the persisted entry, waiting for any in-flight fetch to finish writing."""
        async with self._lock:
            await self._delete_entry()

    async def _delete_entry(self) -> None:
        for key in keys.PHARMACY_CACHE_KEYS:
            try:
                await self._store.delete(key)
            except StorageError as e:
                logger.warning(f"Pharmacy cache invalidation failed: {e}")

    async def get_all_pharmacies(self, region_tag: str) -> list[Pharmacy]:
        """Return the roster for ``region_tag``, fetching it when the cache is stale.

        On a fetch failure a stale same-region entry is served instead.

        Raises:
            FetchError: If the source failed and nothing is cached.
        """
        async with self._lock:
            entry = await self.read_entry()
            now = self._now_millis()
            previous_fetch = entry.fetched_at_epoch_millis if entry is not None else 0

            if entry is not None and entry.region_tag != region_tag:
                logger.info(f"Pharmacy cache region changed ({entry.region_tag} -> {region_tag}), resetting")
                await self._delete_entry()
                entry = None
            elif entry is not None and entry.is_fresh(now, self._ttl_millis, region_tag):
                logger.debug(f"Pharmacy cache hit ({len(entry.pharmacies)} pharmacies)")
                return list(entry.pharmacies)

            logger.info("Pharmacy cache miss, fetching roster")
            try:
                pharmacies = await self._source.fetch()
            except FetchError as e:
                if entry is not None:
                    logger.warning(f"Roster fetch failed, serving stale cache: {e}")
                    return list(entry.pharmacies)
                raise

            await self._write_entry(pharmacies, max(now, previous_fetch), region_tag)
            return list(pharmacies)

    async def _write_entry(self, pharmacies: list[Pharmacy], fetched_at: int, region_tag: str) -> None:
        blob = json.dumps([pharmacy.to_record() for pharmacy in pharmacies], ensure_ascii=False)
        try:
            await self._store.set(keys.PHARMACY_CACHE_DATA, blob)
            await self._store.set(keys.PHARMACY_CACHE_REGION, region_tag)
            await self._store.set(keys.PHARMACY_CACHE_TIMESTAMP, str(fetched_at))
        except StorageError as e:
            logger.warning(f"Pharmacy cache write failed, roster not persisted: {e}")
