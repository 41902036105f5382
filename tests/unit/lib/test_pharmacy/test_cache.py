"""Unit tests for the pharmacy roster cache."""

import asyncio
import json

import pytest

from pharmacy_finder.lib.pharmacy.cache import DEFAULT_TTL_SECONDS, PharmacyCache
from pharmacy_finder.lib.pharmacy.source import FetchError
from pharmacy_finder.lib.storage import keys
from pharmacy_finder.lib.storage.base import StorageError
from pharmacy_finder.lib.storage.memory import InMemoryKeyValueStore

HOUR = 60 * 60


class BrokenStore(InMemoryKeyValueStore):
    """Store whose writes always fail."""

    async def set(self, key: str, value: str) -> None:
        raise StorageError(key, "Write failed")


class YieldingStore(InMemoryKeyValueStore):
    """Store that hands control back to the event loop on every operation, like a real backend."""

    async def get(self, key: str) -> str | None:
        await asyncio.sleep(0)
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        await super().set(key, value)

    async def delete(self, key: str) -> None:
        await asyncio.sleep(0)
        await super().delete(key)


@pytest.fixture
def cache(store, source, clock) -> PharmacyCache:
    return PharmacyCache(store, source, clock=clock)


class TestPharmacyCacheConstruction:
    def test_default_ttl_is_three_hours(self) -> None:
        assert DEFAULT_TTL_SECONDS == 3 * HOUR

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_rejects_non_positive_ttl(self, store, source, ttl: int) -> None:
        with pytest.raises(ValueError, match="ttl_seconds"):
            PharmacyCache(store, source, ttl_seconds=ttl)


class TestGetAllPharmacies:
    """Tests for freshness, region tagging and fallback behaviour."""

    async def test_first_call_fetches_and_persists(self, cache, store, source, clock) -> None:
        pharmacies = await cache.get_all_pharmacies("Izmir")

        assert len(pharmacies) == 10
        assert source.calls == 1
        data = store.snapshot()
        assert data[keys.PHARMACY_CACHE_REGION] == "Izmir"
        assert data[keys.PHARMACY_CACHE_TIMESTAMP] == str(int(clock.now * 1000))
        assert len(json.loads(data[keys.PHARMACY_CACHE_DATA])) == 10

    async def test_served_from_cache_within_ttl(self, cache, source, clock) -> None:
        first = await cache.get_all_pharmacies("Izmir")
        clock.advance(1 * HOUR)
        second = await cache.get_all_pharmacies("Izmir")

        assert source.calls == 1
        assert second == first

    async def test_refetches_after_ttl(self, cache, store, source, clock) -> None:
        await cache.get_all_pharmacies("Izmir")
        clock.advance(3 * HOUR)
        await cache.get_all_pharmacies("Izmir")

        assert source.calls == 2
        assert store.snapshot()[keys.PHARMACY_CACHE_TIMESTAMP] == str(int(clock.now * 1000))

    async def test_region_change_resets_entry(self, cache, store, source) -> None:
        await cache.get_all_pharmacies("Ankara")
        await cache.get_all_pharmacies("Izmir")

        assert source.calls == 2
        assert store.snapshot()[keys.PHARMACY_CACHE_REGION] == "Izmir"

    async def test_repeated_calls_are_idempotent(self, cache, store, source) -> None:
        await cache.get_all_pharmacies("Izmir")
        before = store.snapshot()
        await cache.get_all_pharmacies("Izmir")

        assert store.snapshot() == before
        assert source.calls == 1

    async def test_stale_entry_served_when_fetch_fails(self, cache, source, clock) -> None:
        cached = await cache.get_all_pharmacies("Izmir")
        clock.advance(4 * HOUR)
        source.fail = True

        assert await cache.get_all_pharmacies("Izmir") == cached
        assert source.calls == 2

    async def test_fetch_failure_without_cache_raises(self, cache, source) -> None:
        source.fail = True
        with pytest.raises(FetchError):
            await cache.get_all_pharmacies("Izmir")

    async def test_other_region_entry_is_not_a_fallback(self, cache, store, source) -> None:
        await cache.get_all_pharmacies("Ankara")
        source.fail = True

        with pytest.raises(FetchError):
            await cache.get_all_pharmacies("Izmir")
        assert store.snapshot() == {}

    async def test_corrupt_entry_is_refetched(self, source, clock) -> None:
        store = InMemoryKeyValueStore(
            {
                keys.PHARMACY_CACHE_DATA: "not json",
                keys.PHARMACY_CACHE_TIMESTAMP: str(int(clock.now * 1000)),
                keys.PHARMACY_CACHE_REGION: "Izmir",
            }
        )
        cache = PharmacyCache(store, source, clock=clock)

        assert len(await cache.get_all_pharmacies("Izmir")) == 10
        assert source.calls == 1

    async def test_write_failure_still_returns_roster(self, source, clock) -> None:
        cache = PharmacyCache(BrokenStore(), source, clock=clock)
        assert len(await cache.get_all_pharmacies("Izmir")) == 10

    async def test_concurrent_callers_share_one_fetch(self, source, clock) -> None:
        store = YieldingStore()
        cache = PharmacyCache(store, source, clock=clock)

        results = await asyncio.gather(*(cache.get_all_pharmacies("Izmir") for _ in range(5)))

        assert source.calls == 1
        assert all(result == results[0] for result in results)
        assert store.snapshot()[keys.PHARMACY_CACHE_REGION] == "Izmir"

    async def test_timestamp_never_moves_backwards(self, cache, store, clock) -> None:
        await cache.get_all_pharmacies("Ankara")
        first_fetch = int(store.snapshot()[keys.PHARMACY_CACHE_TIMESTAMP])

        clock.advance(-2 * HOUR)
        await cache.get_all_pharmacies("Izmir")

        data = store.snapshot()
        assert data[keys.PHARMACY_CACHE_REGION] == "Izmir"
        assert int(data[keys.PHARMACY_CACHE_TIMESTAMP]) >= first_fetch


class TestFreshnessAndInvalidate:
    async def test_is_fresh(self, cache, clock) -> None:
        assert await cache.is_fresh("Izmir") is False
        await cache.get_all_pharmacies("Izmir")
        assert await cache.is_fresh("Izmir") is True
        assert await cache.is_fresh("Ankara") is False
        clock.advance(3 * HOUR)
        assert await cache.is_fresh("Izmir") is False

    async def test_invalidate_deletes_all_keys(self, cache, store, source) -> None:
        await cache.get_all_pharmacies("Izmir")
        await cache.invalidate()

        assert store.snapshot() == {}
        assert await cache.read_entry() is None
        await cache.get_all_pharmacies("Izmir")
        assert source.calls == 2

    async def test_invalidate_waits_for_in_flight_write(self, source, clock) -> None:
        store = YieldingStore()
        cache = PharmacyCache(store, source, clock=clock)

        fetch = asyncio.create_task(cache.get_all_pharmacies("Izmir"))
        await asyncio.sleep(0)
        await cache.invalidate()

        assert len(await fetch) == 10
        assert store.snapshot() == {}

    async def test_read_entry(self, cache, clock) -> None:
        await cache.get_all_pharmacies("Izmir")
        entry = await cache.read_entry()

        assert entry is not None
        assert entry.region_tag == "Izmir"
        assert entry.fetched_at_epoch_millis == int(clock.now * 1000)
        assert len(entry.pharmacies) == 10
