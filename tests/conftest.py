"""Shared test fixtures: settings, stores, a fake geocoder, a roster source and a controllable clock."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pharmacy_finder.core.config import Settings
from pharmacy_finder.lib.geocoder.base import AddressComponents, BaseGeocoder, Coordinate, GeocodingProviderError
from pharmacy_finder.lib.pharmacy.models import Pharmacy
from pharmacy_finder.lib.pharmacy.source import BasePharmacySource, FetchError, StaticPharmacySource
from pharmacy_finder.lib.storage.memory import InMemoryKeyValueStore
from pharmacy_finder.models.base import Base

IZMIR_CENTER = Coordinate(latitude=38.42, longitude=27.14)
ANKARA_CENTER = Coordinate(latitude=39.93, longitude=32.85)

IZMIR_COMPONENTS = AddressComponents(
    street="Cumhuriyet Bulvarı",
    district="Konak",
    city="İzmir",
    region="İzmir",
    country="Türkiye",
)
ANKARA_COMPONENTS = AddressComponents(
    street="Atatürk Bulvarı",
    district="Çankaya",
    city="Ankara",
    region="Ankara",
    country="Türkiye",
)


class FakeClock:
    """Epoch-seconds clock that only moves when told to."""

    def __init__(self, start: float = 1_748_419_200.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGeocoder(BaseGeocoder):
    """Geocoder answering from fixed tables; points near Izmir or Ankara reverse geocode to those cities."""

    def __init__(self) -> None:
        self.addresses: dict[str, Coordinate] = {
            "Konak, Izmir": IZMIR_CENTER,
            "Kizilay, Ankara": ANKARA_CENTER,
        }
        self.fail = False
        self.reverse_calls = 0
        self.forward_calls = 0

    @property
    def provider_name(self) -> str:
        return "fake"

    async def geocode(self, address: str) -> Coordinate | None:
        self.forward_calls += 1
        if self.fail:
            raise GeocodingProviderError("fake", "Test error")
        return self.addresses.get(address)

    async def reverse_geocode(self, coordinate: Coordinate) -> list[AddressComponents]:
        self.reverse_calls += 1
        if self.fail:
            raise GeocodingProviderError("fake", "Test error")
        if 37.8 <= coordinate.latitude <= 39.4 and 26.2 <= coordinate.longitude <= 28.5:
            return [IZMIR_COMPONENTS]
        if 39.5 <= coordinate.latitude <= 40.5 and 32.0 <= coordinate.longitude <= 33.5:
            return [ANKARA_COMPONENTS]
        return []


class CountingSource(BasePharmacySource):
    """Roster source that counts fetches and can be switched to failing."""

    def __init__(self, records: list[dict] | None = None) -> None:
        self._inner = StaticPharmacySource(records)
        self.calls = 0
        self.fail = False

    async def fetch(self) -> list[Pharmacy]:
        self.calls += 1
        if self.fail:
            msg = "Source unreachable"
            raise FetchError(msg)
        return await self._inner.fetch()


@pytest.fixture
def settings() -> Settings:
    """Test application settings, isolated from any local .env file."""
    return Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def izmir() -> Coordinate:
    return IZMIR_CENTER


@pytest.fixture
def ankara() -> Coordinate:
    return ANKARA_CENTER


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def source() -> CountingSource:
    return CountingSource()


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Session factory over a shared in-memory SQLite database with tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()
