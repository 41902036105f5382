"""Pharmacy locator — acquires a location, persists it and resolves nearby pharmacies.

A location comes from the device, from the saved session, from a free-text
address or from a pin dropped on the map. Each resolution runs under a
sequence number from the state store so that only the latest request
updates the visible state.
"""

import asyncio

from loguru import logger

from pharmacy_finder.core.config import Settings
from pharmacy_finder.lib.geocoder import get_configured_geocoder
from pharmacy_finder.lib.geocoder.base import BaseGeocoder, Coordinate, GeocodeFailure, GeocodingProviderError
from pharmacy_finder.lib.geocoder.position import BasePositionProvider, PermissionDeniedError, PositionUnavailableError
from pharmacy_finder.lib.geocoder.region import RegionGuard
from pharmacy_finder.lib.pharmacy.cache import PharmacyCache
from pharmacy_finder.lib.pharmacy.duty import DutyStatusProvider
from pharmacy_finder.lib.pharmacy.models import Pharmacy
from pharmacy_finder.lib.pharmacy.resolver import NearbyResolver, UnsupportedRegionError
from pharmacy_finder.lib.pharmacy.source import BasePharmacySource, FetchError, HttpPharmacySource, StaticPharmacySource
from pharmacy_finder.lib.storage.base import BaseKeyValueStore
from pharmacy_finder.services.location_session import LocationSession, SessionSnapshot
from pharmacy_finder.services.state import AppStateStore

PERMISSION_DENIED_MESSAGE = "Location Access Denied. Please enter your address manually to find pharmacies near you."
POSITION_UNAVAILABLE_MESSAGE = "Unable to get your location. Please try again or enter your address manually."
ADDRESS_NOT_FOUND_MESSAGE = "Address not found"
FETCH_FAILED_MESSAGE = "Failed to find nearby pharmacies. Please try again."


class PharmacyLocator:
    """Coordinates location acquisition, session persistence and nearby resolution.

    Args:
        geocoder: Forward/reverse geocoder for addresses and pins.
        positions: Device position provider.
        session: Saved location session.
        resolver: Nearby pharmacy resolver.
        state: State store updated with results; a new one is created if omitted.
    """

    def __init__(
        self,
        *,
        geocoder: BaseGeocoder,
        positions: BasePositionProvider,
        session: LocationSession,
        resolver: NearbyResolver,
        state: AppStateStore | None = None,
    ) -> None:
        self._geocoder = geocoder
        self._positions = positions
        self._session = session
        self._resolver = resolver
        self.state = state or AppStateStore()

    async def startup(self, duty_only: bool = False) -> list[Pharmacy] | None:
        """Restore the saved session and resolve from the best available location.

        The saved session and the roster prefetch run concurrently; either one
        failing is logged and treated as empty. Resolution failures are left
        on the state and yield None.
        """
        snapshot, prefetched = await asyncio.gather(
            self._session.load(),
            self._resolver.prefetch(),
            return_exceptions=True,
        )
        if isinstance(snapshot, BaseException):
            logger.warning(f"Could not load saved session: {snapshot}")
            snapshot = SessionSnapshot()
        if isinstance(prefetched, BaseException):
            logger.warning(f"Roster prefetch failed: {prefetched}")
        self.state.load_session(snapshot)

        try:
            if await self._positions.check_permission():
                try:
                    return await self.locate_with_device(duty_only=duty_only)
                except (PermissionDeniedError, PositionUnavailableError) as e:
                    logger.info(f"Device location unavailable at startup: {e}")

            if snapshot.coordinates is not None:
                return await self._resolve(snapshot.coordinates, duty_only)
        except (UnsupportedRegionError, FetchError) as e:
            logger.info(f"Startup resolution failed: {e}")
            return None

        logger.info("No location available at startup, waiting for user input")
        return None

    async def locate_with_device(self, *, request_permission: bool = False, duty_only: bool = False) -> list[Pharmacy]:
        """Resolve around the current device position.

        The lookup counts as a request from the start, so a permission or fix
        failure that arrives after a newer request leaves that request's state alone.

        Raises:
            PermissionDeniedError: If location access is not (or not any more) granted.
            PositionUnavailableError: If the device produced no fix.
            UnsupportedRegionError: If the position is outside the supported region.
            FetchError: If the roster is unavailable and nothing is cached.
        """
        sequence = self.state.begin_request()
        granted = await self._positions.check_permission()
        if not granted and request_permission:
            granted = await self._positions.request_permission()
        if not granted:
            self.state.apply_error(sequence, PERMISSION_DENIED_MESSAGE)
            msg = "Location permission denied"
            raise PermissionDeniedError(msg)

        try:
            coordinate = await self._positions.get_current_position()
        except PermissionDeniedError:
            self.state.apply_error(sequence, PERMISSION_DENIED_MESSAGE)
            raise
        except PositionUnavailableError:
            self.state.apply_error(sequence, POSITION_UNAVAILABLE_MESSAGE)
            raise

        await self._session.save_coordinates(coordinate)
        return await self._resolve(coordinate, duty_only, sequence)

    async def locate_by_address(self, address: str, duty_only: bool = False) -> list[Pharmacy]:
        """Geocode a free-text address, save it and resolve around it.

        Raises:
            GeocodeFailure: If the address could not be geocoded.
            UnsupportedRegionError: If the address is outside the supported region.
            FetchError: If the roster is unavailable and nothing is cached.
        """
        address = address.strip()
        if not address:
            self.state.set_error(ADDRESS_NOT_FOUND_MESSAGE)
            msg = "Please enter an address"
            raise GeocodeFailure(msg)

        try:
            coordinate = await self._geocoder.geocode(address)
        except GeocodingProviderError as e:
            logger.warning(f"Address lookup failed: {e}")
            coordinate = None
        if coordinate is None:
            self.state.set_error(ADDRESS_NOT_FOUND_MESSAGE)
            raise GeocodeFailure(ADDRESS_NOT_FOUND_MESSAGE)

        await self._session.save_address(address)
        await self._session.save_coordinates(coordinate)
        self.state.update_address(address)
        return await self._resolve(coordinate, duty_only)

    async def locate_by_pin(self, coordinate: Coordinate, duty_only: bool = False) -> list[Pharmacy]:
        """Confirm a pin dropped on the map: name it, save it and resolve around it.

        Raises:
            GeocodeFailure: If the point has no address.
            UnsupportedRegionError: If the point is outside the supported region.
            FetchError: If the roster is unavailable and nothing is cached.
        """
        try:
            results = await self._geocoder.reverse_geocode(coordinate)
        except GeocodingProviderError as e:
            logger.warning(f"Reverse geocoding failed: {e}")
            results = []
        address = results[0].formatted() if results else ""
        if not address:
            self.state.set_error(ADDRESS_NOT_FOUND_MESSAGE)
            raise GeocodeFailure(ADDRESS_NOT_FOUND_MESSAGE)

        await self._session.save_address(address)
        await self._session.save_coordinates(coordinate)
        self.state.update_address(address)
        return await self._resolve(coordinate, duty_only)

    async def refresh(self, duty_only: bool = False) -> list[Pharmacy]:
        """Resolve again around the current coordinates.

        Raises:
            GeocodeFailure: If no location has been chosen yet.
        """
        coordinate = self.state.state.coordinates
        if coordinate is None:
            msg = "No location selected"
            raise GeocodeFailure(msg)
        return await self._resolve(coordinate, duty_only)

    async def _resolve(self, coordinate: Coordinate, duty_only: bool, sequence: int | None = None) -> list[Pharmacy]:
        if sequence is None:
            sequence = self.state.begin_request(coordinate)
        elif self.state.is_current(sequence):
            self.state.update_coordinates(coordinate)
        try:
            pharmacies = await self._resolver.resolve_nearby(coordinate, duty_only)
        except UnsupportedRegionError as e:
            self.state.apply_error(sequence, str(e), detected_region=e.detected_region)
            raise
        except FetchError as e:
            logger.warning(f"Pharmacy resolution failed: {e}")
            self.state.apply_error(sequence, FETCH_FAILED_MESSAGE)
            raise

        if not self.state.apply_result(sequence, pharmacies):
            logger.debug(f"Discarding result of superseded request {sequence}")
        return pharmacies


def create_pharmacy_source(settings: Settings) -> BasePharmacySource:
    """Build the roster source selected in settings.

    Raises:
        ValueError: If the HTTP source is selected without a URL.
    """
    if settings.pharmacy_source == "http":
        if not settings.pharmacy_source_url:
            msg = "pharmacy_source_url is required when pharmacy_source is 'http'"
            raise ValueError(msg)
        return HttpPharmacySource(settings.pharmacy_source_url, timeout=settings.pharmacy_source_timeout)
    return StaticPharmacySource()


def create_locator(
    settings: Settings,
    store: BaseKeyValueStore,
    positions: BasePositionProvider,
    *,
    geocoder: BaseGeocoder | None = None,
    source: BasePharmacySource | None = None,
    duty_provider: DutyStatusProvider | None = None,
) -> PharmacyLocator:
    """Wire a PharmacyLocator from settings and a key-value store."""
    geocoder = geocoder or get_configured_geocoder(settings)
    cache = PharmacyCache(
        store,
        source or create_pharmacy_source(settings),
        ttl_seconds=settings.pharmacy_cache_ttl_seconds,
    )
    resolver = NearbyResolver(RegionGuard(geocoder, settings.supported_region), cache, duty_provider)
    return PharmacyLocator(
        geocoder=geocoder,
        positions=positions,
        session=LocationSession(store),
        resolver=resolver,
    )
