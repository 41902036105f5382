"""Nearby pharmacy resolution: region check, cached roster, distance sort, duty filter."""

import dataclasses
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from pharmacy_finder.lib.distance import haversine_distance
from pharmacy_finder.lib.geocoder.base import Coordinate
from pharmacy_finder.lib.geocoder.region import RegionGuard
from pharmacy_finder.lib.pharmacy.cache import PharmacyCache
from pharmacy_finder.lib.pharmacy.duty import DutyStatusProvider, NoDutyInformation
from pharmacy_finder.lib.pharmacy.models import Pharmacy

UNKNOWN_REGION = "Unknown"


class UnsupportedRegionError(Exception):
    """Raised when a coordinate lies outside the supported service region.

    Args:
        detected_region: Region name found by reverse geocoding, or "Unknown".
        supported_region: Name of the region the service covers.
    """

    def __init__(self, detected_region: str | None, supported_region: str) -> None:
        self.detected_region = detected_region or UNKNOWN_REGION
        self.supported_region = supported_region
        super().__init__(f"{self.detected_region} is outside the supported region ({supported_region})")


def sort_by_distance(pharmacies: list[Pharmacy]) -> list[Pharmacy]:
    """Sort ascending by distance; pharmacies without a distance keep their order at the end."""
    return sorted(
        pharmacies,
        key=lambda p: (p.distance_in_meters is None, p.distance_in_meters or 0.0),
    )


class NearbyResolver:
    """Produces the distance-sorted pharmacy list for a coordinate.

    Args:
        region_guard: Supported-region check.
        cache: Pharmacy roster cache.
        duty_provider: Duty schedule; defaults to no duty information.
        now: Returns the current local time, used for duty lookups.
    """

    def __init__(
        self,
        region_guard: RegionGuard,
        cache: PharmacyCache,
        duty_provider: DutyStatusProvider | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._region_guard = region_guard
        self._cache = cache
        self._duty_provider = duty_provider or NoDutyInformation()
        self._now = now

    @property
    def region_name(self) -> str:
        return self._region_guard.region_name

    async def prefetch(self) -> list[Pharmacy]:
        """Warm the roster cache for the supported region."""
        return await self._cache.get_all_pharmacies(self.region_name)

    async def resolve_nearby(
        self,
        coordinate: Coordinate,
        duty_only: bool = False,
        *,
        limit: int | None = None,
        max_distance_meters: float | None = None,
    ) -> list[Pharmacy]:
        """Resolve pharmacies around ``coordinate``, nearest first.

        Args:
            coordinate: User position.
            duty_only: Keep only pharmacies on duty now.
            limit: Maximum number of results.
            max_distance_meters: Drop pharmacies farther than this (and those
                without a known distance).

        Raises:
            UnsupportedRegionError: If the coordinate is outside the supported region.
            FetchError: If the roster is unavailable and nothing is cached.
        """
        check = await self._region_guard.check(coordinate)
        if not check.supported:
            logger.info(f"Coordinate outside {self.region_name} (detected: {check.detected_region or UNKNOWN_REGION})")
            # A lookup failure detects no region and leaves the cached roster alone
            if check.detected_region is not None:
                await self._cache.invalidate()
            raise UnsupportedRegionError(check.detected_region, self.region_name)

        roster = await self._cache.get_all_pharmacies(self.region_name)
        at_time = self._now()
        annotated = [self._annotate(pharmacy, coordinate, at_time) for pharmacy in roster]
        result = sort_by_distance(annotated)

        if duty_only:
            result = [p for p in result if p.is_on_duty]
        if max_distance_meters is not None:
            result = [
                p for p in result if p.distance_in_meters is not None and p.distance_in_meters <= max_distance_meters
            ]
        if limit is not None:
            result = result[:limit]

        logger.debug(f"Resolved {len(result)} of {len(roster)} pharmacies (duty_only={duty_only})")
        return result

    def _annotate(self, pharmacy: Pharmacy, origin: Coordinate, at_time: datetime) -> Pharmacy:
        position = pharmacy.coordinate
        distance = haversine_distance(origin, position) if position is not None else None
        return dataclasses.replace(
            pharmacy,
            distance_in_meters=distance,
            is_on_duty=self._duty_provider.is_on_duty(pharmacy.pharmacy_id, at_time),
        )
