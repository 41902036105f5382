"""Supported-region membership check based on reverse geocoding."""

from dataclasses import dataclass

from loguru import logger

from pharmacy_finder.lib.geocoder.base import AddressComponents, BaseGeocoder, Coordinate

# Turkish dotted/dotless I variants all fold to a plain "i"
_TURKISH_FOLD = str.maketrans({"İ": "i", "I": "i", "ı": "i"})
_COMBINING_DOT_ABOVE = "\u0307"


def normalize_region_name(name: str) -> str:
    """Trim and case-fold a region name so "İZMİR", "izmir" and " Izmir " compare equal."""
    return name.strip().translate(_TURKISH_FOLD).casefold().replace(_COMBINING_DOT_ABOVE, "")


@dataclass(frozen=True)
class RegionCheck:
    """Outcome of a region check: membership plus the detected region name."""

    supported: bool
    detected_region: str | None


class RegionGuard:
    """Decides whether a coordinate lies in the one supported service region.

    Args:
        geocoder: Geocoder used for reverse lookups.
        region_name: Name of the supported city, e.g. ``"Izmir"``.
    """

    def __init__(self, geocoder: BaseGeocoder, region_name: str = "Izmir") -> None:
        self._geocoder = geocoder
        self._region_name = region_name
        self._normalized = normalize_region_name(region_name)

    @property
    def region_name(self) -> str:
        return self._region_name

    async def check(self, coordinate: Coordinate) -> RegionCheck:
        """Reverse geocode once and report membership and the detected region.

        Never raises; a geocoding failure yields an unsupported result.
        """
        try:
            results = await self._geocoder.reverse_geocode(coordinate)
        except Exception as e:
            logger.warning(f"Region check failed on reverse geocoding: {e}")
            return RegionCheck(supported=False, detected_region=None)

        supported = any(self._matches(components) for components in results)
        detected = self._region_name if supported else _first_region_name(results)
        return RegionCheck(supported=supported, detected_region=detected)

    async def is_in_supported_region(self, coordinate: Coordinate) -> bool:
        return (await self.check(coordinate)).supported

    async def detect_region(self, coordinate: Coordinate) -> str | None:
        return (await self.check(coordinate)).detected_region

    def _matches(self, components: AddressComponents) -> bool:
        for value in (components.city, components.region, components.subregion):
            if value and normalize_region_name(value) == self._normalized:
                return True
        return False


def _first_region_name(results: list[AddressComponents]) -> str | None:
    for components in results[:1]:
        for value in (components.city, components.region, components.subregion):
            if value and value.strip():
                return value.strip()
    return None
