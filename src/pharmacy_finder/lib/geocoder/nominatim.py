"""OpenStreetMap Nominatim geocoder provider.

Uses the Nominatim search and reverse APIs
(https://nominatim.org/release-docs/develop/api/Overview/). Free but
rate-limited to 1 req/sec.
"""

import httpx
from loguru import logger

from pharmacy_finder.lib.geocoder.base import (
    AddressComponents,
    BaseGeocoder,
    Coordinate,
    GeocodingProviderError,
)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "pharmacy-finder/0.1"


class NominatimGeocoder(BaseGeocoder):
    """OpenStreetMap Nominatim geocoder provider, restricted to Turkey."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        email: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
        country_codes: str = "tr",
    ) -> None:
        self._timeout = timeout
        self._email = email
        self._user_agent = user_agent
        self._country_codes = country_codes

    @property
    def provider_name(self) -> str:
        return "nominatim"

    async def geocode(self, address: str) -> Coordinate | None:
        """Geocode an address using the Nominatim search API.

        Raises:
            GeocodingProviderError: On transport or service errors.
        """
        params: dict[str, str | int] = {
            "q": address,
            "format": "json",
            "limit": 1,
            "countrycodes": self._country_codes,
        }
        data = await self._get("/search", params)
        return self._parse_search(data)

    async def reverse_geocode(self, coordinate: Coordinate) -> list[AddressComponents]:
        """Reverse geocode a coordinate using the Nominatim reverse API.

        Raises:
            GeocodingProviderError: On transport or service errors.
        """
        params: dict[str, str | int | float] = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "format": "json",
            "addressdetails": 1,
        }
        data = await self._get("/reverse", params)
        return self._parse_reverse(data)

    async def _get(self, path: str, params: dict) -> dict | list:
        if self._email:
            params["email"] = self._email
        headers = {"User-Agent": self._user_agent}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(f"{NOMINATIM_BASE_URL}{path}", params=params, headers=headers)
                response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            logger.warning("Nominatim geocoder timeout (query redacted)")
            raise GeocodingProviderError("nominatim", "Geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Nominatim geocoder HTTP error {e.response.status_code}")
            raise GeocodingProviderError(
                "nominatim",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Nominatim geocoder connection error")
            raise GeocodingProviderError("nominatim", "Connection to geocoding provider failed") from e
        except Exception as e:
            logger.exception("Nominatim geocoder unexpected error")
            raise GeocodingProviderError("nominatim", f"Unexpected error: {e}") from e

    def _parse_search(self, data: list[dict]) -> Coordinate | None:
        """Parse a Nominatim search response (a list of places)."""
        if not data:
            return None

        best = data[0]
        try:
            return Coordinate(latitude=float(best["lat"]), longitude=float(best["lon"]))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Failed to parse Nominatim response: {e}")
            raise GeocodingProviderError("nominatim", f"Failed to parse response: {e}") from e

    def _parse_reverse(self, data: dict) -> list[AddressComponents]:
        """Parse a Nominatim reverse response (a single place or an error object)."""
        if not isinstance(data, dict) or "error" in data:
            return []
        address = data.get("address") or {}
        if not address:
            return []

        return [
            AddressComponents(
                street=address.get("road") or address.get("pedestrian"),
                district=address.get("suburb") or address.get("city_district") or address.get("quarter"),
                city=address.get("city") or address.get("town") or address.get("municipality"),
                region=address.get("province") or address.get("state"),
                subregion=address.get("county") or address.get("state_district"),
                country=address.get("country"),
            )
        ]
