"""Photon (Komoot) geocoder provider.

Uses the Photon geocoder (https://photon.komoot.io/) for forward and
reverse lookups. Free, open-source and self-hostable; based on OpenStreetMap data.
"""

import httpx
from loguru import logger

from pharmacy_finder.lib.geocoder.base import (
    AddressComponents,
    BaseGeocoder,
    Coordinate,
    GeocodingProviderError,
)

DEFAULT_BASE_URL = "https://photon.komoot.io"
DEFAULT_TIMEOUT = 10.0

# Bias forward lookups towards central Izmir
_DEFAULT_BIAS = Coordinate(latitude=38.4237, longitude=27.1428)


class PhotonGeocoder(BaseGeocoder):
    """Photon (Komoot) geocoder provider."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = DEFAULT_BASE_URL,
        bias: Coordinate | None = _DEFAULT_BIAS,
    ) -> None:
        self._timeout = timeout
        self._base_url = base_url.rstrip("/")
        self._bias = bias

    @property
    def provider_name(self) -> str:
        return "photon"

    async def geocode(self, address: str) -> Coordinate | None:
        """Geocode an address using the Photon API.

        Raises:
            GeocodingProviderError: On transport or service errors.
        """
        params: dict[str, str | int | float] = {"q": address, "limit": 1, "lang": "en"}
        if self._bias is not None:
            params["lat"] = self._bias.latitude
            params["lon"] = self._bias.longitude
        data = await self._get("/api", params)
        return self._parse_search(data)

    async def reverse_geocode(self, coordinate: Coordinate) -> list[AddressComponents]:
        """Reverse geocode a coordinate using the Photon reverse API.

        Raises:
            GeocodingProviderError: On transport or service errors.
        """
        params: dict[str, str | int | float] = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "lang": "en",
        }
        data = await self._get("/reverse", params)
        return self._parse_reverse(data)

    async def _get(self, path: str, params: dict) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(f"{self._base_url}{path}", params=params)
                response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            logger.warning("Photon geocoder timeout (query redacted)")
            raise GeocodingProviderError("photon", "Geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Photon geocoder HTTP error {e.response.status_code}")
            raise GeocodingProviderError(
                "photon",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Photon geocoder connection error")
            raise GeocodingProviderError("photon", "Connection to geocoding provider failed") from e
        except Exception as e:
            logger.exception("Photon geocoder unexpected error")
            raise GeocodingProviderError("photon", f"Unexpected error: {e}") from e

    def _parse_search(self, data: dict) -> Coordinate | None:
        """Parse a Photon GeoJSON response into the best matching coordinate."""
        features = data.get("features", [])
        if not features:
            return None

        try:
            coords = features[0]["geometry"]["coordinates"]
            return Coordinate(latitude=float(coords[1]), longitude=float(coords[0]))
        except (KeyError, IndexError, ValueError, TypeError) as e:
            logger.warning(f"Failed to parse Photon response: {e}")
            raise GeocodingProviderError("photon", f"Failed to parse response: {e}") from e

    @staticmethod
    def _parse_reverse(data: dict) -> list[AddressComponents]:
        """Map each Photon feature's properties onto AddressComponents."""
        results = []
        for feature in data.get("features", []):
            properties = feature.get("properties") or {}
            street = properties.get("street")
            if street and properties.get("housenumber"):
                street = f"{street} {properties['housenumber']}"
            results.append(
                AddressComponents(
                    street=street,
                    district=properties.get("district") or properties.get("locality"),
                    city=properties.get("city"),
                    region=properties.get("state"),
                    subregion=properties.get("county"),
                    country=properties.get("country"),
                )
            )
        return results
