"""Abstract geocoder interface and the value types it exchanges."""

import json
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (-90 <= self.latitude <= 90):
            msg = f"latitude must be between -90 and 90, got {self.latitude}"
            raise ValueError(msg)
        if not (-180 <= self.longitude <= 180):
            msg = f"longitude must be between -180 and 180, got {self.longitude}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinate":
        """Build a Coordinate from a ``{"latitude": .., "longitude": ..}`` mapping.

        Raises:
            ValueError: On missing keys, non-numeric or out-of-range values.
        """
        try:
            lat = float(data["latitude"])
            lon = float(data["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Invalid coordinate payload: {e}"
            raise ValueError(msg) from e
        if math.isnan(lat) or math.isnan(lon):
            msg = "Invalid coordinate payload: NaN"
            raise ValueError(msg)
        return cls(latitude=lat, longitude=lon)

    @classmethod
    def from_json(cls, text: str) -> "Coordinate":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Invalid coordinate JSON: {e}"
            raise ValueError(msg) from e
        if not isinstance(data, dict):
            msg = "Invalid coordinate JSON: expected an object"
            raise ValueError(msg)
        return cls.from_dict(data)


@dataclass(frozen=True)
class AddressComponents:
    """Administrative components returned by reverse geocoding."""

    street: str | None = None
    district: str | None = None
    city: str | None = None
    region: str | None = None
    subregion: str | None = None
    country: str | None = None

    def formatted(self) -> str:
        """Join street, district and city into a display address."""
        return ", ".join(part for part in (self.street, self.district, self.city) if part)


class GeocodingProviderError(Exception):
    """Raised when a geocoding provider experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error)
    from a successful response with no match (which returns None or []).

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class GeocodeFailure(Exception):
    """Raised when forward or reverse geocoding produced no usable result."""

    def __init__(self, message: str = "Address not found") -> None:
        self.message = message
        super().__init__(message)


class BaseGeocoder(ABC):
    """Abstract geocoder interface. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @abstractmethod
    async def geocode(self, address: str) -> Coordinate | None:
        """Resolve an address to a coordinate.

        Args:
            address: Free-text address.

        Returns:
            Coordinate or None if the address could not be geocoded.
        """

    @abstractmethod
    async def reverse_geocode(self, coordinate: Coordinate) -> list[AddressComponents]:
        """Resolve a coordinate to address components.

        Args:
            coordinate: Point to look up.

        Returns:
            Matching address components, best first. Empty when nothing matched.
        """
