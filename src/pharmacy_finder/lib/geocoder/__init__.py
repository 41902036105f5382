"""Geocoder library — address lookup, reverse lookup, device position and region checks.

Public API:
    - Coordinate: Immutable latitude/longitude value type
    - AddressComponents: Reverse-geocoding result
    - BaseGeocoder: Abstract provider interface
    - NominatimGeocoder: OpenStreetMap Nominatim provider
    - PhotonGeocoder: Photon (Komoot) provider
    - BasePositionProvider / FixedPositionProvider: Device position gateway
    - RegionGuard: Supported-region membership check
    - get_geocoder / get_configured_geocoder: Provider factory/registry
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pharmacy_finder.lib.geocoder.base import (
    AddressComponents,
    BaseGeocoder,
    Coordinate,
    GeocodeFailure,
    GeocodingProviderError,
)
from pharmacy_finder.lib.geocoder.nominatim import NominatimGeocoder
from pharmacy_finder.lib.geocoder.photon import PhotonGeocoder
from pharmacy_finder.lib.geocoder.position import (
    BasePositionProvider,
    FixedPositionProvider,
    PermissionDeniedError,
    PositionUnavailableError,
)
from pharmacy_finder.lib.geocoder.region import RegionCheck, RegionGuard, normalize_region_name

if TYPE_CHECKING:
    from pharmacy_finder.core.config import Settings

_PROVIDERS: dict[str, type[BaseGeocoder]] = {
    "nominatim": NominatimGeocoder,
    "photon": PhotonGeocoder,
}


def get_available_providers() -> list[str]:
    """Return the names of all registered geocoder providers."""
    return sorted(_PROVIDERS.keys())


def get_geocoder(provider: str = "nominatim", **kwargs: Any) -> BaseGeocoder:
    """Get a geocoder instance by provider name.

    Args:
        provider: Provider name (e.g., "nominatim").
        **kwargs: Additional arguments forwarded to the provider constructor.

    Raises:
        ValueError: If the provider is not registered.
    """
    cls = _PROVIDERS.get(provider)
    if cls is None:
        msg = f"Unknown geocoder provider: {provider!r}. Available: {list(_PROVIDERS.keys())}"
        raise ValueError(msg)
    return cls(**kwargs)


def get_configured_geocoder(settings: Settings) -> BaseGeocoder:
    """Instantiate the geocoder selected in settings with its provider options."""
    provider_kwargs: dict[str, dict[str, Any]] = {
        "nominatim": {
            "timeout": settings.geocoder_timeout,
            "email": settings.geocoder_nominatim_email,
        },
        "photon": {
            "timeout": settings.geocoder_timeout,
            "base_url": settings.geocoder_photon_base_url,
        },
    }
    name = settings.geocoder_provider
    return get_geocoder(name, **provider_kwargs.get(name, {}))


__all__ = [
    "AddressComponents",
    "BaseGeocoder",
    "BasePositionProvider",
    "Coordinate",
    "FixedPositionProvider",
    "GeocodeFailure",
    "GeocodingProviderError",
    "NominatimGeocoder",
    "PermissionDeniedError",
    "PhotonGeocoder",
    "PositionUnavailableError",
    "RegionCheck",
    "RegionGuard",
    "get_available_providers",
    "get_configured_geocoder",
    "get_geocoder",
    "normalize_region_name",
]
