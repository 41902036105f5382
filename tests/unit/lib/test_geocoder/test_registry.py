"""Unit tests for the geocoder provider registry."""

import pytest

from pharmacy_finder.core.config import Settings
from pharmacy_finder.lib.geocoder import (
    NominatimGeocoder,
    PhotonGeocoder,
    get_available_providers,
    get_configured_geocoder,
    get_geocoder,
)


class TestRegistry:
    def test_available_providers(self) -> None:
        assert get_available_providers() == ["nominatim", "photon"]

    def test_get_geocoder_by_name(self) -> None:
        assert isinstance(get_geocoder("photon"), PhotonGeocoder)
        assert get_geocoder().provider_name == "nominatim"

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown geocoder provider"):
            get_geocoder("census")

    def test_configured_geocoder_uses_settings(self, settings: Settings) -> None:
        geocoder = get_configured_geocoder(settings)
        assert isinstance(geocoder, NominatimGeocoder)

    def test_configured_photon(self) -> None:
        settings = Settings(
            _env_file=None,
            geocoder_provider="photon",
            geocoder_photon_base_url="http://photon.local:2322",
        )
        geocoder = get_configured_geocoder(settings)
        assert isinstance(geocoder, PhotonGeocoder)
        assert geocoder._base_url == "http://photon.local:2322"
