"""Unit tests for geocoder value types."""

import pytest

from pharmacy_finder.lib.geocoder.base import AddressComponents, Coordinate, GeocodingProviderError


class TestCoordinate:
    """Tests for the Coordinate value type."""

    def test_valid_coordinate(self) -> None:
        c = Coordinate(latitude=38.42, longitude=27.14)
        assert c.latitude == 38.42
        assert c.longitude == 27.14

    @pytest.mark.parametrize("latitude", [-90.1, 90.1, float("nan")])
    def test_latitude_out_of_range(self, latitude: float) -> None:
        with pytest.raises(ValueError, match="latitude"):
            Coordinate(latitude=latitude, longitude=0.0)

    @pytest.mark.parametrize("longitude", [-180.1, 180.1])
    def test_longitude_out_of_range(self, longitude: float) -> None:
        with pytest.raises(ValueError, match="longitude"):
            Coordinate(latitude=0.0, longitude=longitude)

    def test_bounds_are_inclusive(self) -> None:
        Coordinate(latitude=90, longitude=180)
        Coordinate(latitude=-90, longitude=-180)

    def test_is_immutable(self) -> None:
        c = Coordinate(latitude=38.42, longitude=27.14)
        with pytest.raises(AttributeError):
            c.latitude = 0.0  # type: ignore[misc]

    def test_json_round_trip(self) -> None:
        c = Coordinate(latitude=38.428350, longitude=27.192230)
        assert Coordinate.from_json(c.to_json()) == c

    def test_from_dict_accepts_numeric_strings(self) -> None:
        assert Coordinate.from_dict({"latitude": "38.5", "longitude": "27.1"}) == Coordinate(38.5, 27.1)

    @pytest.mark.parametrize(
        "text",
        ["not json", "[1, 2]", '{"latitude": 38.4}', '{"latitude": "x", "longitude": 27}', '{"latitude": 95, "longitude": 27}'],
    )
    def test_from_json_rejects_bad_payloads(self, text: str) -> None:
        with pytest.raises(ValueError):
            Coordinate.from_json(text)


class TestAddressComponents:
    """Tests for AddressComponents.formatted()."""

    def test_joins_street_district_city(self) -> None:
        components = AddressComponents(street="Fazıl Paşa Cd.", district="Konak", city="İzmir", country="Türkiye")
        assert components.formatted() == "Fazıl Paşa Cd., Konak, İzmir"

    def test_skips_missing_parts(self) -> None:
        assert AddressComponents(district="Bornova", city="İzmir").formatted() == "Bornova, İzmir"

    def test_empty(self) -> None:
        assert AddressComponents().formatted() == ""


class TestGeocodingProviderError:
    def test_message_includes_provider(self) -> None:
        err = GeocodingProviderError("nominatim", "timed out", status_code=504)
        assert str(err) == "nominatim: timed out"
        assert err.status_code == 504
