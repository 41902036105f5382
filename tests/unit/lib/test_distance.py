"""Unit tests for the Haversine distance calculator."""

import math

import pytest

from pharmacy_finder.lib.distance import EARTH_RADIUS_METERS, haversine_distance
from pharmacy_finder.lib.geocoder.base import Coordinate

KONAK = Coordinate(latitude=38.4189, longitude=27.1287)
BORNOVA = Coordinate(latitude=38.4697, longitude=27.2211)
ANKARA = Coordinate(latitude=39.9334, longitude=32.8597)


class TestHaversineDistance:
    """Tests for haversine_distance()."""

    def test_same_point_is_zero(self) -> None:
        assert haversine_distance(KONAK, KONAK) == 0.0

    @pytest.mark.parametrize(
        ("a", "b"),
        [(KONAK, BORNOVA), (KONAK, ANKARA), (Coordinate(0, 179.9), Coordinate(0, -179.9))],
    )
    def test_symmetric(self, a: Coordinate, b: Coordinate) -> None:
        assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a), abs=1e-9)

    def test_one_degree_of_latitude(self) -> None:
        """One degree along a meridian is R * pi / 180 meters."""
        d = haversine_distance(Coordinate(38.0, 27.0), Coordinate(39.0, 27.0))
        assert d == pytest.approx(EARTH_RADIUS_METERS * math.pi / 180, rel=1e-9)

    def test_points_on_a_meridian_add_up(self) -> None:
        a = Coordinate(38.30, 27.14)
        b = Coordinate(38.42, 27.14)
        c = Coordinate(38.55, 27.14)
        assert haversine_distance(a, c) == pytest.approx(
            haversine_distance(a, b) + haversine_distance(b, c), rel=1e-6
        )

    def test_antipodal_points(self) -> None:
        d = haversine_distance(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
        assert d == pytest.approx(math.pi * EARTH_RADIUS_METERS)

    def test_izmir_to_ankara(self) -> None:
        """Konak to central Ankara is roughly 520 km as the crow flies."""
        assert 500_000 < haversine_distance(KONAK, ANKARA) < 540_000

    def test_wraps_across_antimeridian(self) -> None:
        d = haversine_distance(Coordinate(0, 179.9), Coordinate(0, -179.9))
        assert d == pytest.approx(EARTH_RADIUS_METERS * math.radians(0.2), rel=1e-6)
