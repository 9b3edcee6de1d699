"""
Unit tests for the geospatial helpers.
"""

import pytest

from app.utils.spatial import (
    Coordinate,
    distance_km,
    filter_within_radius,
    is_within_radius,
)

DOHA_CORNICHE = Coordinate(25.2854, 51.5310)


@pytest.mark.unit
class TestDistance:
    """Test Haversine distance."""

    def test_distance_to_self_is_zero(self):
        """Test that a point is at distance 0 from itself."""
        assert distance_km(DOHA_CORNICHE, DOHA_CORNICHE) == 0.0

    def test_distance_is_symmetric(self):
        """Test that distance(a, b) == distance(b, a)."""
        festival_city = Coordinate(25.3548, 51.4326)
        assert distance_km(DOHA_CORNICHE, festival_city) == pytest.approx(
            distance_km(festival_city, DOHA_CORNICHE)
        )

    def test_distance_between_nearby_points(self):
        """Test that points ~70m apart measure well under 200m."""
        d = distance_km(DOHA_CORNICHE, (25.2859, 51.5315))
        assert 0 < d < 0.2

    def test_one_degree_of_latitude(self):
        """Test one degree along a meridian against the mean Earth radius."""
        assert distance_km((0.0, 0.0), (1.0, 0.0)) == pytest.approx(111.195, abs=0.01)

    def test_accepts_plain_tuples(self):
        """Test that (lat, lon) tuples work like Coordinate."""
        assert distance_km((25.2854, 51.5310), DOHA_CORNICHE) == 0.0


@pytest.mark.unit
class TestRadius:
    """Test radius membership and filtering."""

    def test_is_within_radius(self):
        """Test near and far points against a 500m radius."""
        assert is_within_radius((25.286, 51.532), DOHA_CORNICHE, 500) is True
        assert is_within_radius((25.3, 51.55), DOHA_CORNICHE, 500) is False

    def test_radius_boundary_is_inclusive(self):
        """Test that a point exactly on the radius counts as inside."""
        point = (25.2954, 51.5310)
        radius = distance_km(point, DOHA_CORNICHE) * 1000
        assert is_within_radius(point, DOHA_CORNICHE, radius) is True

    def test_filter_within_radius_keeps_matching_items_in_order(self):
        """Test that filtering keeps exactly the in-radius items, in order."""
        stores = [
            {"id": 2, "latitude": 25.295, "longitude": 51.540},
            {"id": 3, "latitude": 25.400, "longitude": 51.600},
            {"id": 1, "latitude": 25.285, "longitude": 51.531},
        ]

        nearby = filter_within_radius(stores, DOHA_CORNICHE, 2000)

        assert [s["id"] for s in nearby] == [2, 1]
        for store in nearby:
            point = (store["latitude"], store["longitude"])
            assert distance_km(point, DOHA_CORNICHE) * 1000 <= 2000

    def test_filter_within_radius_accepts_objects(self):
        """Test filtering objects exposing latitude/longitude attributes."""

        class Pin:
            def __init__(self, latitude, longitude):
                self.latitude = latitude
                self.longitude = longitude

        near, far = Pin(25.2855, 51.5311), Pin(26.0, 52.0)
        assert filter_within_radius([far, near], DOHA_CORNICHE, 100) == [near]

    def test_filter_within_radius_empty_input(self):
        """Test that an empty input gives an empty result."""
        assert filter_within_radius([], DOHA_CORNICHE, 1000) == []
