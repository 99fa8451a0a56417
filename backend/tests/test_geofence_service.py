"""Tests for haversine distance and geofence classification."""
from types import SimpleNamespace
import pytest
from geoattend.services.geofence_service import GeofenceService

POINTS = [
    (0.0, 0.0),
    (5.6037, -0.1870),
    (-33.8688, 151.2093),
    (51.5074, -0.1278),
    (89.9, 179.9),
]

@pytest.mark.parametrize('a', POINTS)
@pytest.mark.parametrize('b', POINTS)
def test_distance_is_symmetric(a, b):
    assert GeofenceService.distance_meters(*a, *b) == GeofenceService.distance_meters(*b, *a)

@pytest.mark.parametrize('p', POINTS)
def test_distance_to_self_is_zero(p):
    assert GeofenceService.distance_meters(*p, *p) == 0

def test_known_short_distances():
    # 0.001 degrees of latitude is about 111 m on a 6371 km sphere
    assert GeofenceService.distance_meters(0.0, 0.0, 0.001, 0.0) == pytest.approx(111.19, abs=0.01)
    assert GeofenceService.distance_meters(0.0, 0.0, 0.0003, 0.0) == pytest.approx(33.36, abs=0.01)

def test_is_within_boundary_is_inclusive():
    assert GeofenceService.is_within(50.0, 50) is True
    assert GeofenceService.is_within(49.99, 50) is True
    assert GeofenceService.is_within(50.0001, 50) is False

def test_verify_location_reports_distance_and_radius():
    window = SimpleNamespace(latitude=0.0, longitude=0.0, radius_meters=50)

    inside = GeofenceService.verify_location(0.0003, 0.0, window)
    assert inside['is_inside'] is True
    assert inside['allowed_radius'] == 50

    outside = GeofenceService.verify_location(0.001, 0.0, window)
    assert outside['is_inside'] is False
    assert outside['distance'] == pytest.approx(111.19, abs=0.01)
    assert outside['center'] == {'latitude': 0.0, 'longitude': 0.0}
