# backend/geoattend/services/geofence_service.py
"""Geofence verification service."""
import math
from typing import Dict

class GeofenceService:
    """Service for GPS distance and geofence checks."""

    EARTH_RADIUS_METERS = 6371000  # mean Earth radius

    @staticmethod
    def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Haversine distance between two GPS points in meters.

        No antimeridian normalization; fine at campus scale.
        """
        lat1_rad = math.radians(lat1)
        lat2_rad = math.radians(lat2)
        delta_lat = math.radians(lat2 - lat1)
        delta_lon = math.radians(lon2 - lon1)

        a = (math.sin(delta_lat/2) ** 2 +
             math.cos(lat1_rad) * math.cos(lat2_rad) *
             math.sin(delta_lon/2) ** 2)
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))

        return GeofenceService.EARTH_RADIUS_METERS * c

    @staticmethod
    def is_within(distance: float, radius_meters: float) -> bool:
        """Boundary is inclusive."""
        return distance <= radius_meters

    @staticmethod
    def verify_location(user_lat: float, user_lng: float, window) -> Dict:
        """Verify if user is within the window's geofence."""
        distance = GeofenceService.distance_meters(
            user_lat, user_lng,
            window.latitude, window.longitude
        )

        return {
            'is_inside': GeofenceService.is_within(distance, window.radius_meters),
            'distance': distance,
            'allowed_radius': window.radius_meters,
            'center': {
                'latitude': window.latitude,
                'longitude': window.longitude
            }
        }
