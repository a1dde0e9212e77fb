"""Geographic utility functions for distance calculations and radius queries."""

import math
from collections.abc import Iterable

from models.spot import SurfSpot

# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def bounding_box(
    lat: float, lon: float, radius_km: float
) -> tuple[float, float, float, float]:
    """
    Approximate (min_lat, max_lat, min_lon, max_lon) box around a point.

    The box is padded slightly so it never excludes a point the exact
    haversine check would keep. Near the poles or the antimeridian the
    longitude span opens up to the full circle.
    """
    km_per_degree = math.pi * EARTH_RADIUS_KM / 180.0
    delta_lat = radius_km / km_per_degree * 1.01

    cos_lat = math.cos(math.radians(min(89.999, abs(lat) + delta_lat)))
    delta_lon = radius_km / (km_per_degree * cos_lat) * 1.01
    if delta_lon >= 180.0 or abs(lon) + delta_lon > 180.0:
        return (lat - delta_lat, lat + delta_lat, -180.0, 180.0)

    return (lat - delta_lat, lat + delta_lat, lon - delta_lon, lon + delta_lon)


def find_within_radius(
    latitude: float,
    longitude: float,
    radius_km: float,
    spots: Iterable[SurfSpot],
) -> list[tuple[SurfSpot, float]]:
    """
    Find spots within a radius of a point.

    A spot is included when its great-circle distance is less than or equal
    to the radius. Results are ordered by ascending distance; spots at the
    same distance keep their input order.

    Args:
        latitude: Center latitude in degrees
        longitude: Center longitude in degrees
        radius_km: Search radius in kilometers
        spots: Candidate spots

    Returns:
        List of (SurfSpot, distance_km) tuples. Empty for a non-positive radius.
    """
    if radius_km <= 0:
        return []

    min_lat, max_lat, min_lon, max_lon = bounding_box(latitude, longitude, radius_km)

    nearby = []
    for spot in spots:
        # Quick bounding box check
        if not (
            min_lat <= spot.latitude <= max_lat
            and min_lon <= spot.longitude <= max_lon
        ):
            continue

        distance = haversine_distance(latitude, longitude, spot.latitude, spot.longitude)
        if distance <= radius_km:
            nearby.append((spot, distance))

    nearby.sort(key=lambda x: x[1])
    return nearby
