"""
GeoMath - Spherical Navigation Calculations

Provides distance, bearing and projection utilities on a spherical Earth,
and the great-circle intersection used for radial cross-fixes.

All distances are in nautical miles.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

# Spherical Earth radius in nautical miles
EARTH_RADIUS_NM = 3440.0

# Length of the construction arc used to define each bearing's great circle.
# Any non-zero value below half the circumference defines the same plane.
PROJECTION_DISTANCE_NM = 100.0


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair in degrees."""
    lat: float
    lon: float


def haversine_distance(lat1: float, lon1: float,
                       lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points.

    Args:
        lat1: Latitude of point 1 (degrees)
        lon1: Longitude of point 1 (degrees)
        lat2: Latitude of point 2 (degrees)
        lon2: Longitude of point 2 (degrees)

    Returns:
        Distance in nautical miles
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_NM * c


def bearing(lat1: float, lon1: float,
            lat2: float, lon2: float) -> float:
    """
    Calculate the initial great-circle bearing from point 1 to point 2.

    Args:
        lat1: Latitude of point 1 (degrees)
        lon1: Longitude of point 1 (degrees)
        lat2: Latitude of point 2 (degrees)
        lon2: Longitude of point 2 (degrees)

    Returns:
        True bearing in degrees (0-360, where 0 is North)
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lon = math.radians(lon2 - lon1)

    x = math.sin(delta_lon) * math.cos(lat2_rad)
    y = (math.cos(lat1_rad) * math.sin(lat2_rad) -
         math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(delta_lon))

    initial_bearing = math.atan2(x, y)

    bearing_deg = math.degrees(initial_bearing)
    return (bearing_deg + 360) % 360


def destination_point(lat: float, lon: float,
                      bearing_deg: float, distance: float) -> Tuple[float, float]:
    """
    Calculate destination point given start point, bearing and distance.

    Args:
        lat: Starting latitude (degrees)
        lon: Starting longitude (degrees)
        bearing_deg: True bearing in degrees
        distance: Distance in nautical miles

    Returns:
        Tuple of (latitude, longitude) for destination point
    """
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    bearing_rad = math.radians(bearing_deg)

    angular_distance = distance / EARTH_RADIUS_NM

    lat2 = math.asin(
        math.sin(lat_rad) * math.cos(angular_distance) +
        math.cos(lat_rad) * math.sin(angular_distance) * math.cos(bearing_rad)
    )

    lon2 = lon_rad + math.atan2(
        math.sin(bearing_rad) * math.sin(angular_distance) * math.cos(lat_rad),
        math.cos(angular_distance) - math.sin(lat_rad) * math.sin(lat2)
    )

    return (math.degrees(lat2), math.degrees(lon2))


def lat_lon_to_spherical(point: GeoPoint) -> np.ndarray:
    """Convert a GeoPoint to a unit vector (x towards 0/0, z towards the north pole)."""
    lat_rad = math.radians(point.lat)
    lon_rad = math.radians(point.lon)
    return np.array([
        math.cos(lat_rad) * math.cos(lon_rad),
        math.cos(lat_rad) * math.sin(lon_rad),
        math.sin(lat_rad),
    ])


def _candidate_from_vector(vec: np.ndarray) -> GeoPoint:
    # Longitude comes from atan rather than atan2, so both antipodal
    # candidates share one longitude in (90, 270) and differ only in
    # latitude sign. The bearing comparison below relies on that.
    lat = 90.0 - np.degrees(np.arccos(vec[2]))
    lon = 180.0 + np.degrees(np.arctan(vec[1] / vec[0]))
    return GeoPoint(lat=float(lat), lon=float(lon))


def great_circle_intersection(point1: GeoPoint, brg1: float,
                              point2: GeoPoint, brg2: float) -> GeoPoint:
    """
    Compute the intersection of two true bearings on great circles.

    Each bearing defines a great circle through its origin; the two circles
    cross at two antipodal points. The candidate whose bearing from point1
    is closest to brg1 is returned.

    brg1 is compared as given, without normalization, so e.g. -90 and 270
    can select different candidates.

    Coincident or antipodal rays have no unique intersection and produce
    NaN coordinates.

    Args:
        point1: Origin of the first bearing
        brg1: True bearing from point1 (degrees)
        point2: Origin of the second bearing
        brg2: True bearing from point2 (degrees)

    Returns:
        Intersection point. Longitude is not normalized to [-180, 180].
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        pa11 = lat_lon_to_spherical(point1)
        pa12 = lat_lon_to_spherical(GeoPoint(*destination_point(
            point1.lat, point1.lon, brg1 % 360, PROJECTION_DISTANCE_NM)))
        pa21 = lat_lon_to_spherical(point2)
        pa22 = lat_lon_to_spherical(GeoPoint(*destination_point(
            point2.lat, point2.lon, brg2 % 360, PROJECTION_DISTANCE_NM)))

        n1 = np.cross(pa11, pa12)
        n2 = np.cross(pa21, pa22)

        line = np.cross(n1, n2)
        i1 = line / np.linalg.norm(line)
        i2 = -i1

        s1 = _candidate_from_vector(i1)
        s2 = _candidate_from_vector(i2)

    brg_to_s1 = bearing(point1.lat, point1.lon, s1.lat, s1.lon)
    brg_to_s2 = bearing(point1.lat, point1.lon, s2.lat, s2.lon)

    delta1 = abs(brg1 - brg_to_s1)
    delta2 = abs(brg1 - brg_to_s2)

    return s1 if delta1 < delta2 else s2
