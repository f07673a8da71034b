"""
Shared calculations module.

This module contains the geometric functions used by the path segmenter:
distance, bearing, midpoint and interpolation between geographic points,
plus the angle normalisation helpers they share. It is the single source of
truth for the math; every other module calls into it.
"""

import math
import logging
from typing import Tuple

from geopy.distance import geodesic

from core.constants import (
    FULL_CIRCLE_DEGREES, ANGLE_WRAP_BOUNDARY_DEGREES, MAX_LATITUDE_DEGREES,
    MEAN_EARTH_RADIUS_METERS, COINCIDENT_BEARING_DEGREES
)

logger = logging.getLogger(__name__)


# =============================================================================
# ANGLE HELPERS
# =============================================================================

def normalize_bearing(angle: float) -> float:
    """Normalize an angle in degrees to the [0, 360) range."""
    result = angle % FULL_CIRCLE_DEGREES
    # Float modulo can round a tiny negative input up to exactly 360
    if result >= FULL_CIRCLE_DEGREES:
        result = 0.0
    return float(result)


def normalize_longitude(lon: float) -> float:
    """Normalize a longitude in degrees to the [-180, 180) range."""
    return (lon + ANGLE_WRAP_BOUNDARY_DEGREES) % FULL_CIRCLE_DEGREES - ANGLE_WRAP_BOUNDARY_DEGREES


def reverse_bearing(bearing: float) -> float:
    """Return the opposite compass direction of a bearing."""
    return normalize_bearing(bearing + ANGLE_WRAP_BOUNDARY_DEGREES)


def bearing_difference(bearing1: float, bearing2: float) -> float:
    """
    Calculate the smallest signed difference from bearing1 to bearing2.

    Args:
        bearing1, bearing2: Bearings in degrees

    Returns:
        float: Difference in degrees in the [-180, 180) range. Positive values
        mean bearing2 lies clockwise of bearing1.
    """
    return normalize_longitude(bearing2 - bearing1)


# =============================================================================
# BASIC GEOMETRIC CALCULATIONS
# =============================================================================

def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the initial compass bearing from the first point to the second.

    The result is measured clockwise from true north and normalised to
    [0, 360): 0 is north, 90 is east. Coincident points have no heading and
    yield COINCIDENT_BEARING_DEGREES instead of raising.
    Non-finite coordinates have no heading either and yield NaN.
    """
    if not _all_finite(lat1, lon1, lat2, lon2):
        return math.nan

    if lat1 == lat2 and lon1 == lon2:
        return COINCIDENT_BEARING_DEGREES

    # Convert to radians
    lat1 = math.radians(lat1)
    lon1 = math.radians(lon1)
    lat2 = math.radians(lat2)
    lon2 = math.radians(lon2)

    # Calculate bearing
    x = math.sin(lon2 - lon1) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    initial_bearing = math.atan2(x, y)

    # Convert to degrees
    return normalize_bearing(math.degrees(initial_bearing))


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(value) for value in values)


def _geodesic_supported(*coordinates: float) -> bool:
    """Check whether geopy accepts the coordinates (finite, |lat| <= 90)."""
    if not _all_finite(*coordinates):
        return False
    lat1, _, lat2, _ = coordinates
    return abs(lat1) <= MAX_LATITUDE_DEGREES and abs(lat2) <= MAX_LATITUDE_DEGREES


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the geodesic distance between two points in meters.

    Uses the WGS84 ellipsoid. Coordinates geopy refuses (latitudes beyond
    +/-90 degrees, non-finite values) fall back to the spherical haversine
    formula, so malformed input still produces a value: NaN when any
    coordinate is infinite or NaN.
    """
    if not _geodesic_supported(lat1, lon1, lat2, lon2):
        logger.debug(f"Coordinates ({lat1}, {lon1}) -> ({lat2}, {lon2}) outside geodesic range, "
                     f"using haversine")
        return haversine_distance(lat1, lon1, lat2, lon2)
    return geodesic((lat1, lon1), (lat2, lon2)).meters


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points in meters."""
    if not _all_finite(lat1, lon1, lat2, lon2):
        return math.nan

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a slightly past 1 for antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return MEAN_EARTH_RADIUS_METERS * c


# =============================================================================
# MIDPOINTS AND INTERPOLATION
# =============================================================================

def calculate_midpoint(lat1: float, lon1: float, lat2: float, lon2: float) -> Tuple[float, float]:
    """
    Calculate the great-circle midpoint between two points.

    Antipodal points have infinitely many midpoints; the formula then
    degrades to a deterministic point on the equator rather than raising.
    Non-finite coordinates give (NaN, NaN).

    Returns:
        tuple: (latitude, longitude) in degrees, longitude in [-180, 180)
    """
    if not _all_finite(lat1, lon1, lat2, lon2):
        return math.nan, math.nan

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    lambda1 = math.radians(lon1)
    dlambda = math.radians(lon2 - lon1)

    bx = math.cos(phi2) * math.cos(dlambda)
    by = math.cos(phi2) * math.sin(dlambda)

    phi_m = math.atan2(
        math.sin(phi1) + math.sin(phi2),
        math.sqrt((math.cos(phi1) + bx) ** 2 + by ** 2)
    )
    lambda_m = lambda1 + math.atan2(by, math.cos(phi1) + bx)

    return math.degrees(phi_m), normalize_longitude(math.degrees(lambda_m))


def interpolate_great_circle(lat1: float, lon1: float, lat2: float, lon2: float,
                             fraction: float) -> Tuple[float, float]:
    """
    Calculate the point at a fraction of the way along the great circle.

    Args:
        lat1, lon1: Start point in degrees
        lat2, lon2: End point in degrees
        fraction: 0.0 returns the start, 1.0 the end

    Returns:
        tuple: (latitude, longitude) in degrees
    """
    if not _all_finite(lat1, lon1, lat2, lon2):
        return math.nan, math.nan

    phi1, lambda1 = math.radians(lat1), math.radians(lon1)
    phi2, lambda2 = math.radians(lat2), math.radians(lon2)

    angular_distance = haversine_distance(lat1, lon1, lat2, lon2) / MEAN_EARTH_RADIUS_METERS
    sin_delta = math.sin(angular_distance)
    if sin_delta == 0:
        # Coincident or antipodal: no unique great circle
        return lat1, normalize_longitude(lon1)

    a = math.sin((1 - fraction) * angular_distance) / sin_delta
    b = math.sin(fraction * angular_distance) / sin_delta

    x = a * math.cos(phi1) * math.cos(lambda1) + b * math.cos(phi2) * math.cos(lambda2)
    y = a * math.cos(phi1) * math.sin(lambda1) + b * math.cos(phi2) * math.sin(lambda2)
    z = a * math.sin(phi1) + b * math.sin(phi2)

    lat = math.atan2(z, math.sqrt(x ** 2 + y ** 2))
    lon = math.atan2(y, x)
    return math.degrees(lat), normalize_longitude(math.degrees(lon))


def interpolate_linear(lat1: float, lon1: float, lat2: float, lon2: float,
                       fraction: float) -> Tuple[float, float]:
    """
    Linearly interpolate latitude and longitude between two points.

    The longitude delta takes the short way around, so legs crossing the
    antimeridian interpolate across it instead of around the globe.
    """
    dlon = lon2 - lon1
    if dlon > ANGLE_WRAP_BOUNDARY_DEGREES:
        dlon -= FULL_CIRCLE_DEGREES
    elif dlon < -ANGLE_WRAP_BOUNDARY_DEGREES:
        dlon += FULL_CIRCLE_DEGREES

    lat = lat1 + (lat2 - lat1) * fraction
    lon = normalize_longitude(lon1 + dlon * fraction)
    return lat, lon
