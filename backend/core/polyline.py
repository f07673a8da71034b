"""
Polyline input.

Map frameworks hand out routes as polylines: a point count plus indexed
access to projected (x, y) coordinates. This module defines that contract,
a concrete polyline over spherical Web Mercator (EPSG:3857) meters, and the
conversion of any polyline into a path of GeoPoints at a uniform altitude.
"""

import math
import logging
from typing import Callable, List, Protocol, Sequence, Tuple, runtime_checkable

from core.models.geo import GeoPoint
from core.validation import ValidationError, validate_altitude
from core.constants import WGS84_SEMI_MAJOR_AXIS_METERS, MERCATOR_MAX_LATITUDE_DEGREES

logger = logging.getLogger(__name__)


@runtime_checkable
class Polyline(Protocol):
    """A sequence of projected points."""

    @property
    def point_count(self) -> int:
        ...

    def point(self, index: int) -> Tuple[float, float]:
        ...


def geo_to_mercator(lat: float, lon: float) -> Tuple[float, float]:
    """Project latitude/longitude in degrees to Web Mercator meters."""
    lat = max(-MERCATOR_MAX_LATITUDE_DEGREES, min(MERCATOR_MAX_LATITUDE_DEGREES, lat))
    x = WGS84_SEMI_MAJOR_AXIS_METERS * math.radians(lon)
    y = WGS84_SEMI_MAJOR_AXIS_METERS * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return x, y


def mercator_to_geo(x: float, y: float) -> Tuple[float, float]:
    """Unproject Web Mercator meters to (latitude, longitude) in degrees."""
    lon = math.degrees(x / WGS84_SEMI_MAJOR_AXIS_METERS)
    lat = math.degrees(2 * math.atan(math.exp(y / WGS84_SEMI_MAJOR_AXIS_METERS)) - math.pi / 2)
    return lat, lon


class MercatorPolyline:
    """
    Polyline backed by Web Mercator coordinates in meters.

    Points are copied at construction, so later changes to the source
    sequence do not affect the polyline.
    """

    def __init__(self, points: Sequence[Tuple[float, float]]):
        if points is None:
            raise ValidationError("Polyline points sequence is None")
        self._points = [(float(x), float(y)) for x, y in points]

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Tuple[float, float]]) -> 'MercatorPolyline':
        """Build a polyline from (latitude, longitude) pairs."""
        return cls([geo_to_mercator(lat, lon) for lat, lon in coordinates])

    @property
    def point_count(self) -> int:
        return len(self._points)

    def point(self, index: int) -> Tuple[float, float]:
        return self._points[index]

    def __len__(self) -> int:
        return self.point_count

    def __repr__(self) -> str:
        return f"MercatorPolyline(point_count={self.point_count})"


def polyline_to_points(polyline: Polyline,
                       altitude: float,
                       to_geo: Callable[[float, float], Tuple[float, float]] = mercator_to_geo
                       ) -> List[GeoPoint]:
    """
    Convert a polyline into GeoPoints at a uniform altitude.

    Polyline points carry no altitude, so every point receives the same one.

    Args:
        polyline: Object exposing point_count and point(index)
        altitude: Altitude in meters applied to every point
        to_geo: Projection inverse, (x, y) -> (lat, lon)

    Returns:
        List of GeoPoint in polyline order

    Raises:
        ValidationError: If polyline is None or altitude is invalid
    """
    if polyline is None:
        raise ValidationError("Polyline is None")
    altitude = validate_altitude(altitude, "Polyline altitude")

    points = []
    for i in range(polyline.point_count):
        x, y = polyline.point(i)
        lat, lon = to_geo(x, y)
        points.append(GeoPoint(lat, lon, altitude))

    logger.debug(f"Converted polyline with {len(points)} points at altitude {altitude}m")
    return points
