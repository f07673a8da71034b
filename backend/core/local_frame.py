"""
Geographic to local scene coordinates.

Renderers place nodes in a local 3D frame, not in latitude/longitude. The
mapper contract here is what a rendering backend calls to turn a segment
anchor into a scene position; `EnuMapper` is the default implementation.
"""

import math
import logging
from typing import Protocol, Tuple

from core.models.geo import GeoPoint
from core.constants import MEAN_EARTH_RADIUS_METERS
from core.calculations import normalize_longitude
from core.validation import ValidationError

logger = logging.getLogger(__name__)


class GeoToLocalMapper(Protocol):
    """Maps a geographic point to (x, y, z) scene coordinates in meters."""

    def to_local(self, point: GeoPoint) -> Tuple[float, float, float]:
        ...


class EnuMapper:
    """
    East/north/up tangent plane around an origin.

    Uses an equirectangular approximation, accurate for the few kilometers an
    AR session covers. Scene axes follow right-handed, y-up engines:
    x = east, y = up, z = -north (so north is "into" the screen).
    """

    def __init__(self, origin: GeoPoint):
        if origin is None:
            raise ValidationError("Mapper origin is None")
        self.origin = origin
        self._cos_origin_lat = math.cos(math.radians(origin.latitude))

    @property
    def origin_altitude(self) -> float:
        return self.origin.altitude if self.origin.altitude is not None else 0.0

    def east_north(self, point: GeoPoint) -> Tuple[float, float]:
        """Return (east, north) offsets of a point from the origin in meters."""
        dlon = normalize_longitude(point.longitude - self.origin.longitude)
        east = math.radians(dlon) * MEAN_EARTH_RADIUS_METERS * self._cos_origin_lat
        north = math.radians(point.latitude - self.origin.latitude) * MEAN_EARTH_RADIUS_METERS
        return east, north

    def to_local(self, point: GeoPoint) -> Tuple[float, float, float]:
        east, north = self.east_north(point)
        altitude = point.altitude if point.altitude is not None else self.origin_altitude
        up = altitude - self.origin_altitude
        return east, up, -north

    def __repr__(self) -> str:
        return f"EnuMapper(origin={self.origin!r})"
