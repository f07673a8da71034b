"""
Geographic point model.

This module defines the immutable coordinate value used for every path point
and segment anchor.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Sequence, Any


@dataclass(frozen=True)
class GeoPoint:
    """
    A WGS84 coordinate with an optional altitude.

    An altitude of None means the point has no altitude of its own; the
    segmenter then applies the uniform altitude configured for the path.
    """
    latitude: float  # Degrees
    longitude: float  # Degrees
    altitude: Optional[float] = None  # Meters

    def with_altitude(self, altitude: Optional[float]) -> 'GeoPoint':
        """Return a copy of this point at the given altitude."""
        return replace(self, altitude=altitude)

    def resolve_altitude(self, default_altitude: float) -> 'GeoPoint':
        """Return this point, filling in default_altitude if it has none."""
        if self.altitude is not None:
            return self
        return self.with_altitude(default_altitude)

    def as_tuple(self) -> Tuple[float, float, Optional[float]]:
        """Return (latitude, longitude, altitude)."""
        return self.latitude, self.longitude, self.altitude

    @property
    def is_finite(self) -> bool:
        """True when latitude and longitude are finite numbers."""
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)

    @classmethod
    def from_tuple(cls, values: Sequence[Any]) -> 'GeoPoint':
        """
        Build a point from a (lat, lon) or (lat, lon, alt) sequence.

        Raises:
            ValueError: If the sequence does not have 2 or 3 items
        """
        if len(values) == 2:
            lat, lon = values
            return cls(float(lat), float(lon))
        if len(values) == 3:
            lat, lon, alt = values
            return cls(float(lat), float(lon), None if alt is None else float(alt))
        raise ValueError(f"Expected (lat, lon) or (lat, lon, alt), got {len(values)} values")
