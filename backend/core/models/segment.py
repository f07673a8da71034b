"""
Segment data models.

This module defines the data structures for path segments: the oriented,
length-sized legs between consecutive points of a geographic path, and the
box shape the default shape policy produces for them.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple
import pandas as pd

from core.models.geo import GeoPoint
from core.constants import (
    DEFAULT_TAG, DEFAULT_BOX_CHAMFER_RADIUS, DEFAULT_BOX_COLOR
)


@dataclass(frozen=True)
class BoxShape:
    """
    A box-shaped renderable description.

    The long axis is `length`; renderers orient it along the segment bearing.
    """
    width: float  # Meters, across the path
    height: float  # Meters, vertical thickness
    length: float  # Meters, along the path
    chamfer_radius: float = DEFAULT_BOX_CHAMFER_RADIUS
    color: Tuple[float, float, float, float] = DEFAULT_BOX_COLOR  # RGBA, 0-1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'width': self.width,
            'height': self.height,
            'length': self.length,
            'chamfer_radius': self.chamfer_radius,
            'color': list(self.color),
        }


@dataclass(frozen=True)
class Segment:
    """
    Represents one leg of a path, ready to be placed by a renderer.

    A segment is anchored at the midpoint of its two endpoints, is as long as
    the geodesic distance between them, and points along the initial bearing
    from the first endpoint toward the second.
    """
    # Placement
    anchor: GeoPoint  # Midpoint between start and end
    length: float  # Distance between endpoints in meters
    bearing: float  # Compass bearing in degrees [0, 360), clockwise from north

    # Labelling and rendering
    tag: str = DEFAULT_TAG
    shape: Any = None  # Output of the shape policy

    # Provenance in the original path
    index: int = 0  # Position of this leg in the path (0-based)
    start: Optional[GeoPoint] = field(default=None, compare=False)
    end: Optional[GeoPoint] = field(default=None, compare=False)

    @property
    def yaw_degrees(self) -> float:
        """
        Rotation about the vertical axis for a right-handed, y-up scene.

        Compass bearings turn clockwise seen from above while such scenes
        turn counter-clockwise, hence the negation.
        """
        return -self.bearing

    @property
    def yaw_radians(self) -> float:
        """Yaw in radians."""
        return math.radians(self.yaw_degrees)

    @property
    def is_degenerate(self) -> bool:
        """True for a zero-length leg between coincident points."""
        return self.length == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert segment to a flat dictionary for DataFrame or JSON output."""
        shape = self.shape.to_dict() if hasattr(self.shape, 'to_dict') else self.shape
        return {
            'index': self.index,
            'tag': self.tag,
            'anchor_latitude': self.anchor.latitude,
            'anchor_longitude': self.anchor.longitude,
            'anchor_altitude': self.anchor.altitude,
            'length': self.length,
            'bearing': self.bearing,
            'yaw_degrees': self.yaw_degrees,
            'start_latitude': self.start.latitude if self.start else None,
            'start_longitude': self.start.longitude if self.start else None,
            'end_latitude': self.end.latitude if self.end else None,
            'end_longitude': self.end.longitude if self.end else None,
            'shape': shape,
        }


def segments_to_dataframe(segments: List[Segment]) -> pd.DataFrame:
    """
    Convert a list of segments to a pandas DataFrame.

    Args:
        segments: List of Segment objects

    Returns:
        pandas DataFrame with one row per segment, in path order
    """
    if not segments:
        return pd.DataFrame()

    data = [segment.to_dict() for segment in segments]
    return pd.DataFrame(data)
