"""
Path segment construction.

This module turns an ordered sequence of geographic points into the oriented,
length-sized segments an AR overlay places along the path. Each consecutive
pair of points becomes one segment; each step of the construction is a small
function that can be tested independently.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

import numpy as np

from core.calculations import (
    calculate_bearing, calculate_distance, calculate_midpoint, interpolate_linear
)
from core.constants import (
    DEFAULT_TAG, MIDPOINT_GREAT_CIRCLE, MIDPOINT_LINEAR, COINCIDENT_DISTANCE_METERS
)
from core.models.geo import GeoPoint
from core.models.segment import Segment
from core.polyline import Polyline, polyline_to_points
from core.shapes import ShapeBuilder, default_box_builder, ensure_shape_length
from core.validation import (
    validate_points, validate_altitude, validate_coordinates,
    validate_midpoint_method, ValidationError
)

logger = logging.getLogger(__name__)


@dataclass
class SegmenterConfig:
    """Configuration for building the segments of one path."""
    altitude: float  # Meters, applied to points without their own altitude
    tag: str = DEFAULT_TAG
    shape_builder: ShapeBuilder = field(default=default_box_builder)
    midpoint_method: str = MIDPOINT_GREAT_CIRCLE
    strict: bool = False  # Reject out-of-range coordinates instead of propagating them

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and API output."""
        return {
            'altitude': self.altitude,
            'tag': self.tag,
            'shape_builder': getattr(self.shape_builder, '__name__', repr(self.shape_builder)),
            'midpoint_method': self.midpoint_method,
            'strict': self.strict,
        }


def resolve_config(altitude: Optional[float] = None,
                   tag: Optional[str] = None,
                   shape_builder: Optional[ShapeBuilder] = None,
                   config: Optional[SegmenterConfig] = None) -> SegmenterConfig:
    """
    Merge explicit arguments with an optional config.

    Explicit arguments win over the config; the config wins over defaults.

    Raises:
        ValidationError: If no altitude is given either way, or a value is invalid
    """
    if altitude is None and config is None:
        raise ValidationError("Altitude is required")

    base = config if config is not None else SegmenterConfig(altitude=altitude)
    resolved = SegmenterConfig(
        altitude=validate_altitude(altitude if altitude is not None else base.altitude),
        tag=tag if tag is not None else (base.tag if base.tag is not None else DEFAULT_TAG),
        shape_builder=shape_builder if shape_builder is not None else (base.shape_builder or default_box_builder),
        midpoint_method=validate_midpoint_method(base.midpoint_method),
        strict=base.strict
    )

    if not callable(resolved.shape_builder):
        raise ValidationError(f"Shape builder must be callable, got {resolved.shape_builder!r}")

    return resolved


def prepare_points(points: Iterable[Any], config: SegmenterConfig) -> List[GeoPoint]:
    """
    Validate the path and fill in the uniform altitude.

    This is the first step in segment construction. The input sequence is
    never modified; a new list is returned.
    """
    path = validate_points(points)
    path = [point.resolve_altitude(config.altitude) for point in path]

    if config.strict:
        validate_coordinates(path)

    return path


def compute_anchor(a: GeoPoint, b: GeoPoint, method: str = MIDPOINT_GREAT_CIRCLE) -> GeoPoint:
    """
    Compute the placement anchor of the leg from a to b.

    Args:
        a, b: Endpoints with resolved altitudes
        method: MIDPOINT_GREAT_CIRCLE or MIDPOINT_LINEAR

    Returns:
        GeoPoint halfway along the leg, at the mean of the endpoint altitudes
    """
    altitude = (a.altitude + b.altitude) / 2

    if a.latitude == b.latitude and a.longitude == b.longitude:
        return GeoPoint(a.latitude, a.longitude, altitude)

    if method == MIDPOINT_LINEAR:
        lat, lon = interpolate_linear(a.latitude, a.longitude, b.latitude, b.longitude, 0.5)
    else:
        lat, lon = calculate_midpoint(a.latitude, a.longitude, b.latitude, b.longitude)

    return GeoPoint(lat, lon, altitude)


def make_segment(a: GeoPoint, b: GeoPoint, index: int, config: SegmenterConfig) -> Segment:
    """
    Build the segment for one consecutive pair of points.

    Args:
        a: Start of the leg
        b: End of the leg
        index: Position of the leg in the path
        config: Resolved segmenter configuration

    Returns:
        Segment anchored at the midpoint, sized by distance, oriented by bearing
    """
    distance = calculate_distance(a.latitude, a.longitude, b.latitude, b.longitude)
    # geodesic can return a few nanometers for identical points near the poles
    if distance <= COINCIDENT_DISTANCE_METERS:
        distance = 0.0

    bearing = calculate_bearing(a.latitude, a.longitude, b.latitude, b.longitude)
    anchor = compute_anchor(a, b, config.midpoint_method)

    shape = ensure_shape_length(config.shape_builder(distance), distance)

    return Segment(
        anchor=anchor,
        length=distance,
        bearing=bearing,
        tag=config.tag,
        shape=shape,
        index=index,
        start=a,
        end=b
    )


def _generate(path: List[GeoPoint], config: SegmenterConfig) -> Iterator[Segment]:
    for i in range(len(path) - 1):
        yield make_segment(path[i], path[i + 1], i, config)


def iter_segments(points: Iterable[Any],
                  altitude: Optional[float] = None,
                  tag: Optional[str] = None,
                  shape_builder: Optional[ShapeBuilder] = None,
                  config: Optional[SegmenterConfig] = None) -> Iterator[Segment]:
    """
    Lazily produce the segments of a path.

    Inputs are validated immediately; segments are computed as the iterator
    is consumed. Calling again restarts from the first leg.

    Returns:
        Iterator over Segment in path order
    """
    resolved = resolve_config(altitude, tag, shape_builder, config)
    path = prepare_points(points, resolved)
    return _generate(path, resolved)


def build_segments(points: Iterable[Any],
                   altitude: Optional[float] = None,
                   tag: Optional[str] = None,
                   shape_builder: Optional[ShapeBuilder] = None,
                   config: Optional[SegmenterConfig] = None) -> List[Segment]:
    """
    Build one segment per consecutive pair of points.

    This is the main entry point for segment construction. Paths with fewer
    than two points are valid and produce no segments.

    Args:
        points: Ordered path; GeoPoints or (lat, lon[, alt]) tuples
        altitude: Uniform altitude in meters for points without one
        tag: Label shared by all segments (default "")
        shape_builder: length -> shape policy (default box)
        config: Optional SegmenterConfig; explicit arguments take precedence

    Returns:
        List of max(0, len(points) - 1) segments in path order

    Raises:
        ValidationError: If points is None, altitude is missing or invalid,
            or strict mode rejects a coordinate
    """
    resolved = resolve_config(altitude, tag, shape_builder, config)
    logger.debug(f"Building segments with {resolved.to_dict()}")
    path = prepare_points(points, resolved)

    if len(path) < 2:
        logger.debug(f"Path has {len(path)} points, no segments to build")
        return []

    segments = list(_generate(path, resolved))

    degenerate_count = sum(1 for segment in segments if segment.is_degenerate)
    if degenerate_count:
        logger.warning(f"{degenerate_count} zero-length segments from coincident consecutive points")

    non_finite_count = sum(1 for segment in segments if math.isnan(segment.length))
    if non_finite_count:
        logger.warning(f"{non_finite_count} segments with non-finite coordinates, length and bearing are NaN")

    logger.info(f"Built {len(segments)} segments from {len(path)} points " +
                f"(altitude={resolved.altitude}m, tag={resolved.tag!r})")
    return segments


def build_segments_from_polyline(polyline: Polyline,
                                 altitude: Optional[float] = None,
                                 tag: Optional[str] = None,
                                 shape_builder: Optional[ShapeBuilder] = None,
                                 config: Optional[SegmenterConfig] = None) -> List[Segment]:
    """
    Build segments from a polyline at a uniform altitude.

    Args:
        polyline: Object exposing point_count and point(index) in Web Mercator meters
        altitude: Uniform altitude in meters
        tag, shape_builder, config: As for build_segments

    Returns:
        List of segments in polyline order
    """
    resolved = resolve_config(altitude, tag, shape_builder, config)
    points = polyline_to_points(polyline, resolved.altitude)
    return build_segments(points, config=resolved)


def summarize_segments(segments: List[Segment]) -> Dict[str, Any]:
    """
    Summarize the segments of a path.

    This provides useful statistics for debugging and API responses.

    Args:
        segments: List of built segments

    Returns:
        Dictionary with count and length statistics
    """
    if not segments:
        return {
            'count': 0,
            'total_length_m': 0.0,
            'mean_length_m': None,
            'min_length_m': None,
            'max_length_m': None,
            'degenerate_count': 0,
        }

    lengths = np.array([segment.length for segment in segments], dtype=float)

    return {
        'count': len(segments),
        'total_length_m': float(lengths.sum()),
        'mean_length_m': float(lengths.mean()),
        'min_length_m': float(lengths.min()),
        'max_length_m': float(lengths.max()),
        'degenerate_count': int((lengths == 0).sum()),
    }
