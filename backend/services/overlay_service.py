"""
Path overlay service.

This module provides the object an AR scene holds for one path: it takes the
path once, builds every segment eagerly, and hands them to a rendering
backend. A changed path means building a new overlay.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from core.gpx import load_gpx_points
from core.models.geo import GeoPoint
from core.models.segment import Segment, segments_to_dataframe
from core.polyline import Polyline, polyline_to_points
from core.rendering import RenderingBackend
from core.segments import SegmenterConfig, build_segments, summarize_segments
from core.shapes import ShapeBuilder
from core.validation import ValidationError, validate_points
from config.settings import OverlayConfig

logger = logging.getLogger(__name__)


def default_segmenter_config(altitude: Optional[float] = None) -> SegmenterConfig:
    """Build a SegmenterConfig from application settings."""
    return SegmenterConfig(
        altitude=OverlayConfig.ALTITUDE if altitude is None else altitude,
        tag=OverlayConfig.TAG,
        midpoint_method=OverlayConfig.MIDPOINT_METHOD,
        strict=OverlayConfig.STRICT
    )


class PathOverlay:
    """
    Oriented segments for one path, ready to render.

    Exactly one of `points` or `polyline` must be given. Polyline points get
    the uniform altitude; explicit points keep their own altitude when they
    have one.
    """

    def __init__(self,
                 points: Optional[Iterable[Any]] = None,
                 polyline: Optional[Polyline] = None,
                 altitude: Optional[float] = None,
                 tag: Optional[str] = None,
                 shape_builder: Optional[ShapeBuilder] = None,
                 config: Optional[SegmenterConfig] = None):
        if (points is None) == (polyline is None):
            raise ValidationError("Provide exactly one of points or polyline")

        if config is None:
            config = default_segmenter_config(altitude)

        self.config = config
        self.polyline = polyline
        self.altitude = config.altitude if altitude is None else altitude

        if polyline is not None:
            path = polyline_to_points(polyline, self.altitude)
        else:
            path = validate_points(points)
        self.points: Tuple[GeoPoint, ...] = tuple(path)

        self.segments: Tuple[Segment, ...] = tuple(build_segments(
            self.points,
            altitude=self.altitude,
            tag=tag,
            shape_builder=shape_builder,
            config=config
        ))
        self.tag = self.segments[0].tag if self.segments else (tag if tag is not None else config.tag)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def render(self, backend: RenderingBackend) -> RenderingBackend:
        """
        Place every segment on the backend, in path order.

        Returns:
            The backend, for chaining
        """
        count = backend.place_all(self.segments)
        logger.info(f"Rendered {count} segments with {backend.name} backend")
        return backend

    def to_dataframe(self) -> pd.DataFrame:
        """Segments as a DataFrame, one row per segment."""
        return segments_to_dataframe(list(self.segments))

    def summary(self) -> Dict[str, Any]:
        """Summary statistics of the overlay."""
        summary = summarize_segments(list(self.segments))
        summary['point_count'] = len(self.points)
        summary['tag'] = self.tag
        summary['altitude'] = self.altitude
        return summary

    def to_records(self) -> List[Dict[str, Any]]:
        """Segments as JSON-ready dictionaries."""
        return [segment.to_dict() for segment in self.segments]


def build_overlay_from_gpx(gpx_file,
                           altitude: Optional[float] = None,
                           tag: Optional[str] = None,
                           shape_builder: Optional[ShapeBuilder] = None,
                           config: Optional[SegmenterConfig] = None) -> Tuple[PathOverlay, Dict[str, Any]]:
    """
    Build an overlay from a GPX file.

    GPX elevations are kept per point; `altitude` only fills points without one.

    Args:
        gpx_file: File-like object containing GPX data
        altitude: Uniform altitude for points lacking elevation
        tag: Label for all segments; defaults to the GPX name, then ""

    Returns:
        tuple: (PathOverlay, GPX metadata)

    Raises:
        ValidationError: If the GPX file cannot be loaded
    """
    points, metadata = load_gpx_points(gpx_file)

    if tag is None and metadata.get('name'):
        tag = metadata['name']

    overlay = PathOverlay(
        points=points,
        altitude=altitude,
        tag=tag,
        shape_builder=shape_builder,
        config=config
    )
    return overlay, metadata
