"""
Segments package.

This package contains the path segmenter: construction of oriented,
length-sized segments from an ordered sequence of geographic points.
Clean, focused interface with no circular dependencies.
"""

# Core segment construction functions
from .builder import (
    SegmenterConfig,
    build_segments,
    iter_segments,
    build_segments_from_polyline,
    summarize_segments,
    make_segment,
    compute_anchor,
    prepare_points,
    resolve_config,
)

# Segment models
from core.models.segment import Segment, BoxShape, segments_to_dataframe

# Clean public API - only segment construction and models
__all__ = [
    # Main entry points
    'build_segments',
    'iter_segments',
    'build_segments_from_polyline',
    'summarize_segments',
    'SegmenterConfig',

    # Modular construction steps
    'resolve_config',
    'prepare_points',
    'compute_anchor',
    'make_segment',

    # Models
    'Segment',
    'BoxShape',
    'segments_to_dataframe',
]
