"""
Shape policies for path segments.

A shape policy is any callable mapping a segment length in meters to an
opaque renderable description. The segmenter only owns this contract; what
the returned shape looks like is up to the policy and the renderer that
consumes it.
"""

import logging
from typing import Any, Callable, Tuple

from core.models.segment import BoxShape
from core.validation import ValidationError, validate_box_dimensions
from core.constants import (
    DEFAULT_BOX_WIDTH_METERS, DEFAULT_BOX_HEIGHT_METERS,
    DEFAULT_BOX_CHAMFER_RADIUS, DEFAULT_BOX_COLOR, SHAPE_LENGTH_TOLERANCE
)

logger = logging.getLogger(__name__)

# length (meters) -> shape
ShapeBuilder = Callable[[float], Any]


def default_box_builder(length: float) -> BoxShape:
    """Build the default box: 1 m wide, 0.2 m high, blue, as long as the segment."""
    return BoxShape(
        width=DEFAULT_BOX_WIDTH_METERS,
        height=DEFAULT_BOX_HEIGHT_METERS,
        length=length,
        chamfer_radius=DEFAULT_BOX_CHAMFER_RADIUS,
        color=DEFAULT_BOX_COLOR
    )


def make_box_builder(width: float = DEFAULT_BOX_WIDTH_METERS,
                     height: float = DEFAULT_BOX_HEIGHT_METERS,
                     color: Tuple[float, float, float, float] = DEFAULT_BOX_COLOR,
                     chamfer_radius: float = DEFAULT_BOX_CHAMFER_RADIUS) -> ShapeBuilder:
    """
    Create a box shape policy with custom dimensions.

    Args:
        width: Box width in meters
        height: Box height in meters
        color: RGBA color, channels in the 0-1 range
        chamfer_radius: Edge rounding radius in meters

    Returns:
        ShapeBuilder producing BoxShape instances

    Raises:
        ValidationError: If the dimensions or color are invalid
    """
    validate_box_dimensions(width, height)
    if len(color) != 4 or not all(0.0 <= channel <= 1.0 for channel in color):
        raise ValidationError(f"Box color must be 4 RGBA channels in 0-1, got {color!r}")

    color = tuple(float(channel) for channel in color)

    def build(length: float) -> BoxShape:
        return BoxShape(
            width=width,
            height=height,
            length=length,
            chamfer_radius=chamfer_radius,
            color=color
        )

    return build


def ensure_shape_length(shape: Any, length: float) -> Any:
    """
    Check that a shape exposing a `length` attribute matches the segment length.

    Shapes without a `length` attribute are opaque and accepted as-is.

    Raises:
        ValidationError: If the shape's length is not a number or differs
            from the segment length
    """
    shape_length = getattr(shape, 'length', None)
    if shape_length is None:
        return shape

    try:
        shape_length = float(shape_length)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Shape length must be a number, got {shape_length!r}") from e

    tolerance = SHAPE_LENGTH_TOLERANCE * max(1.0, abs(length))
    if abs(shape_length - length) > tolerance:
        raise ValidationError(f"Shape length {shape_length} does not match segment length {length}")
    return shape
