"""
Input validation utilities for core functions.

The segmenter itself is permissive: it accepts any coordinates it is given.
The functions here guard the boundaries where misuse is a programmer error
(missing input, unusable altitude) and implement the optional strict mode
that rejects geographically invalid coordinates.
"""

import math
import logging
from typing import List, Optional, Any, Iterable, Mapping
from pathlib import Path

from core.models.geo import GeoPoint
from core.constants import (
    MAX_LATITUDE_DEGREES, MAX_LONGITUDE_DEGREES, MIDPOINT_METHODS
)

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


def coerce_point(value: Any, context: str = "Point") -> GeoPoint:
    """
    Convert a supported point representation into a GeoPoint.

    Accepts GeoPoint instances, mappings with 'latitude'/'longitude' (and
    optional 'altitude') keys, and (lat, lon) or (lat, lon, alt) sequences.

    Raises:
        ValidationError: If the value cannot be interpreted as a point
    """
    if isinstance(value, GeoPoint):
        return value

    if isinstance(value, Mapping):
        try:
            altitude = value.get('altitude')
            return GeoPoint(
                float(value['latitude']),
                float(value['longitude']),
                None if altitude is None else float(altitude)
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"{context}: Invalid point mapping {dict(value)!r}") from e

    if isinstance(value, (str, bytes)):
        raise ValidationError(f"{context}: Expected a coordinate, got string {value!r}")

    try:
        return GeoPoint.from_tuple(tuple(value))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{context}: Cannot interpret {value!r} as a point") from e


def validate_points(points: Optional[Iterable[Any]], context: str = "Path") -> List[GeoPoint]:
    """
    Validate a path and normalise it to a list of GeoPoints.

    An empty path is valid. A missing path (None) is not: it signals that no
    input was provided at all, which must not be mistaken for a path that
    simply yields no segments.

    Args:
        points: Sequence of points in any form accepted by coerce_point
        context: Context description for error messages

    Returns:
        List of GeoPoint, in the input order

    Raises:
        ValidationError: If points is None or contains unusable entries
    """
    if points is None:
        raise ValidationError(f"{context}: Points sequence is None")

    if isinstance(points, (str, bytes)):
        raise ValidationError(f"{context}: Expected a sequence of points, got a string")

    try:
        iterator = iter(points)
    except TypeError as e:
        raise ValidationError(f"{context}: Points must be iterable, got {type(points).__name__}") from e

    result = [coerce_point(point, f"{context} point {i}") for i, point in enumerate(iterator)]
    logger.debug(f"{context}: Validated {len(result)} points")
    return result


def validate_altitude(altitude: Any, context: str = "Altitude") -> float:
    """
    Validate and normalise the uniform altitude of a path.

    Returns:
        Altitude in meters as a float

    Raises:
        ValidationError: If altitude is missing or not a finite number
    """
    if altitude is None:
        raise ValidationError(f"{context}: Value is None")

    if isinstance(altitude, bool):
        raise ValidationError(f"{context}: Expected a number, got {altitude!r}")

    try:
        altitude_float = float(altitude)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{context}: Cannot convert to float: {altitude!r}") from e

    if math.isnan(altitude_float) or math.isinf(altitude_float):
        raise ValidationError(f"{context}: Invalid value: {altitude_float}")

    return altitude_float


def validate_coordinates(points: List[GeoPoint], context: str = "Path") -> List[GeoPoint]:
    """
    Strictly validate coordinate ranges.

    Only used when strict mode is enabled; the default segmentation accepts
    and propagates out-of-range coordinates.

    Raises:
        ValidationError: If any latitude, longitude or altitude is invalid
    """
    invalid = []
    for i, point in enumerate(points):
        if not point.is_finite:
            invalid.append(f"{i}: non-finite coordinate ({point.latitude}, {point.longitude})")
        elif not -MAX_LATITUDE_DEGREES <= point.latitude <= MAX_LATITUDE_DEGREES:
            invalid.append(f"{i}: latitude {point.latitude} (must be -90 to 90)")
        elif not -MAX_LONGITUDE_DEGREES <= point.longitude <= MAX_LONGITUDE_DEGREES:
            invalid.append(f"{i}: longitude {point.longitude} (must be -180 to 180)")
        elif point.altitude is not None and not math.isfinite(point.altitude):
            invalid.append(f"{i}: non-finite altitude {point.altitude}")

    if invalid:
        raise ValidationError(f"{context}: {len(invalid)} invalid points - " + "; ".join(invalid[:5]))

    logger.debug(f"{context}: Strict validation passed for {len(points)} points")
    return points


def validate_midpoint_method(method: str) -> str:
    """
    Validate a midpoint method name.

    Raises:
        ValidationError: If the method is not one of MIDPOINT_METHODS
    """
    if method not in MIDPOINT_METHODS:
        raise ValidationError(f"Unknown midpoint method: {method!r} (expected one of {MIDPOINT_METHODS})")
    return method


def validate_box_dimensions(width: float, height: float) -> None:
    """
    Validate box shape dimensions.

    Raises:
        ValidationError: If width or height is not a positive finite number
    """
    for name, value in (('width', width), ('height', height)):
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValidationError(f"Box {name} must be a number, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise ValidationError(f"Box {name} must be positive, got {value}")


def validate_file_upload(uploaded_file: Any, max_size: int = 10 * 1024 * 1024) -> None:
    """
    Validate an uploaded GPX file before processing.

    Args:
        uploaded_file: File-like object, optionally with 'name' and 'size'
        max_size: Maximum accepted size in bytes

    Raises:
        ValidationError: If file validation fails
    """
    if uploaded_file is None:
        raise ValidationError("No file uploaded")

    if hasattr(uploaded_file, 'size') and uploaded_file.size is not None and uploaded_file.size > max_size:
        raise ValidationError(f"File too large: {uploaded_file.size / 1024 / 1024:.1f}MB "
                              f"(max {max_size / 1024 / 1024:.0f}MB)")

    name = getattr(uploaded_file, 'name', None)
    if isinstance(name, str):
        file_path = Path(name)
        if file_path.suffix.lower() != '.gpx':
            raise ValidationError(f"Invalid file type: {file_path.suffix} (expected .gpx)")

    logger.debug(f"File validation passed: {getattr(uploaded_file, 'name', 'unknown')}")
