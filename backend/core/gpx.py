"""
GPX file parsing and handling.

This module contains functions for loading a path from a GPX file. Track
points are preferred, then route points, then waypoints; elevations are kept
as per-point altitudes.
"""

import os
import gpxpy
import gpxpy.gpx
import logging
from typing import Tuple, Dict, List, Any

from core.models.geo import GeoPoint
from core.validation import validate_file_upload, ValidationError

logger = logging.getLogger(__name__)


def _extract_points(gpx: gpxpy.gpx.GPX) -> Tuple[List[GeoPoint], str]:
    """Return the path points and the GPX element they came from."""
    track_points = [
        GeoPoint(point.latitude, point.longitude, point.elevation)
        for track in gpx.tracks
        for segment in track.segments
        for point in segment.points
    ]
    if track_points:
        return track_points, 'track'

    route_points = [
        GeoPoint(point.latitude, point.longitude, point.elevation)
        for route in gpx.routes
        for point in route.points
    ]
    if route_points:
        return route_points, 'route'

    waypoints = [
        GeoPoint(point.latitude, point.longitude, point.elevation)
        for point in gpx.waypoints
    ]
    return waypoints, 'waypoints'


def load_gpx_points(gpx_file) -> Tuple[List[GeoPoint], Dict[str, Any]]:
    """
    Load and parse a GPX file into a list of path points.

    Args:
        gpx_file: A file-like object (or string) containing GPX data

    Returns:
        tuple: (list of GeoPoint in file order, dict with metadata)

    Raises:
        ValidationError: If file validation or parsing fails, or the file
            holds no points
    """
    try:
        # Validate the uploaded file
        validate_file_upload(gpx_file)

        # Parse the GPX file
        gpx = gpxpy.parse(gpx_file)

    except gpxpy.gpx.GPXException as e:
        raise ValidationError(f"Invalid GPX file format: {str(e)}") from e
    except ValidationError:
        raise
    except Exception as e:
        raise ValidationError(f"Failed to parse GPX file: {str(e)}") from e

    points, source = _extract_points(gpx)
    if not points:
        raise ValidationError("GPX file contains no tracks, routes or waypoints")

    # Extract metadata
    metadata = {
        'name': None,
        'description': None,
        'time': None,
        'author': None,
        'source': source,
        'point_count': len(points),
        'has_elevation': any(point.altitude is not None for point in points),
    }

    # Try to get the path name from GPX data
    if gpx.tracks and gpx.tracks[0].name:
        metadata['name'] = gpx.tracks[0].name
    elif gpx.routes and gpx.routes[0].name:
        metadata['name'] = gpx.routes[0].name
    elif isinstance(getattr(gpx_file, 'name', None), str):
        # Use the filename if available
        filename = os.path.basename(gpx_file.name)
        metadata['name'] = os.path.splitext(filename)[0]

    # Extract other metadata if available
    if gpx.description:
        metadata['description'] = gpx.description
    if gpx.time:
        metadata['time'] = gpx.time
    if gpx.author_name:
        metadata['author'] = gpx.author_name

    logger.info(f"Successfully loaded GPX file with {len(points)} {source} points")
    return points, metadata


def load_gpx_points_from_path(file_path: str) -> Tuple[List[GeoPoint], Dict[str, Any]]:
    """
    Load a GPX file from disk path.

    Args:
        file_path: Path to the GPX file

    Returns:
        tuple: (list of GeoPoint, dict with metadata)

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"GPX file not found: {file_path}")

    with open(file_path, 'r') as f:
        points, metadata = load_gpx_points(f)

        # Use filename if no name was extracted
        if not metadata['name']:
            metadata['name'] = os.path.splitext(os.path.basename(file_path))[0]

        return points, metadata
