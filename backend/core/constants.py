"""
Constants for the Trail Lens application.

This module contains the mathematical, geodetic and rendering-default
constants used throughout the codebase. Constants are grouped by their purpose
and documented with their units where applicable.
"""

# =============================================================================
# ANGLE CONSTANTS (all in degrees)
# =============================================================================

FULL_CIRCLE_DEGREES = 360
ANGLE_WRAP_BOUNDARY_DEGREES = 180  # Used for angle wrapping calculations
MAX_LATITUDE_DEGREES = 90
MAX_LONGITUDE_DEGREES = 180

# Bearing returned when two points coincide and no heading exists
COINCIDENT_BEARING_DEGREES = 0.0

# =============================================================================
# EARTH MODEL
# =============================================================================

# IUGG mean earth radius, used by the spherical formulas (haversine, midpoint)
MEAN_EARTH_RADIUS_METERS = 6371008.8

# WGS84 semi-major axis, used by spherical Web Mercator (EPSG:3857)
WGS84_SEMI_MAJOR_AXIS_METERS = 6378137.0

# Web Mercator is undefined at the poles; latitudes are clamped to this value
MERCATOR_MAX_LATITUDE_DEGREES = 85.05112878

# Distances at or below this are treated as coincident points
COINCIDENT_DISTANCE_METERS = 1e-9

# =============================================================================
# SEGMENT DEFAULTS
# =============================================================================

DEFAULT_TAG = ""

# Midpoint strategies
MIDPOINT_GREAT_CIRCLE = "great_circle"
MIDPOINT_LINEAR = "linear"
MIDPOINT_METHODS = (MIDPOINT_GREAT_CIRCLE, MIDPOINT_LINEAR)

# Default box shape (meters); length always equals the segment distance
DEFAULT_BOX_WIDTH_METERS = 1.0
DEFAULT_BOX_HEIGHT_METERS = 0.2
DEFAULT_BOX_CHAMFER_RADIUS = 0.0

# Default box color as RGBA in the 0-1 range
DEFAULT_BOX_COLOR = (47.0 / 255.0, 125.0 / 255.0, 255.0 / 255.0, 1.0)

# Relative tolerance used when checking that a shape length matches its segment
SHAPE_LENGTH_TOLERANCE = 1e-9

# =============================================================================
# VALIDATION
# =============================================================================

assert DEFAULT_BOX_WIDTH_METERS > 0 and DEFAULT_BOX_HEIGHT_METERS > 0, \
    "Default box dimensions must be positive"
assert all(0.0 <= channel <= 1.0 for channel in DEFAULT_BOX_COLOR), \
    "Default box color channels must be in the 0-1 range"
