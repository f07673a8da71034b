"""
Application settings and configuration.

This module contains application-specific configuration, API settings, and defaults.
For algorithmic constants, see core.constants module.
"""

import os
import logging
from typing import Dict, Any

# Import algorithmic constants from core module
from core.constants import (
    DEFAULT_TAG,
    MIDPOINT_GREAT_CIRCLE,
    MIDPOINT_METHODS,
    DEFAULT_BOX_WIDTH_METERS,
    DEFAULT_BOX_HEIGHT_METERS,
    DEFAULT_BOX_COLOR
)

# App information
APP_NAME = "Trail Lens"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Turn geographic paths into oriented segments for AR overlays"

# Overlay defaults (environment overrides for deployments)
DEFAULT_ALTITUDE = float(os.environ.get("TRAIL_LENS_DEFAULT_ALTITUDE", "0.0"))  # Meters
DEFAULT_MIDPOINT_METHOD = os.environ.get("TRAIL_LENS_MIDPOINT_METHOD", MIDPOINT_GREAT_CIRCLE)
DEFAULT_STRICT_COORDINATES = False  # Accept and propagate out-of-range coordinates
# DEFAULT_TAG imported from core.constants

# Box shape defaults (reference core constants)
DEFAULT_BOX_WIDTH = DEFAULT_BOX_WIDTH_METERS  # From core.constants
DEFAULT_BOX_HEIGHT = DEFAULT_BOX_HEIGHT_METERS  # From core.constants

# API limits
MAX_UPLOAD_SIZE_BYTES = 50 * 1024 * 1024  # 50MB
MIN_UPLOAD_SIZE_BYTES = 100  # Smaller files cannot hold a GPX document
MAX_POINTS_PER_REQUEST = 100000

# API server
API_HOST = os.environ.get("TRAIL_LENS_API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("TRAIL_LENS_API_PORT", "8000"))

# CORS origins for browser frontends
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "TRAIL_LENS_CORS_ORIGINS",
        "http://localhost:3000,http://localhost:3001"
    ).split(",")
    if origin.strip()
]

# Logging configuration
LOGGING_CONFIG = {
    "level": getattr(logging, os.environ.get("TRAIL_LENS_LOG_LEVEL", "INFO").upper(), logging.INFO),
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


# =============== Configuration Classes ===============
# These classes provide typed access to configuration sections

class OverlayConfig:
    """Configuration parameters for building path overlays."""
    ALTITUDE = DEFAULT_ALTITUDE
    TAG = DEFAULT_TAG
    MIDPOINT_METHOD = DEFAULT_MIDPOINT_METHOD
    MIDPOINT_METHODS = MIDPOINT_METHODS
    STRICT = DEFAULT_STRICT_COORDINATES

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get overlay configuration as a dictionary."""
        return {
            'altitude': cls.ALTITUDE,
            'tag': cls.TAG,
            'midpoint_method': cls.MIDPOINT_METHOD,
            'strict': cls.STRICT,
        }


class BoxConfig:
    """Configuration parameters for the default box shape."""
    WIDTH = DEFAULT_BOX_WIDTH
    HEIGHT = DEFAULT_BOX_HEIGHT
    COLOR = DEFAULT_BOX_COLOR

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get box configuration as a dictionary."""
        return {
            'width': cls.WIDTH,
            'height': cls.HEIGHT,
            'color': list(cls.COLOR),
        }


class ApiConfig:
    """Configuration parameters for the HTTP API."""
    MAX_UPLOAD_SIZE = MAX_UPLOAD_SIZE_BYTES
    MIN_UPLOAD_SIZE = MIN_UPLOAD_SIZE_BYTES
    MAX_POINTS = MAX_POINTS_PER_REQUEST
    CORS_ORIGINS = CORS_ORIGINS
    HOST = API_HOST
    PORT = API_PORT

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get API configuration as a dictionary."""
        return {
            'max_upload_size': cls.MAX_UPLOAD_SIZE,
            'min_upload_size': cls.MIN_UPLOAD_SIZE,
            'max_points': cls.MAX_POINTS,
            'cors_origins': list(cls.CORS_ORIGINS),
            'host': cls.HOST,
            'port': cls.PORT,
        }
