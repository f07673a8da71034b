"""
Services package.

Provides the layer between the API and the core segmenter.

Modules:
    overlay_service: Path overlays built from point lists, polylines and GPX files
"""

from services.overlay_service import PathOverlay, build_overlay_from_gpx, default_segmenter_config

__all__ = [
    'PathOverlay',
    'build_overlay_from_gpx',
    'default_segmenter_config',
]
