"""
Rendering package.

Backends that place path segments in a scene, and the factory to pick one.
"""

from .backends import (
    RenderingBackend,
    RecordingBackend,
    SceneGraphBackend,
    Placement,
    SceneNode,
)
from .factory import RenderingBackendFactory, get_backend

__all__ = [
    'RenderingBackend',
    'RecordingBackend',
    'SceneGraphBackend',
    'Placement',
    'SceneNode',
    'RenderingBackendFactory',
    'get_backend',
]
