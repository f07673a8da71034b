"""
Rendering backend factory.

This module provides a factory pattern for rendering backends.
Currently supports 'scene' (scene-graph descriptors) and 'recording' (no-op).
"""

from typing import Any, Dict, Type

from core.rendering.backends import RenderingBackend, RecordingBackend, SceneGraphBackend


class RenderingBackendFactory:
    """Factory for creating rendering backends."""

    _backends: Dict[str, Type[RenderingBackend]] = {
        'scene': SceneGraphBackend,
        'recording': RecordingBackend,
    }

    @classmethod
    def create_backend(cls, name: str, **kwargs: Any) -> RenderingBackend:
        """
        Create a rendering backend by name.

        Args:
            name: Backend name ('scene' or 'recording')
            **kwargs: Passed to the backend constructor

        Returns:
            RenderingBackend instance

        Raises:
            ValueError: If the backend is not supported
        """
        name_lower = name.lower()

        if name_lower not in cls._backends:
            raise ValueError(f"Unknown rendering backend: {name!r} "
                             f"(available: {sorted(cls._backends)})")

        return cls._backends[name_lower](**kwargs)

    @classmethod
    def get_available_backends(cls) -> Dict[str, str]:
        """Get available backends with descriptions."""
        result = {}
        for backend_name, backend_class in cls._backends.items():
            backend = backend_class()
            result[backend_name] = f"{backend.name}: {backend.description}"
        return result

    @classmethod
    def get_default_backend(cls) -> str:
        """Get the default backend name."""
        return 'scene'


def get_backend(name: str = 'scene', **kwargs: Any) -> RenderingBackend:
    """Convenience function to create a backend by name."""
    return RenderingBackendFactory.create_backend(name, **kwargs)
