"""
Rendering backends for path segments.

The segmenter produces geographic descriptors; placing them in a 3D scene is
a backend's job. Every backend exposes a single capability, placing one
segment, so the geometry never depends on a particular engine.
"""

import math
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from core.models.geo import GeoPoint
from core.models.segment import Segment
from core.local_frame import GeoToLocalMapper, EnuMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """What a backend was asked to place: where, how rotated, what, and its label."""
    anchor: GeoPoint
    yaw_degrees: float
    shape: Any
    tag: str


@dataclass(frozen=True)
class SceneNode:
    """
    A scene-graph node descriptor for one segment.

    `euler_y` is the rotation about the vertical axis in radians, already
    sign-flipped for a right-handed, y-up engine.
    """
    name: str
    position: Tuple[float, float, float]  # Meters in the local frame
    euler_y: float  # Radians
    shape: Any
    tag: str


class RenderingBackend(ABC):
    """Abstract base class for segment rendering backends."""

    @abstractmethod
    def place(self, segment: Segment) -> None:
        """
        Place one segment in the scene.

        Args:
            segment: Segment with anchor, bearing, shape and tag
        """
        pass

    def place_all(self, segments: Iterable[Segment]) -> int:
        """
        Place segments in order.

        Returns:
            Number of segments placed
        """
        count = 0
        for segment in segments:
            self.place(segment)
            count += 1
        logger.debug(f"{self.name} backend placed {count} segments")
        return count

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the backend."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Description of the backend."""
        pass


class RecordingBackend(RenderingBackend):
    """
    Backend that records placements without rendering anything.

    Used in tests and anywhere a no-op renderer is needed.
    """

    def __init__(self):
        self.placements: List[Placement] = []

    def place(self, segment: Segment) -> None:
        self.placements.append(Placement(
            anchor=segment.anchor,
            yaw_degrees=segment.yaw_degrees,
            shape=segment.shape,
            tag=segment.tag
        ))

    def clear(self) -> None:
        self.placements = []

    @property
    def name(self) -> str:
        return "Recording"

    @property
    def description(self) -> str:
        return "No-op backend that records placements for inspection"


class SceneGraphBackend(RenderingBackend):
    """
    Backend producing scene-graph node descriptors.

    Anchors are converted to local coordinates with the given mapper. Without
    one, an EnuMapper is created around the start of the first segment placed.
    """

    def __init__(self, mapper: Optional[GeoToLocalMapper] = None, name_prefix: str = "segment"):
        self.mapper = mapper
        self.name_prefix = name_prefix
        self.nodes: List[SceneNode] = []

    def _mapper_for(self, segment: Segment) -> GeoToLocalMapper:
        if self.mapper is None:
            origin = segment.start if segment.start is not None else segment.anchor
            self.mapper = EnuMapper(origin)
            logger.debug(f"Scene origin set to {origin}")
        return self.mapper

    def place(self, segment: Segment) -> None:
        position = self._mapper_for(segment).to_local(segment.anchor)
        self.nodes.append(SceneNode(
            name=f"{self.name_prefix}-{segment.index}",
            position=position,
            euler_y=math.radians(segment.yaw_degrees),
            shape=segment.shape,
            tag=segment.tag
        ))

    @property
    def name(self) -> str:
        return "SceneGraph"

    @property
    def description(self) -> str:
        return "Builds y-up scene node descriptors positioned in a local east/north/up frame"
