"""
Tests for rendering backends and the local coordinate mapper.
"""

import math

import pytest

from core.local_frame import EnuMapper
from core.models.geo import GeoPoint
from core.rendering import (
    RecordingBackend,
    SceneGraphBackend,
    RenderingBackendFactory,
    get_backend,
)
from core.segments import build_segments
from core.validation import ValidationError


class TestEnuMapper:
    """Tests for EnuMapper."""

    def test_origin_maps_to_zero(self):
        mapper = EnuMapper(GeoPoint(45.0, 7.0, 100.0))
        assert mapper.to_local(GeoPoint(45.0, 7.0, 100.0)) == pytest.approx((0.0, 0.0, 0.0))

    def test_axes(self):
        """East is +x, up is +y, north is -z."""
        mapper = EnuMapper(GeoPoint(0.0, 0.0, 0.0))

        x, y, z = mapper.to_local(GeoPoint(0.0, 0.001, 0.0))
        assert x > 0 and z == pytest.approx(0)

        x, y, z = mapper.to_local(GeoPoint(0.001, 0.0, 0.0))
        assert z < 0 and x == pytest.approx(0)

        x, y, z = mapper.to_local(GeoPoint(0.0, 0.0, 12.0))
        assert y == pytest.approx(12.0)

    def test_distance_scale(self):
        """A thousandth of a degree north is about 111 meters."""
        _, _, z = EnuMapper(GeoPoint(0.0, 0.0)).to_local(GeoPoint(0.001, 0.0))
        assert -z == pytest.approx(111.2, rel=0.01)

    def test_missing_altitudes_default_to_origin(self):
        mapper = EnuMapper(GeoPoint(0.0, 0.0, 50.0))
        _, y, _ = mapper.to_local(GeoPoint(0.0, 0.001))
        assert y == 0.0

    def test_antimeridian(self):
        """A point just across the antimeridian is close by, not 360 degrees away."""
        mapper = EnuMapper(GeoPoint(0.0, 179.999))
        x, _, _ = mapper.to_local(GeoPoint(0.0, -179.999))
        assert x == pytest.approx(222.4, rel=0.01)

    def test_none_origin_raises(self):
        with pytest.raises(ValidationError):
            EnuMapper(None)


class TestRecordingBackend:
    """Tests for RecordingBackend."""

    def test_records_placements_in_order(self, square_path):
        segments = build_segments(square_path, altitude=1.5, tag="walk")
        backend = RecordingBackend()
        count = backend.place_all(segments)

        assert count == 3
        assert [p.anchor for p in backend.placements] == [s.anchor for s in segments]
        assert [p.yaw_degrees for p in backend.placements] == [-s.bearing for s in segments]
        assert all(p.tag == "walk" for p in backend.placements)
        assert backend.placements[0].shape is segments[0].shape

    def test_clear(self, square_path):
        backend = RecordingBackend()
        backend.place_all(build_segments(square_path, altitude=0))
        backend.clear()
        assert backend.placements == []


class TestSceneGraphBackend:
    """Tests for SceneGraphBackend."""

    def test_nodes_positioned_and_rotated(self):
        segments = build_segments([(0.0, 0.0), (0.0, 1.0)], altitude=0)
        backend = SceneGraphBackend(mapper=EnuMapper(GeoPoint(0.0, 0.0, 0.0)))
        backend.place_all(segments)

        assert len(backend.nodes) == 1
        node = backend.nodes[0]
        x, y, z = node.position
        assert x == pytest.approx(55597, rel=0.01)
        assert y == pytest.approx(0.0)
        assert z == pytest.approx(0.0, abs=1e-6)
        assert node.euler_y == pytest.approx(-math.pi / 2)
        assert node.name == "segment-0"
        assert node.shape.length == segments[0].length

    def test_default_origin_is_first_segment_start(self, square_path):
        segments = build_segments(square_path, altitude=0)
        backend = SceneGraphBackend()
        backend.place_all(segments)
        assert backend.mapper.origin == segments[0].start
        # First leg heads north from the origin: anchor is ahead on -z
        _, _, z = backend.nodes[0].position
        assert z < 0

    def test_empty_input(self):
        backend = SceneGraphBackend()
        assert backend.place_all([]) == 0
        assert backend.nodes == []


class TestRenderingBackendFactory:
    """Tests for the backend factory."""

    def test_create_by_name(self):
        assert isinstance(get_backend('recording'), RecordingBackend)
        assert isinstance(get_backend('SCENE'), SceneGraphBackend)

    def test_kwargs_passed_through(self):
        backend = get_backend('scene', name_prefix='leg')
        assert backend.name_prefix == 'leg'

    def test_unknown_backend_raises(self):
        with pytest.raises(ValueError):
            get_backend('opengl')

    def test_available_backends(self):
        available = RenderingBackendFactory.get_available_backends()
        assert set(available) == {'scene', 'recording'}
        assert RenderingBackendFactory.get_default_backend() in available
