"""
Tests for the path overlay service.
"""

import io

import pytest

from core.models.geo import GeoPoint
from core.polyline import MercatorPolyline
from core.rendering import RecordingBackend, SceneGraphBackend
from core.segments import SegmenterConfig
from core.validation import ValidationError
from services.overlay_service import PathOverlay, build_overlay_from_gpx


class TestPathOverlay:
    """Tests for PathOverlay construction and rendering."""

    def test_segments_built_eagerly(self, square_path):
        overlay = PathOverlay(points=square_path, altitude=3.0, tag="loop")
        assert len(overlay) == 3
        assert isinstance(overlay.segments, tuple)
        assert overlay.tag == "loop"
        assert all(s.anchor.altitude == 3.0 for s in overlay)

    def test_from_polyline(self):
        polyline = MercatorPolyline.from_coordinates([(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)])
        overlay = PathOverlay(polyline=polyline, altitude=4.0)
        assert len(overlay) == 2
        assert all(p.altitude == 4.0 for p in overlay.points)
        assert overlay.segments[0].bearing == pytest.approx(90)

    def test_requires_exactly_one_source(self, square_path):
        with pytest.raises(ValidationError):
            PathOverlay(altitude=0)
        with pytest.raises(ValidationError):
            PathOverlay(points=square_path, polyline=MercatorPolyline([]), altitude=0)

    def test_empty_and_single_point_paths(self):
        assert len(PathOverlay(points=[], altitude=0)) == 0
        assert len(PathOverlay(points=[GeoPoint(51.5, -0.1)], altitude=0)) == 0

    def test_tag_defaults_to_empty(self, square_path):
        overlay = PathOverlay(points=square_path, altitude=0)
        assert overlay.tag == ""
        assert PathOverlay(points=[], altitude=0).tag == ""

    def test_altitude_defaults_from_settings(self, square_path):
        overlay = PathOverlay(points=square_path)
        assert overlay.altitude == 0.0

    def test_config_respected(self, square_path):
        config = SegmenterConfig(altitude=9.0, tag="cfg")
        overlay = PathOverlay(points=square_path, config=config)
        assert overlay.tag == "cfg"
        assert overlay.altitude == 9.0

    def test_render_in_order(self, square_path):
        overlay = PathOverlay(points=square_path, altitude=0, tag="x")
        backend = overlay.render(RecordingBackend())
        assert len(backend.placements) == 3
        assert [p.anchor for p in backend.placements] == [s.anchor for s in overlay.segments]

    def test_render_to_scene(self, square_path):
        overlay = PathOverlay(points=square_path, altitude=0)
        backend = overlay.render(SceneGraphBackend())
        assert [node.name for node in backend.nodes] == ["segment-0", "segment-1", "segment-2"]

    def test_rendering_twice_gives_same_result(self, square_path):
        overlay = PathOverlay(points=square_path, altitude=0)
        first = overlay.render(RecordingBackend()).placements
        second = overlay.render(RecordingBackend()).placements
        assert first == second

    def test_summary_and_dataframe(self, square_path):
        overlay = PathOverlay(points=square_path, altitude=2.0, tag="s")
        summary = overlay.summary()
        assert summary['count'] == 3
        assert summary['point_count'] == 4
        assert summary['tag'] == "s"
        assert summary['altitude'] == 2.0

        df = overlay.to_dataframe()
        assert len(df) == 3
        assert df['length'].sum() == pytest.approx(summary['total_length_m'])

    def test_records_are_json_ready(self, square_path):
        records = PathOverlay(points=square_path, altitude=0).to_records()
        assert records[0]['shape']['length'] == records[0]['length']
        assert isinstance(records[0]['shape']['color'], list)


class TestBuildOverlayFromGpx:
    """Tests for build_overlay_from_gpx."""

    def test_tag_defaults_to_gpx_name(self, sample_track_gpx):
        overlay, metadata = build_overlay_from_gpx(io.StringIO(sample_track_gpx), altitude=20.0)
        assert len(overlay) == 3
        assert overlay.tag == "Morning Walk"
        assert metadata['source'] == 'track'

    def test_gpx_elevation_wins(self, sample_track_gpx):
        """Per-point elevations are kept; the altitude fills the gaps."""
        overlay, _ = build_overlay_from_gpx(io.StringIO(sample_track_gpx), altitude=20.0)
        first, _, last = overlay.segments
        assert first.anchor.altitude == pytest.approx(13.0)
        assert last.end.altitude == 20.0
        assert last.anchor.altitude == pytest.approx(18.0)

    def test_explicit_tag(self, sample_track_gpx):
        overlay, _ = build_overlay_from_gpx(io.StringIO(sample_track_gpx), tag="mine")
        assert overlay.tag == "mine"

    def test_invalid_gpx_raises(self):
        with pytest.raises(ValidationError):
            build_overlay_from_gpx(io.StringIO("<gpx"))
