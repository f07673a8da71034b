"""
Tests for the FastAPI backend.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from config.settings import ApiConfig


@pytest.fixture
def client():
    return TestClient(app)


class TestInfoEndpoints:
    """Tests for the informational endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "POST /api/segments" in response.json()["endpoints"]

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_config(self, client):
        response = client.get("/api/config")
        assert response.status_code == 200
        body = response.json()
        assert body["defaults"]["tag"] == ""
        assert body["defaults"]["box"]["width"] == 1.0
        assert "great_circle" in body["options"]["midpoint_method"]

    def test_api_settings(self):
        settings = ApiConfig.as_dict()
        assert settings["max_points"] == 100000
        assert isinstance(settings["port"], int)


class TestCreateSegments:
    """Tests for POST /api/segments."""

    def test_one_degree_east(self, client):
        response = client.post("/api/segments", json={
            "points": [
                {"latitude": 0, "longitude": 0, "altitude": 0},
                {"latitude": 0, "longitude": 1, "altitude": 0},
            ],
            "altitude": 0,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["summary"]["count"] == 1
        segment = body["segments"][0]
        assert segment["length"] == pytest.approx(111195, rel=0.01)
        assert segment["bearing"] == pytest.approx(90)
        assert segment["yaw_degrees"] == pytest.approx(-90)
        assert segment["shape"]["length"] == segment["length"]

    def test_empty_points(self, client):
        response = client.post("/api/segments", json={"points": [], "altitude": 0})
        assert response.status_code == 200
        assert response.json()["segments"] == []
        assert response.json()["summary"]["count"] == 0

    def test_tag_and_box(self, client):
        response = client.post("/api/segments", json={
            "points": [
                {"latitude": 45.0, "longitude": -120.0},
                {"latitude": 45.001, "longitude": -120.0},
                {"latitude": 45.001, "longitude": -119.999},
            ],
            "altitude": 5,
            "tag": "trail",
            "box": {"width": 2.0, "height": 0.5},
        })
        assert response.status_code == 200
        segments = response.json()["segments"]
        assert len(segments) == 2
        assert all(s["tag"] == "trail" for s in segments)
        assert segments[0]["shape"]["width"] == 2.0
        assert segments[0]["anchor_altitude"] == 5.0

    def test_strict_mode_rejects_bad_latitude(self, client):
        response = client.post("/api/segments", json={
            "points": [
                {"latitude": 95, "longitude": 0},
                {"latitude": 95, "longitude": 1},
            ],
            "altitude": 0,
            "strict": True,
        })
        assert response.status_code == 400

    def test_unknown_midpoint_method(self, client):
        response = client.post("/api/segments", json={
            "points": [{"latitude": 0, "longitude": 0}, {"latitude": 0, "longitude": 1}],
            "altitude": 0,
            "midpoint_method": "spline",
        })
        assert response.status_code == 400

    def test_invalid_box(self, client):
        response = client.post("/api/segments", json={
            "points": [{"latitude": 0, "longitude": 0}, {"latitude": 0, "longitude": 1}],
            "altitude": 0,
            "box": {"width": -1, "height": 0.2},
        })
        assert response.status_code == 400

    def test_missing_points_field(self, client):
        response = client.post("/api/segments", json={"altitude": 0})
        assert response.status_code == 422


class TestCreateSegmentsFromGpx:
    """Tests for POST /api/segments/gpx."""

    def test_upload(self, client, sample_track_gpx):
        response = client.post(
            "/api/segments/gpx",
            files={"file": ("walk.gpx", sample_track_gpx.encode("utf-8"), "application/gpx+xml")},
            params={"altitude": 20.0},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["summary"]["count"] == 3
        assert body["summary"]["tag"] == "Morning Walk"
        assert body["metadata"]["filename"] == "walk.gpx"

    def test_wrong_extension(self, client, sample_track_gpx):
        response = client.post(
            "/api/segments/gpx",
            files={"file": ("walk.txt", sample_track_gpx.encode("utf-8"), "text/plain")},
        )
        assert response.status_code == 400

    def test_empty_upload(self, client):
        response = client.post(
            "/api/segments/gpx",
            files={"file": ("empty.gpx", b"<gpx/>", "application/gpx+xml")},
        )
        assert response.status_code == 400

    def test_gpx_without_points(self, client, empty_gpx):
        response = client.post(
            "/api/segments/gpx",
            files={"file": ("nothing.gpx", empty_gpx.encode("utf-8"), "application/gpx+xml")},
        )
        assert response.status_code == 400
