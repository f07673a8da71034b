"""
Shared fixtures for the test suite.
"""

import pytest

from core.models.geo import GeoPoint


SAMPLE_TRACK_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="trail-lens-tests" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning Walk</name>
    <trkseg>
      <trkpt lat="51.5000" lon="-0.1000"><ele>12.0</ele></trkpt>
      <trkpt lat="51.5010" lon="-0.1000"><ele>14.0</ele></trkpt>
      <trkpt lat="51.5010" lon="-0.0980"><ele>16.0</ele></trkpt>
      <trkpt lat="51.5000" lon="-0.0980"></trkpt>
    </trkseg>
  </trk>
</gpx>
"""

SAMPLE_ROUTE_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="trail-lens-tests" xmlns="http://www.topografix.com/GPX/1/1">
  <rte>
    <name>Harbour Route</name>
    <rtept lat="45.0000" lon="-120.0000"></rtept>
    <rtept lat="45.0100" lon="-120.0000"></rtept>
  </rte>
</gpx>
"""

EMPTY_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="trail-lens-tests" xmlns="http://www.topografix.com/GPX/1/1">
</gpx>
"""


@pytest.fixture
def sample_track_gpx():
    return SAMPLE_TRACK_GPX


@pytest.fixture
def sample_route_gpx():
    return SAMPLE_ROUTE_GPX


@pytest.fixture
def empty_gpx():
    return EMPTY_GPX


@pytest.fixture
def square_path():
    """Four points: north, east, then south legs of one degree each."""
    return [
        GeoPoint(0.0, 0.0),
        GeoPoint(1.0, 0.0),
        GeoPoint(1.0, 1.0),
        GeoPoint(0.0, 1.0),
    ]
