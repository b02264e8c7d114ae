"""Shared fixtures: synthetic segments with known lengths."""

import math

import pytest

# Meters per degree of latitude on the haversine sphere (R = 6,371,000 m)
M_PER_DEG_LAT = 6_371_000.0 * math.pi / 180


def make_segment(seg_id, start_lat, start_lon, length_m, tags=None, n_points=2, reverse=False):
    """A straight north-going segment of exactly length_m meters.

    Distances along a meridian do not depend on latitude, so lengths are
    exact wherever the segment is placed.
    """
    from loop_walks.models import Coordinate, MapSegment

    step = length_m / M_PER_DEG_LAT / (n_points - 1)
    points = [Coordinate(lat=start_lat + i * step, lon=start_lon) for i in range(n_points)]
    if reverse:
        points.reverse()
    return MapSegment(id=seg_id, points=points, tags=tags or {})


def north_of(lat, meters):
    return lat + meters / M_PER_DEG_LAT


@pytest.fixture
def segment():
    return make_segment


@pytest.fixture
def connected_trio():
    """Three 500m segments, 30m apart end to start; the third is stored reversed."""
    s1 = make_segment(1, 48.0, 2.0, 500)
    s2 = make_segment(2, north_of(48.0, 530), 2.0, 500)
    s3 = make_segment(3, north_of(48.0, 1060), 2.0, 500, reverse=True)
    return [s1, s2, s3]


@pytest.fixture(autouse=True)
def reset_session_state():
    from loop_walks.config import SynthesisSettings
    from loop_walks.state import state, RouteStore

    state.settings = SynthesisSettings()
    state.store = RouteStore()
    state.last_area_hash = None
    yield
