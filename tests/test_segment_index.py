"""Tests for nearest connectable segment lookup."""
from loop_walks.models import Coordinate, MapSegment
from conftest import make_segment, north_of


def test_finds_segment_within_radius():
    from loop_walks.core.segment_index import find_nearest
    near = make_segment(1, north_of(48.0, 50), 2.0, 300)
    far = make_segment(2, north_of(48.0, 150), 2.0, 300)
    result = find_nearest([far, near], Coordinate(lat=48.0, lon=2.0))
    assert result.id == 1


def test_returns_none_beyond_connection_radius():
    from loop_walks.core.segment_index import find_nearest
    seg = make_segment(1, north_of(48.0, 250), 2.0, 300)
    assert find_nearest([seg], Coordinate(lat=48.0, lon=2.0)) is None


def test_connection_radius_is_200m():
    from loop_walks.core.segment_index import CONNECTION_RADIUS_M
    assert CONNECTION_RADIUS_M == 200.0


def test_custom_radius():
    from loop_walks.core.segment_index import find_nearest
    seg = make_segment(1, north_of(48.0, 250), 2.0, 300)
    result = find_nearest([seg], Coordinate(lat=48.0, lon=2.0), max_distance_m=300)
    assert result is seg


def test_last_point_counts_as_endpoint():
    from loop_walks.core.segment_index import find_nearest
    # Stored north-to-south: its last point is the one 20m away
    seg = make_segment(7, north_of(48.0, 20), 2.0, 1000, reverse=True)
    assert seg.end.lat < seg.start.lat
    result = find_nearest([seg], Coordinate(lat=48.0, lon=2.0))
    assert result is seg


def test_excluded_ids_are_skipped():
    from loop_walks.core.segment_index import find_nearest
    near = make_segment(1, north_of(48.0, 10), 2.0, 300)
    other = make_segment(2, north_of(48.0, 100), 2.0, 300)
    result = find_nearest([near, other], Coordinate(lat=48.0, lon=2.0), excluded={1})
    assert result.id == 2


def test_all_excluded_returns_none():
    from loop_walks.core.segment_index import find_nearest
    seg = make_segment(1, north_of(48.0, 10), 2.0, 300)
    assert find_nearest([seg], Coordinate(lat=48.0, lon=2.0), excluded={1}) is None


def test_empty_candidates_returns_none():
    from loop_walks.core.segment_index import find_nearest
    assert find_nearest([], Coordinate(lat=0, lon=0)) is None


def test_ties_resolve_to_first_in_input_order():
    from loop_walks.core.segment_index import SegmentIndex
    a = make_segment(10, north_of(48.0, 40), 2.0, 300)
    b = make_segment(20, north_of(48.0, 40), 2.0, 600)
    point = Coordinate(lat=48.0, lon=2.0)
    assert SegmentIndex([a, b]).find_nearest(point).id == 10
    assert SegmentIndex([b, a]).find_nearest(point).id == 20


def test_single_point_segments_are_dropped():
    from loop_walks.core.segment_index import SegmentIndex
    stub = MapSegment(id=99, points=[Coordinate(lat=48.0, lon=2.0)])
    seg = make_segment(1, north_of(48.0, 50), 2.0, 300)
    index = SegmentIndex([stub, seg])
    assert len(index) == 1
    assert index.find_nearest(Coordinate(lat=48.0, lon=2.0)).id == 1


def test_endpoint_distances_use_closer_end():
    import pytest
    from loop_walks.core.segment_index import SegmentIndex
    seg = make_segment(1, north_of(48.0, 100), 2.0, 500)
    distances = SegmentIndex([seg]).endpoint_distances(Coordinate(lat=48.0, lon=2.0))
    assert distances[0] == pytest.approx(100, abs=1e-3)
