"""Tests for TracePoint, Trace construction and resampling."""

import pytest

from pressure_profile import Coordinates, Elevation, Trace, TracePoint


def _pairs(rows):
    return [(Coordinates.create(lat, lng), Elevation.from_meters(elev)) for lat, lng, elev in rows]


ROUTE = [
    (-38.2330, -68.6297, 545),
    (-38.2340, -68.6287, 520),
    (-38.2350, -68.6277, 530),
    (-38.2362, -68.6270, 490),
    (-38.2370, -68.6255, 505),
]


class TestTracePoint:
    def test_create_start(self):
        p = TracePoint.create_start(Coordinates.create(1, 2), Elevation.from_meters(10))
        assert p.index == 0
        assert p.is_start
        assert p.distance_from_start == 0
        assert p.segment_distance is None

    @pytest.mark.parametrize("index", [-1, 1.5, True, "1"])
    def test_rejects_bad_index(self, index):
        with pytest.raises(ValueError):
            TracePoint.create(index, Coordinates.create(1, 2), Elevation.from_meters(10), 0)

    def test_rejects_negative_distance(self):
        with pytest.raises(ValueError):
            TracePoint.create(1, Coordinates.create(1, 2), Elevation.from_meters(10), -0.1)

    def test_segment_distance_is_written_once(self):
        p = TracePoint.create(1, Coordinates.create(1, 2), Elevation.from_meters(10), 100)
        p.set_segment_distance(100)
        assert p.segment_distance == 100
        with pytest.raises(ValueError):
            p.set_segment_distance(50)

    def test_rejects_negative_segment_distance(self):
        p = TracePoint.create(1, Coordinates.create(1, 2), Elevation.from_meters(10), 100)
        with pytest.raises(ValueError):
            p.set_segment_distance(-1)
        assert p.segment_distance is None

    def test_fields_are_read_only(self):
        p = TracePoint.create(1, Coordinates.create(1, 2), Elevation.from_meters(10), 100)
        with pytest.raises(ValueError):
            p.distance_from_start = 5

    def test_relations(self):
        a = TracePoint.create(0, Coordinates.create(0, 0), Elevation.from_meters(100), 0)
        b = TracePoint.create(1, Coordinates.create(0, 1), Elevation.from_meters(80), 111_195)
        assert a.is_before(b) and b.is_after(a)
        assert a.elevation_difference_to(b) == 20
        assert a.distance_to(b) == pytest.approx(111_195, rel=1e-4)
        assert not a.equals(b)
        assert a.equals(TracePoint.create(0, Coordinates.create(0, 0.0000001), Elevation.from_meters(100.001), 5))

    def test_to_dict(self):
        p = TracePoint.create(2, Coordinates.create(1, 2), Elevation.from_meters(10), 100, segment_distance=40)
        assert p.to_dict() == {
            "index": 2,
            "latitude": 1,
            "longitude": 2,
            "elevation_m": 10,
            "distance_from_start_m": 100,
            "segment_distance_m": 40,
        }


class TestTraceConstruction:
    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            Trace([])
        with pytest.raises(ValueError):
            Trace.from_coordinates_and_elevations([])

    def test_rejects_index_mismatch(self, make_points):
        points = make_points([100, 100, 100], 10)
        with pytest.raises(ValueError, match="index mismatch"):
            Trace([points[0], points[2]])

    def test_rejects_decreasing_distance(self):
        c = Coordinates.create(0, 0)
        e = Elevation.from_meters(0)
        points = [TracePoint.create(0, c, e, 0), TracePoint.create(1, c, e, 50), TracePoint.create(2, c, e, 49)]
        with pytest.raises(ValueError, match="non-decreasing"):
            Trace(points)

    def test_accepts_repeated_distance(self):
        c = Coordinates.create(0, 0)
        e = Elevation.from_meters(0)
        trace = Trace([TracePoint.create(0, c, e, 0), TracePoint.create(1, c, e, 0)])
        assert trace.total_distance == 0

    def test_points_are_not_mutable_through_accessor(self, make_points):
        trace = Trace(make_points([1, 2, 3], 10))
        assert isinstance(trace.points, tuple)
        assert len(trace) == 3

    def test_holds_its_own_copies_of_the_points(self, make_points):
        original = make_points([100, 200, 150], 100)
        trace = Trace(original)

        assert trace.points == tuple(original)
        assert all(kept is not given for kept, given in zip(trace.points, original))

        original[1].set_segment_distance(100)
        assert original[1].segment_distance == 100
        assert trace.points[1].segment_distance is None

    def test_copies_keep_segment_distance(self):
        c = Coordinates.create(0, 0)
        e = Elevation.from_meters(0)
        trace = Trace([TracePoint.create(0, c, e, 0), TracePoint.create(1, c, e, 25, segment_distance=25)])
        assert trace.points[1].segment_distance == 25
        with pytest.raises(ValueError, match="already recorded"):
            trace.points[1].set_segment_distance(30)

    def test_from_coordinates_and_elevations(self):
        trace = Trace.from_coordinates_and_elevations(_pairs(ROUTE))
        points = trace.points
        assert [p.index for p in points] == list(range(len(ROUTE)))
        assert points[0].distance_from_start == 0
        assert points[0].segment_distance is None
        for prev, curr in zip(points, points[1:]):
            assert curr.segment_distance == pytest.approx(prev.distance_to(curr))
            assert curr.distance_from_start == pytest.approx(prev.distance_from_start + curr.segment_distance)
            assert prev.distance_from_start <= curr.distance_from_start

    def test_duplicate_vertices_keep_order(self):
        rows = [ROUTE[0], ROUTE[0], ROUTE[1]]
        trace = Trace.from_coordinates_and_elevations(_pairs(rows))
        assert trace.points[1].distance_from_start == 0
        assert trace.points[1].segment_distance == 0


class TestTraceQueries:
    @pytest.fixture
    def trace(self):
        return Trace.from_coordinates_and_elevations(_pairs(ROUTE))

    def test_distance_properties(self, trace):
        assert trace.total_distance == trace.end_point.distance_from_start
        assert trace.total_distance_km == pytest.approx(trace.total_distance / 1000)
        assert trace.point_count == 5

    def test_elevation_profile(self, trace):
        profile = trace.elevation_profile
        assert profile.min.meters == 490
        assert profile.max.meters == 545
        assert profile.start.meters == 545
        assert profile.end.meters == 505
        assert profile.difference == -40
        assert trace.min_elevation.meters == 490
        assert trace.max_elevation.meters == 545
        assert trace.elevation_difference == -40

    def test_get_point_at(self, trace):
        assert trace.get_point_at(2).index == 2
        with pytest.raises(IndexError):
            trace.get_point_at(5)
        with pytest.raises(IndexError):
            trace.get_point_at(-1)

    def test_get_point_closest_to_distance(self, make_points):
        trace = Trace(make_points([0, 0, 0, 0], 100))
        assert trace.get_point_closest_to_distance(140).index == 1
        assert trace.get_point_closest_to_distance(160).index == 2
        assert trace.get_point_closest_to_distance(150).index == 1
        assert trace.get_point_closest_to_distance(10_000).index == 3

    def test_get_points_in_range_is_inclusive(self, make_points):
        trace = Trace(make_points([0, 0, 0, 0, 0], 100))
        assert [p.index for p in trace.get_points_in_range(100, 300)] == [1, 2, 3]
        assert trace.get_points_in_range(401, 500) == []

    def test_to_dict(self, trace):
        data = trace.to_dict()
        assert data["point_count"] == 5
        assert data["elevation_profile"]["difference_m"] == -40
        assert len(data["points"]) == 5


class TestResampling:
    def test_rejects_non_positive_interval(self, make_points):
        trace = Trace(make_points([0, 0], 100))
        for bad in (0, -10, float("nan"), "50", None):
            with pytest.raises(ValueError):
                trace.generate_points_at_interval(bad)

    def test_interpolates_at_fixed_steps(self, make_points):
        trace = Trace(make_points([100, 200, 150], 100))
        points = trace.generate_points_at_interval(50)

        assert [p.index for p in points] == [0, 1, 2, 3, 4]
        assert [p.distance_from_start for p in points] == [0, 50, 100, 150, 200]
        assert [p.elevation_meters for p in points] == pytest.approx([100, 150, 200, 175, 150])
        assert points[1].latitude == pytest.approx(-38.2330 - 0.00005)
        assert points[1].longitude == pytest.approx(-68.6297 + 0.00005)

    def test_appends_real_end_point(self, make_points):
        trace = Trace(make_points([100, 110], 120))
        points = trace.generate_points_at_interval(50)
        assert [p.distance_from_start for p in points] == [0, 50, 100, 120]
        assert points[-1].index == 3
        assert points[-1].coordinates == trace.end_point.coordinates
        assert points[-1].elevation_meters == 110

    def test_interval_longer_than_trace(self, survey_records):
        trace = Trace.from_coordinates_and_elevations(
            _pairs([(r["latitude"], r["longitude"], r["elevation_m"]) for r in survey_records])
        )
        points = trace.generate_points_at_interval(500)
        assert len(points) == 2
        assert points[0].distance_from_start == 0
        assert points[1].index == 1
        assert points[1].distance_from_start == trace.total_distance

    def test_single_point_trace(self, make_points):
        trace = Trace(make_points([100], 0))
        points = trace.generate_points_at_interval(50)
        assert len(points) == 1
        assert points[0].equals(trace.start_point)

    def test_leaves_original_untouched(self, make_points):
        original = make_points([100, 200, 150], 100)
        trace = Trace(original)
        points = trace.generate_points_at_interval(30)
        assert trace.points == tuple(original)
        assert points[0] is not trace.start_point

    def test_resampling_is_stable(self):
        trace = Trace.from_coordinates_and_elevations(_pairs(ROUTE))
        first = trace.generate_points_at_interval(50)
        second = Trace(first).generate_points_at_interval(50)

        assert len(second) == len(first)
        for a, b in zip(first, second):
            assert b.latitude == pytest.approx(a.latitude, abs=1e-9)
            assert b.longitude == pytest.approx(a.longitude, abs=1e-9)
            assert b.elevation_meters == pytest.approx(a.elevation_meters, abs=1e-9)

    def test_resampled_points_form_a_valid_trace(self):
        trace = Trace.from_coordinates_and_elevations(_pairs(ROUTE))
        points = trace.generate_points_at_interval(37.5)
        resampled = Trace(points)
        assert resampled.total_distance == pytest.approx(trace.total_distance)

    def test_is_deterministic(self):
        trace = Trace.from_coordinates_and_elevations(_pairs(ROUTE))
        first = [p.to_dict() for p in trace.generate_points_at_interval(25)]
        second = [p.to_dict() for p in trace.generate_points_at_interval(25)]
        assert first == second
