"""
Tests for segment generation.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from flare.bundling.curves import bundle_curve
from flare.bundling.segments import (
    ControlNode,
    generate_segments,
    interpolate_points,
    segment_count,
)
from flare.bundling.simulation import ForceSimulation, LinkForce, ManyBodyForce
from flare.loading.records import Airport, Flight
from flare.utils import LinearScale


def make_airport(iata, x, y):
    return Airport(iata=iata, latitude=x, longitude=y, x=x, y=y)


def make_flight(source, target, count=1):
    return Flight(source.iata, target.iata, count, source=source, target=target)


@pytest.fixture
def scale():
    """Segment scale over a 100 unit canvas."""
    return LinearScale(domain=(0, 100), range_=(3, 10))


class TestSegmentCount:
    """Tests for control node counts."""

    def test_scale_ends(self, scale):
        """Test counts at both ends of the scale."""
        assert segment_count(0, scale) == 3
        assert segment_count(100, scale) == 10

    def test_rounds_half_up(self, scale):
        """Test 6.5 rounds to 7."""
        assert segment_count(50, scale) == 7

    def test_never_negative(self):
        """Test counts are clamped at zero."""
        scale = LinearScale(domain=(0, 10), range_=(0, -5))
        assert segment_count(10, scale) == 0


class TestInterpolatePoints:
    """Tests for evenly spaced control nodes."""

    def test_even_spacing(self):
        """Test nodes sit at indices 1..N of [0, N + 1]."""
        source = make_airport("A", 0, 0)
        target = make_airport("B", 40, 20)
        points = interpolate_points(source, target, 3)

        assert [(p.x, p.y) for p in points] == [
            pytest.approx((10, 5)),
            pytest.approx((20, 10)),
            pytest.approx((30, 15)),
        ]

    def test_free_nodes(self):
        """Test control nodes start unpinned and at rest."""
        points = interpolate_points(make_airport("A", 0, 0), make_airport("B", 1, 1), 2)
        for point in points:
            assert isinstance(point, ControlNode)
            assert not point.is_fixed
            assert point.vx == 0 and point.vy == 0

    def test_zero_nodes(self):
        """Test no control nodes."""
        assert interpolate_points(make_airport("A", 0, 0), make_airport("B", 1, 1), 0) == []


class TestGenerateSegments:
    """Tests for turning edges into bundles."""

    def test_airports_fixed(self, scale):
        """Test existing nodes are pinned where they are."""
        a, b = make_airport("A", 0, 0), make_airport("B", 60, 80)
        generate_segments([a, b], [make_flight(a, b)], scale)

        assert a.fx == 0 and a.fy == 0
        assert b.fx == 60 and b.fy == 80

    def test_path_shape(self, scale):
        """Test path runs from source through N nodes to target."""
        a, b = make_airport("A", 0, 0), make_airport("B", 60, 80)
        bundle = generate_segments([a, b], [make_flight(a, b)], scale)

        path = bundle.paths[0]
        assert path[0] is a
        assert path[-1] is b
        # distance 100 -> 10 inner nodes
        assert len(path) == 12
        assert len(bundle.links) == 11
        assert len(bundle.nodes) == 2 + 10

    def test_links_chain(self, scale):
        """Test links connect consecutive path nodes."""
        a, b = make_airport("A", 0, 0), make_airport("B", 30, 40)
        bundle = generate_segments([a, b], [make_flight(a, b)], scale)

        path = bundle.paths[0]
        for link, (source, target) in zip(bundle.links, zip(path, path[1:])):
            assert link.source is source
            assert link.target is target

    def test_collinear(self, scale):
        """Test control nodes lie on the straight edge."""
        a, b = make_airport("A", 10, 10), make_airport("B", 70, 90)
        bundle = generate_segments([a, b], [make_flight(a, b)], scale)

        for node in bundle.control_nodes:
            # on the line y = 10 + (x - 10) * 80 / 60
            assert node.y == pytest.approx(10 + (node.x - 10) * 80 / 60)
            assert 10 < node.x < 70

    def test_zero_length_edge(self):
        """Test a zero-length edge with a zero count is one direct link."""
        scale = LinearScale(domain=(0, 100), range_=(0, 10))
        a = make_airport("A", 5, 5)
        bundle = generate_segments([a], [make_flight(a, a)], scale)

        assert bundle.paths[0] == [a, a]
        assert len(bundle.links) == 1
        assert bundle.control_nodes == []

    def test_zero_length_edge_gets_coincident_nodes(self, scale):
        """Test a zero-length edge still gets its minimum control nodes."""
        a = make_airport("A", 5, 5)
        bundle = generate_segments([a], [make_flight(a, a)], scale)

        path = bundle.paths[0]
        assert len(path) == 5
        assert path[0] is a and path[-1] is a
        for node in bundle.control_nodes:
            assert (node.x, node.y) == (a.x, a.y)
        assert len(bundle.links) == 4

    def test_zero_length_edge_layout_stays_finite(self, scale):
        """Test coincident control nodes are separated without NaNs."""
        a = make_airport("A", 5, 5)
        bundle = generate_segments([a], [make_flight(a, a)], scale)

        sim = ForceSimulation(bundle.nodes, alpha_decay=0.1)
        sim.force("charge", ManyBodyForce(strength=40, distance_max=5))
        sim.force("link", LinkForce(bundle.links, strength=2, distance=0))
        sim.run()

        assert np.isfinite(sim.positions).all()
        assert (a.x, a.y) == (5, 5)
        curve = bundle_curve(bundle.paths[0])
        np.testing.assert_allclose(curve[0], (5, 5))
        np.testing.assert_allclose(curve[-1], (5, 5))

    def test_every_edge_gets_a_path(self, scale):
        """Test one path per edge, in edge order."""
        a, b, c = make_airport("A", 0, 0), make_airport("B", 0, 50), make_airport("C", 50, 0)
        flights = [make_flight(a, b), make_flight(b, c), make_flight(c, a)]
        bundle = generate_segments([a, b, c], flights, scale)

        assert len(bundle.paths) == 3
        assert [(p[0], p[-1]) for p in bundle.paths] == [(a, b), (b, c), (c, a)]
        total_inner = sum(len(p) - 2 for p in bundle.paths)
        assert len(bundle.links) == total_inner + 3
