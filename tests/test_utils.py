"""
Tests for utility functions.
"""

import sys
from collections import namedtuple
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from flare.utils import (
    LinearScale,
    PointScale,
    PowScale,
    SqrtScale,
    distance,
    lerp,
    round_half_up,
)

Point = namedtuple("Point", ["x", "y"])


class TestDistance:
    """Tests for planar distance."""

    def test_pythagoras(self):
        """Test the 3-4-5 triangle."""
        assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)

    def test_same_point(self):
        """Test distance between identical points."""
        assert distance(Point(7, -2), Point(7, -2)) == 0.0

    def test_symmetry(self):
        """Test that distance does not depend on direction."""
        a, b = Point(33.6, -84.4), Point(40.6, -73.8)
        assert distance(a, b) == pytest.approx(distance(b, a))


class TestRounding:
    """Tests for half-up rounding."""

    def test_ties_round_up(self):
        """Test ties go towards positive infinity."""
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2

    def test_regular_values(self):
        """Test values away from ties."""
        assert round_half_up(3.2) == 3
        assert round_half_up(9.7) == 10
        assert round_half_up(0.0) == 0

    def test_lerp(self):
        """Test interpolation endpoints and midpoint."""
        assert lerp(3, 10, 0) == 3
        assert lerp(3, 10, 1) == 10
        assert lerp(3, 10, 0.5) == pytest.approx(6.5)


class TestLinearScale:
    """Tests for LinearScale."""

    def test_endpoints(self):
        """Test domain ends map to range ends."""
        scale = LinearScale(domain=(0, 100), range_=(3, 10))
        assert scale(0) == pytest.approx(3)
        assert scale(100) == pytest.approx(10)
        assert scale(50) == pytest.approx(6.5)

    def test_extrapolates(self):
        """Test values beyond the domain are not clamped."""
        scale = LinearScale(domain=(0, 10), range_=(0, 1))
        assert scale(20) == pytest.approx(2.0)
        assert scale(-10) == pytest.approx(-1.0)

    def test_degenerate_domain(self):
        """Test a zero-width domain maps to the middle of the range."""
        scale = LinearScale(domain=(5, 5), range_=(2, 4))
        assert scale(5) == pytest.approx(3)
        assert scale(100) == pytest.approx(3)


class TestPowScale:
    """Tests for PowScale and SqrtScale."""

    def test_sqrt(self):
        """Test square root scaling."""
        scale = SqrtScale(domain=(0, 100), range_=(0, 10))
        assert scale(25) == pytest.approx(5)
        assert scale(100) == pytest.approx(10)

    def test_exponent(self):
        """Test arbitrary exponents."""
        scale = PowScale(exponent=2, domain=(0, 10), range_=(0, 100))
        assert scale(5) == pytest.approx(25)

    def test_negative_values_keep_sign(self):
        """Test the transform is odd-symmetric."""
        scale = PowScale(exponent=0.5, domain=(-4, 4), range_=(-1, 1))
        assert scale(-4) == pytest.approx(-1)
        assert scale(-1) == pytest.approx(-0.5)

    def test_bubble_radius(self):
        """Test the default airport bubble range."""
        scale = PowScale(exponent=0.5, range_=(1, 2.5))
        assert scale(0) == pytest.approx(1)
        assert scale(1) == pytest.approx(2.5)


class TestPointScale:
    """Tests for PointScale."""

    def test_even_spacing(self):
        """Test values are spread from first to last range value."""
        scale = PointScale(["a", "b", "c"], (0, 100))
        assert scale("a") == 0
        assert scale("b") == pytest.approx(50)
        assert scale("c") == pytest.approx(100)
        assert scale.step == pytest.approx(50)

    def test_single_value(self):
        """Test a single value sits in the middle of the range."""
        scale = PointScale(["only"], (10, 20))
        assert scale("only") == pytest.approx(15)
        assert scale.step == 0.0

    def test_unknown_value(self):
        """Test values outside the domain."""
        scale = PointScale(["a", "b"], (0, 1))
        with pytest.raises(KeyError):
            scale("z")
