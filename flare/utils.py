"""
FLARE Utility Functions
Common utility functions for planar geometry and value scaling.
"""

import math
from typing import Sequence, Tuple


def distance(source, target) -> float:
    """
    Calculate the Euclidean distance between two nodes.

    sqrt( (x2 - x1)^2 + (y2 - y1)^2 )

    Args:
        source: Object with x and y attributes
        target: Object with x and y attributes

    Returns:
        Distance in layout units

    Example:
        >>> distance(Point(0, 0), Point(3, 4))
        5.0
    """
    dx2 = (target.x - source.x) ** 2
    dy2 = (target.y - source.y) ** 2

    return math.sqrt(dx2 + dy2)


def lerp(start: float, end: float, t: float) -> float:
    """Linearly interpolate between start (t=0) and end (t=1)."""
    return start * (1 - t) + end * t


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties towards positive infinity.

    Python's round() uses banker's rounding (round(2.5) == 2); segment counts
    are rounded the way browsers round them (2.5 -> 3, -2.5 -> -2).
    """
    return int(math.floor(value + 0.5))


class LinearScale:
    """
    Maps a continuous domain onto a continuous range.

    The scale is not clamped: values outside the domain extrapolate.

    Example:
        >>> scale = LinearScale(domain=(0, 100), range_=(3, 10))
        >>> scale(50)
        6.5
    """

    def __init__(
        self,
        domain: Tuple[float, float] = (0.0, 1.0),
        range_: Tuple[float, float] = (0.0, 1.0),
    ):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def _normalize(self, value: float) -> float:
        d0, d1 = self._transform(self.domain[0]), self._transform(self.domain[1])
        if d1 == d0:
            # degenerate domain maps everything to the middle of the range
            return 0.5
        return (self._transform(value) - d0) / (d1 - d0)

    def _transform(self, value: float) -> float:
        return float(value)

    def __call__(self, value: float) -> float:
        return lerp(self.range[0], self.range[1], self._normalize(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self.domain}, range={self.range})"


class PowScale(LinearScale):
    """
    Linear scale applied after raising values to an exponent.

    Negative values keep their sign: transform(x) = sign(x) * |x| ** exponent.
    """

    def __init__(
        self,
        exponent: float = 1.0,
        domain: Tuple[float, float] = (0.0, 1.0),
        range_: Tuple[float, float] = (0.0, 1.0),
    ):
        self.exponent = float(exponent)
        super().__init__(domain, range_)

    def _transform(self, value: float) -> float:
        value = float(value)
        return math.copysign(abs(value) ** self.exponent, value)


class SqrtScale(PowScale):
    """Power scale with exponent 0.5, used to size bubbles by area."""

    def __init__(
        self,
        domain: Tuple[float, float] = (0.0, 1.0),
        range_: Tuple[float, float] = (0.0, 1.0),
    ):
        super().__init__(0.5, domain, range_)


class PointScale:
    """
    Spreads discrete values evenly across a continuous range.

    The first value lands on range[0] and the last on range[1].
    """

    def __init__(self, domain: Sequence[str], range_: Tuple[float, float]):
        self.domain = list(domain)
        self.range = (float(range_[0]), float(range_[1]))

    @property
    def step(self) -> float:
        if len(self.domain) < 2:
            return 0.0
        return (self.range[1] - self.range[0]) / (len(self.domain) - 1)

    def __call__(self, value: str) -> float:
        """
        Position of a domain value.

        Raises:
            KeyError: If value is not part of the domain
        """
        if value not in self.domain:
            raise KeyError(value)
        if len(self.domain) == 1:
            return (self.range[0] + self.range[1]) / 2
        return self.range[0] + self.domain.index(value) * self.step
