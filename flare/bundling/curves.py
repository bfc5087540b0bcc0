"""
Bundle Curves
Smooth drawing geometry for segmented paths.

A path's control polygon is first straightened towards the chord from its
first to its last point (beta = 1 keeps it, beta = 0 collapses it onto the
chord), then drawn as a uniform cubic B-spline. The spline is anchored at
both endpoints, so curves always start at the source airport and end at the
target airport.
"""

from typing import Any, Sequence

import numpy as np

from .constants import CURVE_BETA, CURVE_SAMPLES


def node_points(path: Sequence[Any]) -> np.ndarray:
    """Convert a path of nodes (x/y attributes) or (x, y) pairs to an array."""
    points = [
        (node.x, node.y) if hasattr(node, "x") else (node[0], node[1])
        for node in path
    ]
    return np.array(points, dtype=float).reshape(-1, 2)


def straighten(points: np.ndarray, beta: float = CURVE_BETA) -> np.ndarray:
    """
    Pull control points towards the straight line between the endpoints.

    Args:
        points: (n, 2) control polygon
        beta: Bundle strength in [0, 1]

    Returns:
        (n, 2) straightened polygon with identical endpoints
    """
    points = np.asarray(points, dtype=float)
    j = len(points) - 1
    if j <= 0 or beta == 1:
        return points.copy()

    t = np.arange(j + 1, dtype=float)[:, None] / j
    chord = points[0] + t * (points[-1] - points[0])
    result = beta * points + (1 - beta) * chord

    result[0] = points[0]
    result[-1] = points[-1]
    return result


def _bezier(p0, c1, c2, p3, samples: int) -> np.ndarray:
    t = np.linspace(0.0, 1.0, samples + 1)[1:, None]
    u = 1 - t
    return u**3 * p0 + 3 * u**2 * t * c1 + 3 * u * t**2 * c2 + t**3 * p3


def basis_curve(points: np.ndarray, samples: int = CURVE_SAMPLES) -> np.ndarray:
    """
    Sample a uniform cubic B-spline through a control polygon.

    Fewer than three points are returned as a straight polyline.

    Args:
        points: (n, 2) control polygon
        samples: Points per cubic segment

    Returns:
        (m, 2) polyline starting at points[0] and ending at points[-1]
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(points) < 3:
        return points.copy()

    x0, x1 = points[0], points[1]
    pieces = [points[:1], ((5 * x0 + x1) / 6)[None, :]]
    current = pieces[-1][0]

    def segment(x0, x1, x):
        return _bezier(
            current,
            (2 * x0 + x1) / 3,
            (x0 + 2 * x1) / 3,
            (x0 + 4 * x1 + x) / 6,
            samples,
        )

    for x in points[2:]:
        pieces.append(segment(x0, x1, x))
        current = pieces[-1][-1]
        x0, x1 = x1, x

    # close on the last control point
    pieces.append(segment(x0, x1, x1))
    pieces.append(points[-1:])

    return np.concatenate(pieces)


def bundle_curve(
    path: Sequence[Any], beta: float = CURVE_BETA, samples: int = CURVE_SAMPLES
) -> np.ndarray:
    """
    Drawing geometry for one bundled path.

    Args:
        path: Ordered nodes (x/y attributes) or (x, y) pairs
        beta: Bundle strength in [0, 1]
        samples: Points per cubic segment

    Returns:
        (m, 2) polyline in layout coordinates
    """
    return basis_curve(straighten(node_points(path), beta), samples)
