"""
2D vector helpers over numpy arrays.

Points are float64 arrays of shape (2,), curves arrays of shape (n, 2), so
addition, subtraction and scalar multiplication are plain numpy arithmetic.
"""

import math

import numpy as np


def distance(p, q):
    """Euclidean distance between two points."""
    return math.hypot(p[0] - q[0], p[1] - q[1])


def elementwise_min(points):
    """Componentwise minimum over a sequence of points."""
    return np.min(np.asarray(points, dtype=np.float64), axis=0)


def elementwise_max(points):
    """Componentwise maximum over a sequence of points."""
    return np.max(np.asarray(points, dtype=np.float64), axis=0)


def point_at(curve, t):
    """
    Point of a curve at parameter t.

    The integer part of t selects the vertex, the fractional part moves
    linearly toward the next vertex. A zero offset returns the vertex itself
    without touching its successor, so t may equal the last index.
    """
    index = math.floor(t)
    offset = t - index
    if offset == 0.0:
        return curve[index]
    return (1.0 - offset) * curve[index] + offset * curve[index + 1]
