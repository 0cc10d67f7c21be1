"""
Linear interpolation primitives.

A collection of small linear functions used by both the zone statistics and
the slab model: distance, line intersection, and interpolation through two,
three and four points. Every point is a 3-vector (x, y, z) where the
interpolated quantity lives in z. The query point only needs x and y.
"""

import math

import numpy as np


def vector(x, y, z=np.nan):
    """
    Create a 3-vector (x, y, z).

    Parameters:
    -----------
    x, y : float
        Planar coordinates
    z : float
        Value to interpolate (NaN for a query point)

    Returns:
    --------
    np.ndarray
        Position vector
    """
    return np.array([x, y, z], dtype=float)


def distance(v0, v1):
    """Cartesian distance between two points using only x and y."""
    return math.hypot(v1[0] - v0[0], v1[1] - v0[1])


def one_d(v0, v1, v):
    """
    Interpolate z between two points.

    The interpolation runs along whichever axis has the larger separation
    between the two points so the slope denominator is never tiny. When the
    two points coincide the z value of the first is returned.

    Parameters:
    -----------
    v0, v1 : sequence of float
        Point vectors (x, y, z)
    v : sequence of float
        Query point (x, y)

    Returns:
    --------
    float
        Interpolated z value
    """
    dx = v1[0] - v0[0]
    dy = v1[1] - v0[1]
    if abs(dx) > abs(dy):
        return (v1[2] - v0[2]) / dx * (v[0] - v0[0]) + v0[2]
    if dy == 0.0:
        return float(v0[2])
    return (v1[2] - v0[2]) / dy * (v[1] - v0[1]) + v0[2]


def two_d(v0, v1, v2, v):
    """
    Fit a plane through three points and evaluate it at the query point.

    Of the two algebraically equivalent closed forms, the one pivoting on the
    point with the larger y separation from ``v0`` is used. Degenerate
    (collinear) triangles fall back to :func:`one_d` on the first two points.

    Parameters:
    -----------
    v0, v1, v2 : sequence of float
        Point vectors (x, y, z)
    v : sequence of float
        Query point (x, y)

    Returns:
    --------
    float
        Interpolated z value
    """
    if abs(v2[1] - v0[1]) > abs(v1[1] - v0[1]):
        denom = (v1[0] - v0[0]) * (v2[1] - v0[1]) - (v2[0] - v0[0]) * (v1[1] - v0[1])
        if denom == 0.0:
            return one_d(v0, v1, v)
        a = ((v2[1] - v0[1]) * (v1[2] - v0[2]) - (v1[1] - v0[1]) * (v2[2] - v0[2])) / denom
        b = ((v2[2] - v0[2]) - a * (v2[0] - v0[0])) / (v2[1] - v0[1])
    else:
        denom = (v2[0] - v0[0]) * (v1[1] - v0[1]) - (v1[0] - v0[0]) * (v2[1] - v0[1])
        if denom == 0.0:
            return one_d(v0, v1, v)
        a = ((v1[1] - v0[1]) * (v2[2] - v0[2]) - (v2[1] - v0[1]) * (v1[2] - v0[2])) / denom
        b = ((v1[2] - v0[2]) - a * (v1[0] - v0[0])) / (v1[1] - v0[1])

    c = v0[2] - a * v0[0] - b * v0[1]
    return a * v[0] + b * v[1] + c


def three_d(v0, v1, v2, v3, v):
    """
    Fit the product of two linear functions through four grid corners.

    The corners must be ordered: origin, +x increment, +y increment and
    +x+y increment. The surface is not linear, hence the name.

    Parameters:
    -----------
    v0, v1, v2, v3 : sequence of float
        Corner vectors (x, y, z)
    v : sequence of float
        Query point (x, y)

    Returns:
    --------
    float
        Interpolated z value
    """
    dx = v1[0] - v0[0]
    dy = v2[1] - v0[1]
    b = (v1[2] - v0[2]) / dx
    c = (v2[2] - v0[2]) / dy
    d = (v3[2] - v2[2] - v1[2] + v0[2]) / (dx * dy)
    return (b * (v[0] - v0[0]) + c * (v[1] - v0[1])
            + d * (v[0] - v0[0]) * (v[1] - v0[1]) + v0[2])


def intersect(v0, v1, v):
    """
    Find where the line through v0 and v1 crosses the perpendicular through v.

    Returns:
    --------
    np.ndarray
        Intersection point (x, y, NaN)
    """
    dx = v1[0] - v0[0]
    dy = v1[1] - v0[1]
    if dx == 0.0:
        # The line is vertical, so the perpendicular is horizontal
        return vector(v0[0], v[1])
    if dy == 0.0:
        # The line is horizontal, so the perpendicular is vertical
        return vector(v[0], v0[1])

    a0 = dy / dx
    b0 = v0[1] - a0 * v0[0]
    a1 = -1.0 / a0
    b1 = v[1] - a1 * v[0]
    return intersect_lines(a0, b0, a1, b1)


def intersect_lines(a0, b0, a1, b1):
    """
    Cross the lines y = a0*x + b0 and y = a1*x + b1.

    If a0 is zero the first line is horizontal (y = b0) and the second is
    taken to be vertical with b1 its fixed x value. If a1 is zero the first
    line is vertical with b0 its fixed x value and the second is horizontal
    (y = b1).

    Returns:
    --------
    np.ndarray
        Intersection point (x, y, NaN)
    """
    if a0 == 0.0:
        return vector(b1, b0)
    if a1 == 0.0:
        return vector(b0, b1)
    x = (b1 - b0) / (a0 - a1)
    return vector(x, a0 * x + b0)
