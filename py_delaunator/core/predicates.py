"""
Geometric predicates for 2D Delaunay triangulation.

Orientation and in-circle signs are evaluated with a floating-point fast path
guarded by Shewchuk's static error bounds. When the bound cannot certify the
sign, the test is handed to the adaptive-precision predicates of the
``shewchuk`` package, so the returned sign is always the sign of the exact
determinant.
"""

import math
from typing import Tuple

import shewchuk

# Half an ulp of 1.0, Shewchuk's "epsilon"
_ROUNDOFF = 2.0 ** -53
CCW_ERRBOUND = (3.0 + 16.0 * _ROUNDOFF) * _ROUNDOFF
ICC_ERRBOUND = (10.0 + 96.0 * _ROUNDOFF) * _ROUNDOFF

# Absolute tolerance used to drop near-duplicate points (twice machine epsilon)
EPSILON = 2.0 ** -51


def _sign(value) -> int:
    return int(value > 0) - int(value < 0)


def orientation(ax: float, ay: float, bx: float, by: float,
                cx: float, cy: float) -> int:
    """
    Sign of twice the signed area of triangle ``a, b, c``.

    Returns:
        +1 if counter-clockwise, -1 if clockwise, 0 if collinear
    """
    detleft = (bx - ax) * (cy - ay)
    detright = (by - ay) * (cx - ax)
    det = detleft - detright

    errbound = CCW_ERRBOUND * (abs(detleft) + abs(detright))
    if det > errbound or -det > errbound:
        return _sign(det)
    return _sign(shewchuk.orientation(float(ax), float(ay), float(bx),
                                      float(by), float(cx), float(cy)))


def in_circle(ax: float, ay: float, bx: float, by: float,
              cx: float, cy: float, px: float, py: float) -> int:
    """
    Locate ``p`` relative to the circumcircle of counter-clockwise ``a, b, c``.

    Returns:
        +1 if ``p`` is strictly inside, -1 if outside, 0 if cocircular
    """
    adx = ax - px
    ady = ay - py
    bdx = bx - px
    bdy = by - py
    cdx = cx - px
    cdy = cy - py

    bdxcdy = bdx * cdy
    cdxbdy = cdx * bdy
    alift = adx * adx + ady * ady

    cdxady = cdx * ady
    adxcdy = adx * cdy
    blift = bdx * bdx + bdy * bdy

    adxbdy = adx * bdy
    bdxady = bdx * ady
    clift = cdx * cdx + cdy * cdy

    det = (alift * (bdxcdy - cdxbdy)
           + blift * (cdxady - adxcdy)
           + clift * (adxbdy - bdxady))

    permanent = ((abs(bdxcdy) + abs(cdxbdy)) * alift
                 + (abs(cdxady) + abs(adxcdy)) * blift
                 + (abs(adxbdy) + abs(bdxady)) * clift)
    errbound = ICC_ERRBOUND * permanent
    if det > errbound or -det > errbound:
        return _sign(det)
    # shewchuk takes the query point first
    return _sign(shewchuk.incircle_test(float(px), float(py), float(ax),
                                        float(ay), float(bx), float(by),
                                        float(cx), float(cy)))


def _circumdelta(ax, ay, bx, by, cx, cy) -> Tuple[float, float]:
    dx = bx - ax
    dy = by - ay
    ex = cx - ax
    ey = cy - ay

    bl = dx * dx + dy * dy
    cl = ex * ex + ey * ey
    denom = dx * ey - dy * ex
    if denom == 0:
        return math.inf, math.inf
    d = 0.5 / denom

    return (ey * bl - dy * cl) * d, (dx * cl - ex * bl) * d


def circumradius_squared(ax: float, ay: float, bx: float, by: float,
                         cx: float, cy: float) -> float:
    """Squared circumradius of ``a, b, c``; ``inf`` for collinear input."""
    x, y = _circumdelta(ax, ay, bx, by, cx, cy)
    return x * x + y * y


def circumcenter(ax: float, ay: float, bx: float, by: float,
                 cx: float, cy: float) -> Tuple[float, float]:
    """Center of the circle through ``a, b, c``."""
    x, y = _circumdelta(ax, ay, bx, by, cx, cy)
    return ax + x, ay + y


def pseudo_angle(dx: float, dy: float) -> float:
    """
    Value in [0, 1) that increases monotonically with the angle of ``(dx, dy)``.

    Cheaper than ``atan2`` and good enough for bucketing hull points.
    """
    denom = abs(dx) + abs(dy)
    if denom == 0:
        return 0.0
    p = dx / denom
    if dy > 0:
        return (3.0 - p) / 4.0
    return (1.0 + p) / 4.0


def nearly_equals(ax: float, ay: float, bx: float, by: float) -> bool:
    return abs(ax - bx) <= EPSILON and abs(ay - by) <= EPSILON
