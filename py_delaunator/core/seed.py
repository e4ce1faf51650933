"""
Input coercion, seed triangle selection and insertion ordering.

The seed triangle is chosen near the middle of the point cloud with the
smallest circumcircle available, and every point is then processed in order
of increasing distance from that circle's center. Ties are always resolved
in favour of the lower point index so repeated runs are identical.
"""

from typing import Optional, Sequence, Tuple

import numpy as np
import structlog

from .predicates import circumcenter, orientation

logger = structlog.get_logger()


def as_points(points) -> np.ndarray:
    """
    Coerce input coordinates to an ``(n, 2)`` float64 array.

    Args:
        points: Any array-like of ``(x, y)`` pairs (lists, tuples, numpy arrays)

    Returns:
        Contiguous float64 array of shape ``(n, 2)``

    Raises:
        ValueError: If the input is not a collection of 2D coordinates or
            holds NaN / infinite values
    """
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Points must be numeric (x, y) pairs: {exc}") from exc

    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Points must have shape (n, 2), got {arr.shape}")

    finite = np.isfinite(arr).all(axis=1)
    if not finite.all():
        bad = int(np.argmin(finite))
        raise ValueError(
            f"Point {bad} has non-finite coordinates: {arr[bad].tolist()}")

    return np.ascontiguousarray(arr)


def find_seed_triangle(points: np.ndarray) -> Optional[Tuple[int, int, int]]:
    """
    Pick a counter-clockwise seed triangle ``(i0, i1, i2)``.

    Returns ``None`` when no three points span a triangle (fewer than three
    distinct points, or every point on one line).
    """
    n = len(points)
    if n < 3:
        return None

    xs = points[:, 0]
    ys = points[:, 1]

    # seed point closest to the centroid
    cx, cy = xs.mean(), ys.mean()
    i0 = int(np.argmin((xs - cx) ** 2 + (ys - cy) ** 2))
    x0, y0 = points[i0].tolist()

    # closest point to the seed, ignoring coincident ones
    d = (xs - x0) ** 2 + (ys - y0) ** 2
    d[d == 0] = np.inf
    i1 = int(np.argmin(d))
    if d[i1] == np.inf:
        return None
    x1, y1 = points[i1].tolist()

    # third point forming the smallest circumcircle with the first two
    dx, dy = x1 - x0, y1 - y0
    ex, ey = xs - x0, ys - y0
    bl = dx * dx + dy * dy
    cl = ex * ex + ey * ey
    denom = dx * ey - dy * ex
    with np.errstate(divide="ignore", invalid="ignore"):
        k = 0.5 / denom
        rx = (ey * bl - dy * cl) * k
        ry = (dx * cl - ex * bl) * k
        radii = rx * rx + ry * ry
    radii[denom == 0] = np.inf
    radii[~np.isfinite(radii)] = np.inf
    radii[[i0, i1]] = np.inf

    while True:
        i2 = int(np.argmin(radii))
        if radii[i2] == np.inf:
            return None
        x2, y2 = points[i2].tolist()
        orient = orientation(x0, y0, x1, y1, x2, y2)
        if orient != 0:
            break
        # the float denominator was not exactly zero but the points are
        radii[i2] = np.inf

    if orient < 0:
        i1, i2 = i2, i1

    return i0, i1, i2


def check_seed_triangle(points: np.ndarray,
                        seed: Sequence[int]) -> Tuple[int, int, int]:
    """
    Validate a caller-supplied seed triangle and normalize it to
    counter-clockwise order.
    """
    if len(seed) != 3:
        raise ValueError(f"Seed triangle needs 3 indices, got {len(seed)}")
    i0, i1, i2 = (int(i) for i in seed)
    n = len(points)
    for i in (i0, i1, i2):
        if not 0 <= i < n:
            raise ValueError(f"Seed index {i} out of range for {n} points")
    if len({i0, i1, i2}) != 3:
        raise ValueError(f"Seed triangle indices must be distinct: {tuple(seed)}")

    orient = orientation(*points[i0].tolist(), *points[i1].tolist(),
                         *points[i2].tolist())
    if orient == 0:
        raise ValueError(f"Seed triangle {tuple(seed)} is degenerate (collinear)")
    if orient < 0:
        i1, i2 = i2, i1
    return i0, i1, i2


def seed_center(points: np.ndarray, seed: Tuple[int, int, int]) -> Tuple[float, float]:
    i0, i1, i2 = seed
    cx, cy = circumcenter(*points[i0].tolist(), *points[i1].tolist(),
                          *points[i2].tolist())
    return float(cx), float(cy)


def sort_by_distance(points: np.ndarray, center: Tuple[float, float]) -> np.ndarray:
    """Indices of ``points`` ordered by squared distance to ``center``."""
    dx = points[:, 0] - center[0]
    dy = points[:, 1] - center[1]
    return np.argsort(dx * dx + dy * dy, kind="stable")


def collinear_hull(points: np.ndarray) -> np.ndarray:
    """
    Hull of input that cannot be triangulated.

    Distinct points are ordered along the line by their x offset from the
    first point (y offset when all x are equal). Coincident points keep the
    lowest index only.
    """
    n = len(points)
    if n == 0:
        return np.empty(0, dtype=np.int64)

    dx = points[:, 0] - points[0, 0]
    dy = points[:, 1] - points[0, 1]
    dists = np.where(dx != 0, dx, dy)
    order = np.argsort(dists, kind="stable")

    hull = []
    d0 = -np.inf
    for i in order:
        if dists[i] > d0:
            hull.append(int(i))
            d0 = dists[i]
    return np.asarray(hull, dtype=np.int64)
