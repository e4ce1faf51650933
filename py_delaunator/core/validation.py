"""
Consistency checks for a finished triangulation.

Any failure here means a bug in the triangulation engine, not bad input, so
every check raises ``AssertionError`` with a description of the first
violation found.
"""

from typing import TYPE_CHECKING, Iterable

import numpy as np
import structlog

from .mesh import EMPTY, next_halfedge
from .predicates import in_circle, orientation

if TYPE_CHECKING:
    from .triangulation import Triangulation

logger = structlog.get_logger()

# Relative mismatch allowed between hull area and summed triangle area
COVERAGE_TOLERANCE = 1e-12


def robust_sum(values: Iterable[float]) -> float:
    """Kahan-Babuska summation, Neumaier variant."""
    values = iter(values)
    total = next(values, 0.0)
    err = 0.0
    for k in values:
        m = total + k
        if abs(total) >= abs(k):
            err += total - m + k
        else:
            err += k - m + total
        total = m
    return total + err


def hull_area(points: np.ndarray, hull) -> float:
    """Twice the signed area enclosed by ``hull`` (positive when CCW)."""
    if len(hull) == 0:
        return 0.0
    # shift to the first hull point to keep terms small far from the origin
    ox, oy = points[hull[0]]
    terms = []
    j = len(hull) - 1
    for i in range(len(hull)):
        x0, y0 = points[hull[j]]
        x, y = points[hull[i]]
        terms.append(((x - ox) + (x0 - ox)) * (y - y0))
        j = i
    return robust_sum(terms)


def triangles_area(points: np.ndarray, triangles) -> float:
    """Twice the summed unsigned area of all triangles."""
    terms = []
    for i in range(0, len(triangles), 3):
        ax, ay = points[triangles[i]]
        bx, by = points[triangles[i + 1]]
        cx, cy = points[triangles[i + 2]]
        terms.append(abs((by - ay) * (cx - bx) - (bx - ax) * (cy - by)))
    return robust_sum(terms)


def check_halfedges(tri: "Triangulation") -> None:
    """Twin links must be symmetric and join the same two points reversed."""
    triangles = tri.triangles
    halfedges = tri.halfedges
    if len(triangles) % 3 != 0 or len(halfedges) != len(triangles):
        raise AssertionError(
            f"Array sizes inconsistent: {len(triangles)} triangles entries, "
            f"{len(halfedges)} half-edges")

    for e in range(len(halfedges)):
        twin = int(halfedges[e])
        if twin == EMPTY:
            continue
        if not 0 <= twin < len(halfedges) or int(halfedges[twin]) != e:
            raise AssertionError(f"Invalid halfedge connection {e} -> {twin}")
        if (triangles[e] != triangles[next_halfedge(twin)]
                or triangles[twin] != triangles[next_halfedge(e)]):
            raise AssertionError(f"Half-edges {e} and {twin} are not opposite")


def check_orientation(tri: "Triangulation") -> None:
    """Every triangle must be strictly counter-clockwise."""
    points = tri.points.tolist()
    for t, (a, b, c) in enumerate(tri.simplices.tolist()):
        if orientation(*points[a], *points[b], *points[c]) <= 0:
            raise AssertionError(f"Triangle {t} {(a, b, c)} is not counter-clockwise")


def check_hull(tri: "Triangulation") -> None:
    """Hull half-edges must start on the hull, each hull edge exactly once."""
    hull_edges = set()
    j = len(tri.hull) - 1
    for i in range(len(tri.hull)):
        hull_edges.add((int(tri.hull[j]), int(tri.hull[i])))
        j = i

    boundary = set()
    for e in np.flatnonzero(tri.halfedges == EMPTY):
        edge = (int(tri.triangles[e]), int(tri.triangles[next_halfedge(e)]))
        if edge not in hull_edges:
            raise AssertionError(f"Boundary half-edge {e} {edge} is not on the hull")
        boundary.add(edge)

    if boundary != hull_edges:
        raise AssertionError(
            f"Hull edges without a triangle: {sorted(hull_edges - boundary)}")


def check_coverage(tri: "Triangulation", tolerance: float = COVERAGE_TOLERANCE) -> None:
    """Triangles must tile the hull: no gaps, no overlaps."""
    expected = hull_area(tri.points, tri.hull)
    actual = triangles_area(tri.points, tri.triangles)
    err = abs((expected - actual) / expected)
    if err > tolerance:
        raise AssertionError(
            f"Triangulation is broken: {err} error, epsilon: {tolerance}")


def check_delaunay(tri: "Triangulation") -> None:
    """
    No input point may lie strictly inside a triangle's circumcircle.

    Brute force over all point/triangle pairs, intended for tests.
    """
    coords = tri.points.tolist()
    for t, (a, b, c) in enumerate(tri.simplices.tolist()):
        ax, ay = coords[a]
        bx, by = coords[b]
        cx, cy = coords[c]
        for p, (px, py) in enumerate(coords):
            if p in (a, b, c):
                continue
            if in_circle(ax, ay, bx, by, cx, cy, px, py) > 0:
                raise AssertionError(
                    f"Point {p} lies inside the circumcircle of triangle {t}")


def check_triangulation(tri: "Triangulation", delaunay: bool = False) -> None:
    """
    Run all structural checks on a triangulation.

    Args:
        tri: Triangulation to verify
        delaunay: Also run the quadratic empty-circumcircle check
    """
    check_halfedges(tri)
    if tri.is_empty:
        return
    check_orientation(tri)
    check_hull(tri)
    check_coverage(tri)
    if delaunay:
        check_delaunay(tri)
    logger.debug("Triangulation checks passed", triangles=len(tri))
