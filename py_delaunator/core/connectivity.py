"""
Point connectivity derived from a triangulation.

Neighbour lists, border flags and a point-to-half-edge index are everything
a dual (Voronoi) construction needs: each point's cell is bounded by the
circumcenters of the triangles found by walking its half-edge fan.
"""

from typing import List, Optional

import numpy as np
import structlog

from .mesh import EMPTY, edges_around_point, next_halfedge
from .triangulation import Triangulation

logger = structlog.get_logger()


def build_point_neighbors(tri: Triangulation) -> List[List[int]]:
    """
    Build neighbour lists for every input point.

    Args:
        tri: Triangulation

    Returns:
        ``neighbors[i]`` is the sorted list of points sharing an edge with
        ``i``; empty for points left out of the mesh (duplicates)
    """
    n_points = len(tri.points)
    logger.debug("Building point neighbours", points=n_points,
                 halfedges=len(tri.halfedges))
    neighbors = [set() for _ in range(n_points)]

    triangles = tri.triangles.tolist()
    for e, p1 in enumerate(triangles):
        p2 = triangles[next_halfedge(e)]
        neighbors[p1].add(p2)
        neighbors[p2].add(p1)

    return [sorted(points) for points in neighbors]


def build_border_flags(tri: Triangulation) -> np.ndarray:
    """``flags[i] == 1`` if point ``i`` lies on the convex hull."""
    flags = np.zeros(len(tri.points), dtype=np.uint8)
    flags[tri.hull] = 1
    return flags


def point_to_halfedge(tri: Triangulation) -> np.ndarray:
    """
    Map every point to one half-edge ending at it.

    Hull points are mapped to their incoming hull half-edge, so that
    ``edges_around_point`` started there visits the whole fan. Points absent
    from the mesh map to ``EMPTY``.
    """
    index = np.full(len(tri.points), EMPTY, dtype=np.int64)
    triangles = tri.triangles.tolist()
    halfedges = tri.halfedges.tolist()
    for e in range(len(triangles)):
        endpoint = triangles[next_halfedge(e)]
        if index[endpoint] == EMPTY or halfedges[e] == EMPTY:
            index[endpoint] = e
    return index


def triangles_around_point(tri: Triangulation, point: int,
                           index: Optional[np.ndarray] = None) -> List[int]:
    """
    Triangles incident to ``point`` in walk order.

    Args:
        tri: Triangulation
        point: Input point index
        index: Optional precomputed result of ``point_to_halfedge``

    Returns:
        Triangle ids; empty if the point is not part of the mesh
    """
    if index is None:
        index = point_to_halfedge(tri)
    start = int(index[point])
    if start == EMPTY:
        return []
    return [e // 3 for e in edges_around_point(tri.halfedges, start)]
