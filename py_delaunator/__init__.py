"""
Fast 2D Delaunay triangulation.

Example::

    from py_delaunator import triangulate

    tri = triangulate([(0, 0), (1, 0), (1, 1), (0, 1)])
    tri.simplices   # (m, 3) counter-clockwise point indices
    tri.halfedges   # twin half-edge per half-edge, -1 on the hull
    tri.hull        # convex hull, counter-clockwise
"""

from .core import (
    EMPTY,
    HalfEdge,
    Triangle,
    Triangulation,
    Vertex,
    find_seed_triangle,
    triangulate,
)

__version__ = "0.1.0"

__all__ = ['EMPTY', 'HalfEdge', 'Triangle', 'Triangulation', 'Vertex',
           'find_seed_triangle', 'triangulate']
