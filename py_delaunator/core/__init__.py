"""
Core triangulation functionality.
"""

from .mesh import EMPTY
from .triangulation import Triangulation, triangulate
from .seed import find_seed_triangle
from .elements import Triangle, HalfEdge, Vertex
from .predicates import orientation, in_circle, circumcenter, circumradius_squared
from .mesh import (next_halfedge, prev_halfedge, edges_around_point,
                   edges_of_triangle, points_of_triangle, triangle_of_edge,
                   triangles_adjacent_to_triangle)
from .connectivity import (build_point_neighbors, build_border_flags,
                           point_to_halfedge, triangles_around_point)
from .validation import check_triangulation

__all__ = ['EMPTY', 'Triangulation', 'triangulate', 'find_seed_triangle',
           'Triangle', 'HalfEdge', 'Vertex',
           'orientation', 'in_circle', 'circumcenter', 'circumradius_squared',
           'next_halfedge', 'prev_halfedge', 'edges_around_point',
           'edges_of_triangle', 'points_of_triangle', 'triangle_of_edge',
           'triangles_adjacent_to_triangle',
           'build_point_neighbors', 'build_border_flags',
           'point_to_halfedge', 'triangles_around_point',
           'check_triangulation']
