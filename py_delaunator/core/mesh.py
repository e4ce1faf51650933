"""
Half-edge navigation helpers.

These operate directly on the flat ``triangles`` / ``halfedges`` arrays of a
triangulation and are the building blocks for neighbour queries and dual
(Voronoi) constructions.
"""

from typing import Iterator, List, Tuple

EMPTY = -1


def next_halfedge(e: int) -> int:
    """Next half-edge (counter-clockwise) within the same triangle."""
    return e - 2 if e % 3 == 2 else e + 1


def prev_halfedge(e: int) -> int:
    """Previous half-edge (clockwise) within the same triangle."""
    return e + 2 if e % 3 == 0 else e - 1


def triangle_of_edge(e: int) -> int:
    return e // 3


def edges_of_triangle(t: int) -> Tuple[int, int, int]:
    return 3 * t, 3 * t + 1, 3 * t + 2


def points_of_triangle(triangles, t: int) -> Tuple[int, int, int]:
    return tuple(int(triangles[e]) for e in edges_of_triangle(t))


def triangles_adjacent_to_triangle(halfedges, t: int) -> List[int]:
    """Triangles sharing an edge with ``t``; hull edges contribute nothing."""
    adjacent = []
    for e in edges_of_triangle(t):
        opposite = int(halfedges[e])
        if opposite != EMPTY:
            adjacent.append(triangle_of_edge(opposite))
    return adjacent


def edges_around_point(halfedges, start: int) -> Iterator[int]:
    """
    Walk the fan of half-edges around a point.

    ``start`` must be a half-edge ending at the point. Yields incoming
    half-edges rotating clockwise, stopping when the walk returns to
    ``start`` or reaches the convex hull. For a hull point, start from its
    incoming hull half-edge to visit the whole fan.

    Args:
        halfedges: Twin array of a triangulation
        start: A half-edge whose end point is the point of interest

    Yields:
        Half-edge ids ending at the point
    """
    incoming = start
    while True:
        yield incoming
        outgoing = next_halfedge(incoming)
        incoming = int(halfedges[outgoing])
        if incoming == EMPTY or incoming == start:
            break
