"""
The advancing convex hull used during sweep-hull insertion.

The hull is a circular doubly linked list over point indices stored in flat
arrays (``prev``, ``next``, ``tri``) so that splicing a vertex in or out is
O(1). An angular hash around the seed circumcenter gives a starting vertex
close to the edge a new point can see.
"""

import math
from typing import List, Tuple

from .mesh import EMPTY
from .predicates import orientation, pseudo_angle


class Hull:
    """
    Mutable boundary of the region triangulated so far.

    Attributes:
        start: Some vertex currently on the hull, used as the walk origin
        prev: ``prev[i]`` is the vertex before ``i`` (counter-clockwise order)
        next: ``next[i]`` is the vertex after ``i``; ``next[i] == i`` marks a
            vertex that has been absorbed into the interior
        tri: ``tri[i]`` is the half-edge running along the hull from ``i``
    """

    def __init__(self, n: int, center: Tuple[float, float],
                 seed: Tuple[int, int, int], coords: List[float]):
        i0, i1, i2 = seed
        self.coords = coords
        self.center = center
        self.hash_size = max(int(math.ceil(math.sqrt(n))), 1)

        self.prev = [EMPTY] * n
        self.next = [EMPTY] * n
        self.tri = [EMPTY] * n
        self.hash = [EMPTY] * self.hash_size
        self.start = i0

        self.next[i0] = self.prev[i2] = i1
        self.next[i1] = self.prev[i0] = i2
        self.next[i2] = self.prev[i1] = i0

        self.tri[i0] = 0
        self.tri[i1] = 1
        self.tri[i2] = 2

        for i in seed:
            self.hash_point(i)

    def hash_key(self, x: float, y: float) -> int:
        angle = pseudo_angle(x - self.center[0], y - self.center[1])
        return int(math.floor(angle * self.hash_size)) % self.hash_size

    def hash_point(self, i: int) -> None:
        self.hash[self.hash_key(self.coords[2 * i], self.coords[2 * i + 1])] = i

    def is_removed(self, i: int) -> bool:
        return self.next[i] == i

    def find_visible_edge(self, x: float, y: float) -> Tuple[int, bool]:
        """
        Find a hull edge ``(e, next[e])`` that the point ``(x, y)`` sees.

        Returns:
            Tuple of (edge start vertex or ``EMPTY`` if the point sees no edge,
            whether the search stopped at its first candidate, in which case
            edges before ``e`` may be visible too)
        """
        coords = self.coords
        hull_next = self.next

        start = 0
        key = self.hash_key(x, y)
        for j in range(self.hash_size):
            start = self.hash[(key + j) % self.hash_size]
            if start != EMPTY and start != hull_next[start]:
                break

        start = self.prev[start]
        e = start
        while True:
            q = hull_next[e]
            if orientation(x, y, coords[2 * e], coords[2 * e + 1],
                           coords[2 * q], coords[2 * q + 1]) < 0:
                break
            e = q
            if e == start:
                return EMPTY, False

        return e, e == start

    def swap_halfedge(self, old: int, new: int) -> None:
        """Point the hull vertex whose edge was ``old`` at half-edge ``new``."""
        v = self.start
        while True:
            if self.tri[v] == old:
                self.tri[v] = new
                break
            v = self.prev[v]
            if v == self.start:
                break

    def to_list(self) -> List[int]:
        """Hull vertices in counter-clockwise order starting at ``start``."""
        hull = []
        e = self.start
        while True:
            hull.append(e)
            e = self.next[e]
            if e == self.start:
                break
        return hull
