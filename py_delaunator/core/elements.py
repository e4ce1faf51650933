"""
Lightweight views over the elements of a triangulation.

A view only stores the triangulation and an index into its half-edge
arrays, so creating one is cheap and it always reflects the final mesh.
"""

from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .mesh import EMPTY, next_halfedge, prev_halfedge

if TYPE_CHECKING:
    from .triangulation import Triangulation


class Triangle:
    """One triangle, identified by the index of its first half-edge."""

    __slots__ = ("triangulation", "index")

    def __init__(self, triangulation: "Triangulation", index: int):
        self.triangulation = triangulation
        self.index = index

    def __repr__(self) -> str:
        return f"Triangle(id={self.id}, points={self.points()})"

    def __eq__(self, other) -> bool:
        return (isinstance(other, Triangle)
                and other.triangulation is self.triangulation
                and other.index == self.index)

    def __hash__(self) -> int:
        return hash((id(self.triangulation), self.index))

    @property
    def id(self) -> int:
        return self.index // 3

    @property
    def a(self) -> "Vertex":
        return Vertex(self.triangulation, self.index)

    @property
    def b(self) -> "Vertex":
        return Vertex(self.triangulation, self.index + 1)

    @property
    def c(self) -> "Vertex":
        return Vertex(self.triangulation, self.index + 2)

    @property
    def ab(self) -> "HalfEdge":
        return HalfEdge(self.triangulation, self.index)

    @property
    def bc(self) -> "HalfEdge":
        return HalfEdge(self.triangulation, self.index + 1)

    @property
    def ca(self) -> "HalfEdge":
        return HalfEdge(self.triangulation, self.index + 2)

    def vertices(self) -> List["Vertex"]:
        return [self.a, self.b, self.c]

    def edges(self) -> List["HalfEdge"]:
        return [self.ab, self.bc, self.ca]

    def points(self) -> Tuple[int, int, int]:
        """Point indices of the corners in counter-clockwise order."""
        tris = self.triangulation.triangles
        return (int(tris[self.index]), int(tris[self.index + 1]),
                int(tris[self.index + 2]))

    def neighbors(self) -> List["Triangle"]:
        """Triangles across each edge, skipping hull edges."""
        return [t for t in (e.right for e in self.edges()) if t is not None]


class HalfEdge:
    """One directed edge of a triangle."""

    __slots__ = ("triangulation", "index")

    def __init__(self, triangulation: "Triangulation", index: int):
        self.triangulation = triangulation
        self.index = index

    def __repr__(self) -> str:
        return f"HalfEdge(id={self.index}, {self.start.id}->{self.end.id})"

    def __eq__(self, other) -> bool:
        return (isinstance(other, HalfEdge)
                and other.triangulation is self.triangulation
                and other.index == self.index)

    def __hash__(self) -> int:
        return hash((id(self.triangulation), self.index))

    @property
    def id(self) -> int:
        return self.index

    @property
    def twin(self) -> Optional["HalfEdge"]:
        """Opposite half-edge in the adjacent triangle; ``None`` on the hull."""
        j = int(self.triangulation.halfedges[self.index])
        if j == EMPTY:
            return None
        return HalfEdge(self.triangulation, j)

    @property
    def is_hull(self) -> bool:
        return int(self.triangulation.halfedges[self.index]) == EMPTY

    @property
    def next(self) -> "HalfEdge":
        return HalfEdge(self.triangulation, next_halfedge(self.index))

    @property
    def prev(self) -> "HalfEdge":
        return HalfEdge(self.triangulation, prev_halfedge(self.index))

    @property
    def start(self) -> "Vertex":
        return Vertex(self.triangulation, self.index)

    @property
    def end(self) -> "Vertex":
        return Vertex(self.triangulation, next_halfedge(self.index))

    @property
    def left(self) -> Triangle:
        """The triangle this half-edge belongs to."""
        return Triangle(self.triangulation, self.index - self.index % 3)

    @property
    def right(self) -> Optional[Triangle]:
        """The triangle on the other side, ``None`` on the hull."""
        j = int(self.triangulation.halfedges[self.index])
        if j == EMPTY:
            return None
        return Triangle(self.triangulation, j - j % 3)


class Vertex:
    """
    A corner of a triangle.

    ``index`` is the half-edge leaving the corner, so two corners of
    different triangles can refer to the same input point.
    """

    __slots__ = ("triangulation", "index")

    def __init__(self, triangulation: "Triangulation", index: int):
        self.triangulation = triangulation
        self.index = index

    def __repr__(self) -> str:
        return f"Vertex(id={self.id}, halfedge={self.index})"

    def __eq__(self, other) -> bool:
        return (isinstance(other, Vertex)
                and other.triangulation is self.triangulation
                and other.index == self.index)

    def __hash__(self) -> int:
        return hash((id(self.triangulation), self.index))

    @property
    def id(self) -> int:
        """Index of the input point."""
        return int(self.triangulation.triangles[self.index])

    @property
    def coords(self) -> Tuple[float, float]:
        x, y = self.triangulation.points[self.id]
        return float(x), float(y)

    def edges(self) -> Iterator[HalfEdge]:
        """
        Half-edges starting at this vertex.

        Iteration runs counter-clockwise. If it reaches the convex hull it
        resumes from the starting edge going clockwise. On the hull, the
        one edge arriving at the vertex along the boundary does not start
        there and is not visited.
        """
        halfedges = self.triangulation.halfedges
        start = self.index
        index = start

        while True:
            yield HalfEdge(self.triangulation, index)
            incoming = int(halfedges[prev_halfedge(index)])
            if incoming == start:
                return
            if incoming == EMPTY:
                break
            index = incoming

        # hit the hull: go back to the start and iterate the other way
        twin = int(halfedges[start])
        index = EMPTY if twin == EMPTY else next_halfedge(twin)
        while index != EMPTY:
            yield HalfEdge(self.triangulation, index)
            twin = int(halfedges[index])
            index = EMPTY if twin == EMPTY else next_halfedge(twin)

    def triangles(self) -> Iterator[Triangle]:
        """Triangles that have this vertex as a corner."""
        for edge in self.edges():
            yield edge.left
