"""
Sweep-hull Delaunay triangulation.

Points are inserted in order of distance from the seed triangle's
circumcenter. Every insertion attaches a fan of triangles to the hull edges
the point can see, and each new triangle is immediately legalized with
Lawson flips so the mesh stays Delaunay after every step.

The mesh is stored as flat half-edge arrays: half-edge ``e`` starts at point
``triangles[e]`` and ``halfedges[e]`` is the opposite half-edge in the
neighbouring triangle, or ``EMPTY`` on the convex hull.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
import structlog

from ..config import settings
from .elements import HalfEdge, Triangle
from .hull import Hull
from .mesh import EMPTY, next_halfedge, prev_halfedge
from .predicates import in_circle, nearly_equals, orientation
from .seed import (
    as_points,
    check_seed_triangle,
    collinear_hull,
    find_seed_triangle,
    seed_center,
    sort_by_distance,
)
from .validation import check_triangulation

logger = structlog.get_logger()


@dataclass(eq=False)
class Triangulation:
    """Result of a Delaunay triangulation.

    Attributes:
        points: Input coordinates, shape ``(n, 2)``
        triangles: Flat array of point indices; each consecutive triple is a
            counter-clockwise triangle and entry ``e`` is the origin of
            half-edge ``e``
        halfedges: Twin half-edge of every half-edge, ``EMPTY`` on the hull
        hull: Convex hull point indices in counter-clockwise order, starting
            from an arbitrary hull vertex
        seed: Seed triangle used to start the sweep, ``None`` if the input
            could not be triangulated
        flips: Number of Lawson flips performed
        skipped: Number of points dropped because they coincide with an
            earlier point
    """
    points: np.ndarray
    triangles: np.ndarray
    halfedges: np.ndarray
    hull: np.ndarray
    seed: Optional[Tuple[int, int, int]] = None
    flips: int = 0
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.triangles) // 3

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def simplices(self) -> np.ndarray:
        """Triangles as an ``(m, 3)`` array of point indices."""
        return self.triangles.reshape(-1, 3)

    def triangle(self, t: int) -> Triangle:
        if not 0 <= t < len(self):
            raise IndexError(f"Triangle {t} out of range ({len(self)} triangles)")
        return Triangle(self, 3 * t)

    def half_edge(self, e: int) -> HalfEdge:
        if not 0 <= e < len(self.halfedges):
            raise IndexError(
                f"Half-edge {e} out of range ({len(self.halfedges)} half-edges)")
        return HalfEdge(self, e)

    def iter_triangles(self) -> Iterator[Triangle]:
        for index in range(0, len(self.triangles), 3):
            yield Triangle(self, index)

    def iter_half_edges(self) -> Iterator[HalfEdge]:
        for index in range(len(self.halfedges)):
            yield HalfEdge(self, index)


class _Builder:
    """Mutable state of one triangulation run."""

    def __init__(self, points: np.ndarray, seed: Tuple[int, int, int]):
        n = len(points)
        self.n = n
        self.coords = points.ravel().tolist()
        self.seed = seed
        self.center = seed_center(points, seed)

        max_triangles = max(2 * n - 5, 1)
        self.triangles = [0] * (max_triangles * 3)
        self.halfedges = [EMPTY] * (max_triangles * 3)
        self.triangles_len = 0
        self.flips = 0
        self.skipped = 0

        self.ids = sort_by_distance(points, self.center).tolist()
        self.add_triangle(seed[0], seed[1], seed[2], EMPTY, EMPTY, EMPTY)
        self.hull = Hull(n, self.center, seed, self.coords)

    def link(self, a: int, b: int) -> None:
        self.halfedges[a] = b
        if b != EMPTY:
            self.halfedges[b] = a

    def add_triangle(self, i0: int, i1: int, i2: int,
                     a: int, b: int, c: int) -> int:
        """Append triangle ``(i0, i1, i2)`` linked to half-edges ``a, b, c``."""
        t = self.triangles_len

        self.triangles[t] = i0
        self.triangles[t + 1] = i1
        self.triangles[t + 2] = i2

        self.link(t, a)
        self.link(t + 1, b)
        self.link(t + 2, c)

        self.triangles_len += 3
        return t

    def legalize(self, a: int) -> int:
        r"""
        Flip edges until the triangles around half-edge ``a`` are Delaunay.

        If the pair of triangles doesn't satisfy the Delaunay condition
        (p1 is inside the circumcircle of [p0, pl, pr]), flip them, then do
        the same check for the new pair of triangles::

                      pl                    pl
                     /||\                  /  \
                  al/ || \bl            al/    \a
                   /  ||  \              /      \
                  /  a||b  \    flip    /___ar___\
                p0\   ||   /p1   =>   p0\---bl---/p1
                   \  ||  /              \      /
                  ar\ || /br             b\    /br
                     \||/                  \  /
                      pr                    pr

        Returns:
            The half-edge ``ar`` of the last edge examined
        """
        triangles = self.triangles
        halfedges = self.halfedges
        coords = self.coords
        stack = []
        ar = 0

        while True:
            b = halfedges[a]
            a0 = a - a % 3
            ar = a0 + (a + 2) % 3

            if b == EMPTY:  # convex hull edge
                if not stack:
                    break
                a = stack.pop()
                continue

            b0 = b - b % 3
            al = a0 + (a + 1) % 3
            bl = b0 + (b + 2) % 3

            p0 = triangles[ar]
            pr = triangles[a]
            pl = triangles[al]
            p1 = triangles[bl]

            illegal = in_circle(
                coords[2 * p0], coords[2 * p0 + 1],
                coords[2 * pr], coords[2 * pr + 1],
                coords[2 * pl], coords[2 * pl + 1],
                coords[2 * p1], coords[2 * p1 + 1]) > 0

            if illegal:
                triangles[a] = p1
                triangles[b] = p0

                hbl = halfedges[bl]

                # edge swapped on the other side of the hull (rare)
                if hbl == EMPTY:
                    self.hull.swap_halfedge(bl, a)

                self.link(a, hbl)
                self.link(b, halfedges[ar])
                self.link(ar, bl)
                self.flips += 1

                stack.append(b0 + (b + 1) % 3)
            else:
                if not stack:
                    break
                a = stack.pop()

        return ar

    def locate(self, x: float, y: float) -> int:
        """
        First half-edge of a triangle containing ``(x, y)`` (boundary
        included), or ``EMPTY`` if the point is outside the mesh.

        Walks towards the point from a hull triangle; the walk terminates on
        a Delaunay mesh, with a linear scan as a safety net.
        """
        triangles = self.triangles
        halfedges = self.halfedges
        coords = self.coords

        def outside(e):
            a = triangles[e]
            b = triangles[next_halfedge(e)]
            return orientation(coords[2 * a], coords[2 * a + 1],
                               coords[2 * b], coords[2 * b + 1], x, y) < 0

        e = self.hull.tri[self.hull.start]
        t = e - e % 3
        for _ in range(self.triangles_len // 3 + 1):
            for e in (t, t + 1, t + 2):
                if outside(e):
                    twin = halfedges[e]
                    if twin == EMPTY:
                        return EMPTY
                    t = twin - twin % 3
                    break
            else:
                return t

        for t in range(0, self.triangles_len, 3):
            if not (outside(t) or outside(t + 1) or outside(t + 2)):
                return t
        return EMPTY

    def insert_inside(self, i: int, x: float, y: float) -> bool:
        """
        Insert a point that sees no hull edge, i.e. lies on the hull boundary
        or inside the mesh.

        Returns:
            False if the point coincides with an existing vertex
        """
        t = self.locate(x, y)
        if t == EMPTY:
            return False

        triangles = self.triangles
        coords = self.coords
        on_edges = []
        for e in (t, t + 1, t + 2):
            a = triangles[e]
            b = triangles[next_halfedge(e)]
            if orientation(coords[2 * a], coords[2 * a + 1],
                           coords[2 * b], coords[2 * b + 1], x, y) == 0:
                on_edges.append(e)

        if len(on_edges) >= 2:
            # duplicate of a corner
            return False
        if not on_edges:
            self.split_triangle(t, i)
        elif self.halfedges[on_edges[0]] == EMPTY:
            self.split_hull_edge(on_edges[0], i)
        else:
            self.split_edge(on_edges[0], i)
        return True

    def split_triangle(self, t: int, p: int) -> None:
        """Replace triangle ``(a, b, c)`` by ``(a, b, p)``, ``(b, c, p)``, ``(c, a, p)``."""
        triangles = self.triangles
        halfedges = self.halfedges
        e1, e2 = t + 1, t + 2
        a, b, c = triangles[t], triangles[e1], triangles[e2]
        bc = halfedges[e1]
        ca = halfedges[e2]

        triangles[e2] = p
        t1 = self.add_triangle(b, c, p, bc, EMPTY, e1)
        t2 = self.add_triangle(c, a, p, ca, e2, t1 + 1)
        if bc == EMPTY:
            self.hull.swap_halfedge(e1, t1)
        if ca == EMPTY:
            self.hull.swap_halfedge(e2, t2)

        self.legalize(t)
        self.legalize(t1)
        self.legalize(t2)

    def split_edge(self, e: int, p: int) -> None:
        """Split the interior edge ``e`` and the two triangles sharing it into four."""
        triangles = self.triangles
        halfedges = self.halfedges
        f = halfedges[e]
        en, ep = next_halfedge(e), prev_halfedge(e)
        fn, fp = next_halfedge(f), prev_halfedge(f)
        a, b = triangles[e], triangles[f]
        c, d = triangles[ep], triangles[fp]
        bc = halfedges[en]
        ad = halfedges[fn]

        # (a, b, c) becomes (a, p, c) and (b, a, d) becomes (b, p, d)
        triangles[en] = p
        triangles[fn] = p
        t3 = self.add_triangle(p, b, c, f, bc, en)
        t4 = self.add_triangle(p, a, d, e, ad, fn)
        if bc == EMPTY:
            self.hull.swap_halfedge(en, t3 + 1)
        if ad == EMPTY:
            self.hull.swap_halfedge(fn, t4 + 1)

        self.legalize(ep)
        self.legalize(fp)
        self.legalize(t3 + 1)
        self.legalize(t4 + 1)

    def split_hull_edge(self, e: int, p: int) -> None:
        """Split the hull edge ``e`` and its triangle, splicing ``p`` into the hull."""
        triangles = self.triangles
        halfedges = self.halfedges
        hull = self.hull
        en, ep = next_halfedge(e), prev_halfedge(e)
        a, b, c = triangles[e], triangles[en], triangles[ep]
        bc = halfedges[en]

        # (a, b, c) becomes (a, p, c)
        triangles[en] = p
        t3 = self.add_triangle(p, b, c, EMPTY, bc, en)
        if bc == EMPTY:
            hull.swap_halfedge(en, t3 + 1)

        hull.next[a] = p
        hull.prev[p] = a
        hull.next[p] = b
        hull.prev[b] = p
        hull.tri[p] = t3
        hull.hash_point(p)

        self.legalize(ep)
        self.legalize(t3 + 1)

    def run(self) -> None:
        coords = self.coords
        hull = self.hull
        hull_next = hull.next
        hull_prev = hull.prev
        hull_tri = hull.tri
        i0, i1, i2 = self.seed

        xp = yp = 0.0
        for k, i in enumerate(self.ids):
            x = coords[2 * i]
            y = coords[2 * i + 1]

            # skip near-duplicate points
            if k > 0 and nearly_equals(x, y, xp, yp):
                self.skipped += 1
                continue
            xp, yp = x, y

            # skip seed triangle points
            if i == i0 or i == i1 or i == i2:
                continue

            e, walk_back = hull.find_visible_edge(x, y)
            if e == EMPTY:
                # on the hull boundary or inside the mesh
                if not self.insert_inside(i, x, y):
                    self.skipped += 1
                continue

            # add the first triangle from the point
            t = self.add_triangle(e, i, hull_next[e], EMPTY, EMPTY, hull_tri[e])

            hull_tri[i] = self.legalize(t + 2)
            hull_tri[e] = t  # keep track of boundary triangles on the hull

            # walk forward through the hull, adding more triangles and flipping
            n = hull_next[e]
            while True:
                q = hull_next[n]
                if orientation(x, y, coords[2 * n], coords[2 * n + 1],
                               coords[2 * q], coords[2 * q + 1]) >= 0:
                    break
                t = self.add_triangle(n, i, q, hull_tri[i], EMPTY, hull_tri[n])
                hull_tri[i] = self.legalize(t + 2)
                hull_next[n] = n  # mark as removed
                n = q

            # walk backward from the other side, adding more triangles and flipping
            if walk_back:
                while True:
                    q = hull_prev[e]
                    if orientation(x, y, coords[2 * q], coords[2 * q + 1],
                                   coords[2 * e], coords[2 * e + 1]) >= 0:
                        break
                    t = self.add_triangle(q, i, e, EMPTY, hull_tri[e], hull_tri[q])
                    self.legalize(t + 2)
                    hull_tri[q] = t
                    hull_next[e] = e  # mark as removed
                    e = q

            # update the hull indices
            hull.start = hull_prev[i] = e
            hull_next[e] = hull_prev[n] = i
            hull_next[i] = n

            # save the two new edges in the hash table
            hull.hash_point(i)
            hull.hash_point(e)


def _empty_result(points: np.ndarray) -> Triangulation:
    return Triangulation(
        points=points,
        triangles=np.empty(0, dtype=np.int64),
        halfedges=np.empty(0, dtype=np.int64),
        hull=collinear_hull(points),
    )


def triangulate(points, seed_triangle: Optional[Sequence[int]] = None,
                check: Optional[bool] = None) -> Triangulation:
    """
    Compute the Delaunay triangulation of a set of 2D points.

    Args:
        points: ``(n, 2)`` array-like of coordinates
        seed_triangle: Optional indices of the triangle to start the sweep
            from; chosen automatically when omitted
        check: Run the mesh consistency checks on the result; defaults to
            ``settings.check_invariants``

    Returns:
        Triangulation. Inputs without three non-collinear points produce an
        empty triangulation whose hull lists the distinct points in order.

    Raises:
        ValueError: On malformed or non-finite input, or an invalid seed
            triangle
        AssertionError: If ``check`` is enabled and the mesh is inconsistent
    """
    points = as_points(points)
    n = len(points)

    if seed_triangle is not None:
        seed = check_seed_triangle(points, seed_triangle)
    else:
        seed = find_seed_triangle(points)

    if seed is None:
        logger.debug("No triangulation exists for input", points=n)
        return _empty_result(points)

    builder = _Builder(points, seed)
    builder.run()

    size = builder.triangles_len
    result = Triangulation(
        points=points,
        triangles=np.array(builder.triangles[:size], dtype=np.int64),
        halfedges=np.array(builder.halfedges[:size], dtype=np.int64),
        hull=np.array(builder.hull.to_list(), dtype=np.int64),
        seed=seed,
        flips=builder.flips,
        skipped=builder.skipped,
    )

    logger.debug("Triangulation complete",
                 points=n, triangles=len(result), hull=len(result.hull),
                 flips=builder.flips, skipped=builder.skipped, seed=seed)

    if check is None:
        check = settings.check_invariants
    if check:
        check_triangulation(result)

    return result
