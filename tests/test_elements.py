"""Tests for the triangle, half-edge and vertex views."""

import numpy as np
import pytest

from py_delaunator import HalfEdge, Triangle, Vertex, triangulate


@pytest.fixture
def diamond(diamond_points):
    return triangulate(diamond_points)


class TestTriangle:
    """Test the triangle view."""

    def test_corners(self, diamond):
        t = diamond.triangle(0)
        assert t.id == 0
        assert t.points() == (0, 1, 2)
        assert [v.id for v in t.vertices()] == [0, 1, 2]
        assert t.a.id == 0 and t.b.id == 1 and t.c.id == 2

    def test_edges(self, diamond):
        t = diamond.triangle(1)
        assert [e.id for e in t.edges()] == [3, 4, 5]
        assert (t.ab.start.id, t.ab.end.id) == (2, 3)
        assert (t.bc.start.id, t.bc.end.id) == (3, 0)
        assert (t.ca.start.id, t.ca.end.id) == (0, 2)

    def test_neighbors(self, diamond):
        assert sorted(t.id for t in diamond.triangle(0).neighbors()) == [1, 3]
        assert sorted(t.id for t in diamond.triangle(2).neighbors()) == [1, 3]

    def test_equality(self, diamond):
        assert diamond.triangle(1) == diamond.triangle(1)
        assert diamond.triangle(1) != diamond.triangle(2)
        assert len({diamond.triangle(1), diamond.triangle(1)}) == 1
        assert "Triangle(id=1" in repr(diamond.triangle(1))

    def test_views_of_different_meshes_differ(self, diamond_points):
        first = triangulate(diamond_points)
        second = triangulate(diamond_points)
        assert first.triangle(0) != second.triangle(0)


class TestHalfEdge:
    """Test the half-edge view."""

    def test_twin(self, diamond):
        e = diamond.half_edge(2)
        assert e.twin.id == 5
        assert e.twin.twin == e
        assert e.start.id == e.twin.end.id
        assert e.end.id == e.twin.start.id

    def test_hull_edge(self, diamond):
        e = diamond.half_edge(1)
        assert e.is_hull
        assert e.twin is None
        assert e.right is None

    def test_next_prev(self, diamond):
        e = diamond.half_edge(5)
        assert e.next.id == 3
        assert e.prev.id == 4
        assert e.next.next.next == e

    def test_left_right(self, diamond):
        e = diamond.half_edge(0)
        assert e.left.id == 0
        assert e.right.id == 3

    def test_all_twins_consistent(self, random_points):
        tri = triangulate(random_points)
        for e in tri.iter_half_edges():
            if e.is_hull:
                continue
            assert isinstance(e.twin, HalfEdge)
            assert (e.start.id, e.end.id) == (e.twin.end.id, e.twin.start.id)
            assert e.left == e.twin.right


class TestVertex:
    """Test the vertex view and its edge fan."""

    def test_coords(self, diamond):
        v = diamond.triangle(1).b
        assert isinstance(v, Vertex)
        assert v.id == 3
        assert v.coords == (-1.0, 0.0)

    def test_interior_vertex_edges(self, diamond):
        v = Vertex(diamond, 0)
        assert [e.id for e in v.edges()] == [0, 5, 8, 9]

    def test_hull_vertex_edges(self, diamond):
        assert [e.id for e in Vertex(diamond, 1).edges()] == [1, 11]
        assert [e.id for e in Vertex(diamond, 2).edges()] == [2, 3]

    def test_edges_start_at_vertex(self, random_points):
        tri = triangulate(random_points)
        for e in range(0, len(tri.halfedges), 7):
            v = Vertex(tri, e)
            for edge in v.edges():
                assert edge.start.id == v.id

    def test_triangles_cover_incident_triangles(self, random_points):
        tri = triangulate(random_points)
        simplices = tri.simplices
        for e in range(0, len(tri.halfedges), 5):
            v = Vertex(tri, e)
            expected = set(np.flatnonzero((simplices == v.id).any(axis=1)).tolist())
            found = [t.id for t in v.triangles()]
            assert len(found) == len(set(found))
            assert set(found) == expected

    def test_triangle_views(self, diamond):
        assert all(isinstance(t, Triangle) for t in Vertex(diamond, 0).triangles())
        assert sorted(t.id for t in Vertex(diamond, 0).triangles()) == [0, 1, 2, 3]
