"""Tests for sdfray/grid.py: pixel-grid adjacency."""

import math

import sdfray
from sdfray import grid
from sdfray.grid import grid_edges, grid_neighbors, in_bounds


class TestAdjacency:
    def test_eight_neighbors(self):
        neighbors = list(grid_neighbors((5, 5)))
        assert len(neighbors) == 8
        assert {n.pos for n in neighbors} == {
            (4, 4), (4, 5), (4, 6), (5, 4), (5, 6), (6, 4), (6, 5), (6, 6)
        }

    def test_neighbor_lengths(self):
        for n in grid_neighbors((0, 0)):
            di, dj = n.offset
            expected = math.sqrt(2.0) if di and dj else 1.0
            assert math.isclose(n.length, expected)

    def test_neighbor_offsets_cancel(self):
        offsets = [n.offset for n in grid_neighbors((3, 1))]
        assert sum(di for di, _ in offsets) == 0
        assert sum(dj for _, dj in offsets) == 0

    def test_four_edges(self):
        edges = list(grid_edges((2, 3)))
        assert {e.pos for e in edges} == {(1, 3), (3, 3), (2, 2), (2, 4)}
        assert all(e.length == 1.0 for e in edges)

    def test_edges_are_subset_of_neighbors(self):
        assert {e.pos for e in grid_edges((1, 1))} < {n.pos for n in grid_neighbors((1, 1))}

    def test_in_bounds(self):
        assert in_bounds((0, 0), (2, 3))
        assert in_bounds((1, 2), (2, 3))
        assert not in_bounds((2, 0), (2, 3))
        assert not in_bounds((0, -1), (2, 3))


def test_no_volume_export():
    # the grid module only serves pixel adjacency; fields are never baked to disk
    for name in ("sample_field", "save_npy"):
        assert not hasattr(grid, name)
        assert not hasattr(sdfray, name)
        assert name not in sdfray.__all__
