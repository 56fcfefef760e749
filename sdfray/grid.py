"""Grid utilities: pixel-grid adjacency for the progressive renderer."""

from __future__ import annotations

import math
from typing import Iterator, NamedTuple, Tuple

_Pos = Tuple[int, int]

_NEIGHBOR_OFFSETS = [
    (di, dj) for di in (-1, 0, 1) for dj in (-1, 0, 1) if (di, dj) != (0, 0)
]
_EDGE_OFFSETS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


class Neighbor(NamedTuple):
    pos: _Pos
    offset: _Pos
    length: float


# ===========================================================================
# Adjacency
# ===========================================================================

def in_bounds(pos: _Pos, shape: Tuple[int, ...]) -> bool:
    i, j = pos
    return 0 <= i < shape[0] and 0 <= j < shape[1]


def grid_neighbors(pos: _Pos) -> Iterator[Neighbor]:
    """Yield the 8 surrounding cells with their offsets and edge lengths.

    Cells are not bounds-checked; use :func:`in_bounds`.
    """
    i, j = pos
    for di, dj in _NEIGHBOR_OFFSETS:
        yield Neighbor((i + di, j + dj), (di, dj), math.hypot(di, dj))


def grid_edges(pos: _Pos) -> Iterator[Neighbor]:
    """Yield the 4 edge-adjacent cells (unit edge length)."""
    i, j = pos
    for di, dj in _EDGE_OFFSETS:
        yield Neighbor((i + di, j + dj), (di, dj), 1.0)
