"""Sphere tracing against signed distance fields.

Rays advance by the field value at their current position until the value
drops below ``min_distance`` (hit) or a single step exceeds
``max_distance`` (miss).  All rays of a batch are marched together and stop
independently.

A ray that is still marching when ``max_iterations`` runs out is reported
as a hit at its last position.  Grazing rays often end up there.

Example:
    >>> from sdfray.geometry import Sphere
    >>> from sdfray.trace import trace_ray
    >>> hit = trace_ray(Sphere((0, 0, 0), 1.0), (0, 0, 5), (0, 0, -1))
    >>> # hit is close to (0, 0, 1); a miss would return None
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf
from .config import TraceConfig
from .geometry import Sdf

_Array = npt.NDArray[np.floating]
_Mask = npt.NDArray[np.bool_]


class TraceResult(NamedTuple):
    """Outcome of tracing a batch of rays.

    Attributes:
        position: Final position of every ray, shape ``(..., 3)``.  Only
            meaningful where ``hit`` is true.
        hit: Boolean array of shape ``(...)``; false where the ray escaped.
    """

    position: _Array
    hit: _Mask


def trace(
    field: Sdf,
    start: _Array | Sequence[float],
    direction: _Array | Sequence[float],
    config: TraceConfig = TraceConfig(),
) -> TraceResult:
    """Sphere-trace rays from *start* along *direction*.

    *start* and *direction* broadcast against each other; *direction* is used
    as given (no normalisation), so each step moves ``|direction| * d``.
    """
    start = sdf.as_points(start)
    direction = sdf.as_points(direction)
    start, direction = np.broadcast_arrays(start, direction)
    batch_shape = start.shape[:-1]

    pos = start.reshape(-1, 3).copy()
    dirs = direction.reshape(-1, 3)
    active = np.arange(pos.shape[0])
    missed = np.zeros(pos.shape[0], dtype=bool)

    for _ in range(config.max_iterations):
        if active.size == 0:
            break
        dist = field(pos[active])
        pos[active] += dirs[active] * dist[:, None]
        done = dist < config.min_distance
        escaped = ~done & (dist > config.max_distance)
        missed[active[escaped]] = True
        active = active[~(done | escaped)]

    return TraceResult(pos.reshape(batch_shape + (3,)), ~missed.reshape(batch_shape))


def trace_ray(
    field: Sdf,
    start: Sequence[float],
    direction: Sequence[float],
    config: TraceConfig = TraceConfig(),
) -> _Array | None:
    """Trace a single ray; return the hit position or ``None`` on a miss."""
    result = trace(field, start, direction, config)
    if not bool(result.hit):
        return None
    return result.position
