"""Shared array helpers used throughout sdfray.

This module provides:

* **Type alias**: :data:`_F`
* **Vector constructors**: :func:`vec2`, :func:`vec3`, :func:`as_points`
* **Math helpers**: :func:`length`, :func:`dot`, :func:`dot2`, :func:`clamp`,
  :func:`normalize`, :func:`rotate`

Every helper works on ``numpy`` arrays whose *last* axis holds the vector
components, so a batch of points has shape ``(..., 3)``.

Not meant to be imported directly by end users; import from
:mod:`sdfray.sdf_lib` instead.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

__all__ = [
    "_F",
    "vec2", "vec3", "as_points",
    "length", "dot", "dot2", "clamp", "normalize", "rotate",
]


# ===========================================================================
# Vector constructors
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


def vec3(x: _F, y: _F, z: _F) -> _F:
    """Stack *x*, *y*, *z* into a ``(..., 3)`` array."""
    x, y, z = np.broadcast_arrays(x, y, z)
    return np.stack([x, y, z], axis=-1)


def as_points(p: _F | Sequence[float]) -> _F:
    """Convert *p* to a float64 array of 3-D points.

    Raises
    ------
    ValueError
        If the last axis of *p* does not have length 3.
    """
    arr = np.asarray(p, dtype=float)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"Expected points with a trailing axis of 3, got shape {arr.shape}")
    return arr


# ===========================================================================
# Math helpers
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def dot2(a: _F) -> _F:
    """Squared length: ``dot(a, a)``."""
    return dot(a, a)


def clamp(x: _F, lo: float | _F, hi: float | _F) -> _F:
    """Clamp *x* element-wise to ``[lo, hi]``."""
    return np.minimum(np.maximum(x, lo), hi)


def normalize(v: _F) -> _F:
    """Scale *v* to unit length along the last axis."""
    v = np.asarray(v, dtype=float)
    return v / length(v)[..., None]


def rotate(p: _F, axis: _F, angle: float) -> _F:
    """Rotate points *p* by *angle* radians about *axis* (Rodrigues' formula).

    The axis need not be unit length.  Positive angles follow the right-hand
    rule around the axis.
    """
    k = normalize(np.asarray(axis, dtype=float))
    c = np.cos(angle)
    s = np.sin(angle)
    return p * c + np.cross(k, p) * s + k * (dot(p, k)[..., None] * (1.0 - c))
