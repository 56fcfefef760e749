"""SDF math kernels for the sdfray package.

Re-exports all shared helpers from :mod:`sdfray._common`, then adds the
primitive distance functions and the smooth boolean operators that
:mod:`sdfray.geometry` wraps into field objects.

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A "point array" *p*
has shape ``(..., 3)``; scalar SDF results have shape ``(...,)``.

Formulas for the primitives follow Inigo Quilez's distance function
reference: https://iquilezles.org/articles/distfunctions/
"""

import numpy as np

from ._common import *  # noqa: F401, F403  (re-export shared helpers)


# ===========================================================================
# Smooth minimum and booleans
# ===========================================================================

def smooth_min(a: _F, b: _F, k: float) -> _F:
    """Hyperbolic smooth minimum ``0.5 * (a + b - sqrt((b - a)^2 + (2k)^2))``.

    ``k`` is roughly the radius of the rounded seam.  ``k == 0`` is the hard
    minimum.
    """
    if k == 0:
        return np.minimum(a, b)
    x = b - a
    return 0.5 * (a + b - np.sqrt(x * x + (2.0 * k) ** 2))


def opUnion(d1: _F, d2: _F, k: float = 0.0) -> _F:
    """Union of two distances, rounded by *k*."""
    return smooth_min(d1, d2, k)


def opIntersection(d1: _F, d2: _F, k: float = 0.0) -> _F:
    """Intersection of two distances, rounded by *k*."""
    return -smooth_min(-d1, -d2, k)


def opSubtraction(d1: _F, d2: _F, k: float = 0.0) -> _F:
    """Carve *d2* out of *d1*, rounded by *k*."""
    return -smooth_min(-d1, d2, k)


# ===========================================================================
# Primitive SDFs
# ===========================================================================

def sdSphere(p: _F, r: float) -> _F:
    """Sphere of radius *r* centred at the origin."""
    return length(p) - r


def sdBox(p: _F, b: _F, roundness: float = 0.0) -> _F:
    """Axis-aligned box with half-extents *b*, edges rounded by *roundness*.

    The rounded box keeps the outer extents *b*: the core box is shrunk by
    *roundness* before the rounding is added back.
    """
    q = np.abs(p) - (b - roundness)
    return length(np.maximum(q, 0.0)) + np.minimum(np.max(q, axis=-1), 0.0) - roundness


def sdCylinder(p: _F, r: float, h: float, roundness: float = 0.0) -> _F:
    """Capped cylinder along Y with radius *r* and full height *h*."""
    d = vec2(length(p[..., [0, 2]]) - r + roundness, np.abs(p[..., 1]) - h / 2.0)
    return (
        np.minimum(np.maximum(d[..., 0], d[..., 1]), 0.0)
        + length(np.maximum(d, 0.0))
        - roundness
    )


def _box_edge(x: _F, y: _F, z: _F) -> _F:
    w = vec3(x, y, z)
    return length(np.maximum(w, 0.0)) + np.minimum(np.max(w, axis=-1), 0.0)


def sdBoxFrame(p: _F, b: _F, e: float, roundness: float = 0.0) -> _F:
    """Wireframe box with half-extents *b* and wire thickness *e*."""
    t = e - roundness
    p = np.abs(p) - (b - roundness)
    q = np.abs(p + t) - t
    d = np.minimum(
        np.minimum(
            _box_edge(p[..., 0], q[..., 1], q[..., 2]),
            _box_edge(q[..., 0], p[..., 1], q[..., 2]),
        ),
        _box_edge(q[..., 0], q[..., 1], p[..., 2]),
    )
    return d - roundness


def sdCapsule(p: _F, a: _F, b: _F, r: float) -> _F:
    """Capsule from *a* to *b* with radius *r*."""
    pa = p - a
    ba = b - a
    h = clamp(dot(pa, ba) / dot2(ba), 0.0, 1.0)
    return length(pa - ba * h[..., None]) - r


def sdHalfSpace(p: _F, point: _F, direction: _F) -> _F:
    """Signed distance to the plane through *point*; *direction* points outside."""
    return dot(p - point, normalize(direction))
