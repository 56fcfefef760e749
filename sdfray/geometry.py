"""Signed distance fields: primitives, smooth booleans and gradients."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf
from .field import Field

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]

_AXES = np.eye(3)


# ===========================================================================
# Base class
# ===========================================================================

class Sdf(Field):
    """A scalar field approximating signed distance to a surface.

    Values are negative inside, zero on the boundary and a lower bound on
    the distance outside.  Sphere tracing relies on that bound, which is why
    :meth:`scale` rescales the returned distance as well as the sampling
    point.

    Implements:
    - Boolean operations: :meth:`union`, :meth:`intersect`, :meth:`subtract`
    - Transforms inherited from :class:`~sdfray.field.Field`
    """

    def _wrap(self, func) -> Sdf:
        return Sdf(func)

    def scale(self, s: float) -> Sdf:
        """Uniformly scale by *s*, keeping the field a distance bound."""
        return Sdf(lambda p: self._func(p / s) * s)

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, other: Sdf, k: float = 0.0) -> Sdf:
        """Return the union of this shape and *other*, rounded by *k*."""
        return Union([self, other], k)

    def intersect(self, other: Sdf, k: float = 0.0) -> Sdf:
        """Return the intersection of this shape and *other*, rounded by *k*."""
        return Intersection([self, other], k)

    def subtract(self, other: Sdf, k: float = 0.0) -> Sdf:
        """Carve *other* out of this shape, rounded by *k*."""
        return Subtraction(self, other, k)


# ===========================================================================
# Primitive shapes
# ===========================================================================

class Sphere(Sdf):
    """Sphere with given *center* and *radius*."""

    def __init__(self, center: Sequence[float], radius: float) -> None:
        c = np.asarray(center, dtype=float)
        super().__init__(lambda p: sdf.sdSphere(p - c, radius))


class Box(Sdf):
    """Axis-aligned box with *half_size* ``(hx, hy, hz)`` centred at origin.

    *roundness* rounds the edges without growing the box.
    """

    def __init__(self, half_size: Sequence[float], roundness: float = 0.0) -> None:
        b = np.asarray(half_size, dtype=float)
        super().__init__(lambda p: sdf.sdBox(p, b, roundness))


class Cylinder(Sdf):
    """Capped cylinder along Y.

    Parameters
    ----------
    radius:
        Cylinder radius in the XZ plane.
    height:
        Full height along Y (the cylinder spans ``[-height/2, height/2]``).
    roundness:
        Radius of the rounded rim.
    """

    def __init__(self, radius: float, height: float, roundness: float = 0.0) -> None:
        super().__init__(lambda p: sdf.sdCylinder(p, radius, height, roundness))


class BoxFrame(Sdf):
    """Edges of an axis-aligned box, *thickness* wide, centred at origin."""

    def __init__(
        self,
        half_size: Sequence[float],
        thickness: float,
        roundness: float = 0.0,
    ) -> None:
        b = np.asarray(half_size, dtype=float)
        super().__init__(lambda p: sdf.sdBoxFrame(p, b, thickness, roundness))


class Capsule(Sdf):
    """Capsule from *a* to *b* with *radius*."""

    def __init__(self, a: Sequence[float], b: Sequence[float], radius: float) -> None:
        pa = np.asarray(a, dtype=float)
        pb = np.asarray(b, dtype=float)
        super().__init__(lambda p: sdf.sdCapsule(p, pa, pb, radius))


class HalfSpace(Sdf):
    """Everything behind the plane through *point*.

    *direction* is the outward normal and need not be unit length.
    """

    def __init__(self, point: Sequence[float], direction: Sequence[float]) -> None:
        o = np.asarray(point, dtype=float)
        n = np.asarray(direction, dtype=float)
        super().__init__(lambda p: sdf.sdHalfSpace(p, o, n))


# ===========================================================================
# Boolean operation classes
# ===========================================================================

def _check_operands(sdfs: Sequence[Sdf], name: str) -> list[Sdf]:
    items = list(sdfs)
    if not items:
        raise ValueError(f"{name} needs at least one SDF")
    return items


class Union(Sdf):
    """Smooth union of one or more SDFs.

    The operands are folded left to right with :func:`~sdfray.sdf_lib.opUnion`.
    For ``k > 0`` the result depends on the order of *sdfs*.
    """

    def __init__(self, sdfs: Sequence[Sdf], k: float = 0.0) -> None:
        items = _check_operands(sdfs, "Union")

        def _sdf(p: _Array) -> _Array:
            d = items[0]._func(p)
            for g in items[1:]:
                d = sdf.opUnion(d, g._func(p), k)
            return d

        super().__init__(_sdf)


class Intersection(Sdf):
    """Smooth intersection of one or more SDFs (left fold, order-sensitive)."""

    def __init__(self, sdfs: Sequence[Sdf], k: float = 0.0) -> None:
        items = _check_operands(sdfs, "Intersection")

        def _sdf(p: _Array) -> _Array:
            d = items[0]._func(p)
            for g in items[1:]:
                d = sdf.opIntersection(d, g._func(p), k)
            return d

        super().__init__(_sdf)


class Subtraction(Sdf):
    """Subtract *cutter* from *base*."""

    def __init__(self, base: Sdf, cutter: Sdf, k: float = 0.0) -> None:
        super().__init__(
            lambda p: sdf.opSubtraction(base._func(p), cutter._func(p), k)
        )


# ===========================================================================
# Gradient
# ===========================================================================

def gradient(field: Sdf, p: _Array, eps: float = 1e-10) -> _Array:
    """Central-difference gradient of *field* at *p*.

    Each component is ``(f(p + eps*e) - f(p - eps*e)) / (2*eps)``.  The
    default step is small enough that cancellation noise shows up at double
    precision; pass a larger *eps* for smoother normals.

    Returns an array with the same shape as *p*.  The result is not
    normalised.
    """
    p = sdf.as_points(p)
    components = []
    for axis in _AXES:
        step = axis * eps
        components.append((field(p + step) - field(p - step)) / (2.0 * eps))
    return np.stack(components, axis=-1)
