"""Fields of 3-D position and the transformations that move them.

A :class:`Field` wraps a callable ``func(p) -> values`` where *p* is a
``(..., 3)`` array of points.  Fields never change after construction:
every transform returns a new field that samples the old one at a moved
position.

:class:`Transformation` objects describe a transform without a field
attached, so the same placement can be applied to a signed distance field,
a colour field, or a whole :class:`~sdfray.model.Model` (anything that
exposes ``translate``/``rotate``/``scale`` methods).
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf

_Array = npt.NDArray[np.floating]
_FieldFunc = Callable[[_Array], _Array]

_X = np.array([1.0, 0.0, 0.0])
_Y = np.array([0.0, 1.0, 0.0])
_Z = np.array([0.0, 0.0, 1.0])

T = TypeVar("T")


class Field:
    """Base class for fields of 3-D position.

    Implements:
    - Evaluation:  :meth:`evaluate`, ``__call__``
    - Transforms:  :meth:`translate`, :meth:`rotate`, :meth:`scale`,
      :meth:`rotate_x`, :meth:`rotate_y`, :meth:`rotate_z`

    Subclasses override :meth:`_wrap` so transforms keep the field kind.
    """

    def __init__(self, func: _FieldFunc) -> None:
        self._func = func

    def evaluate(self, p: _Array) -> _Array:
        """Evaluate the field at *p* (shape ``(..., 3)``)."""
        return self._func(sdf.as_points(p))

    def __call__(self, p: _Array) -> _Array:
        return self.evaluate(p)

    def _wrap(self, func: _FieldFunc) -> Field:
        return Field(func)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def translate(self, offset: Sequence[float]) -> Field:
        """Move the field forward by *offset*: sample at ``p - offset``."""
        t = np.asarray(offset, dtype=float)
        return self._wrap(lambda p: self._func(p - t))

    def rotate(self, axis: Sequence[float], angle: float) -> Field:
        """Rotate the field by *angle* radians about *axis* through the origin."""
        a = np.asarray(axis, dtype=float)
        return self._wrap(lambda p: self._func(sdf.rotate(p, a, -angle)))

    def scale(self, s: float) -> Field:
        """Uniformly scale the field by *s* about the origin."""
        return self._wrap(lambda p: self._func(p / s))

    def rotate_x(self, angle: float) -> Field:
        """Rotate around the X axis by *angle* radians."""
        return self.rotate(_X, angle)

    def rotate_y(self, angle: float) -> Field:
        """Rotate around the Y axis by *angle* radians."""
        return self.rotate(_Y, angle)

    def rotate_z(self, angle: float) -> Field:
        """Rotate around the Z axis by *angle* radians."""
        return self.rotate(_Z, angle)


# ===========================================================================
# Transformations
# ===========================================================================

class Transformation:
    """A reusable field-to-field mapping.

    ``Transformation`` objects are applied by calling them on a field (or a
    model).  ``a >> b`` composes left to right: the result applies *a* first,
    then *b*.
    """

    def __init__(self, apply: Callable[[Any], Any]) -> None:
        self._apply = apply

    def __call__(self, target: T) -> T:
        return self._apply(target)

    def __rshift__(self, other: Transformation) -> Transformation:
        return combine([self, other])


def identity() -> Transformation:
    """Transformation that returns its input unchanged."""
    return Transformation(lambda target: target)


def translate(offset: Sequence[float]) -> Transformation:
    """Transformation moving a field forward by *offset*."""
    return Transformation(lambda target: target.translate(offset))


def rotate(axis: Sequence[float], angle: float) -> Transformation:
    """Transformation rotating a field by *angle* radians about *axis*."""
    return Transformation(lambda target: target.rotate(axis, angle))


def scale(s: float) -> Transformation:
    """Transformation scaling a field by *s* (kind-specific semantics)."""
    return Transformation(lambda target: target.scale(s))


def combine(transformations: Sequence[Transformation]) -> Transformation:
    """Fold *transformations* into one that applies them in sequence order."""
    steps = list(transformations)

    def _apply(target: Any) -> Any:
        for t in steps:
            target = t(target)
        return target

    return Transformation(_apply)
