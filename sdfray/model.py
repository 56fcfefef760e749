"""Models: a signed distance field paired with a colour field.

Both fields of a :class:`Model` live in the same coordinate space, so every
transform is applied to the pair at once.  The CSG operators here combine
the distance fields exactly like :mod:`sdfray.geometry` and additionally
blend colour by a per-point distance vote (see :func:`merge_color_fields`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import numpy.typing as npt

from . import geometry
from .color_field import ColorField
from .geometry import Sdf

_Array = npt.NDArray[np.floating]


@dataclass(frozen=True)
class Model:
    """An ``(sdf, color_field)`` pair.

    Attributes:
        sdf: Shape of the model.
        color_field: Surface colour, sampled wherever the shape is hit.
    """

    sdf: Sdf
    color_field: ColorField

    def translate(self, offset: Sequence[float]) -> Model:
        return Model(self.sdf.translate(offset), self.color_field.translate(offset))

    def rotate(self, axis: Sequence[float], angle: float) -> Model:
        return Model(self.sdf.rotate(axis, angle), self.color_field.rotate(axis, angle))

    def scale(self, s: float) -> Model:
        return Model(self.sdf.scale(s), self.color_field.scale(s))

    def rotate_x(self, angle: float) -> Model:
        return Model(self.sdf.rotate_x(angle), self.color_field.rotate_x(angle))

    def rotate_y(self, angle: float) -> Model:
        return Model(self.sdf.rotate_y(angle), self.color_field.rotate_y(angle))

    def rotate_z(self, angle: float) -> Model:
        return Model(self.sdf.rotate_z(angle), self.color_field.rotate_z(angle))


# ===========================================================================
# Colour blending
# ===========================================================================

def merge_color_fields(models: Sequence[Model], k: float) -> ColorField:
    """Blend the colour fields of *models* by distance vote.

    At each point every model votes with ``|sdf(p)|``.  With ``k == 0`` the
    colour of the nearest model wins, ties going to the earliest model in
    *models*.  With ``k > 0`` colours are averaged with weights
    ``2 ** (-|sdf(p)| / k)``.

    The weights can underflow to zero far from every surface when *k* is
    small; no clamping is applied.
    """
    items = list(models)
    if not items:
        raise ValueError("merge_color_fields needs at least one model")

    def _color(p: _Array) -> _Array:
        dists = np.stack([np.abs(m.sdf._func(p)) for m in items])
        colors = np.stack([np.broadcast_to(m.color_field._func(p), p.shape) for m in items])
        if k == 0:
            index = np.argmin(dists, axis=0)
            return np.take_along_axis(colors, index[None, ..., None], axis=0)[0]
        weights = np.power(2.0, -dists / k)
        total = np.sum(colors * weights[..., None], axis=0)
        return total / np.sum(weights, axis=0)[..., None]

    return ColorField(_color)


# ===========================================================================
# CSG
# ===========================================================================

def union(models: Sequence[Model], blend: float = 0.0, color_blend: float = 0.0) -> Model:
    """Smooth union of *models*; *blend* rounds the shape, *color_blend* the colours."""
    items = list(models)
    return Model(
        geometry.Union([m.sdf for m in items], blend),
        merge_color_fields(items, color_blend),
    )


def intersection(models: Sequence[Model], blend: float = 0.0, color_blend: float = 0.0) -> Model:
    """Smooth intersection of *models*."""
    items = list(models)
    return Model(
        geometry.Intersection([m.sdf for m in items], blend),
        merge_color_fields(items, color_blend),
    )


def subtraction(a: Model, b: Model, blend: float = 0.0, color_blend: float = 0.0) -> Model:
    """Carve *b* out of *a*.  The cut surface votes for *b*'s colour near *b*."""
    return Model(
        geometry.Subtraction(a.sdf, b.sdf, blend),
        merge_color_fields([a, b], color_blend),
    )


# ===========================================================================
# Constant-colour primitives
# ===========================================================================

def sphere(color: Sequence[float], center: Sequence[float], radius: float) -> Model:
    return Model(geometry.Sphere(center, radius), ColorField.constant(color))


def box(color: Sequence[float], half_size: Sequence[float], roundness: float = 0.0) -> Model:
    return Model(geometry.Box(half_size, roundness), ColorField.constant(color))


def cylinder(color: Sequence[float], radius: float, height: float, roundness: float = 0.0) -> Model:
    return Model(geometry.Cylinder(radius, height, roundness), ColorField.constant(color))


def box_frame(
    color: Sequence[float],
    half_size: Sequence[float],
    thickness: float,
    roundness: float = 0.0,
) -> Model:
    return Model(geometry.BoxFrame(half_size, thickness, roundness), ColorField.constant(color))


def capsule(color: Sequence[float], a: Sequence[float], b: Sequence[float], radius: float) -> Model:
    return Model(geometry.Capsule(a, b, radius), ColorField.constant(color))


def half_space(color: Sequence[float], point: Sequence[float], direction: Sequence[float]) -> Model:
    return Model(geometry.HalfSpace(point, direction), ColorField.constant(color))
