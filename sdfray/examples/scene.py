"""Shared scene pieces: a ground plane and a simple light rig."""

from __future__ import annotations

from typing import Sequence

from sdfray import model
from sdfray.geometry import HalfSpace
from sdfray.model import Model
from sdfray.render import LightSource


def ground_plane(height: float = -1.0) -> HalfSpace:
    """Horizontal ground at *height*, solid below."""
    return HalfSpace((0.0, height, 0.0), (0.0, 1.0, 0.0))


def ground_model(color: Sequence[float] = (0.6, 0.6, 0.6), height: float = -1.0) -> Model:
    """:func:`ground_plane` as a constant-colour model."""
    return model.half_space(color, (0.0, height, 0.0), (0.0, 1.0, 0.0))


def default_lights(ambient: float = 0.25, key: float = 0.75) -> list[LightSource]:
    """An ambient fill plus one directional key light from the upper left."""
    return [
        LightSource(None, (ambient, ambient, ambient)),
        LightSource((-1.0, 2.0, 1.5), (key, key, key)),
    ]
