"""Parametric snowman scene.

Usage::

    from sdfray.examples import Snowman, default_lights
    from sdfray.render import render_perspective

    pixels = render_perspective(Snowman(), default_lights(), (160, 120), pattern="8")
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from sdfray import model
from sdfray.model import Model

_WHITE = (0.95, 0.95, 1.0)
_BLACK = (0.05, 0.05, 0.05)
_CARROT = (1.0, 0.45, 0.1)


def Snowman(
    center: Sequence[float] = (0.0, 0.0, -4.0),
    size: float = 1.0,
    blend: float = 0.08,
    color_blend: float = 0.0,
) -> Model:
    """Build a snowman whose lowest point is close to ``center.y - size``.

    The model is authored at unit size around the origin, then scaled by
    *size* and moved to *center*.

    Parameters
    ----------
    center:
        Position of the middle of the snowman.
    size:
        Uniform scale.
    blend:
        Smoothing radius between the snow balls.
    color_blend:
        Colour blending radius where parts meet.
    """
    body = model.union(
        [
            model.sphere(_WHITE, (0.0, -0.5, 0.0), 0.5),
            model.sphere(_WHITE, (0.0, 0.2, 0.0), 0.35),
            model.sphere(_WHITE, (0.0, 0.7, 0.0), 0.25),
        ],
        blend=blend,
    )

    eyes = [model.sphere(_BLACK, (x, 0.77, 0.21), 0.035) for x in (-0.08, 0.08)]
    nose = model.capsule(_CARROT, (0.0, 0.7, 0.22), (0.0, 0.67, 0.42), 0.03)
    hat = model.union(
        [
            model.cylinder(_BLACK, 0.28, 0.03, 0.01).translate((0.0, 0.91, 0.0)),
            model.cylinder(_BLACK, 0.17, 0.3, 0.02).translate((0.0, 1.05, 0.0)),
        ]
    ).rotate_z(np.deg2rad(-10.0))

    snowman = model.union([body, *eyes, nose, hat], color_blend=color_blend)
    return snowman.scale(size).translate(center)
