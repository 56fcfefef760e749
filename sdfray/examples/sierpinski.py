"""Sierpinski tetrahedron made of spheres.

Usage::

    from sdfray.examples import SierpinskiTetrahedron

    fractal = SierpinskiTetrahedron(lod=4).translate((0.0, 0.0, -4.0))
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from sdfray import field, model
from sdfray.fractal import Copy, create_fractal
from sdfray.model import Model

# Corners of a regular tetrahedron inscribed in the unit sphere
_CORNERS = np.array(
    [
        [1.0, 1.0, 1.0],
        [1.0, -1.0, -1.0],
        [-1.0, 1.0, -1.0],
        [-1.0, -1.0, 1.0],
    ]
) / np.sqrt(3.0)


def SierpinskiTetrahedron(
    lod: float = 4.0,
    smoothness: float = 0.0,
    color: Sequence[float] = (0.9, 0.75, 0.3),
    radius: float = 0.5,
) -> Model:
    """Build a Sierpinski tetrahedron.

    Each level places four half-size copies of the fractal at the corners of
    a tetrahedron around a central sphere of *radius*.  Every copy halves the
    level of detail, so ``lod=4`` gives three levels of copies.
    """
    copies = [
        Copy(field.combine([field.scale(0.5), field.translate(corner * 0.75)]), 0.5)
        for corner in _CORNERS
    ]
    fractal = create_fractal(copies)
    return fractal(model.sphere(color, (0.0, 0.0, 0.0), radius), lod, smoothness)
