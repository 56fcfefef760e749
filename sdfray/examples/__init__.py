"""sdfray.examples: example scenes built from the public API.

Implemented scenes
------------------
:func:`Snowman`
    Smoothly blended snowman with a hat, eyes and a carrot nose.

:func:`SierpinskiTetrahedron`
    Sphere-based Sierpinski fractal built with :mod:`sdfray.fractal`.

Helpers
-------
:func:`ground_plane`, :func:`default_lights`
"""

from .scene import default_lights, ground_plane
from .sierpinski import SierpinskiTetrahedron
from .snowman import Snowman

__all__ = ["Snowman", "SierpinskiTetrahedron", "ground_plane", "default_lights"]
