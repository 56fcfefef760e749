"""RGB colour fields.

A :class:`ColorField` maps ``(..., 3)`` points to ``(..., 3)`` RGB values.
It shares the transform algebra of :class:`~sdfray.field.Field` but has no
distance semantics, so scaling only moves the sampling point and colour
fields are never combined with the SDF booleans.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .field import Field


class ColorField(Field):
    """Field of RGB triples."""

    def _wrap(self, func) -> ColorField:
        return ColorField(func)

    @classmethod
    def constant(cls, color: Sequence[float]) -> ColorField:
        """Field returning *color* everywhere."""
        c = np.asarray(color, dtype=float)
        if c.shape != (3,):
            raise ValueError(f"Expected an RGB triple, got shape {c.shape}")
        return cls(lambda p: np.broadcast_to(c, p.shape[:-1] + (3,)))
