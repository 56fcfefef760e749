"""Pixel values and pixel buffers.

Colours are linear RGB and are *not* premultiplied by alpha.  A pixel
buffer is indexed ``[i, j]`` where ``i`` runs left to right and ``j`` top to
bottom, so its shape equals the render resolution ``(nx, ny)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import numpy.typing as npt

_Array = npt.NDArray[np.floating]
_Resolution = Tuple[int, int]


@dataclass(frozen=True)
class Pixel:
    """A single RGB colour with coverage *alpha* in ``[0, 1]``."""

    color: Tuple[float, float, float]
    alpha: float

    @classmethod
    def transparent(cls) -> Pixel:
        return cls((0.0, 0.0, 0.0), 0.0)


@dataclass(eq=False)
class Pixels:
    """A grid of pixels stored as two arrays.

    Attributes:
        color: ``(nx, ny, 3)`` float array.
        alpha: ``(nx, ny)`` float array.
    """

    color: _Array
    alpha: _Array

    def __post_init__(self) -> None:
        self.color = np.asarray(self.color, dtype=float)
        self.alpha = np.asarray(self.alpha, dtype=float)
        if self.color.shape != self.alpha.shape + (3,):
            raise ValueError(
                f"Colour shape {self.color.shape} does not match alpha shape {self.alpha.shape}"
            )

    @classmethod
    def transparent(cls, resolution: Sequence[int]) -> Pixels:
        """Fully transparent buffer of the given ``(nx, ny)`` resolution."""
        nx, ny = _check_resolution(resolution)
        return cls(np.zeros((nx, ny, 3)), np.zeros((nx, ny)))

    @property
    def shape(self) -> _Resolution:
        return self.alpha.shape  # type: ignore[return-value]

    def __getitem__(self, pos: Tuple[int, int]) -> Pixel:
        c = self.color[pos]
        return Pixel((float(c[0]), float(c[1]), float(c[2])), float(self.alpha[pos]))

    def __setitem__(self, pos: Tuple[int, int], pixel: Pixel) -> None:
        self.color[pos] = pixel.color
        self.alpha[pos] = pixel.alpha

    def copy(self) -> Pixels:
        return Pixels(self.color.copy(), self.alpha.copy())

    def to_rgba(self) -> _Array:
        """Return a ``(ny, nx, 4)`` image with row 0 at the top."""
        rgba = np.concatenate([self.color, self.alpha[..., None]], axis=-1)
        return np.transpose(rgba, (1, 0, 2))


def _check_resolution(resolution: Sequence[int]) -> _Resolution:
    nx, ny = (int(n) for n in resolution)
    if nx <= 0 or ny <= 0:
        raise ValueError(f"Resolution must be positive, got {tuple(resolution)}")
    return nx, ny


# ===========================================================================
# Sample arithmetic
# ===========================================================================

def average_samples(color: _Array, alpha: _Array) -> Tuple[_Array, _Array]:
    """Average multisample results along the first axis.

    Colour is weighted by alpha (``sum(color * alpha) / sum(alpha)``) and the
    resulting alpha is the plain mean.  Where no sample has coverage the
    colour is black.
    """
    total = np.sum(alpha, axis=0)
    weighted = np.sum(color * alpha[..., None], axis=0)
    safe = np.where(total > 0.0, total, 1.0)
    averaged = np.where((total > 0.0)[..., None], weighted / safe[..., None], 0.0)
    return averaged, total / alpha.shape[0]


def composite_under(
    top_color: _Array,
    top_alpha: _Array,
    bottom_color: _Array,
    bottom_alpha: _Array,
) -> Tuple[_Array, _Array]:
    """Place *bottom* under *top*."""
    cover = 1.0 - top_alpha
    color = top_color + bottom_color * cover[..., None]
    alpha = top_alpha + bottom_alpha * cover
    return color, alpha
