"""Progressive, adaptive rendering one pixel at a time.

:func:`render_partial_image` returns a :class:`ProgressiveRender` whose
:meth:`~ProgressiveRender.step` renders exactly one pixel per call.  The
caller decides the pacing (e.g. a few steps per animation frame) and
cancels simply by no longer calling ``step()``.

Each step:

1. Picks the next pixel with a randomised approximate maximum: a fixed
   number of worklist entries is drawn and the one with the highest score
   ``distance + color_weight * colour_gradient`` wins.  The draw is not
   guaranteed to find the global maximum.
2. Renders that pixel with the full multisample pattern.
3. Relaxes the "nearest rendered pixel" estimate outwards over the
   8-connected grid with a FIFO queue.  FIFO order is not distance-optimal
   like Dijkstra; the "strictly closer wins" guard still makes it converge
   to the nearest rendered colour.
4. Copies every estimate into the visible pixel buffer, so unrendered
   pixels show the colour of their nearest rendered neighbour.

All state belongs to the :class:`ProgressiveRender` instance; steps on the
same instance must not run concurrently.  Randomness comes from the
caller-supplied :class:`numpy.random.Generator`, so a seeded generator
gives a reproducible render order.

Example:
    >>> import numpy as np
    >>> from sdfray.progressive import render_partial_perspective
    >>> render = render_partial_perspective(scene, lights, (64, 48), np.random.default_rng(0))
    >>> pixels, step = render
    >>> while step():
    ...     pass
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Iterator, Optional, Sequence, Tuple, TypeVar

import numpy as np
import numpy.typing as npt

from .config import ProgressiveConfig, ShadingConfig
from .geometry import Sdf
from .grid import grid_edges, grid_neighbors, in_bounds
from .model import Model
from .pixels import Pixel, Pixels, _check_resolution
from .render import (
    LightSource,
    OrthographicProjection,
    OrthographicShadowProjection,
    OrthographicWithShadowProjection,
    PerspectiveProjection,
    Projection,
    get_multisample_pattern,
    normalize_lights,
    render_pixels,
)

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_Pos = Tuple[int, int]

# Callback receives (rendered_pixels, total_pixels)
ProgressCallback = Callable[[int, int], None]

T = TypeVar("T")


# ===========================================================================
# Building blocks
# ===========================================================================

def pop_max(
    worklist: list[T],
    score: Callable[[T], float],
    sample_count: int,
    rng: np.random.Generator,
) -> Optional[T]:
    """Remove and return an approximately highest-scoring item of *worklist*.

    *sample_count* indices are drawn uniformly with replacement; the first
    drawn item with the highest score wins.  Returns ``None`` when the
    worklist is empty.
    """
    if not worklist:
        return None
    indices = rng.integers(0, len(worklist), size=sample_count)
    best_score = -np.inf
    best_index = int(indices[0])
    for i in indices:
        value = score(worklist[i])
        if value <= best_score:
            continue
        best_score = value
        best_index = int(i)
    return worklist.pop(best_index)


def color_difference(estimate: Pixels, pos: _Pos) -> float:
    """Distance between a cell's colour and the mean of its edge neighbours."""
    colors = [estimate.color[n.pos] for n in grid_edges(pos) if in_bounds(n.pos, estimate.shape)]
    if not colors:
        return 0.0
    mean = np.mean(colors, axis=0)
    return float(np.linalg.norm(mean - estimate.color[pos]))


def relax_distances(distance: _Array, estimate: Pixels, pixel: Pixel, pos: _Pos) -> None:
    """Spread *pixel*, rendered at *pos*, to every cell it is now nearest to.

    *distance* holds the grid distance from each cell to the nearest rendered
    pixel and *estimate* that pixel's value; both are updated in place.
    """
    queue: deque[tuple[_Pos, float]] = deque([(pos, 0.0)])
    while queue:
        cell, dist = queue.popleft()
        if not in_bounds(cell, distance.shape):
            continue
        current = distance[cell]
        if current <= dist:
            continue
        distance[cell] = dist
        estimate[cell] = pixel
        for n in grid_neighbors(cell):
            if not in_bounds(n.pos, distance.shape):
                continue
            next_dist = dist + n.length
            if current <= next_dist:
                continue
            queue.append((n.pos, next_dist))


# ===========================================================================
# Progressive render state
# ===========================================================================

class ProgressiveRender:
    """State of one progressive render.

    Attributes:
        pixels: Visible buffer, updated in place after every step.
        estimate: Nearest-rendered-pixel value per cell.
        distance: Grid distance from each cell to its nearest rendered pixel
            (``inf`` until anything is rendered).
        worklist: Pixel positions not yet rendered.

    The object unpacks as ``pixels, step = render``.
    """

    def __init__(
        self,
        projection: Projection,
        model: Model,
        lights: Sequence[LightSource],
        resolution: Sequence[int],
        rng: np.random.Generator,
        pattern: str = "1",
        config: ShadingConfig = ShadingConfig(),
        progressive: ProgressiveConfig = ProgressiveConfig(),
    ) -> None:
        self._offsets = get_multisample_pattern(pattern)
        self._resolution = _check_resolution(resolution)
        self._projection = projection
        self._model = model
        self._lights = normalize_lights(lights)
        self._config = config
        self._progressive = progressive
        self._rng = rng

        nx, ny = self._resolution
        self.pixels = Pixels.transparent(self._resolution)
        self.estimate = Pixels.transparent(self._resolution)
        self.distance = np.full((nx, ny), np.inf)
        self.worklist: list[_Pos] = [(i, j) for i in range(nx) for j in range(ny)]
        logger.debug("Progressive render of %dx%d pixels created", nx, ny)

    def __iter__(self) -> Iterator[Any]:
        return iter((self.pixels, self.step))

    def __repr__(self) -> str:
        nx, ny = self._resolution
        return f"ProgressiveRender(resolution=({nx}, {ny}), remaining={self.remaining})"

    @property
    def resolution(self) -> Tuple[int, int]:
        return self._resolution

    @property
    def remaining(self) -> int:
        """Number of pixels not yet rendered."""
        return len(self.worklist)

    @property
    def total(self) -> int:
        nx, ny = self._resolution
        return nx * ny

    def score(self, pos: _Pos) -> float:
        """Priority of rendering *pos* next."""
        return float(self.distance[pos]) + self._progressive.color_weight * color_difference(
            self.estimate, pos
        )

    def render_pixel(self, pos: _Pos) -> Pixel:
        """Render one pixel with the full multisample pattern."""
        color, alpha = render_pixels(
            self._projection,
            self._model,
            self._lights,
            self._resolution,
            self._offsets,
            np.array([pos]),
            self._config,
        )
        c = color[0]
        return Pixel((float(c[0]), float(c[1]), float(c[2])), float(alpha[0]))

    def step(self) -> bool:
        """Render one more pixel.

        Returns ``False`` once every pixel has been rendered, ``True``
        otherwise.
        """
        pos = pop_max(self.worklist, self.score, self._progressive.sample_count, self._rng)
        if pos is None:
            return False

        relax_distances(self.distance, self.estimate, self.render_pixel(pos), pos)
        np.copyto(self.pixels.color, self.estimate.color)
        np.copyto(self.pixels.alpha, self.estimate.alpha)

        if not self.worklist:
            logger.debug("Progressive render of %dx%d pixels complete", *self._resolution)
        return True

    def run(self, max_steps: Optional[int] = None, callback: Optional[ProgressCallback] = None) -> int:
        """Call :meth:`step` until done or *max_steps* steps have run.

        Args:
            max_steps: Upper bound on steps; ``None`` runs to completion.
            callback: Called after each step with
                ``(rendered_pixels, total_pixels)``.

        Returns:
            Number of pixels rendered by this call.
        """
        steps = 0
        while max_steps is None or steps < max_steps:
            if not self.step():
                break
            steps += 1
            if callback is not None:
                callback(self.total - self.remaining, self.total)
        return steps


# ===========================================================================
# Entry points
# ===========================================================================

def render_partial_image(
    projection: Projection,
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    rng: np.random.Generator,
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
    progressive: ProgressiveConfig = ProgressiveConfig(),
) -> ProgressiveRender:
    """Start a progressive render; nothing is traced until ``step()``."""
    return ProgressiveRender(projection, model, lights, resolution, rng, pattern, config, progressive)


def render_partial_perspective(
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    rng: np.random.Generator,
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
    progressive: ProgressiveConfig = ProgressiveConfig(),
) -> ProgressiveRender:
    return render_partial_image(
        PerspectiveProjection(), model, lights, resolution, rng, pattern, config, progressive
    )


def render_partial_orthographic(
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    rng: np.random.Generator,
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
    progressive: ProgressiveConfig = ProgressiveConfig(),
) -> ProgressiveRender:
    return render_partial_image(
        OrthographicProjection(), model, lights, resolution, rng, pattern, config, progressive
    )


def render_partial_orthographic_shadow(
    ground: Sdf,
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    rng: np.random.Generator,
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
    progressive: ProgressiveConfig = ProgressiveConfig(),
) -> ProgressiveRender:
    return render_partial_image(
        OrthographicShadowProjection(ground), model, lights, resolution, rng, pattern,
        config, progressive,
    )


def render_partial_orthographic_with_shadow(
    ground: Sdf,
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    rng: np.random.Generator,
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
    progressive: ProgressiveConfig = ProgressiveConfig(),
) -> ProgressiveRender:
    return render_partial_image(
        OrthographicWithShadowProjection(ground), model, lights, resolution, rng, pattern,
        config, progressive,
    )
