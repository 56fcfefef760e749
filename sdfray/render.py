"""Full-image rendering of models by sphere tracing.

A render turns a :class:`~sdfray.model.Model`, a list of
:class:`LightSource` objects and a resolution into a
:class:`~sdfray.pixels.Pixels` buffer:

1. Every pixel is split into multisample offsets (:data:`MULTISAMPLE_PATTERNS`).
2. Each sample is mapped to screen coordinates and turned into a ray by a
   projection (perspective, orthographic, or one of the orthographic
   shadow variants).
3. Rays are traced and shaded in one vectorised batch; samples are averaged
   back into pixels with alpha-weighted colour averaging.

Shading is deliberately simple: directional lights either reach the hit
point fully or not at all (hard shadows), their contribution is
``color_field(hit) * light.color * dot(normal, light_dir)`` with no clamping
of back-facing light, and ambient lights (no direction) always contribute
``color_field(hit) * light.color``.

Example:
    >>> from sdfray import model
    >>> from sdfray.render import LightSource, render_perspective
    >>> scene = model.sphere((1.0, 0.2, 0.2), (0.0, 0.0, -3.0), 1.0)
    >>> lights = [LightSource(None, (0.2, 0.2, 0.2)), LightSource((1, 1, 1), (0.8, 0.8, 0.8))]
    >>> pixels = render_perspective(scene, lights, (64, 48), pattern="8")
    >>> image = pixels.to_rgba()  # (48, 64, 4)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf
from .config import ShadingConfig
from .geometry import Sdf, gradient
from .model import Model
from .pixels import Pixels, _check_resolution, average_samples, composite_under
from .trace import trace

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_Samples = Tuple[_Array, _Array]


# ===========================================================================
# Lights
# ===========================================================================

@dataclass(frozen=True)
class LightSource:
    """A light.

    Attributes:
        direction: Direction *towards* the light, or ``None`` for an ambient
            light that is omnidirectional and casts no shadows.
        color: RGB intensity.
    """

    direction: Optional[Tuple[float, float, float]] = None
    color: Tuple[float, float, float] = (1.0, 1.0, 1.0)


def normalize_lights(lights: Sequence[LightSource]) -> list[LightSource]:
    """Return *lights* with unit-length directions."""
    out = []
    for light in lights:
        direction = light.direction
        if direction is not None:
            direction = tuple(float(x) for x in sdf.normalize(np.asarray(direction, dtype=float)))
        out.append(LightSource(direction, tuple(float(c) for c in light.color)))
    return out


# ===========================================================================
# Multisampling
# ===========================================================================

MULTISAMPLE_PATTERNS: dict[str, _Array] = {
    "1": np.array([[0.0, 0.0]]),
    "8": np.array(
        [[1, -3], [-1, 3], [5, 1], [-3, -5], [-5, 5], [-7, -1], [3, 7], [7, -7]],
        dtype=float,
    ) / 16.0,
}


def get_multisample_pattern(name: str) -> _Array:
    """Return the ``(S, 2)`` sub-pixel offsets of pattern *name*.

    Raises
    ------
    ValueError
        If *name* is not a known pattern.
    """
    try:
        return MULTISAMPLE_PATTERNS[name]
    except KeyError:
        raise ValueError(
            f"Invalid multisample pattern {name!r}; expected one of {sorted(MULTISAMPLE_PATTERNS)}"
        ) from None


def screen_coords(coords: _Array, resolution: Sequence[int]) -> _Array:
    """Map pixel coordinates ``(..., 2)`` to screen space.

    The screen is centred on the image and scaled so that its height is 1;
    the horizontal extent follows the aspect ratio.
    """
    res = np.asarray(resolution, dtype=float)
    return (np.asarray(coords, dtype=float) + 0.5 - res * 0.5) / res[1]


# ===========================================================================
# Shading
# ===========================================================================

def shade(
    model: Model,
    start: _Array,
    direction: _Array,
    lights: Sequence[LightSource],
    config: ShadingConfig = ShadingConfig(),
) -> _Samples:
    """Trace and shade a batch of ``(N, 3)`` rays.

    *lights* must already be normalised (see :func:`normalize_lights`).
    Returns ``(color, alpha)`` of shapes ``(N, 3)`` and ``(N,)``; missed rays
    are fully transparent.
    """
    result = trace(model.sdf, start, direction, config.trace)
    hit = result.hit
    color = np.zeros(hit.shape + (3,))
    alpha = hit.astype(float)

    pos = result.position[hit]
    if pos.shape[0] == 0:
        return color, alpha

    normal = gradient(model.sdf, pos, config.gradient_eps)
    surface = model.color_field(pos)
    total = np.zeros_like(pos)
    for light in lights:
        light_color = np.asarray(light.color, dtype=float)
        if light.direction is None:
            total += surface * light_color
            continue
        d = np.asarray(light.direction, dtype=float)
        blocked = trace(model.sdf, pos + d * config.shadow_offset, d, config.trace).hit
        reflection = sdf.dot(normal, d)
        contribution = surface * light_color * reflection[:, None]
        total[~blocked] += contribution[~blocked]

    color[hit] = total
    return color, alpha


def shadow_occupancy(
    model: Model,
    ground: Sdf,
    start: _Array,
    direction: _Array,
    lights: Sequence[LightSource],
    config: ShadingConfig = ShadingConfig(),
) -> _Samples:
    """Shadow cast by *model* on *ground* for a batch of rays.

    Alpha is the fraction of *all* lights whose direction is blocked by the
    model at the ground hit point; ambient lights count in the denominator
    but never block.  Colour is always black.
    """
    result = trace(ground, start, direction, config.trace)
    hit = result.hit
    color = np.zeros(hit.shape + (3,))
    alpha = np.zeros(hit.shape)

    pos = result.position[hit]
    if pos.shape[0] == 0 or not lights:
        return color, alpha

    occupancy = np.zeros(pos.shape[0])
    for light in lights:
        if light.direction is None:
            continue
        d = np.asarray(light.direction, dtype=float)
        blocked = trace(model.sdf, pos + d * config.shadow_offset, d, config.trace).hit
        occupancy[blocked] += 1.0 / len(lights)

    alpha[hit] = occupancy
    return color, alpha


# ===========================================================================
# Projections
# ===========================================================================

class Projection:
    """Turns screen coordinates into shaded samples.

    Subclasses implement :meth:`__call__` for a batch of ``(N, 2)`` screen
    coordinates and return ``(color, alpha)``.
    """

    def __call__(
        self,
        model: Model,
        screen: _Array,
        lights: Sequence[LightSource],
        config: ShadingConfig,
    ) -> _Samples:
        raise NotImplementedError


def _orthographic_rays(screen: _Array) -> Tuple[_Array, _Array]:
    start = sdf.vec3(screen[..., 0], -screen[..., 1], 0.0)
    return start, np.array([0.0, 0.0, -1.0])


class PerspectiveProjection(Projection):
    """Pinhole camera at the origin looking down -Z with a unit focal length."""

    def __call__(self, model, screen, lights, config):
        direction = sdf.normalize(sdf.vec3(screen[..., 0], -screen[..., 1], -1.0))
        return shade(model, np.zeros_like(direction), direction, lights, config)


class OrthographicProjection(Projection):
    """Parallel rays along -Z starting on the ``z = 0`` plane."""

    def __call__(self, model, screen, lights, config):
        start, direction = _orthographic_rays(screen)
        return shade(model, start, direction, lights, config)


class OrthographicShadowProjection(Projection):
    """Only the shadow the model casts on *ground*, seen orthographically."""

    def __init__(self, ground: Sdf) -> None:
        self.ground = ground

    def __call__(self, model, screen, lights, config):
        start, direction = _orthographic_rays(screen)
        return shadow_occupancy(model, self.ground, start, direction, lights, config)


class OrthographicWithShadowProjection(Projection):
    """Orthographic shading composited over the shadow on *ground*."""

    def __init__(self, ground: Sdf) -> None:
        self.ground = ground

    def __call__(self, model, screen, lights, config):
        start, direction = _orthographic_rays(screen)
        top = shade(model, start, direction, lights, config)
        bottom = shadow_occupancy(model, self.ground, start, direction, lights, config)
        return composite_under(*top, *bottom)


# ===========================================================================
# Rendering
# ===========================================================================

def render_pixels(
    projection: Projection,
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    offsets: _Array,
    coords: _Array,
    config: ShadingConfig = ShadingConfig(),
) -> _Samples:
    """Render the pixels at integer *coords* ``(M, 2)``.

    Returns averaged ``(color, alpha)`` of shapes ``(M, 3)`` and ``(M,)``.
    *lights* must already be normalised.
    """
    coords = np.asarray(coords, dtype=float)
    samples = coords[None, :, :] + offsets[:, None, :]
    screen = screen_coords(samples, resolution).reshape(-1, 2)
    color, alpha = projection(model, screen, lights, config)
    n_offsets, n_pixels = samples.shape[:2]
    return average_samples(
        color.reshape(n_offsets, n_pixels, 3),
        alpha.reshape(n_offsets, n_pixels),
    )


def render_image(
    projection: Projection,
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
) -> Pixels:
    """Render a full ``(nx, ny)`` image."""
    offsets = get_multisample_pattern(pattern)
    nx, ny = _check_resolution(resolution)
    lights = normalize_lights(lights)

    started = time.perf_counter()
    I, J = np.meshgrid(np.arange(nx), np.arange(ny), indexing="ij")
    coords = np.stack([I, J], axis=-1).reshape(-1, 2)
    color, alpha = render_pixels(projection, model, lights, (nx, ny), offsets, coords, config)
    logger.debug(
        "Rendered %dx%d image with %d samples/pixel in %.3fs",
        nx, ny, offsets.shape[0], time.perf_counter() - started,
    )
    return Pixels(color.reshape(nx, ny, 3), alpha.reshape(nx, ny))


def render_perspective(
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
) -> Pixels:
    return render_image(PerspectiveProjection(), model, lights, resolution, pattern, config)


def render_orthographic(
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
) -> Pixels:
    return render_image(OrthographicProjection(), model, lights, resolution, pattern, config)


def render_orthographic_shadow(
    ground: Sdf,
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
) -> Pixels:
    return render_image(
        OrthographicShadowProjection(ground), model, lights, resolution, pattern, config
    )


def render_orthographic_with_shadow(
    ground: Sdf,
    model: Model,
    lights: Sequence[LightSource],
    resolution: Sequence[int],
    pattern: str = "1",
    config: ShadingConfig = ShadingConfig(),
) -> Pixels:
    return render_image(
        OrthographicWithShadowProjection(ground), model, lights, resolution, pattern, config
    )
