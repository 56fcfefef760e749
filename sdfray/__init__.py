"""
sdfray: signed distance field modelling and sphere-traced rendering
=====================================================================

Shapes are represented implicitly as signed distance fields (SDFs),
combined with smooth CSG operators, paired with colour fields into models
and rendered by sphere tracing, either as a full image or progressively
one adaptively chosen pixel at a time.

Implemented features
--------------------
- Fields and transformations: translate, rotate, scale, combine
- SDF primitives: Sphere, Box, Cylinder, BoxFrame, Capsule, HalfSpace
- Smooth boolean operations: Union, Intersection, Subtraction
- Recursive fractals with a depth cap: :func:`~sdfray.fractal.create_fractal`
- Models with distance-voted colour blending: :mod:`sdfray.model`
- Sphere tracing and gradients: :func:`trace`, :func:`gradient`
- Renderers: perspective, orthographic, orthographic shadow passes,
  with 1- or 8-sample multisampling
- Progressive adaptive rendering: :mod:`sdfray.progressive`

Quick start
-----------

::

    from sdfray import model, LightSource, render_perspective

    scene = model.union(
        [
            model.sphere((1.0, 0.3, 0.3), (-0.4, 0.0, -3.0), 0.6),
            model.box((0.3, 0.3, 1.0), (0.4, 0.4, 0.4), 0.05).translate((0.5, 0.0, -3.0)),
        ],
        blend=0.2,
        color_blend=0.1,
    )
    lights = [LightSource(None, (0.2, 0.2, 0.2)), LightSource((1, 1, 1), (0.8, 0.8, 0.8))]
    pixels = render_perspective(scene, lights, (160, 120), pattern="8")
    image = pixels.to_rgba()
"""

from . import field, model
from .color_field import ColorField
from .config import ProgressiveConfig, ShadingConfig, TraceConfig
from .field import Field, Transformation, combine, rotate, scale, translate
from .fractal import Copy, FractalDepthError, create_fractal
from .geometry import (
    Box,
    BoxFrame,
    Capsule,
    Cylinder,
    HalfSpace,
    Intersection,
    Sdf,
    Sphere,
    Subtraction,
    Union,
    gradient,
)
from .model import Model
from .pixels import Pixel, Pixels
from .progressive import (
    ProgressiveRender,
    render_partial_image,
    render_partial_orthographic,
    render_partial_orthographic_shadow,
    render_partial_orthographic_with_shadow,
    render_partial_perspective,
)
from .render import (
    LightSource,
    render_image,
    render_orthographic,
    render_orthographic_shadow,
    render_orthographic_with_shadow,
    render_perspective,
)
from .trace import TraceResult, trace, trace_ray

__version__ = "0.1.0"

__all__ = [
    # Fields
    "Field",
    "Transformation",
    "translate",
    "rotate",
    "scale",
    "combine",
    "field",

    # SDFs
    "Sdf",
    "Sphere",
    "Box",
    "Cylinder",
    "BoxFrame",
    "Capsule",
    "HalfSpace",
    "Union",
    "Intersection",
    "Subtraction",
    "gradient",

    # Fractals
    "Copy",
    "create_fractal",
    "FractalDepthError",

    # Colour and models
    "ColorField",
    "Model",
    "model",

    # Tracing
    "trace",
    "trace_ray",
    "TraceResult",

    # Rendering
    "LightSource",
    "Pixel",
    "Pixels",
    "render_image",
    "render_perspective",
    "render_orthographic",
    "render_orthographic_shadow",
    "render_orthographic_with_shadow",

    # Progressive rendering
    "ProgressiveRender",
    "render_partial_image",
    "render_partial_perspective",
    "render_partial_orthographic",
    "render_partial_orthographic_shadow",
    "render_partial_orthographic_with_shadow",

    # Configuration
    "TraceConfig",
    "ShadingConfig",
    "ProgressiveConfig",
]
