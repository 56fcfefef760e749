"""Numeric settings for tracing, shading and progressive rendering.

Two of the defaults are loose:

* ``ShadingConfig.gradient_eps`` is far below the safe finite-difference step
  for double precision, so normals carry some cancellation noise.
* A trace that runs out of iterations is reported as a hit.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class TraceConfig:
    max_iterations: int = 1000
    min_distance: float = 1e-4
    max_distance: float = 1e4


@dataclass(frozen=True, slots=True)
class ShadingConfig:
    gradient_eps: float = 1e-10
    shadow_offset: float = 1e-3
    trace: TraceConfig = field(default_factory=TraceConfig)


@dataclass(frozen=True, slots=True)
class ProgressiveConfig:
    """Candidate selection settings for :mod:`sdfray.progressive`.

    Attributes
    ----------
    sample_count:
        Number of worklist entries drawn (with replacement) per step.
    color_weight:
        Multiplier on the colour-gradient term of the candidate score.
    """

    sample_count: int = 32
    color_weight: float = 32.0
