"""Recursive fractal construction by repeated self-placement.

A fractal is described by a list of :class:`Copy` rules.  At level of
detail ``lod >= 1`` the fractal is the smooth union of the base shape with
one placed copy of the fractal at ``lod * detail_frac`` per rule; below 1 it
is the base shape itself.

The number of base-shape instances grows as ``len(copies) ** depth``, so the
expansion is done with an explicit stack and refuses to start when the
depth would exceed ``max_depth``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from . import geometry
from . import model as model_ops
from .field import Transformation
from .geometry import Sdf
from .model import Model

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 24

_UnionFunc = Callable[[Sequence[Any], float], Any]
Fractal = Callable[..., Any]


class FractalDepthError(ValueError):
    """Raised when a fractal would recurse deeper than its depth cap."""


@dataclass(frozen=True)
class Copy:
    """A placement rule for one sub-fractal.

    Attributes:
        transformation: Where the sub-fractal is placed relative to its parent.
        detail_frac: Level-of-detail multiplier for the sub-fractal; expected
            to be below 1 so the recursion terminates.
    """

    transformation: Transformation
    detail_frac: float


def fractal_depth(copies: Sequence[Copy], lod: float, limit: int = DEFAULT_MAX_DEPTH) -> int:
    """Return the recursion depth of a fractal at *lod*.

    The deepest branch always follows the largest ``detail_frac``.  Counting
    stops at ``limit + 1``, which callers treat as "too deep".
    """
    depth = 0
    if lod < 1:
        return depth
    frac = max((c.detail_frac for c in copies), default=0.0)
    while lod >= 1 and depth <= limit:
        depth += 1
        lod *= frac
    return depth


def count_instances(copies: Sequence[Copy], lod: float, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    """Number of base-shape instances a fractal at *lod* contains."""
    _check_depth(copies, lod, max_depth)
    total = 0
    pending = [lod]
    while pending:
        current = pending.pop()
        total += 1
        if current >= 1:
            pending.extend(current * c.detail_frac for c in copies)
    return total


def _check_depth(copies: Sequence[Copy], lod: float, max_depth: int) -> int:
    depth = fractal_depth(copies, lod, max_depth)
    if depth > max_depth:
        raise FractalDepthError(
            f"Fractal at lod={lod} exceeds the depth cap of {max_depth}; "
            f"lower lod or the largest detail_frac"
        )
    return depth


def _default_union(shape: Any) -> _UnionFunc:
    if isinstance(shape, Model):
        return lambda items, k: model_ops.union(items, blend=k)
    if isinstance(shape, Sdf):
        return lambda items, k: geometry.Union(items, k)
    raise TypeError(
        f"No default union for {type(shape).__name__}; pass union= to create_fractal"
    )


def create_fractal(
    copies: Sequence[Copy],
    union: _UnionFunc | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Fractal:
    """Build a fractal generator from placement rules.

    Parameters
    ----------
    copies:
        Placement rules applied at every level.
    union:
        ``union(items, smoothness)`` used to join each level.  Defaults to
        :func:`sdfray.model.union` for models and
        :class:`sdfray.geometry.Union` for SDFs.
    max_depth:
        Hard cap on recursion depth; deeper requests raise
        :class:`FractalDepthError`.

    Returns
    -------
    callable
        ``fractal(shape, lod, smoothness=0.0)``.
    """
    rules = list(copies)

    def fractal(shape: Any, lod: float, smoothness: float = 0.0) -> Any:
        if lod < 1:
            return shape
        depth = _check_depth(rules, lod, max_depth)
        join = union if union is not None else _default_union(shape)

        # Each frame is (lod, placed children built so far).
        stack: list[tuple[float, list[Any]]] = [(lod, [])]
        result = shape
        while stack:
            frame_lod, children = stack[-1]
            if frame_lod < 1:
                stack.pop()
                built = shape
            elif len(children) < len(rules):
                rule = rules[len(children)]
                stack.append((frame_lod * rule.detail_frac, []))
                continue
            else:
                stack.pop()
                built = join([shape, *children], smoothness)

            if stack:
                parent_children = stack[-1][1]
                parent_children.append(rules[len(parent_children)].transformation(built))
            else:
                result = built

        logger.debug("Expanded fractal: lod=%g depth=%d copies=%d", lod, depth, len(rules))
        return result

    return fractal
