"""Tests for sdfray/sdf_lib.py: SDF math kernels and smooth booleans.

Tests verify:
- Correct sign (negative inside, positive outside, zero on surface)
- Exact or near-exact distance at analytically known points
- Array shape / broadcasting consistency
"""

import numpy as np
import numpy.testing as npt
import pytest

from sdfray import sdf_lib as sdf


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p3(*xyz) -> np.ndarray:
    """Single 3-D point as shape ``(1, 3)``."""
    return np.array([list(xyz)], dtype=float)


def _grid3(n: int = 8) -> np.ndarray:
    """Uniform ``n³`` grid of 3-D points in ``[-1, 1]³`` (shape ``(n, n, n, 3)``)."""
    lin = np.linspace(-1.0, 1.0, n)
    Z, Y, X = np.meshgrid(lin, lin, lin, indexing="ij")
    return np.stack([X, Y, Z], axis=-1)


# ===========================================================================
# Helpers re-exported from _common
# ===========================================================================

class TestVectorHelpers:
    def test_vec3_broadcasts(self):
        v = sdf.vec3(np.zeros(4), 1.0, 2.0)
        assert v.shape == (4, 3)
        npt.assert_allclose(v[2], [0.0, 1.0, 2.0])

    def test_as_points_rejects_wrong_axis(self):
        with pytest.raises(ValueError):
            sdf.as_points(np.zeros((4, 2)))

    def test_as_points_rejects_scalar(self):
        with pytest.raises(ValueError):
            sdf.as_points(1.0)

    def test_normalize(self):
        npt.assert_allclose(sdf.normalize(np.array([0.0, 3.0, 4.0])), [0.0, 0.6, 0.8])

    def test_rotate_quarter_turn_about_z(self):
        p = _p3(1.0, 0.0, 0.0)
        npt.assert_allclose(sdf.rotate(p, [0.0, 0.0, 1.0], np.pi / 2), [[0.0, 1.0, 0.0]], atol=1e-12)

    def test_rotate_preserves_length(self):
        p = _grid3(4)
        rotated = sdf.rotate(p, [1.0, 2.0, 3.0], 0.7)
        npt.assert_allclose(sdf.length(rotated), sdf.length(p), atol=1e-12)


# ===========================================================================
# Smooth minimum and booleans
# ===========================================================================

class TestSmoothMin:
    def test_zero_k_is_min(self):
        rng = np.random.default_rng(0)
        a = rng.normal(size=100)
        b = rng.normal(size=100)
        npt.assert_array_equal(sdf.smooth_min(a, b, 0.0), np.minimum(a, b))

    def test_equal_inputs(self):
        # 0.5 * (2a - 2k)
        npt.assert_allclose(sdf.smooth_min(np.array([1.0]), np.array([1.0]), 0.25), [0.75])

    def test_below_hard_min(self):
        a = np.linspace(-1.0, 1.0, 11)
        b = a[::-1]
        assert np.all(sdf.smooth_min(a, b, 0.1) <= np.minimum(a, b))

    def test_far_apart_close_to_min(self):
        npt.assert_allclose(sdf.smooth_min(np.array([0.0]), np.array([100.0]), 0.1), [0.0], atol=1e-3)


class TestBooleans:
    A = np.array([-1.0, 0.5, 2.0])
    B = np.array([0.3, -0.2, 1.0])

    def test_union(self):
        npt.assert_array_equal(sdf.opUnion(self.A, self.B), np.minimum(self.A, self.B))

    def test_intersection(self):
        npt.assert_array_equal(sdf.opIntersection(self.A, self.B), np.maximum(self.A, self.B))

    def test_subtraction(self):
        npt.assert_array_equal(sdf.opSubtraction(self.A, self.B), np.maximum(self.A, -self.B))

    def test_smooth_intersection_above_hard(self):
        assert np.all(sdf.opIntersection(self.A, self.B, 0.2) >= np.maximum(self.A, self.B))


# ===========================================================================
# Primitives
# ===========================================================================

class TestSphere:
    R = 2.0

    def test_inside_at_origin(self):
        npt.assert_allclose(sdf.sdSphere(_p3(0.0, 0.0, 0.0), self.R), [-2.0])

    def test_on_surface(self):
        npt.assert_allclose(sdf.sdSphere(_p3(2.0, 0.0, 0.0), self.R), [0.0], atol=1e-9)

    def test_outside(self):
        npt.assert_allclose(sdf.sdSphere(_p3(4.0, 0.0, 0.0), self.R), [2.0])

    def test_batch(self):
        p = _grid3(4)
        assert sdf.sdSphere(p, self.R).shape == (4, 4, 4)


class TestBox:
    B = np.array([1.0, 1.0, 1.0])

    def test_inside_at_origin(self):
        npt.assert_allclose(sdf.sdBox(_p3(0.0, 0.0, 0.0), self.B), [-1.0])

    def test_face(self):
        npt.assert_allclose(sdf.sdBox(_p3(2.0, 0.0, 0.0), self.B), [1.0])

    def test_corner(self):
        npt.assert_allclose(sdf.sdBox(_p3(2.0, 2.0, 2.0), self.B), [np.sqrt(3.0)])

    def test_roundness_keeps_face_extent(self):
        npt.assert_allclose(sdf.sdBox(_p3(2.0, 0.0, 0.0), self.B, 0.2), [1.0], atol=1e-12)

    def test_roundness_cuts_corner(self):
        sharp = sdf.sdBox(_p3(1.0, 1.0, 1.0), self.B)
        rounded = sdf.sdBox(_p3(1.0, 1.0, 1.0), self.B, 0.2)
        assert rounded[0] > sharp[0]


class TestCylinder:
    def test_inside_at_origin(self):
        npt.assert_allclose(sdf.sdCylinder(_p3(0.0, 0.0, 0.0), 1.0, 2.0), [-1.0])

    def test_above_cap(self):
        # height is the full height, so the cap sits at y = 1
        npt.assert_allclose(sdf.sdCylinder(_p3(0.0, 2.0, 0.0), 1.0, 2.0), [1.0])

    def test_beside(self):
        npt.assert_allclose(sdf.sdCylinder(_p3(3.0, 0.0, 0.0), 1.0, 2.0), [2.0])


class TestBoxFrame:
    B = np.array([1.0, 1.0, 1.0])

    def test_on_corner(self):
        npt.assert_allclose(sdf.sdBoxFrame(_p3(1.0, 1.0, 1.0), self.B, 0.1), [0.0], atol=1e-12)

    def test_on_edge(self):
        npt.assert_allclose(sdf.sdBoxFrame(_p3(1.0, 1.0, 0.0), self.B, 0.1), [0.0], atol=1e-12)

    def test_centre_is_outside(self):
        assert sdf.sdBoxFrame(_p3(0.0, 0.0, 0.0), self.B, 0.1)[0] > 0.0


class TestCapsule:
    A = np.array([0.0, 0.0, 0.0])
    B = np.array([0.0, 1.0, 0.0])

    def test_on_axis(self):
        npt.assert_allclose(sdf.sdCapsule(_p3(0.0, 0.5, 0.0), self.A, self.B, 0.5), [-0.5])

    def test_beside_segment(self):
        npt.assert_allclose(sdf.sdCapsule(_p3(1.0, 0.5, 0.0), self.A, self.B, 0.5), [0.5])

    def test_past_end(self):
        npt.assert_allclose(sdf.sdCapsule(_p3(0.0, 2.0, 0.0), self.A, self.B, 0.5), [0.5])


class TestHalfSpace:
    POINT = np.array([0.0, -1.0, 0.0])
    DIRECTION = np.array([0.0, 2.0, 0.0])

    def test_outside(self):
        npt.assert_allclose(sdf.sdHalfSpace(_p3(0.0, 1.0, 0.0), self.POINT, self.DIRECTION), [2.0])

    def test_inside(self):
        npt.assert_allclose(sdf.sdHalfSpace(_p3(5.0, -3.0, 7.0), self.POINT, self.DIRECTION), [-2.0])
