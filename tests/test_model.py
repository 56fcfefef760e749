"""Tests for sdfray/model.py and sdfray/color_field.py."""

import dataclasses

import numpy as np
import numpy.testing as npt
import pytest

from sdfray import model
from sdfray.color_field import ColorField
from sdfray.geometry import Sphere
from sdfray.model import Model, merge_color_fields

RED = (1.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 1.0)


def _p(*xyz) -> np.ndarray:
    return np.array([list(xyz)], dtype=float)


def _pair():
    left = model.sphere(RED, (-1.0, 0.0, 0.0), 0.5)
    right = model.sphere(BLUE, (1.0, 0.0, 0.0), 0.5)
    return left, right


# ===========================================================================
# ColorField
# ===========================================================================

class TestColorField:
    def test_constant_shape(self):
        c = ColorField.constant((0.1, 0.2, 0.3))
        out = c(np.zeros((4, 5, 3)))
        assert out.shape == (4, 5, 3)
        npt.assert_allclose(out[2, 3], [0.1, 0.2, 0.3])

    def test_constant_rejects_bad_color(self):
        with pytest.raises(ValueError):
            ColorField.constant((1.0, 0.0))

    def test_positional_field_translate(self):
        c = ColorField(lambda p: np.abs(p)).translate((1.0, 0.0, 0.0))
        npt.assert_allclose(c(_p(1.0, 2.0, 0.0)), [[0.0, 2.0, 0.0]])


# ===========================================================================
# Colour merging
# ===========================================================================

class TestMergeColorFields:
    def test_nearest_wins(self):
        merged = merge_color_fields(_pair(), 0.0)
        npt.assert_allclose(merged(_p(-1.0, 0.0, 0.0)), [RED])
        npt.assert_allclose(merged(_p(1.2, 0.3, 0.0)), [BLUE])

    def test_tie_goes_to_first(self):
        left, right = _pair()
        npt.assert_allclose(merge_color_fields([left, right], 0.0)(_p(0.0, 0.0, 0.0)), [RED])
        npt.assert_allclose(merge_color_fields([right, left], 0.0)(_p(0.0, 0.0, 0.0)), [BLUE])

    def test_votes_by_absolute_distance(self):
        # deep inside the red sphere is further from its surface than the blue one
        big = model.sphere(RED, (0.0, 0.0, 0.0), 5.0)
        small = model.sphere(BLUE, (0.0, 0.0, 0.0), 1.0)
        npt.assert_allclose(merge_color_fields([big, small], 0.0)(_p(0.0, 0.0, 0.0)), [BLUE])

    def test_equal_weights_average(self):
        merged = merge_color_fields(_pair(), 1.0)
        npt.assert_allclose(merged(_p(0.0, 0.0, 0.0)), [[0.5, 0.0, 0.5]])

    def test_exponential_weights(self):
        # |d| = 0.5 and 1.5 with k = 1 gives weights in ratio 2 : 1
        merged = merge_color_fields(_pair(), 1.0)
        npt.assert_allclose(merged(_p(-1.0, 0.0, 0.0)), [[2.0 / 3.0, 0.0, 1.0 / 3.0]])

    def test_batch_shape(self):
        merged = merge_color_fields(_pair(), 0.3)
        assert merged(np.zeros((2, 7, 3))).shape == (2, 7, 3)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            merge_color_fields([], 0.0)


# ===========================================================================
# Model CSG
# ===========================================================================

class TestModelCsg:
    def test_union_sdf_is_min(self):
        left, right = _pair()
        u = model.union([left, right])
        p = np.random.default_rng(0).uniform(-2.0, 2.0, size=(30, 3))
        npt.assert_allclose(u.sdf(p), np.minimum(left.sdf(p), right.sdf(p)))

    def test_union_colors(self):
        u = model.union(list(_pair()))
        npt.assert_allclose(u.color_field(_p(-1.4, 0.0, 0.0)), [RED])
        npt.assert_allclose(u.color_field(_p(1.4, 0.0, 0.0)), [BLUE])

    def test_intersection_sdf_is_max(self):
        a = model.sphere(RED, (-0.25, 0.0, 0.0), 0.5)
        b = model.sphere(BLUE, (0.25, 0.0, 0.0), 0.5)
        i = model.intersection([a, b])
        p = np.random.default_rng(1).uniform(-1.0, 1.0, size=(30, 3))
        npt.assert_allclose(i.sdf(p), np.maximum(a.sdf(p), b.sdf(p)))

    def test_subtraction(self):
        a = model.box(RED, (1.0, 1.0, 1.0))
        b = model.sphere(BLUE, (1.0, 0.0, 0.0), 0.5)
        s = model.subtraction(a, b)
        npt.assert_allclose(s.sdf(_p(1.0, 0.0, 0.0)), [0.5])
        npt.assert_allclose(s.sdf(_p(-0.5, 0.0, 0.0)), [-0.5])
        # the cut surface is nearer the cutter
        npt.assert_allclose(s.color_field(_p(0.5, 0.0, 0.0)), [BLUE])

    def test_smooth_union_blend(self):
        left, right = _pair()
        hard = model.union([left, right])
        soft = model.union([left, right], blend=0.3)
        assert soft.sdf(_p(0.0, 0.0, 0.0))[0] < hard.sdf(_p(0.0, 0.0, 0.0))[0]


class TestModelTransforms:
    def test_translate_moves_both_fields(self):
        m = Model(Sphere((0.0, 0.0, 0.0), 1.0), ColorField(lambda p: np.abs(p)))
        moved = m.translate((3.0, 0.0, 0.0))
        npt.assert_allclose(moved.sdf(_p(3.0, 0.0, 0.0)), [-1.0])
        npt.assert_allclose(moved.color_field(_p(3.0, 1.0, 0.0)), [[0.0, 1.0, 0.0]])

    def test_rotate_moves_both_fields(self):
        m = Model(Sphere((1.0, 0.0, 0.0), 0.5), ColorField(lambda p: np.abs(p)))
        moved = m.rotate_z(np.pi / 2)
        npt.assert_allclose(moved.sdf(_p(0.0, 1.0, 0.0)), [-0.5], atol=1e-12)
        npt.assert_allclose(moved.color_field(_p(0.0, 1.0, 0.0)), [[1.0, 0.0, 0.0]], atol=1e-12)

    def test_scale(self):
        m = model.sphere(RED, (0.0, 0.0, 0.0), 1.0).scale(2.0)
        npt.assert_allclose(m.sdf(_p(3.0, 0.0, 0.0)), [1.0])

    def test_rotate_xy(self):
        m = model.sphere(RED, (0.0, 1.0, 0.0), 0.5)
        npt.assert_allclose(m.rotate_x(np.pi / 2).sdf(_p(0.0, 0.0, 1.0)), [-0.5], atol=1e-12)
        npt.assert_allclose(m.rotate_y(np.pi / 2).sdf(_p(0.0, 1.0, 0.0)), [-0.5], atol=1e-12)

    def test_frozen(self):
        m = model.sphere(RED, (0.0, 0.0, 0.0), 1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.sdf = Sphere((0.0, 0.0, 0.0), 2.0)


class TestConstructors:
    @pytest.mark.parametrize(
        "build",
        [
            lambda: model.sphere(RED, (0.0, 0.0, 0.0), 1.0),
            lambda: model.box(RED, (0.5, 0.5, 0.5), 0.1),
            lambda: model.cylinder(RED, 0.5, 1.0),
            lambda: model.box_frame(RED, (0.5, 0.5, 0.5), 0.05),
            lambda: model.capsule(RED, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), 0.2),
            lambda: model.half_space(RED, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
        ],
    )
    def test_constant_color(self, build):
        m = build()
        assert isinstance(m, Model)
        npt.assert_allclose(m.color_field(np.zeros((3, 3))), np.tile(RED, (3, 1)))
