"""Tests for sdfray/trace.py: batched sphere tracing."""

import numpy as np
import numpy.testing as npt

from sdfray.config import TraceConfig
from sdfray.geometry import HalfSpace, Sphere
from sdfray.trace import TraceResult, trace, trace_ray

UNIT = Sphere((0.0, 0.0, 0.0), 1.0)


class TestTraceRay:
    def test_hits_unit_sphere(self):
        hit = trace_ray(UNIT, (0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit is not None
        npt.assert_allclose(hit, [0.0, 0.0, 1.0], atol=1e-3)

    def test_miss_returns_none(self):
        assert trace_ray(UNIT, (0.0, 0.0, 5.0), (0.0, 0.0, 1.0)) is None

    def test_passes_beside(self):
        assert trace_ray(UNIT, (2.0, 0.0, 5.0), (0.0, 0.0, -1.0)) is None

    def test_hits_ground(self):
        ground = HalfSpace((0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        hit = trace_ray(ground, (0.3, 0.0, -2.0), (0.0, -1.0, 0.0))
        npt.assert_allclose(hit, [0.3, -1.0, -2.0], atol=1e-3)

    def test_start_inside_is_hit(self):
        hit = trace_ray(UNIT, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        assert hit is not None


class TestTraceBatch:
    def test_result_type(self):
        result = trace(UNIT, (0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert isinstance(result, TraceResult)
        assert result.position.shape == (3,)
        assert result.hit.shape == ()

    def test_mixed_hits(self):
        starts = np.array([[0.0, 0.0, 5.0], [0.0, 0.0, 5.0], [0.5, 0.0, 5.0]])
        dirs = np.array([[0.0, 0.0, -1.0], [0.0, 0.0, 1.0], [0.0, 0.0, -1.0]])
        result = trace(UNIT, starts, dirs)
        npt.assert_array_equal(result.hit, [True, False, True])
        npt.assert_allclose(result.position[0], [0.0, 0.0, 1.0], atol=1e-3)
        npt.assert_allclose(result.position[2], [0.5, 0.0, np.sqrt(0.75)], atol=1e-3)

    def test_broadcast_single_start(self):
        dirs = np.array([[[0.0, 0.0, -1.0], [0.0, 1.0, 0.0]]])
        result = trace(UNIT, (0.0, 0.0, 5.0), dirs)
        assert result.position.shape == (1, 2, 3)
        npt.assert_array_equal(result.hit, [[True, False]])

    def test_hit_points_on_surface(self):
        rng = np.random.default_rng(3)
        targets = rng.uniform(-0.5, 0.5, size=(20, 3))
        start = np.array([0.0, 0.0, 4.0])
        dirs = targets - start
        dirs /= np.linalg.norm(dirs, axis=-1, keepdims=True)
        result = trace(UNIT, start, dirs)
        assert result.hit.all()
        npt.assert_allclose(np.abs(UNIT(result.position)), 0.0, atol=1e-4)

    def test_iteration_cap_counts_as_hit(self):
        start = np.array([0.5, 0.0, 5.0])
        result = trace(UNIT, start, (0.0, 0.0, -1.0), TraceConfig(max_iterations=1))
        assert bool(result.hit)
        step = np.sqrt(0.25 + 25.0) - 1.0
        npt.assert_allclose(result.position, [0.5, 0.0, 5.0 - step])

    def test_max_distance(self):
        # a single step of 4 already counts as escaping
        result = trace(UNIT, (0.0, 0.0, 5.0), (0.0, 0.0, -1.0), TraceConfig(max_distance=3.0))
        assert not bool(result.hit)

    def test_direction_not_normalised(self):
        # steps are |direction| * d, so a long direction overshoots
        result = trace(UNIT, (0.0, 0.0, 5.0), (0.0, 0.0, -2.0), TraceConfig(max_iterations=1))
        npt.assert_allclose(result.position, [0.0, 0.0, -3.0])
