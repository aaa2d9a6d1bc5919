"""
Tests for the FluidSolver tick pipeline and injection API.
"""

import math

import numpy as np
import pytest

from aerograph import FluidSolver, InvalidConfiguration, SimulationConfig
from aerograph.field import BoundaryKind, GridField, set_bnd


class TestConstruction:
    """Tests for parameter validation at construction."""

    def test_allocates_six_zeroed_buffers(self):
        fluid = FluidSolver(8, 0.0, 0.0, 0.1)
        assert len(fluid.buffers) == 6
        for buf in fluid.buffers:
            assert len(buf) == 10 * 10
            assert not buf.data.any()

    @pytest.mark.parametrize("size", [0, -3, 2.5, True, "8", None])
    def test_rejects_bad_resolution(self, size):
        with pytest.raises(InvalidConfiguration):
            FluidSolver(size, 0.0, 0.0, 0.1)

    @pytest.mark.parametrize("field", ["diffusion", "viscosity", "dt"])
    @pytest.mark.parametrize("value", [-1e-3, math.nan, math.inf, -math.inf])
    def test_rejects_bad_rates(self, field, value):
        params = {"diffusion": 0.0, "viscosity": 0.0, "dt": 0.1}
        params[field] = value
        with pytest.raises(InvalidConfiguration):
            FluidSolver(8, **params)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            FluidSolver(0, 0.0, 0.0, 0.1)

    def test_accepts_numpy_scalars(self):
        fluid = FluidSolver(np.int64(6), np.float32(0.0), 1e-5, 0.1)
        assert fluid.size == 6

    def test_from_config(self):
        fluid = FluidSolver.from_config(SimulationConfig(resolution=12, diffusion=1e-4))
        assert fluid.size == 12
        assert fluid.diff == pytest.approx(1e-4)

    def test_instances_do_not_share_state(self):
        a = FluidSolver(6, 0.0, 0.0, 0.1)
        b = FluidSolver(6, 0.0, 0.0, 0.1)
        a.add_density(3, 3, 5.0)
        a.step(4)
        assert b.total_density() == 0.0


class TestInjection:
    """Tests for add_density / add_velocity / erase / reset."""

    def test_add_density_is_additive_and_unclamped(self):
        fluid = FluidSolver(4, 0.0, 0.0, 0.1)
        fluid.add_density(2, 2, 200.0)
        fluid.add_density(2, 2, 200.0)
        assert fluid.density.get(2, 2) == 400.0

    def test_out_of_range_coordinates_saturate(self):
        fluid = FluidSolver(4, 0.0, 0.0, 0.1)
        fluid.add_density(-10, 100, 5.0)
        fluid.add_velocity(99, -99, 1.0, 2.0)
        assert fluid.density.get(0, 5) == 5.0
        assert fluid.Vx.get(5, 0) == 1.0
        assert fluid.Vy.get(5, 0) == 2.0

    def test_add_velocity_adds_both_components(self):
        fluid = FluidSolver(4, 0.0, 0.0, 0.1)
        fluid.add_velocity(1, 3, 1.5, -2.0)
        fluid.add_velocity(1, 3, 0.5, 1.0)
        assert fluid.Vx.get(1, 3) == 2.0
        assert fluid.Vy.get(1, 3) == -1.0

    def test_erase(self):
        fluid = FluidSolver(4, 0.0, 0.0, 0.1)
        fluid.add_density(2, 2, 50.0)
        fluid.erase(2, 2)
        assert fluid.density.get(2, 2) == 0.0

    def test_reset_zero_fills_everything(self):
        fluid = FluidSolver(8, 1e-4, 1e-4, 0.1)
        fluid.add_density(4, 4, 100.0)
        fluid.add_velocity(4, 4, 3.0, 3.0)
        fluid.step(5)
        fluid.reset()
        for buf in fluid.buffers:
            assert not buf.data.any()

    def test_density_view_is_read_only(self):
        fluid = FluidSolver(4, 0.0, 0.0, 0.1)
        fluid.add_density(1, 1, 3.0)
        view = fluid.density_view()
        assert view.shape == (6, 6)
        assert view[1, 1] == 3.0
        with pytest.raises(ValueError):
            view[1, 1] = 0.0


class TestStep:
    """Tests for the per-tick pipeline."""

    def test_zero_state_is_fixed_point(self):
        fluid = FluidSolver(8, 1e-3, 1e-3, 0.1)
        for _ in range(10):
            fluid.step(4, 0.0)
        for buf in fluid.buffers:
            assert np.all(buf.data == 0.0)

    def test_still_impulse_survives_one_tick(self):
        fluid = FluidSolver(4, 0.0, 0.0, 0.1)
        fluid.add_density(2, 2, 100.0)
        fluid.step(1, 0.0)

        assert fluid.density.get(2, 2) == 100.0
        interior = fluid.density.interior.copy()
        interior[1, 1] = 0.0
        assert not interior.any()

        # ghost ring mirrors the interior like any scalar field
        probe = GridField(4)
        probe.data[:] = fluid.density.data
        set_bnd(BoundaryKind.SCALAR, probe)
        np.testing.assert_array_equal(fluid.density.grid, probe.grid)

    def test_fade_never_increases_density(self):
        fluid = FluidSolver(8, 0.0, 0.0, 0.1)
        rng = np.random.default_rng(7)
        for x, y in rng.integers(1, 9, size=(12, 2)):
            fluid.add_density(int(x), int(y), float(rng.uniform(1, 100)))
        fluid.step(4, 0.0)  # settle the ghost ring

        before = fluid.density.data.copy()
        fluid.step(4, 0.3)
        assert np.all(fluid.density.data <= before)
        assert fluid.total_density() == pytest.approx(0.7 * before.reshape(10, 10)[1:-1, 1:-1].sum(), rel=1e-5)

    def test_fade_drives_density_to_zero(self):
        fluid = FluidSolver(8, 1e-4, 0.0, 0.1)
        fluid.add_density(4, 4, 1000.0)
        for _ in range(100):
            fluid.step(4, 0.5)
        assert fluid.density.data.max() < 1e-6
        assert fluid.density.data.min() >= 0.0

    def test_full_fade_clears_in_one_tick(self):
        fluid = FluidSolver(8, 0.0, 0.0, 0.1)
        fluid.add_density(4, 4, 1000.0)
        fluid.step(4, 1.0)
        assert not fluid.density.data.any()

    def test_mass_does_not_grow_under_diffusion(self):
        fluid = FluidSolver(16, 1e-3, 0.0, 0.1)
        fluid.add_density(8, 8, 1000.0)
        before = fluid.total_density()
        fluid.step(10, 0.0)
        after = fluid.total_density()
        assert 0.0 < after <= before * (1 + 1e-6)
        assert fluid.density.get(9, 8) > 0.0

    def test_velocity_carries_density(self):
        fluid = FluidSolver(32, 0.0, 0.0, 0.1)
        for y in range(12, 21):
            fluid.add_density(10, y, 100.0)
        for x in range(4, 29):
            for y in range(4, 29):
                fluid.add_velocity(x, y, 2.0, 0.0)
        fluid.step(10, 0.0)
        # smoke drifts towards +x
        d = fluid.density.interior
        centre = (d.sum(axis=0) * np.arange(1, 33)).sum() / d.sum()
        assert centre > 10.0

    def test_stays_finite_under_repeated_stirring(self):
        fluid = FluidSolver(32, 1e-5, 1e-5, 0.1)
        for k in range(30):
            fluid.add_density(16, 16, 150.0)
            fluid.add_velocity(16, 16, 50.0 * math.cos(k), 50.0 * math.sin(k))
            fluid.step(10, 0.0)
        for buf in fluid.buffers:
            assert np.all(np.isfinite(buf.data))

    def test_step_leaves_velocity_walls_reflective(self):
        fluid = FluidSolver(8, 0.0, 1e-4, 0.1)
        fluid.add_velocity(4, 4, 5.0, -3.0)
        fluid.step(6, 0.0)
        g = fluid.Vx.grid
        np.testing.assert_array_equal(g[1:9, 0], -g[1:9, 1])
        g = fluid.Vy.grid
        np.testing.assert_array_equal(g[0, 1:9], -g[1, 1:9])
