"""
Unit Tests for the Trajectory Integrator
========================================
Tests the integration core and the closed-form vacuum validation.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_sim.config import SimulationConfig
from projectile_sim.integrator import (
    SimulationState, StepLimitExceeded, TrajectoryRow,
    accelerations, euler_step, trajectory_rows, simulate_euler,
)
from projectile_sim.validation import (
    vacuum_apex, vacuum_flight_time, vacuum_range, validate_vacuum,
)


VACUUM = SimulationConfig(initial_speed=50.0, launch_angle=45.0,
                          initial_height=0.0, gravity=9.81,
                          drag_coefficient=0.0)


class TestConfig:
    """Initial kinematic state derived from the configuration."""

    def test_defaults(self):
        cfg = SimulationConfig()
        assert cfg.initial_speed == 50.0
        assert cfg.launch_angle == 45.0
        assert cfg.initial_height == 0.0
        assert cfg.gravity == 9.81
        assert cfg.mass == 1.0
        assert cfg.drag_coefficient == 0.05
        assert cfg.timestep == 0.01

    def test_initial_velocity_vector(self):
        cfg = SimulationConfig(initial_speed=100.0, launch_angle=30.0)
        vx, vy = cfg.initial_velocity()
        assert math.hypot(vx, vy) == pytest.approx(100.0)
        assert vy == pytest.approx(50.0)

    def test_initial_state(self):
        cfg = SimulationConfig(initial_height=12.0)
        state = SimulationState.initial(cfg)
        assert (state.time, state.x, state.y) == (0.0, 0.0, 12.0)
        assert state.speed == pytest.approx(cfg.initial_speed)

    def test_config_is_immutable(self):
        cfg = SimulationConfig()
        with pytest.raises(AttributeError):
            cfg.mass = 2.0


class TestStep:
    """Single-step behaviour."""

    def test_gravity_only_without_drag(self):
        cfg = SimulationConfig(drag_coefficient=0.0, gravity=9.81)
        ax, ay = accelerations(cfg, 30.0, 40.0)
        assert ax == 0.0
        assert ay == -9.81

    def test_drag_opposes_motion(self):
        cfg = SimulationConfig(drag_coefficient=0.05, gravity=0.0)
        vx, vy = 30.0, -40.0
        ax, ay = accelerations(cfg, vx, vy)
        assert ax * vx + ay * vy < 0
        # |a| = (c/m) |v|²
        assert math.hypot(ax, ay) == pytest.approx(0.05 * 50.0 ** 2)

    def test_position_uses_updated_velocity(self):
        cfg = SimulationConfig(drag_coefficient=0.0, gravity=10.0,
                               timestep=0.1)
        state = SimulationState(time=0.0, x=0.0, y=5.0, vx=1.0, vy=0.0)
        euler_step(state, cfg)
        assert state.vy == pytest.approx(-1.0)
        # plain explicit Euler would leave y at 5.0
        assert state.y == pytest.approx(4.9)
        assert state.x == pytest.approx(0.1)
        assert state.time == pytest.approx(0.1)


class TestTrajectoryRows:
    """Properties of the emitted row sequence."""

    @pytest.mark.parametrize('cfg', [
        SimulationConfig(),
        VACUUM,
        SimulationConfig(initial_height=25.0, launch_angle=-10.0),
        SimulationConfig(initial_speed=5.0, launch_angle=80.0, timestep=0.05),
    ])
    def test_first_row_is_launch_point(self, cfg):
        first = next(iter(trajectory_rows(cfg)))
        assert first == TrajectoryRow(0.0, 0.0, cfg.initial_height)

    def test_negative_start_height_emits_only_launch_row(self):
        cfg = SimulationConfig(initial_height=-1.0)
        assert list(trajectory_rows(cfg)) == [(0.0, 0.0, -1.0)]

    def test_time_strictly_increasing_by_timestep(self):
        cfg = SimulationConfig(timestep=0.02)
        rows = list(trajectory_rows(cfg))
        times = np.array([r.time for r in rows])
        assert np.all(np.diff(times) > 0)
        expected = np.arange(len(rows)) * cfg.timestep
        assert np.allclose(times, expected, rtol=1e-9, atol=1e-9)

    def test_heights_positive_and_landing_sample_dropped(self):
        cfg = SimulationConfig()
        rows = list(trajectory_rows(cfg))
        assert len(rows) > 1
        assert all(r.y > 0.0 for r in rows[1:])

        # replay: the state after the last emitted row is below ground
        state = SimulationState.initial(cfg)
        for _ in range(len(rows) - 1):
            euler_step(state, cfg)
        assert state.row() == rows[-1]
        euler_step(state, cfg)
        assert state.y <= 0.0

    def test_generator_is_restartable(self):
        cfg = SimulationConfig()
        gen_a = trajectory_rows(cfg)
        gen_b = trajectory_rows(cfg)
        assert next(gen_a) == next(gen_b)
        assert list(gen_a) == list(gen_b)

    def test_zero_mass_ends_after_launch_row(self):
        rows = list(trajectory_rows(SimulationConfig(mass=0.0)))
        assert rows == [(0.0, 0.0, 0.0)]

    def test_zero_mass_and_zero_drag_ends_after_launch_row(self):
        cfg = SimulationConfig(mass=0.0, drag_coefficient=0.0,
                               initial_height=5.0)
        assert list(trajectory_rows(cfg, max_steps=10)) == [(0.0, 0.0, 5.0)]

    def test_zero_mass_gives_non_finite_acceleration(self):
        ax, ay = accelerations(SimulationConfig(mass=0.0), 30.0, 40.0)
        assert ax == -math.inf
        assert ay == -math.inf
        ax, ay = accelerations(
            SimulationConfig(mass=0.0, drag_coefficient=0.0), 30.0, 40.0)
        assert math.isnan(ax) and math.isnan(ay)

    def test_deterministic(self):
        cfg = SimulationConfig(drag_coefficient=0.02, initial_height=3.0)
        assert list(trajectory_rows(cfg)) == list(trajectory_rows(cfg))


class TestVacuum:
    """Drag-free runs against the exact solution."""

    def test_apex_matches_closed_form(self):
        result = simulate_euler(VACUUM)
        assert vacuum_apex(VACUUM) == pytest.approx(63.7, abs=0.1)
        assert result.max_altitude == pytest.approx(63.7, rel=0.01)

    def test_flight_time_matches_closed_form(self):
        result = simulate_euler(VACUUM)
        assert vacuum_flight_time(VACUUM) == pytest.approx(7.2, abs=0.05)
        assert result.flight_time == pytest.approx(7.2, rel=0.01)
        assert result.flight_time < vacuum_flight_time(VACUUM)

    def test_range_matches_closed_form(self):
        result = simulate_euler(VACUUM)
        assert result.range_total == pytest.approx(vacuum_range(VACUUM),
                                                   rel=0.01)

    def test_horizontal_velocity_constant(self):
        result = simulate_euler(VACUUM)
        dx = np.diff(result.x)
        assert np.allclose(dx, dx[0])

    def test_flight_time_from_height(self):
        cfg = SimulationConfig(launch_angle=0.0, initial_height=20.0,
                               gravity=10.0, drag_coefficient=0.0)
        assert vacuum_flight_time(cfg) == pytest.approx(2.0)
        assert vacuum_apex(cfg) == pytest.approx(20.0)

    def test_validate_vacuum(self):
        vr = validate_vacuum(SimulationConfig(), verbose=False)
        assert vr.ref_apex == pytest.approx(vacuum_apex(VACUUM))
        assert vr.max_abs_error_pct() < 1.0

    def test_validate_vacuum_prints_table(self, capsys):
        validate_vacuum(VACUUM, verbose=True)
        out = capsys.readouterr().out
        assert 'VACUUM VALIDATION' in out
        assert 'Apex (m)' in out

    def test_closed_form_needs_gravity(self):
        with pytest.raises(ValueError):
            vacuum_apex(SimulationConfig(gravity=0.0))


class TestDrag:

    def test_drag_reduces_range(self):
        with_drag = simulate_euler(SimulationConfig(drag_coefficient=0.05))
        vacuum = simulate_euler(SimulationConfig(drag_coefficient=0.0))
        assert with_drag.range_total < vacuum.range_total

    def test_drag_lowers_apex(self):
        with_drag = simulate_euler(SimulationConfig(drag_coefficient=0.05))
        vacuum = simulate_euler(SimulationConfig(drag_coefficient=0.0))
        assert with_drag.max_altitude < vacuum.max_altitude

    def test_heavier_projectile_flies_further(self):
        light = simulate_euler(SimulationConfig(mass=1.0))
        heavy = simulate_euler(SimulationConfig(mass=5.0))
        assert heavy.range_total > light.range_total


class TestStepLimit:
    """Safety ceiling for trajectories that never come down."""

    FLOATING = SimulationConfig(gravity=0.0, drag_coefficient=0.0,
                                launch_angle=0.0, initial_height=10.0)

    def test_zero_gravity_never_lands(self):
        rows = []
        with pytest.raises(StepLimitExceeded) as exc:
            for row in trajectory_rows(self.FLOATING, max_steps=1000):
                rows.append(row)
        assert exc.value.steps == 1000
        assert len(rows) == 1001
        assert all(r.y == 10.0 for r in rows)

    def test_time_ceiling(self):
        with pytest.raises(StepLimitExceeded) as exc:
            simulate_euler(self.FLOATING, max_time=1.0)
        assert exc.value.time >= 1.0
        assert exc.value.steps in (100, 101)

    def test_ceiling_not_hit_on_normal_run(self):
        cfg = SimulationConfig()
        bounded = simulate_euler(cfg, max_steps=100_000, max_time=1000.0)
        unbounded = simulate_euler(cfg)
        assert np.array_equal(bounded.y, unbounded.y)


class TestTrajectoryResult:

    def test_result_matches_rows(self):
        cfg = SimulationConfig()
        rows = list(trajectory_rows(cfg))
        result = simulate_euler(cfg)
        assert result.n_rows == len(rows)
        assert list(result.rows()) == rows
        assert result.range_total == rows[-1].x
        assert result.flight_time == rows[-1].time

    def test_apex_time_before_flight_time(self):
        result = simulate_euler(SimulationConfig())
        assert 0.0 < result.apex_time < result.flight_time

    def test_summary(self):
        text = simulate_euler(SimulationConfig()).summary()
        assert 'TRAJECTORY SUMMARY' in text
        assert 'Range' in text


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
