"""
Validation Against Closed-Form Vacuum Ballistics
================================================
With drag disabled the equations of motion have an exact solution:

    apex        = y0 + (v0 sinθ)² / (2g)
    flight time = (v0 sinθ + sqrt((v0 sinθ)² + 2 g y0)) / g
    range       = v0 cosθ · flight time

The integrator is run on a drag-free copy of the configuration and the
emitted samples are compared against these values. Because the last
below-ground sample is never emitted, the simulated flight time and range
sit up to one timestep short of the exact values.
"""

import math
from dataclasses import dataclass, replace

import numpy as np

from .config import SimulationConfig
from .integrator import simulate_euler, TrajectoryResult


def _check_gravity(config: SimulationConfig) -> None:
    if not config.gravity > 0.0:
        raise ValueError(
            f"Closed-form vacuum solution needs gravity > 0 (got {config.gravity})"
        )


def vacuum_apex(config: SimulationConfig) -> float:
    """Exact apex height (m) without drag."""
    _check_gravity(config)
    _, vy = config.initial_velocity()
    return config.initial_height + max(vy, 0.0) ** 2 / (2.0 * config.gravity)


def vacuum_flight_time(config: SimulationConfig) -> float:
    """Exact time (s) until the height returns to zero without drag."""
    _check_gravity(config)
    _, vy = config.initial_velocity()
    g = config.gravity
    disc = vy * vy + 2.0 * g * config.initial_height
    if disc < 0.0:
        return 0.0
    return (vy + math.sqrt(disc)) / g


def vacuum_range(config: SimulationConfig) -> float:
    """Exact horizontal distance (m) at ground impact without drag."""
    vx, _ = config.initial_velocity()
    return vx * vacuum_flight_time(config)


@dataclass
class ValidationResult:
    """Simulated vacuum trajectory vs the exact solution."""
    ref_apex: float
    sim_apex: float
    apex_error_pct: float
    ref_flight_time: float
    sim_flight_time: float
    flight_time_error_pct: float
    ref_range: float
    sim_range: float
    range_error_pct: float

    def max_abs_error_pct(self) -> float:
        return float(np.max(np.abs([self.apex_error_pct,
                                    self.flight_time_error_pct,
                                    self.range_error_pct])))


def _pct(sim: float, ref: float) -> float:
    return 100.0 * (sim - ref) / ref if ref != 0.0 else 0.0


def validate_vacuum(config: SimulationConfig,
                    verbose: bool = True,
                    max_steps: int = 10_000_000) -> ValidationResult:
    """
    Simulate ``config`` with drag switched off and compare against the
    closed-form solution.
    """
    _check_gravity(config)
    vacuum = replace(config, drag_coefficient=0.0)
    traj: TrajectoryResult = simulate_euler(vacuum, max_steps=max_steps)

    ref_apex = vacuum_apex(vacuum)
    ref_tof = vacuum_flight_time(vacuum)
    ref_range = vacuum_range(vacuum)

    vr = ValidationResult(
        ref_apex=ref_apex,
        sim_apex=traj.max_altitude,
        apex_error_pct=_pct(traj.max_altitude, ref_apex),
        ref_flight_time=ref_tof,
        sim_flight_time=traj.flight_time,
        flight_time_error_pct=_pct(traj.flight_time, ref_tof),
        ref_range=ref_range,
        sim_range=traj.range_total,
        range_error_pct=_pct(traj.range_total, ref_range),
    )

    if verbose:
        print(f"\n{'='*52}")
        print(f"  VACUUM VALIDATION  (dt = {config.timestep} s)")
        print(f"{'='*52}")
        print(f"{'Quantity':<14} {'Exact':>11} {'Simulated':>11} {'Err %':>8}")
        print("-" * 52)
        print(f"{'Apex (m)':<14} {vr.ref_apex:>11.3f} {vr.sim_apex:>11.3f} "
              f"{vr.apex_error_pct:>+8.3f}")
        print(f"{'Flight (s)':<14} {vr.ref_flight_time:>11.3f} "
              f"{vr.sim_flight_time:>11.3f} {vr.flight_time_error_pct:>+8.3f}")
        print(f"{'Range (m)':<14} {vr.ref_range:>11.3f} {vr.sim_range:>11.3f} "
              f"{vr.range_error_pct:>+8.3f}")
        print(f"{'='*52}\n")

    return vr
