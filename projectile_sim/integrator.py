"""
Numerical Integration Engine
=============================
Fixed-timestep semi-implicit (symplectic) Euler integration of a point
mass under constant gravity and quadratic drag:

    a = -g ŷ - (c/m) |v| v
    v_{n+1} = v_n + a(v_n) * dt
    x_{n+1} = x_n + v_{n+1} * dt

Rows are produced lazily by ``trajectory_rows``: the launch sample first,
then one sample per step while the new height stays strictly positive.
The first sample at or below ground is computed but never emitted, so the
series brackets the impact without containing it.

Output: ``TrajectoryRow`` tuples, or a ``TrajectoryResult`` holding the
whole series as numpy arrays.
"""

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple

import numpy as np

from .config import SimulationConfig


class TrajectoryRow(NamedTuple):
    """One output sample: (time, x, y)."""
    time: float
    x: float
    y: float


class StepLimitExceeded(RuntimeError):
    """Raised when the safety ceiling is hit before the projectile lands."""

    def __init__(self, steps: int, time: float):
        self.steps = steps
        self.time = time
        super().__init__(
            f"projectile still airborne after {steps} steps (t={time:g} s)"
        )


@dataclass
class SimulationState:
    """Kinematic state owned by a single run of the integration loop."""
    time: float
    x: float
    y: float
    vx: float
    vy: float

    @classmethod
    def initial(cls, config: SimulationConfig) -> 'SimulationState':
        vx, vy = config.initial_velocity()
        return cls(time=0.0, x=0.0, y=config.initial_height, vx=vx, vy=vy)

    @property
    def speed(self) -> float:
        return math.sqrt(self.vx * self.vx + self.vy * self.vy)

    def row(self) -> TrajectoryRow:
        return TrajectoryRow(self.time, self.x, self.y)


def _drag_per_mass(config: SimulationConfig) -> float:
    """c / m with IEEE semantics: zero mass gives inf (or nan for c = 0)."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.divide(np.float64(config.drag_coefficient),
                               config.mass))


def accelerations(config: SimulationConfig, vx: float,
                  vy: float) -> Tuple[float, float]:
    """
    Acceleration (m/s²) from gravity plus quadratic drag.

    Drag has magnitude c|v|² and opposes the velocity vector; with
    c = 0 only gravity remains. Zero mass is not rejected: the
    accelerations become non-finite and propagate into the state.
    """
    speed = math.sqrt(vx * vx + vy * vy)
    k = _drag_per_mass(config)
    ax = -k * speed * vx
    ay = -config.gravity - k * speed * vy
    return ax, ay


def euler_step(state: SimulationState, config: SimulationConfig) -> None:
    """Advance ``state`` in place by one timestep."""
    dt = config.timestep
    ax, ay = accelerations(config, state.vx, state.vy)

    # velocity first, then position with the updated velocity
    state.vx += ax * dt
    state.vy += ay * dt
    state.x += state.vx * dt
    state.y += state.vy * dt
    state.time += dt


def trajectory_rows(config: SimulationConfig,
                    max_steps: Optional[int] = None,
                    max_time: Optional[float] = None
                    ) -> Iterator[TrajectoryRow]:
    """
    Lazily generate the trajectory samples for ``config``.

    Parameters
    ----------
    config : SimulationConfig
    max_steps : int, optional
        Step ceiling. ``None`` (default) means unbounded.
    max_time : float, optional
        Simulated-time ceiling (s). ``None`` (default) means unbounded.

    Yields
    ------
    TrajectoryRow
        The launch row (always, even below ground), then every step whose
        resulting height is > 0.

    Raises
    ------
    StepLimitExceeded
        If a ceiling is reached while the projectile is still airborne.
        Rows produced up to that point have already been yielded.
    """
    state = SimulationState.initial(config)
    yield state.row()

    steps = 0
    while state.y >= 0.0:
        if max_steps is not None and steps >= max_steps:
            raise StepLimitExceeded(steps, state.time)
        if max_time is not None and state.time >= max_time:
            raise StepLimitExceeded(steps, state.time)

        euler_step(state, config)
        steps += 1

        if state.y > 0.0:
            yield state.row()
        else:
            break


@dataclass
class TrajectoryResult:
    """Complete emitted trajectory."""
    config: SimulationConfig

    # Arrays, each of shape (N,)
    time: np.ndarray
    x: np.ndarray             # downrange
    y: np.ndarray             # height

    @property
    def n_rows(self) -> int:
        return len(self.time)

    @property
    def range_total(self) -> float:
        """Downrange distance of the last emitted sample (m)."""
        return float(self.x[-1])

    @property
    def max_altitude(self) -> float:
        """Apex height (m)."""
        return float(np.max(self.y))

    @property
    def apex_time(self) -> float:
        return float(self.time[int(np.argmax(self.y))])

    @property
    def flight_time(self) -> float:
        """Time of the last emitted sample (s)."""
        return float(self.time[-1])

    def rows(self) -> Iterator[TrajectoryRow]:
        for t, x, y in zip(self.time, self.x, self.y):
            yield TrajectoryRow(float(t), float(x), float(y))

    def summary(self) -> str:
        """Human-readable summary string."""
        cfg = self.config
        lines = [
            f"╔══════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY                          ║",
            f"╠══════════════════════════════════════════════╣",
            f"║  Launch vel   : {cfg.initial_speed:>10.2f} m/s{'':<14s} ║",
            f"║  Elevation    : {cfg.launch_angle:>10.2f} °{'':<16s} ║",
            f"║  Drag coeff.  : {cfg.drag_coefficient:>10.4f} kg/m{'':<13s} ║",
            f"║  Timestep     : {cfg.timestep:>10.4f} s{'':<16s} ║",
            f"╠══════════════════════════════════════════════╣",
            f"║  Samples      : {self.n_rows:>10d}{'':<18s} ║",
            f"║  Range        : {self.range_total:>10.2f} m{'':<16s} ║",
            f"║  Max altitude : {self.max_altitude:>10.2f} m{'':<16s} ║",
            f"║  Apex time    : {self.apex_time:>10.2f} s{'':<16s} ║",
            f"║  Flight time  : {self.flight_time:>10.2f} s{'':<16s} ║",
            f"╚══════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def simulate_euler(config: SimulationConfig,
                   max_steps: Optional[int] = None,
                   max_time: Optional[float] = None) -> TrajectoryResult:
    """
    Run the integrator to completion and collect every emitted row.

    Ceilings behave as in ``trajectory_rows``; ``StepLimitExceeded``
    propagates and no partial result is returned.
    """
    history = list(trajectory_rows(config, max_steps=max_steps,
                                   max_time=max_time))
    return _build_result(history, config)


def _build_result(history, config):
    """Convert row list to TrajectoryResult."""
    times, xs, ys = zip(*history)
    return TrajectoryResult(
        config=config,
        time=np.array(times, dtype=np.float64),
        x=np.array(xs, dtype=np.float64),
        y=np.array(ys, dtype=np.float64),
    )
