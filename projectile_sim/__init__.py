"""
Projectile Trajectory Integrator
================================
Fixed-timestep integration of a 2D projectile under gravity and quadratic
drag, streaming (time, x, y) samples until the projectile returns to the
ground.

  - Configuration record, loadable from environment variables / .env
  - Semi-implicit Euler integrator exposed as a lazy row generator
  - CSV sink, closed-form vacuum validation and trajectory plots
"""

from .config import SimulationConfig, config_from_env, read_env_float, ENV_KEYS
from .integrator import (
    TrajectoryRow, SimulationState, TrajectoryResult, StepLimitExceeded,
    accelerations, euler_step, trajectory_rows, simulate_euler,
)
from .output import (
    CSV_HEADER, DEFAULT_OUTPUT_PATH, write_trajectory_csv, read_trajectory_csv,
)
from .validation import (
    vacuum_apex, vacuum_flight_time, vacuum_range,
    validate_vacuum, ValidationResult,
)
from .visualization import plot_trajectory, plot_drag_comparison

__version__ = "1.0.0"
__all__ = [
    'SimulationConfig', 'config_from_env', 'read_env_float', 'ENV_KEYS',
    'TrajectoryRow', 'SimulationState', 'TrajectoryResult', 'StepLimitExceeded',
    'accelerations', 'euler_step', 'trajectory_rows', 'simulate_euler',
    'CSV_HEADER', 'DEFAULT_OUTPUT_PATH',
    'write_trajectory_csv', 'read_trajectory_csv',
    'vacuum_apex', 'vacuum_flight_time', 'vacuum_range',
    'validate_vacuum', 'ValidationResult',
    'plot_trajectory', 'plot_drag_comparison',
]
