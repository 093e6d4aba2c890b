"""
Simulation Configuration
========================
Immutable configuration record for a single trajectory run, plus the
environment-variable loader used by the command-line runner.

Environment keys (all optional):

    V0         initial speed (m/s)          default 50.0
    ANGLE_DEG  launch angle (degrees)       default 45.0
    Y0         initial height (m)           default 0.0
    G          gravity magnitude (m/s²)     default 9.81
    M          mass (kg)                    default 1.0
    C          drag coefficient (kg/m)      default 0.05  (0 = vacuum)
    DT         timestep (s)                 default 0.01

A value that is present but not a valid float silently falls back to the
default. Nothing is range-checked: zero mass or a negative timestep are
passed straight through to the integrator.
"""

import math
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional, Tuple

from dotenv import find_dotenv, load_dotenv


# Field name -> environment key
ENV_KEYS = {
    'initial_speed': 'V0',
    'launch_angle': 'ANGLE_DEG',
    'initial_height': 'Y0',
    'gravity': 'G',
    'mass': 'M',
    'drag_coefficient': 'C',
    'timestep': 'DT',
}


@dataclass(frozen=True)
class SimulationConfig:
    """
    Launch and integration parameters, fixed for the whole run.
    """
    initial_speed: float = 50.0      # m/s
    launch_angle: float = 45.0       # degrees above horizontal
    initial_height: float = 0.0      # m
    gravity: float = 9.81            # m/s², positive magnitude
    mass: float = 1.0                # kg
    drag_coefficient: float = 0.05   # kg/m
    timestep: float = 0.01           # s

    @property
    def launch_angle_rad(self) -> float:
        return self.launch_angle * math.pi / 180.0

    def initial_velocity(self) -> Tuple[float, float]:
        """Launch speed + angle as (vx, vy)."""
        theta = self.launch_angle_rad
        return (self.initial_speed * math.cos(theta),
                self.initial_speed * math.sin(theta))

    def summary(self) -> str:
        lines = [
            f"  Initial speed : {self.initial_speed:>10.3f} m/s",
            f"  Launch angle  : {self.launch_angle:>10.3f} °",
            f"  Initial height: {self.initial_height:>10.3f} m",
            f"  Gravity       : {self.gravity:>10.3f} m/s²",
            f"  Mass          : {self.mass:>10.3f} kg",
            f"  Drag coeff.   : {self.drag_coefficient:>10.4f} kg/m",
            f"  Timestep      : {self.timestep:>10.4f} s",
        ]
        return '\n'.join(lines)


def read_env_float(environ: Mapping[str, str], key: str,
                   default: float) -> float:
    """Float value of ``environ[key]``, or ``default`` if missing/unparseable.

    Surrounding whitespace and digit-group underscores count as unparseable,
    even though ``float()`` would accept them.
    """
    raw = environ.get(key)
    if raw is None or raw != raw.strip() or '_' in raw:
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        return default


def config_from_env(environ: Optional[Mapping[str, str]] = None,
                    dotenv_path: Optional[str] = None,
                    load_dotenv_file: bool = True) -> SimulationConfig:
    """
    Build a SimulationConfig from environment-style key/value pairs.

    Parameters
    ----------
    environ : mapping, optional
        Source of values. Defaults to ``os.environ``.
    dotenv_path : str, optional
        ``.env`` file to load first. Only used when reading ``os.environ``;
        variables already set in the process take precedence and a
        missing file is ignored.
    load_dotenv_file : bool
        Set False to skip ``.env`` loading entirely.
    """
    if environ is None:
        if load_dotenv_file:
            path = dotenv_path or find_dotenv(usecwd=True)
            if path:
                load_dotenv(dotenv_path=path, override=False)
        environ = os.environ

    defaults = SimulationConfig()
    values = {
        f.name: read_env_float(environ, ENV_KEYS[f.name],
                               getattr(defaults, f.name))
        for f in fields(SimulationConfig)
    }
    return SimulationConfig(**values)
