#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE TRAJECTORY INTEGRATOR : Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Reads launch parameters from the environment (and a .env file, if any),
  integrates the trajectory and writes it to results/trajectory.csv.
  The results/ directory must already exist.

  Environment: V0, ANGLE_DEG, Y0, G, M, C, DT  (see projectile_sim.config)

  Usage:
    python main.py                # Write the CSV only
    python main.py --summary      # Also print config + trajectory summary
    python main.py --validate     # Also compare a vacuum run to closed form
    python main.py --plot         # Also save results/trajectory.png
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from projectile_sim.config import config_from_env
from projectile_sim.integrator import trajectory_rows, simulate_euler
from projectile_sim.output import write_trajectory_csv, DEFAULT_OUTPUT_PATH


PLOT_PATH = 'results/trajectory.png'


def main():
    argv = sys.argv[1:]
    config = config_from_env()

    write_trajectory_csv(trajectory_rows(config), DEFAULT_OUTPUT_PATH)
    print("Trajectory written to trajectory.csv")

    if '--summary' in argv or '--plot' in argv:
        result = simulate_euler(config)

        if '--summary' in argv:
            print(config.summary())
            print(result.summary())

        if '--plot' in argv:
            from projectile_sim.visualization import plot_trajectory
            import matplotlib.pyplot as plt

            fig = plot_trajectory(result, save_path=PLOT_PATH)
            plt.close(fig)
            print(f"  ✓ Saved: {PLOT_PATH}")

    if '--validate' in argv:
        from projectile_sim.validation import validate_vacuum
        validate_vacuum(config, verbose=True)


if __name__ == "__main__":
    main()
