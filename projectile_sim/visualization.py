"""
Visualization
=============
Plots for emitted trajectories:
  1. Trajectory (height vs downrange)
  2. Comparison of several runs (e.g. vacuum vs drag)

All figures share a dark theme applied through matplotlib rcParams.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Dict, Optional

from .integrator import TrajectoryResult


BACKGROUND = '#0a0a0a'
FOREGROUND = '#e0e0e0'
PALETTE = ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b', '#e040fb', '#ff5252']

DARK_RC = {
    'figure.facecolor': BACKGROUND,
    'axes.facecolor': BACKGROUND,
    'axes.edgecolor': '#333333',
    'axes.labelcolor': FOREGROUND,
    'axes.titlecolor': FOREGROUND,
    'axes.grid': True,
    'grid.color': '#333333',
    'grid.alpha': 0.4,
    'grid.linewidth': 0.5,
    'xtick.color': FOREGROUND,
    'ytick.color': FOREGROUND,
    'legend.facecolor': '#1a1a1a',
    'legend.edgecolor': '#444444',
    'legend.labelcolor': FOREGROUND,
    'legend.fontsize': 10,
    'savefig.facecolor': BACKGROUND,
    'savefig.dpi': 150,
    'savefig.bbox': 'tight',
}


def _save(fig, save_path, show=False):
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  1. Single Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: TrajectoryResult, save_path: Optional[str] = None,
                    show: bool = False) -> plt.Figure:
    """Height vs downrange for a single run."""
    cfg = result.config
    idx_max = int(np.argmax(result.y))

    with plt.rc_context(DARK_RC):
        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(result.x, result.y, color=PALETTE[0], linewidth=2.5,
                label='Trajectory')
        ax.plot(result.x[0], result.y[0], 'o', color='#00e676',
                markersize=10, label='Launch', zorder=5)
        ax.plot(result.x[-1], result.y[-1], 'x', color='#ff5252',
                markersize=12, markeredgewidth=3, label='Last sample',
                zorder=5)
        ax.plot(result.x[idx_max], result.y[idx_max], '^', color='#ffeb3b',
                markersize=10, label='Apex', zorder=5)

        ax.set_xlabel('Downrange (m)', fontsize=12)
        ax.set_ylabel('Height (m)', fontsize=12)
        ax.set_title(f'Projectile Trajectory (v₀={cfg.initial_speed:.1f} m/s, '
                     f'θ={cfg.launch_angle:.1f}°, '
                     f'c={cfg.drag_coefficient:g} kg/m)',
                     fontsize=13, fontweight='bold')
        ax.legend()
        ax.set_ylim(bottom=0)
        ax.set_xlim(left=0)
        return _save(fig, save_path, show)


# ══════════════════════════════════════════════════════════════════════════
#  2. Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_drag_comparison(results: Dict[str, TrajectoryResult],
                         save_path: Optional[str] = None) -> plt.Figure:
    """Overlay labelled trajectories, with a range bar chart alongside."""
    labels = list(results)
    colors = [PALETTE[i % len(PALETTE)] for i in range(len(labels))]
    ranges = [results[k].range_total for k in labels]

    with plt.rc_context(DARK_RC):
        fig, (ax_traj, ax_range) = plt.subplots(
            1, 2, figsize=(16, 6), gridspec_kw={'width_ratios': [2, 1]})

        for label, color in zip(labels, colors):
            res = results[label]
            ax_traj.plot(res.x, res.y, color=color, linewidth=2, label=label)
        ax_traj.set_xlabel('Downrange (m)')
        ax_traj.set_ylabel('Height (m)')
        ax_traj.set_title('Trajectory Comparison', fontweight='bold')
        ax_traj.set_ylim(bottom=0)
        ax_traj.legend()

        bars = ax_range.barh(labels, ranges, color=colors, alpha=0.85,
                             edgecolor='#555')
        ax_range.set_xlabel('Range (m)')
        ax_range.set_title('Range', fontweight='bold')
        for bar, r in zip(bars, ranges):
            ax_range.text(bar.get_width(), bar.get_y() + bar.get_height() / 2,
                          f' {r:.1f} m', va='center', color=FOREGROUND,
                          fontsize=10)

        return _save(fig, save_path)
