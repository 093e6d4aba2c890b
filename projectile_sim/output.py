"""
Trajectory CSV Output
=====================
Streams trajectory rows to a CSV file:

    time (s),pos-x (m),pos-y (m)
    0,0,0
    0.01,0.35355...,0.35257...
    ...

Each field is the shortest positional decimal text that round-trips the
float: `0`, `0.000032`, `100000000000000000000`.
The parent directory must already exist; I/O errors are not caught here.
"""

import csv
from typing import Iterable, List, Sequence

import numpy as np

from .integrator import TrajectoryRow


CSV_HEADER = ("time (s)", "pos-x (m)", "pos-y (m)")
DEFAULT_OUTPUT_PATH = "results/trajectory.csv"


def format_value(value: float) -> str:
    """Shortest round-trip text in positional notation (never exponent form)."""
    return np.format_float_positional(float(value), unique=True, trim='-')


def write_trajectory_csv(rows: Iterable[Sequence[float]],
                         path: str = DEFAULT_OUTPUT_PATH) -> int:
    """
    Write ``rows`` (e.g. the ``trajectory_rows`` generator) to ``path``.

    Rows are written one at a time in the order received and the file is
    flushed before returning.

    Returns
    -------
    int
        Number of data rows written (header excluded).
    """
    count = 0
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for row in rows:
            writer.writerow([format_value(v) for v in row])
            count += 1
        f.flush()
    return count


def read_trajectory_csv(path: str) -> List[TrajectoryRow]:
    """Load a file written by ``write_trajectory_csv``."""
    with open(path, newline='') as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None or tuple(header) != CSV_HEADER:
            raise ValueError(f"'{path}' is not a trajectory CSV (header {header!r})")
        return [TrajectoryRow(*(float(v) for v in rec)) for rec in reader if rec]
