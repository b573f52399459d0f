"""
Shared test fixtures for the trajectory metrics test suite.

Provides small hand-checkable soll/ist trajectory pairs, a longer
synthetic robot path with a measured counterpart, and CSV files of both
for command line tests.
"""

import math
from typing import List, Tuple

import numpy as np
import pytest

from trajectory_metrics import Trajectory


@pytest.fixture
def soll_points() -> List[Tuple[float, float]]:
    """Straight planned path along the x axis."""
    return [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]


@pytest.fixture
def ist_points() -> List[Tuple[float, float]]:
    """Measured path with a single 1 mm deviation in the middle."""
    return [(0.0, 0.0), (1.0, 1.0), (2.0, 0.0)]


@pytest.fixture
def soll_trajectory(soll_points) -> Trajectory:
    return Trajectory.from_array(soll_points, role="soll")


@pytest.fixture
def ist_trajectory(ist_points) -> Trajectory:
    return Trajectory.from_array(ist_points, role="ist")


@pytest.fixture
def helix() -> np.ndarray:
    """3-D helix sampled at 40 points, a typical Cartesian robot path (mm)."""
    t = np.linspace(0.0, 2.0 * math.pi, 40)
    return np.column_stack([100.0 * np.cos(t), 100.0 * np.sin(t), 10.0 * t])


@pytest.fixture
def measured_helix(helix: np.ndarray) -> np.ndarray:
    """The helix recorded at a different rate (55 samples) with a small offset."""
    t = np.linspace(0.0, 2.0 * math.pi, 55)
    return np.column_stack([100.0 * np.cos(t) + 0.2, 100.0 * np.sin(t) - 0.1, 10.0 * t + 0.05])


def _write_csv(path, header, rows):
    lines = [",".join(header)]
    for row in rows:
        lines.append(",".join(str(v) for v in row))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def soll_csv(tmp_path, soll_points):
    rows = [(i * 0.1, x, y, 0.0) for i, (x, y) in enumerate(soll_points)]
    return _write_csv(tmp_path / "soll.csv", ["timestamp", "x", "y", "z"], rows)


@pytest.fixture
def ist_csv(tmp_path, ist_points):
    rows = [(i * 0.1, x, y, 0.0) for i, (x, y) in enumerate(ist_points)]
    return _write_csv(tmp_path / "ist.csv", ["timestamp", "x_ist", "y_ist", "z_ist"], rows)
