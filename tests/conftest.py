import os
import sys

import numpy as np
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

os.environ.setdefault("MPLBACKEND", "Agg")


def make_circle(radius=1.0, z=0.0, n=32, center=(0.0, 0.0), phase=0.0):
    """Counter-clockwise circle (about +z) in the plane z = const."""
    theta = phase + np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
    return np.column_stack((
        center[0] + radius * np.cos(theta),
        center[1] + radius * np.sin(theta),
        np.full(n, float(z)),
    ))


def make_square(half=1.0, z=0.0):
    """Counter-clockwise square (about +z), 4 corners."""
    return np.array([
        [half, -half, z],
        [half, half, z],
        [-half, half, z],
        [-half, -half, z],
    ], dtype=np.float64)


@pytest.fixture
def circle():
    return make_circle


@pytest.fixture
def square():
    return make_square


@pytest.fixture
def cylinder_profiles():
    return [make_circle(1.0, z, n=16) for z in (0.0, 1.0, 2.0)]
