"""Shared geometry builders and fixtures."""

from __future__ import annotations

import math

import numpy as np
import pytest

from drivable_corridor.config import ProjectionSettings
from drivable_corridor.corridor.corridor import Corridor


def straight_points(x0: float, x1: float, y: float = 0.0, n: int = 2) -> np.ndarray:
    """*n* evenly spaced points on the horizontal line from ``(x0, y)`` to ``(x1, y)``."""
    xs = np.linspace(x0, x1, n)
    return np.column_stack([xs, np.full(n, y)])


def arc_points(
    radius: float = 20.0,
    start: float = 0.0,
    stop: float = math.pi,
    n: int = 61,
) -> np.ndarray:
    """Counterclockwise (left-turning) arc around the origin."""
    angles = np.linspace(start, stop, n)
    return np.column_stack([radius * np.cos(angles), radius * np.sin(angles)])


def hairpin_points() -> np.ndarray:
    """Out along y=0 to x=20, a left semicircle of radius 2, back along y=4 to x=0."""
    out_leg = [(float(x), 0.0) for x in range(0, 21)]
    turn = [
        (20.0 + 2.0 * math.cos(a), 2.0 + 2.0 * math.sin(a))
        for a in (-math.pi / 2 + k * math.pi / 13 for k in range(1, 13))
    ]
    back_leg = [(float(x), 4.0) for x in range(20, -1, -1)]
    return np.array(out_leg + turn + back_leg)


def straight_corridor(
    corridor_id: int,
    x0: float,
    x1: float,
    left: float = 2.0,
    right: float = 2.0,
) -> Corridor:
    return Corridor.with_constant_width(
        corridor_id, straight_points(x0, x1), left, right, settings=ProjectionSettings()
    )


@pytest.fixture
def settings() -> ProjectionSettings:
    return ProjectionSettings()


@pytest.fixture
def corridor_a() -> Corridor:
    """Straight corridor on x in [0, 10]."""
    return straight_corridor(1, 0.0, 10.0)


@pytest.fixture
def corridor_b() -> Corridor:
    """Straight corridor on x in [10, 25], narrower than A."""
    return straight_corridor(2, 10.0, 25.0, left=1.0, right=1.0)


@pytest.fixture
def corridor_c() -> Corridor:
    """Straight corridor on x in [25, 30]."""
    return straight_corridor(3, 25.0, 30.0)
