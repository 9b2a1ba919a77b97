"""Mathematical utility functions for curling calculations.

Randomness is always drawn from an explicit ``numpy.random.Generator`` so
callers can seed it.
"""

import math

import numpy as np


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value between min and max."""
    return max(min_val, min(max_val, value))


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Calculate Euclidean distance between two points."""
    return math.sqrt((x1 - x2) ** 2 + (y1 - y2) ** 2)


def rand_between(rng: np.random.Generator, low: float, high: float) -> float:
    """Uniform draw in [low, high)."""
    return float(rng.uniform(low, high))


def random_sign(rng: np.random.Generator) -> int:
    """Return +1 or -1 with equal probability."""
    return 1 if rng.random() > 0.5 else -1


def gauss_random(rng: np.random.Generator) -> float:
    """Standard normal sample via the Box-Muller transform."""
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = float(rng.random())
    while v == 0.0:
        v = float(rng.random())
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def side_of(x: float) -> int:
    """Spin direction that curls a stone at ``x`` back toward the centre line."""
    return -1 if x > 0 else 1
