"""Standard two-dimensional test objectives for benchmarking the minimizers.

Every function takes a coordinate array and returns a float. Functions with
a ``scale`` evaluate the textbook expression at ``scale * x`` so that their
interesting region fits the default ``[-8, 8]`` search box.
"""

from __future__ import annotations

import math
from typing import Callable, Dict

import numpy as np

Array = np.ndarray


def rosenbrock(x: Array) -> float:
    """Rosenbrock's banana valley; minimum 0 at (1, 1)."""
    return float((1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2)


def himmelblau(x: Array) -> float:
    """Himmelblau's function; four minima of value 0, one of them at (3, 2)."""
    return float((x[0] ** 2 + x[1] - 11) ** 2 + (x[0] + x[1] ** 2 - 7) ** 2)


def sphere(x: Array) -> float:
    """Sum of squares; minimum 0 at the origin, any arity."""
    x = np.asarray(x, dtype=float)
    return float(x @ x)


def sin_valley(x: Array, scale: float = 3.0) -> float:
    """McCormick-like valley ``sin(u + v) + (u - v)^2 - 1.5u + 2.5v + 1``."""
    u, v = scale * x[0], scale * x[1]
    return float(math.sin(u + v) + (u - v) ** 2 - 1.5 * u + 2.5 * v + 1)


def styblinski_tang(x: Array, scale: float = 5.0) -> float:
    """Two-dimensional Styblinski-Tang style quartic with four local minima."""
    u, v = scale * x[0], scale * x[1]
    return float(u**4 + v**4 - 16 * (u**2 + v**2) + 5 * (u + v))


TEST_FUNCTIONS: Dict[str, Callable[[Array], float]] = {
    "rosenbrock": rosenbrock,
    "himmelblau": himmelblau,
    "sphere": sphere,
    "sin_valley": sin_valley,
    "styblinski_tang": styblinski_tang,
}


__all__ = [
    "TEST_FUNCTIONS",
    "himmelblau",
    "rosenbrock",
    "sin_valley",
    "sphere",
    "styblinski_tang",
]
