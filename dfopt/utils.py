"""Helpers shared by the population-based and single-point strategies.

All helpers are pure NumPy and take an explicit ``numpy.random.Generator``
where randomness is involved, so results are reproducible given a seed.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

Array = np.ndarray
Boundaries = Tuple[Tuple[float, float], ...]


def as_boundaries(boundaries: Sequence[Sequence[float]]) -> Boundaries:
    """Validate per-dimension ``(low, high)`` pairs and freeze them as tuples."""
    if len(boundaries) == 0:
        raise ValueError("boundaries must contain at least one (low, high) pair")
    frozen = []
    for i, pair in enumerate(boundaries):
        if len(pair) != 2:
            raise ValueError(f"boundary {i} must be a (low, high) pair, got {pair!r}")
        low, high = float(pair[0]), float(pair[1])
        if not np.isfinite(low) or not np.isfinite(high):
            raise ValueError(f"boundary {i} must be finite, got ({low}, {high})")
        if low > high:
            raise ValueError(f"boundary {i} has low > high: ({low}, {high})")
        frozen.append((low, high))
    return tuple(frozen)


def as_point(init: Sequence[float]) -> Tuple[float, ...]:
    """Validate a starting point and freeze it as a tuple of floats."""
    if len(init) == 0:
        raise ValueError("initial point must have at least one coordinate")
    return tuple(float(v) for v in init)


def check_arity(name: str, length: int, arity: int) -> None:
    """Raise if a configured vector does not cover ``arity`` dimensions."""
    if length != arity:
        raise ValueError(f"{name} has {length} dimensions but arity is {arity}")


def bounds_arrays(boundaries: Boundaries, arity: int) -> tuple[Array, Array]:
    """Return ``(low, high)`` arrays for the first ``arity`` dimensions."""
    if len(boundaries) < arity:
        raise ValueError(
            f"boundaries cover {len(boundaries)} dimensions but arity is {arity}"
        )
    bounds = np.asarray(boundaries[:arity], dtype=float)
    return bounds[:, 0], bounds[:, 1]


def uniform_in_box(rng: np.random.Generator, low: Array, high: Array) -> Array:
    """Sample one point uniformly inside the box ``[low, high]``."""
    return (high - low) * rng.random(low.size) + low


def uniform_step(rng: np.random.Generator, arity: int, width: float) -> Array:
    """Uniform random offset with every coordinate in ``[-width, width)``."""
    return (2 * rng.random(arity) - 1) * width


def clamp(x: Array, low: Array, high: Array) -> Array:
    """Clip ``x`` into the box ``[low, high]``."""
    return np.minimum(high, np.maximum(x, low))


def max_squared_distance(xs: Sequence[Array]) -> float:
    """Largest squared Euclidean distance between any two of ``xs``."""
    best = 0.0
    for i in range(len(xs)):
        for j in range(i + 1, len(xs)):
            diff = xs[i] - xs[j]
            dist = float(diff @ diff)
            if dist > best:
                best = dist
    return best


def quality_spread(qualities: Sequence[float]) -> float:
    """Gap between the worst and the best quality."""
    return float(np.max(qualities) - np.min(qualities))


def check_fraction(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def check_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


__all__ = [
    "Boundaries",
    "as_boundaries",
    "as_point",
    "bounds_arrays",
    "check_arity",
    "check_fraction",
    "check_non_negative",
    "check_positive",
    "clamp",
    "max_squared_distance",
    "quality_spread",
    "uniform_in_box",
    "uniform_step",
]
