"""Pytest configuration and shared fixtures for dfopt tests.

This module provides:
- A deterministic NumPy RNG fixture
- Shared test objectives with a known minimum
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the legacy global numpy RNG for every test."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def shifted_bowl():
    """Separable quadratic with its minimum 0 at (1, -0.5)."""

    def fun(x: np.ndarray) -> float:
        return float((x[0] - 1.0) ** 2 + (x[1] + 0.5) ** 2)

    return fun
