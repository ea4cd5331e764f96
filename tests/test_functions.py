import numpy as np
import pytest

from dfopt.functions import (
    TEST_FUNCTIONS,
    himmelblau,
    rosenbrock,
    sin_valley,
    sphere,
    styblinski_tang,
)


@pytest.mark.parametrize(
    "fun, x, expected",
    [
        (rosenbrock, [1.0, 1.0], 0.0),
        (rosenbrock, [0.0, 0.0], 1.0),
        (himmelblau, [3.0, 2.0], 0.0),
        (himmelblau, [0.0, 0.0], 170.0),
        (sphere, [3.0, 4.0], 25.0),
        (sphere, [1.0, 1.0, 1.0], 3.0),
        (sin_valley, [0.0, 0.0], 1.0),
        (styblinski_tang, [0.0, 0.0], 0.0),
    ],
)
def test_known_values(fun, x, expected):
    assert fun(np.array(x)) == pytest.approx(expected)


def test_scaled_functions_use_scale():
    x = np.array([0.2, -0.1])
    assert styblinski_tang(x, scale=1.0) == pytest.approx(
        0.2**4 + 0.1**4 - 16 * (0.04 + 0.01) + 5 * 0.1
    )
    assert sin_valley(x, scale=3.0) == pytest.approx(sin_valley(3 * x, scale=1.0))


def test_registry_returns_floats():
    for fun in TEST_FUNCTIONS.values():
        assert isinstance(fun(np.array([0.5, -0.5])), float)
