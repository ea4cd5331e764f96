import numpy as np
import pytest

from dfopt.core import Evaluator, Point
from dfopt.functions import sphere
from dfopt.local_search import (
    LocalSearch,
    LocalSearchConfig,
    PatternSearch,
    PatternSearchConfig,
    probe_axes,
)


def test_local_search_walks_to_the_origin():
    res = LocalSearch().optimize(sphere, arity=2)
    assert np.allclose(res.result.x, 0.0, atol=0.051)
    assert res.result.quality < 5e-3


def test_local_search_zero_step_does_one_sweep():
    cfg = LocalSearchConfig(step=0.0, init=(1.0, 2.0, 3.0))
    res = LocalSearch(cfg).optimize(sphere, arity=3)
    assert res.nfev == 1 + 2 * 3
    assert np.array_equal(res.result.x, [1.0, 2.0, 3.0])
    assert res.result.quality == 14.0


def test_local_search_rejects_wrong_arity():
    with pytest.raises(ValueError, match="arity"):
        LocalSearch().optimize(sphere, arity=3)


def test_probe_axes_evaluates_both_directions_per_axis():
    evaluator = Evaluator(sphere)
    start = Point([1.0, -1.0], 2.0)
    best, improved = probe_axes(evaluator, start, 0.5)
    assert improved
    assert np.array_equal(best.x, [0.5, -0.5])
    probes = [tuple(p.x) for p in evaluator.calls]
    assert probes == [(1.5, -1.0), (0.5, -1.0), (0.5, -0.5), (0.5, -1.5)]


def test_probe_axes_keeps_start_without_strict_improvement():
    evaluator = Evaluator(lambda x: float(abs(x[0])))
    best, improved = probe_axes(evaluator, Point([0.0], 0.0), 1.0)
    assert not improved
    assert best.x[0] == 0.0


def test_pattern_search_finds_shifted_minimum(shifted_bowl):
    res = PatternSearch().optimize(shifted_bowl, arity=2)
    assert np.allclose(res.result.x, [1.0, -0.5], atol=1e-3)
    assert res.result.quality < 1e-6


def test_pattern_search_zero_step_evaluates_once():
    res = PatternSearch(PatternSearchConfig(init_step=0.0)).optimize(sphere, arity=2)
    assert res.nfev == 1
    assert np.array_equal(res.result.x, [2.0, 2.0])


def test_pattern_search_result_matches_log(shifted_bowl):
    res = PatternSearch().optimize(shifted_bowl, arity=2)
    assert any(
        np.allclose(p.x, res.result.x) and p.quality == pytest.approx(res.result.quality)
        for p in res.log
    )


@pytest.mark.parametrize(
    "kwargs",
    [{"init_step": -1.0}, {"min_step": 0.0}, {"iterations": 0}, {"init": ()}],
)
def test_pattern_search_config_validation(kwargs):
    with pytest.raises(ValueError):
        PatternSearchConfig(**kwargs)


def test_local_search_config_validation():
    with pytest.raises(ValueError):
        LocalSearchConfig(step=-0.1)
