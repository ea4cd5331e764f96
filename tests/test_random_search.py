import numpy as np
import pytest

from dfopt.functions import sphere
from dfopt.random_search import (
    LocalUnimodalSampling,
    LocalUnimodalSamplingConfig,
    LuusJaakola,
    LuusJaakolaConfig,
    SimulatedAnnealing,
    SimulatedAnnealingConfig,
)


def test_luus_jaakola_converges_on_sphere():
    res = LuusJaakola(LuusJaakolaConfig(seed=3)).optimize(sphere, arity=2)
    assert res.result.quality < 0.01


def test_local_unimodal_sampling_converges_on_sphere():
    res = LocalUnimodalSampling(LocalUnimodalSamplingConfig(seed=3)).optimize(sphere, arity=2)
    assert res.result.quality < 0.1


@pytest.mark.parametrize(
    "strategy",
    [
        LuusJaakola(LuusJaakolaConfig(init_range=0.0, seed=0)),
        LocalUnimodalSampling(LocalUnimodalSamplingConfig(init_range=0.0, seed=0)),
    ],
    ids=["luus_jaakola", "local_unimodal_sampling"],
)
def test_zero_range_returns_the_start(strategy):
    res = strategy.optimize(sphere, arity=2)
    assert res.nfev == 1
    assert np.array_equal(res.result.x, [2.0, 2.0])
    assert res.result.quality == 8.0


def test_same_seed_same_run():
    a = LuusJaakola(LuusJaakolaConfig(seed=11)).optimize(sphere, arity=2)
    b = LuusJaakola(LuusJaakolaConfig(seed=11)).optimize(sphere, arity=2)
    assert np.array_equal(a.result.x, b.result.x)
    assert [p.quality for p in a.log] == [p.quality for p in b.log]


def test_shrinking_search_never_gets_worse():
    res = LocalUnimodalSampling(LocalUnimodalSamplingConfig(seed=5)).optimize(sphere, arity=2)
    assert res.result.quality == min(p.quality for p in res.log)


def test_annealing_without_step_stays_put():
    cfg = SimulatedAnnealingConfig(random_step=0.0, seed=0)
    res = SimulatedAnnealing(cfg).optimize(sphere, arity=2)
    assert np.array_equal(res.result.x, [2.0, 2.0])
    assert res.result.quality == 8.0
    assert all(p.quality == 8.0 for p in res.log)
    # one proposal per cooling step
    assert 199 <= res.nfev - 1 <= 201


def test_cold_annealing_descends():
    cfg = SimulatedAnnealingConfig(init_temperature=0.1, cooling=1e-4, seed=2)
    res = SimulatedAnnealing(cfg).optimize(sphere, arity=2)
    assert res.result.quality < 1.0


def test_annealing_zero_temperature_evaluates_start_only():
    cfg = SimulatedAnnealingConfig(init_temperature=0.0, seed=0)
    res = SimulatedAnnealing(cfg).optimize(sphere, arity=2)
    assert res.nfev == 1


@pytest.mark.parametrize(
    "factory",
    [
        lambda: LuusJaakolaConfig(decay=1.0),
        lambda: LuusJaakolaConfig(min_range=0.0),
        lambda: LocalUnimodalSamplingConfig(alpha=0.0),
        lambda: LocalUnimodalSamplingConfig(init_range=-1.0),
        lambda: SimulatedAnnealingConfig(cooling=0.0),
        lambda: SimulatedAnnealingConfig(random_step=-0.1),
    ],
)
def test_config_validation(factory):
    with pytest.raises(ValueError):
        factory()


def test_init_arity_checked():
    with pytest.raises(ValueError, match="arity"):
        LuusJaakola(LuusJaakolaConfig(seed=0)).optimize(sphere, arity=3)
