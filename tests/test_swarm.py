import numpy as np
import pytest

from dfopt.functions import himmelblau, sphere
from dfopt.swarm import (
    FireflyAlgorithm,
    FireflyConfig,
    GlowwormConfig,
    GlowwormSwarm,
    ParticleSwarm,
    ParticleSwarmConfig,
)


def test_particle_swarm_evaluates_whole_swarm_per_iteration():
    cfg = ParticleSwarmConfig(swarm_size=6, seed=0, max_iterations=40)
    res = ParticleSwarm(cfg).optimize(sphere, arity=2)
    assert res.nfev % 6 == 0
    assert res.nfev <= 6 * 41


def test_particle_swarm_improves_on_sphere():
    cfg = ParticleSwarmConfig(swarm_size=10, seed=1, diff=1e-6, max_iterations=300)
    res = ParticleSwarm(cfg).optimize(sphere, arity=2)
    assert res.result.quality < min(p.quality for p in res.log[:10])


def test_particle_swarm_returns_a_current_particle():
    cfg = ParticleSwarmConfig(seed=2, max_iterations=25)
    res = ParticleSwarm(cfg).optimize(himmelblau, arity=2)
    final_swarm = res.log[-cfg.swarm_size :]
    assert res.result.quality == min(p.quality for p in final_swarm)


def test_firefly_positions_stay_in_the_box():
    bounds = ((-1.0, 1.0), (-2.0, 0.5))
    cfg = FireflyConfig(boundaries=bounds, seed=3, alpha=0.5, diff=0.0)
    res = FireflyAlgorithm(cfg).optimize(lambda x: float(-x[0] - x[1]), arity=2)
    xs = np.array([p.x for p in res.log])
    assert np.all(xs[:, 0] >= -1.0) and np.all(xs[:, 0] <= 1.0)
    assert np.all(xs[:, 1] >= -2.0) and np.all(xs[:, 1] <= 0.5)


def test_firefly_runs_at_most_max_iterations():
    cfg = FireflyConfig(swarm_size=8, max_iterations=4, diff=0.0, seed=0)
    res = FireflyAlgorithm(cfg).optimize(sphere, arity=2)
    assert res.nfev == 8 * (1 + 4)


def test_firefly_result_is_best_of_final_swarm():
    cfg = FireflyConfig(seed=5)
    res = FireflyAlgorithm(cfg).optimize(himmelblau, arity=2)
    final_swarm = res.log[-cfg.swarm_size :]
    assert res.result.quality == min(p.quality for p in final_swarm)


def test_glowworm_iteration_budget():
    cfg = GlowwormConfig(seed=0)
    res = GlowwormSwarm(cfg).optimize(himmelblau, arity=2)
    assert res.nfev % cfg.swarm_size == 0
    assert res.nfev <= cfg.swarm_size * (1 + cfg.max_iterations)


def test_glowworm_neighbours_are_better_and_visible():
    gso = GlowwormSwarm()
    positions = np.array([[0.0, 0.0], [1.0, 0.0], [5.0, 0.0], [0.0, 0.0]])
    qualities = np.array([3.0, 1.0, 0.0, 2.0])
    # index 2 is too far, index 3 shares the position
    assert gso._neighbours(0, positions, qualities, 2.0) == [1]


def test_glowworm_select_without_neighbours(rng):
    assert GlowwormSwarm()._select(rng, 0, [], np.array([1.0])) is None


def test_glowworm_select_weights_by_quality_gap(rng):
    qualities = np.array([5.0, 5.0, 0.0])
    picks = {GlowwormSwarm()._select(rng, 0, [1, 2], qualities) for _ in range(100)}
    assert picks == {2}


def test_same_seed_same_swarm():
    cfg = GlowwormConfig(seed=8)
    a = GlowwormSwarm(cfg).optimize(sphere, arity=2)
    b = GlowwormSwarm(cfg).optimize(sphere, arity=2)
    assert [tuple(p.x) for p in a.log] == [tuple(p.x) for p in b.log]


@pytest.mark.parametrize(
    "factory",
    [
        lambda: ParticleSwarmConfig(swarm_size=0),
        lambda: ParticleSwarmConfig(max_iterations=-2),
        lambda: FireflyConfig(alpha=-1.0),
        lambda: FireflyConfig(boundaries=((0.0, float("inf")),)),
        lambda: GlowwormConfig(luciferin_decay=1.5),
        lambda: GlowwormConfig(max_visibility=0.0),
    ],
)
def test_config_validation(factory):
    with pytest.raises(ValueError):
        factory()
