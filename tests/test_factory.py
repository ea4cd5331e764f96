import pytest

from dfopt.factory import STRATEGIES, create_strategy, default_strategies
from dfopt.nelder_mead import NelderMead
from dfopt.swarm import ParticleSwarm


def test_create_strategy_by_name():
    strategy = create_strategy("nelder_mead", threads=2)
    assert isinstance(strategy, NelderMead)
    assert strategy.config.threads == 2


@pytest.mark.parametrize("name", ["Particle-Swarm", "particle swarm", "PARTICLE_SWARM"])
def test_create_strategy_normalizes_names(name):
    assert isinstance(create_strategy(name, seed=0), ParticleSwarm)


def test_unknown_strategy():
    with pytest.raises(ValueError, match="Unsupported strategy"):
        create_strategy("gradient_descent")


def test_unknown_option():
    with pytest.raises(ValueError, match="Invalid options"):
        create_strategy("local_search", temperature=3.0)


def test_invalid_option_value():
    with pytest.raises(ValueError):
        create_strategy("firefly", swarm_size=0)


def test_default_strategies_cover_the_registry():
    strategies = default_strategies(seed=3)
    assert [type(s) for s in strategies] == [cls for cls, _ in STRATEGIES.values()]
    for strategy in strategies:
        if hasattr(strategy.config, "seed"):
            assert strategy.config.seed == 3


def test_strategy_names_are_unique():
    names = [s.name for s in default_strategies()]
    assert len(set(names)) == len(names)
