"""Construct strategies by name, the way the benchmark driver does."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from .core import Optimizer
from .genetic import GeneticAlgorithm, GeneticConfig, MemeticAlgorithm, MemeticConfig
from .local_search import LocalSearch, LocalSearchConfig, PatternSearch, PatternSearchConfig
from .nelder_mead import NelderMead, NelderMeadConfig
from .random_search import (
    LocalUnimodalSampling,
    LocalUnimodalSamplingConfig,
    LuusJaakola,
    LuusJaakolaConfig,
    SimulatedAnnealing,
    SimulatedAnnealingConfig,
)
from .swarm import (
    FireflyAlgorithm,
    FireflyConfig,
    GlowwormConfig,
    GlowwormSwarm,
    ParticleSwarm,
    ParticleSwarmConfig,
)

# name -> (strategy class, config class), in the order the benchmark reports them
STRATEGIES: Dict[str, tuple[Type[Optimizer], type]] = {
    "nelder_mead": (NelderMead, NelderMeadConfig),
    "local_search": (LocalSearch, LocalSearchConfig),
    "particle_swarm": (ParticleSwarm, ParticleSwarmConfig),
    "genetic": (GeneticAlgorithm, GeneticConfig),
    "memetic": (MemeticAlgorithm, MemeticConfig),
    "firefly": (FireflyAlgorithm, FireflyConfig),
    "glowworm": (GlowwormSwarm, GlowwormConfig),
    "pattern_search": (PatternSearch, PatternSearchConfig),
    "local_unimodal_sampling": (LocalUnimodalSampling, LocalUnimodalSamplingConfig),
    "luus_jaakola": (LuusJaakola, LuusJaakolaConfig),
    "simulated_annealing": (SimulatedAnnealing, SimulatedAnnealingConfig),
}

_STOCHASTIC = {
    "particle_swarm",
    "genetic",
    "memetic",
    "firefly",
    "glowworm",
    "local_unimodal_sampling",
    "luus_jaakola",
    "simulated_annealing",
}


def create_strategy(name: str, **options: Any) -> Optimizer:
    """
    Create a strategy from its registry name and config keyword arguments.

    Args:
        name: Strategy name, e.g. "nelder_mead" or "particle_swarm". Case and
            dashes are ignored.
        **options: Fields of the strategy's config dataclass.

    Returns:
        The configured strategy.

    Raises:
        ValueError: If the name is unknown or the options are invalid.
    """
    key = name.lower().replace("-", "_").replace(" ", "_")
    if key not in STRATEGIES:
        raise ValueError(
            f"Unsupported strategy: {name}. Supported: {', '.join(STRATEGIES)}"
        )
    strategy_cls, config_cls = STRATEGIES[key]
    try:
        config = config_cls(**options)
    except TypeError as exc:
        raise ValueError(f"Invalid options for {name}: {exc}") from exc
    return strategy_cls(config)


def default_strategies(seed: Optional[int] = None) -> List[Optimizer]:
    """One instance of every strategy with default settings.

    Args:
        seed: Seed passed to every stochastic strategy; None leaves them
            unseeded.
    """
    strategies = []
    for key in STRATEGIES:
        options = {"seed": seed} if key in _STOCHASTIC else {}
        strategies.append(create_strategy(key, **options))
    return strategies


__all__ = ["STRATEGIES", "create_strategy", "default_strategies"]
