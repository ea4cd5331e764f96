"""dfopt - derivative-free minimization of expensive black-box functions.

Example
-------
>>> from dfopt import NelderMead, rosenbrock
>>> res = NelderMead().optimize(rosenbrock, arity=2)
>>> res.nfev == len(res.log)
True
"""

__version__ = "0.1.0"

from .core import Evaluator, OptimizationResult, Optimizer, Point, evaluate_point
from .factory import STRATEGIES, create_strategy, default_strategies
from .functions import (
    TEST_FUNCTIONS,
    himmelblau,
    rosenbrock,
    sin_valley,
    sphere,
    styblinski_tang,
)
from .genetic import GeneticAlgorithm, GeneticConfig, MemeticAlgorithm, MemeticConfig
from .local_search import LocalSearch, LocalSearchConfig, PatternSearch, PatternSearchConfig
from .logging import configure_logging, get_logger, set_log_level
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

__all__ = [
    "__version__",
    # Contract
    "Evaluator",
    "OptimizationResult",
    "Optimizer",
    "Point",
    "evaluate_point",
    # Strategies
    "FireflyAlgorithm",
    "FireflyConfig",
    "GeneticAlgorithm",
    "GeneticConfig",
    "GlowwormConfig",
    "GlowwormSwarm",
    "LocalSearch",
    "LocalSearchConfig",
    "LocalUnimodalSampling",
    "LocalUnimodalSamplingConfig",
    "LuusJaakola",
    "LuusJaakolaConfig",
    "MemeticAlgorithm",
    "MemeticConfig",
    "NelderMead",
    "NelderMeadConfig",
    "ParticleSwarm",
    "ParticleSwarmConfig",
    "PatternSearch",
    "PatternSearchConfig",
    "SimulatedAnnealing",
    "SimulatedAnnealingConfig",
    # Factory
    "STRATEGIES",
    "create_strategy",
    "default_strategies",
    # Test objectives
    "TEST_FUNCTIONS",
    "himmelblau",
    "rosenbrock",
    "sin_valley",
    "sphere",
    "styblinski_tang",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
]
