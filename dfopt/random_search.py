"""Single-point stochastic search: Luus-Jaakola, local unimodal sampling and
simulated annealing.

All three keep one current point and propose a candidate drawn uniformly from
a box around it. They differ only in how a candidate is accepted and in how
the sampling range or temperature decays.
"""

from __future__ import annotations

import math
from abc import abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .core import Array, Optimizer, Point, evaluate_point
from .logging import get_logger
from .utils import as_point, check_arity, check_non_negative, check_positive, uniform_step

logger = get_logger(__name__)

Evaluator = Callable[[Array], float]


@dataclass(frozen=True)
class LuusJaakolaConfig:
    """
    Configuration for :class:`LuusJaakola`.

    Args:
        init: Starting point.
        init_range: Initial half-width of the sampling box.
        min_range: Stop once the sampling range is at or below this value.
        decay: Factor applied to the range after every failed sample.
        seed: Seed of the random generator; None draws fresh entropy.
    """

    init: Tuple[float, ...] = (2.0, 2.0)
    init_range: float = 1.0
    min_range: float = 1e-4
    decay: float = 0.95
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "init", as_point(self.init))
        check_non_negative("init_range", self.init_range)
        check_positive("min_range", self.min_range)
        if not 0.0 < self.decay < 1.0:
            raise ValueError(f"decay must be in (0, 1), got {self.decay}")


@dataclass(frozen=True)
class LocalUnimodalSamplingConfig:
    """
    Configuration for :class:`LocalUnimodalSampling`.

    Args:
        init: Starting point.
        alpha: Decrease rate; the range shrinks by ``2 ** (-alpha / arity)``
            after every failed sample.
        init_range: Initial half-width of the sampling box.
        min_range: Stop once the sampling range is at or below this value.
        seed: Seed of the random generator; None draws fresh entropy.
    """

    init: Tuple[float, ...] = (2.0, 2.0)
    alpha: float = 0.3
    init_range: float = 1.0
    min_range: float = 1e-4
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "init", as_point(self.init))
        check_positive("alpha", self.alpha)
        check_non_negative("init_range", self.init_range)
        check_positive("min_range", self.min_range)


class _ShrinkingRangeSearch(Optimizer):
    """Accept strict improvements; shrink the sampling range on every failure."""

    @abstractmethod
    def _decay(self, arity: int) -> float:
        """Factor applied to the sampling range after a failed sample."""

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        check_arity("init", len(cfg.init), arity)
        rng = np.random.default_rng(cfg.seed)
        decay = self._decay(arity)
        current = evaluate_point(evaluator, cfg.init)
        sample_range = cfg.init_range
        while sample_range > cfg.min_range:
            candidate = evaluate_point(
                evaluator, current.x + uniform_step(rng, arity, sample_range)
            )
            if candidate < current:
                current = candidate
            else:
                sample_range *= decay
        logger.debug("%s: range %.3g reached, quality=%.6g", self.name, sample_range, current.quality)
        return current


class LuusJaakola(_ShrinkingRangeSearch):
    """Luus-Jaakola random search with a geometric range decay."""

    name = "Luus-Jaakola"

    def __init__(self, config: Optional[LuusJaakolaConfig] = None) -> None:
        self.config = config if config is not None else LuusJaakolaConfig()

    def _decay(self, arity: int) -> float:
        return self.config.decay


class LocalUnimodalSampling(_ShrinkingRangeSearch):
    """Local unimodal sampling (Pedersen): range decay depends on the arity."""

    name = "Local Unimodal Sampling"

    def __init__(self, config: Optional[LocalUnimodalSamplingConfig] = None) -> None:
        self.config = config if config is not None else LocalUnimodalSamplingConfig()

    def _decay(self, arity: int) -> float:
        return 2.0 ** (-self.config.alpha / arity)


@dataclass(frozen=True)
class SimulatedAnnealingConfig:
    """
    Configuration for :class:`SimulatedAnnealing`.

    Args:
        init: Starting point.
        random_step: Half-width of the uniform proposal box.
        init_temperature: Starting temperature.
        cooling: Amount subtracted from the temperature after each proposal.
        seed: Seed of the random generator; None draws fresh entropy.
    """

    init: Tuple[float, ...] = (2.0, 2.0)
    random_step: float = 0.1
    init_temperature: float = 1.0
    cooling: float = 0.005
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "init", as_point(self.init))
        check_non_negative("random_step", self.random_step)
        check_non_negative("init_temperature", self.init_temperature)
        check_positive("cooling", self.cooling)


class SimulatedAnnealing(Optimizer):
    """Simulated annealing with Metropolis acceptance and linear cooling."""

    name = "Simulated Annealing"

    def __init__(self, config: Optional[SimulatedAnnealingConfig] = None) -> None:
        self.config = config if config is not None else SimulatedAnnealingConfig()

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        check_arity("init", len(cfg.init), arity)
        rng = np.random.default_rng(cfg.seed)
        current = evaluate_point(evaluator, cfg.init)
        temperature = cfg.init_temperature
        accepted = 0
        while temperature > 0:
            candidate = evaluate_point(
                evaluator, current.x + uniform_step(rng, arity, cfg.random_step)
            )
            u = rng.random()
            # exp() of a non-negative exponent is >= 1 > u
            if candidate <= current or u < math.exp(
                (current.quality - candidate.quality) / temperature
            ):
                current = candidate
                accepted += 1
            temperature -= cfg.cooling
        logger.debug("simulated annealing accepted %d proposals", accepted)
        return current


__all__ = [
    "LocalUnimodalSampling",
    "LocalUnimodalSamplingConfig",
    "LuusJaakola",
    "LuusJaakolaConfig",
    "SimulatedAnnealing",
    "SimulatedAnnealingConfig",
]
