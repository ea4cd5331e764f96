"""
Genetic and memetic algorithms over real-valued chromosomes.

A chromosome is the coordinate vector of a :class:`~dfopt.core.Point`. Each
generation keeps an elite unchanged and breeds the rest from the best
``selection`` fraction:

1. Sort the population by quality
2. Stop once the worst and the best quality differ by less than ``diff``
3. Choose parents with probability proportional to ``max_quality - quality``
4. Two-point crossover, then per-gene mutation
5. (memetic only) refine random individuals with a short axis search
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .core import Array, Optimizer, Point, evaluate_point
from .local_search import probe_axes
from .logging import get_logger
from .utils import (
    as_boundaries,
    bounds_arrays,
    check_fraction,
    check_non_negative,
    uniform_in_box,
)

logger = get_logger(__name__)

Evaluator = Callable[[Array], float]


@dataclass(frozen=True)
class GeneticConfig:
    """
    Configuration for :class:`GeneticAlgorithm`.

    Args:
        boundaries: ``(low, high)`` per dimension for the initial population.
        population_size: Number of individuals.
        mutation_coef: Scale of the random addition applied by a mutation.
        mutation_rate: Probability that a gene mutates.
        selection: Fraction of the sorted population allowed to breed.
        elite: Fraction of the sorted population copied to the next
            generation unchanged.
        diff: Stop once the worst and the best quality differ by less.
        max_iterations: Optional cap on the number of generations.
        seed: Seed of the random generator; None draws fresh entropy.
    """

    boundaries: Tuple[Tuple[float, float], ...] = ((-8.0, 8.0), (-8.0, 8.0))
    population_size: int = 20
    mutation_coef: float = 0.1
    mutation_rate: float = 0.1
    selection: float = 0.5
    elite: float = 0.1
    diff: float = 0.1
    max_iterations: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "boundaries", as_boundaries(self.boundaries))
        if self.population_size < 1:
            raise ValueError(f"population_size must be >= 1, got {self.population_size}")
        check_non_negative("mutation_coef", self.mutation_coef)
        check_fraction("mutation_rate", self.mutation_rate)
        check_fraction("selection", self.selection)
        check_fraction("elite", self.elite)
        if int(self.selection * self.population_size) < 1:
            raise ValueError(
                f"selection {self.selection} leaves no breeding individuals "
                f"in a population of {self.population_size}"
            )
        check_non_negative("diff", self.diff)
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")


class GeneticAlgorithm(Optimizer):
    """Generational genetic algorithm with elitism and fitness-proportional selection."""

    name = "Genetic algorithm"

    def __init__(self, config: Optional[GeneticConfig] = None) -> None:
        self.config = config if config is not None else GeneticConfig()

    def _choose_parent(self, rng: np.random.Generator, breeding: Sequence[Point]) -> Point:
        """Roulette wheel over ``max_quality - quality`` within ``breeding``."""
        qualities = np.array([p.quality for p in breeding])
        weights = qualities.max() - qualities
        target = rng.random() * weights.sum()
        j = 0
        acc = 0.0
        while j < len(breeding) - 1 and acc + weights[j] < target:
            acc += weights[j]
            j += 1
        return breeding[j]

    def _crossover(self, rng: np.random.Generator, x: Array, y: Array) -> Array:
        """Two-point crossover: genes in ``[p1, p2)`` come from ``y``."""
        p1 = int(rng.random() * x.size)
        p2 = int(rng.random() * x.size)
        if p1 > p2:
            p1, p2 = p2, p1
        child = x.copy()
        child[p1:p2] = y[p1:p2]
        return child

    def _mutate(self, rng: np.random.Generator, x: Array) -> Array:
        cfg = self.config
        for i in range(x.size):
            if rng.random() < cfg.mutation_rate:
                x[i] += cfg.mutation_coef * 2 * (rng.random() - 1)
        return x

    def _initial_population(
        self, rng: np.random.Generator, evaluator: Evaluator, arity: int
    ) -> List[Point]:
        low, high = bounds_arrays(self.config.boundaries, arity)
        return [
            evaluate_point(evaluator, uniform_in_box(rng, low, high))
            for _ in range(self.config.population_size)
        ]

    def _next_generation(
        self, rng: np.random.Generator, evaluator: Evaluator, population: List[Point]
    ) -> List[Point]:
        cfg = self.config
        size = len(population)
        elite_size = int(cfg.elite * size)
        breeding = population[: int(cfg.selection * size)]
        next_gen = list(population[:elite_size])
        for _ in range(size - elite_size):
            parent1 = self._choose_parent(rng, breeding)
            parent2 = self._choose_parent(rng, breeding)
            child = self._mutate(rng, self._crossover(rng, parent1.x, parent2.x))
            next_gen.append(evaluate_point(evaluator, child))
        return next_gen

    def _refine(
        self, rng: np.random.Generator, evaluator: Evaluator, population: List[Point]
    ) -> List[Point]:
        """Hook applied to every fresh generation; the plain GA keeps it as is."""
        return population

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        population = self._initial_population(rng, evaluator, arity)
        generation = 0
        while True:
            population.sort()
            spread = population[-1].quality - population[0].quality
            if spread < cfg.diff:
                logger.debug("%s converged after %d generations", self.name, generation)
                break
            if cfg.max_iterations is not None and generation >= cfg.max_iterations:
                logger.debug("%s hit the generation budget (spread=%.4g)", self.name, spread)
                break
            population = self._next_generation(rng, evaluator, population)
            population = self._refine(rng, evaluator, population)
            generation += 1
        return population[0]


@dataclass(frozen=True)
class MemeticConfig(GeneticConfig):
    """
    Configuration for :class:`MemeticAlgorithm`.

    Extends :class:`GeneticConfig` with the individual optimization step.

    Args:
        ind_opt_prob: Probability that an individual is refined.
        ind_opt_iter: Number of axis sweeps per refinement.
        ind_opt_step: Probe size of the refinement sweeps.
    """

    ind_opt_prob: float = 0.05
    ind_opt_iter: int = 2
    ind_opt_step: float = 0.05

    def __post_init__(self) -> None:
        super().__post_init__()
        check_fraction("ind_opt_prob", self.ind_opt_prob)
        if self.ind_opt_iter < 0:
            raise ValueError(f"ind_opt_iter must be >= 0, got {self.ind_opt_iter}")
        check_non_negative("ind_opt_step", self.ind_opt_step)


class MemeticAlgorithm(GeneticAlgorithm):
    """Genetic algorithm with Lamarckian refinement of random individuals.

    A refined individual runs ``ind_opt_iter`` axis sweeps with a fixed probe
    size and is replaced by whatever the sweeps last accepted; the sweeps keep
    no record of earlier states.
    """

    name = "Memetic algorithm"

    def __init__(self, config: Optional[MemeticConfig] = None) -> None:
        self.config = config if config is not None else MemeticConfig()

    def _refine(
        self, rng: np.random.Generator, evaluator: Evaluator, population: List[Point]
    ) -> List[Point]:
        cfg = self.config
        refined = 0
        for i in range(len(population)):
            if rng.random() < cfg.ind_opt_prob:
                best = population[i]
                for _ in range(cfg.ind_opt_iter):
                    best, _ = probe_axes(evaluator, best, cfg.ind_opt_step)
                population[i] = best
                refined += 1
        logger.debug("memetic refinement touched %d individuals", refined)
        return population


__all__ = [
    "GeneticAlgorithm",
    "GeneticConfig",
    "MemeticAlgorithm",
    "MemeticConfig",
]
