"""Swarm intelligence minimizers: particle swarm, firefly and glowworm swarms.

The swarms move agents through the search space in place and re-evaluate
them after every move. Agents that must remember more than a position (the
velocity and personal best of a particle, the luciferin and visibility of a
glowworm) keep that state in arrays parallel to the list of evaluated points.

References:
    Kennedy, J., & Eberhart, R. (1995). Particle swarm optimization.
    Yang, X.-S. (2010). Firefly algorithm, stochastic test functions and
    design optimisation. arXiv:1003.1464.
    Krishnanand, K. N., & Ghose, D. (2009). Glowworm swarm optimisation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from .core import Array, Optimizer, Point, evaluate_point
from .logging import get_logger
from .utils import (
    as_boundaries,
    bounds_arrays,
    check_non_negative,
    check_positive,
    clamp,
    quality_spread,
    uniform_in_box,
    uniform_step,
)

logger = get_logger(__name__)

Evaluator = Callable[[Array], float]

_DEFAULT_BOUNDARIES = ((-8.0, 8.0), (-8.0, 8.0))


def _check_swarm_size(swarm_size: int) -> None:
    if swarm_size < 1:
        raise ValueError(f"swarm_size must be >= 1, got {swarm_size}")


def _check_max_iterations(max_iterations: Optional[int]) -> None:
    if max_iterations is not None and max_iterations < 0:
        raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")


def _spread(points: List[Point]) -> float:
    return quality_spread([p.quality for p in points])


@dataclass(frozen=True)
class ParticleSwarmConfig:
    """
    Configuration for :class:`ParticleSwarm`.

    Args:
        boundaries: ``(low, high)`` per dimension for initial positions.
        swarm_size: Number of particles.
        omega: Inertia, the decay of a particle's velocity.
        phi_p: Attraction to the particle's own best position.
        phi_g: Attraction to the swarm's best position.
        diff: Stop once the qualities of the swarm differ by less.
        max_iterations: Optional cap on the number of swarm updates.
        seed: Seed of the random generator; None draws fresh entropy.
    """

    boundaries: Tuple[Tuple[float, float], ...] = _DEFAULT_BOUNDARIES
    swarm_size: int = 4
    omega: float = 0.6
    phi_p: float = 0.4
    phi_g: float = 1.4
    diff: float = 0.1
    max_iterations: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "boundaries", as_boundaries(self.boundaries))
        _check_swarm_size(self.swarm_size)
        check_non_negative("diff", self.diff)
        _check_max_iterations(self.max_iterations)


class ParticleSwarm(Optimizer):
    """Global-best particle swarm optimization.

    The returned point is the best *current* particle once the swarm has
    collapsed, not the best position ever visited.
    """

    name = "Particle swarm"

    def __init__(self, config: Optional[ParticleSwarmConfig] = None) -> None:
        self.config = config if config is not None else ParticleSwarmConfig()

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        low, high = bounds_arrays(cfg.boundaries, arity)

        particles: List[Point] = []
        velocities = np.empty((cfg.swarm_size, arity))
        for i in range(cfg.swarm_size):
            x = uniform_in_box(rng, low, high)
            velocities[i] = uniform_step(rng, arity, 1.0) * (high - low)
            particles.append(evaluate_point(evaluator, x))
        personal_best = list(particles)
        global_best = min(particles)

        iteration = 0
        while _spread(particles) >= cfg.diff:
            if cfg.max_iterations is not None and iteration >= cfg.max_iterations:
                break
            for i in range(cfg.swarm_size):
                x = particles[i].x
                rg = rng.random(arity)
                rp = rng.random(arity)
                velocities[i] = (
                    cfg.omega * velocities[i]
                    + cfg.phi_g * rg * (global_best.x - x)
                    + cfg.phi_p * rp * (personal_best[i].x - x)
                )
                particles[i] = evaluate_point(evaluator, x + velocities[i])
                if particles[i] < personal_best[i]:
                    personal_best[i] = particles[i]
                if particles[i] < global_best:
                    global_best = particles[i]
            iteration += 1
        logger.debug(
            "particle swarm stopped after %d iterations, global best=%.6g",
            iteration,
            global_best.quality,
        )
        return min(particles)


@dataclass(frozen=True)
class FireflyConfig:
    """
    Configuration for :class:`FireflyAlgorithm`.

    Args:
        boundaries: ``(low, high)`` per dimension; positions are clamped to it.
        swarm_size: Number of fireflies.
        max_iterations: Number of sweeps over the swarm.
        alpha: Half-width of the uniform random step.
        beta: Attraction coefficient.
        gamma: Exponential decay of attraction with distance.
        diff: Stop once the qualities of the swarm differ by less.
        seed: Seed of the random generator; None draws fresh entropy.
    """

    boundaries: Tuple[Tuple[float, float], ...] = _DEFAULT_BOUNDARIES
    swarm_size: int = 20
    max_iterations: int = 15
    alpha: float = 0.1
    beta: float = 1.0
    gamma: float = 1.0
    diff: float = 0.1
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "boundaries", as_boundaries(self.boundaries))
        _check_swarm_size(self.swarm_size)
        _check_max_iterations(self.max_iterations)
        check_non_negative("alpha", self.alpha)
        check_non_negative("beta", self.beta)
        check_non_negative("gamma", self.gamma)
        check_non_negative("diff", self.diff)


class FireflyAlgorithm(Optimizer):
    """Firefly algorithm with box clamping.

    For every pair ``j <= i`` the darker firefly, judged by the qualities of
    the last evaluation, moves toward the brighter one with attraction
    ``beta * exp(-gamma * distance)`` plus a uniform random step.
    """

    name = "Firefly algorithm"

    def __init__(self, config: Optional[FireflyConfig] = None) -> None:
        self.config = config if config is not None else FireflyConfig()

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        low, high = bounds_arrays(cfg.boundaries, arity)
        swarm = [
            evaluate_point(evaluator, uniform_in_box(rng, low, high))
            for _ in range(cfg.swarm_size)
        ]
        for it in range(cfg.max_iterations):
            if _spread(swarm) < cfg.diff:
                logger.debug("firefly swarm converged after %d iterations", it)
                break
            positions = np.array([p.x for p in swarm])
            for i in range(cfg.swarm_size):
                for j in range(i + 1):
                    bright, dark = i, j
                    if swarm[i].quality > swarm[j].quality:
                        bright, dark = j, i
                    distance = np.linalg.norm(positions[i] - positions[j])
                    attraction = np.exp(-cfg.gamma * distance) * cfg.beta
                    move = uniform_step(rng, arity, cfg.alpha)
                    positions[dark] += attraction * (positions[bright] - positions[dark]) + move
                    positions[dark] = clamp(positions[dark], low, high)
            swarm = [evaluate_point(evaluator, x) for x in positions]
        return min(swarm)


@dataclass(frozen=True)
class GlowwormConfig:
    """
    Configuration for :class:`GlowwormSwarm`.

    Args:
        boundaries: ``(low, high)`` per dimension for initial positions.
        swarm_size: Number of glowworms.
        max_iterations: Number of sweeps over the swarm.
        initial_luciferin: Luciferin every glowworm starts with.
        initial_visibility: Starting neighbourhood radius.
        max_visibility: Upper limit of the neighbourhood radius.
        step: Length of a move toward a neighbour.
        nt: Desired number of visible neighbours.
        beta: Proportionality between the visibility radius and the shortage
            of neighbours.
        luciferin_decay: Fraction of luciferin lost per iteration.
        gamma: Conversion of quality into luciferin.
        diff: Stop once the qualities of the swarm differ by less.
        seed: Seed of the random generator; None draws fresh entropy.
    """

    boundaries: Tuple[Tuple[float, float], ...] = _DEFAULT_BOUNDARIES
    swarm_size: int = 20
    max_iterations: int = 15
    initial_luciferin: float = 0.0
    initial_visibility: float = 2.0
    max_visibility: float = 8.0
    step: float = 0.1
    nt: float = 5.0
    beta: float = 2.0
    luciferin_decay: float = 0.5
    gamma: float = 1.0
    diff: float = 0.1
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "boundaries", as_boundaries(self.boundaries))
        _check_swarm_size(self.swarm_size)
        _check_max_iterations(self.max_iterations)
        check_non_negative("initial_visibility", self.initial_visibility)
        check_positive("max_visibility", self.max_visibility)
        check_non_negative("step", self.step)
        check_non_negative("diff", self.diff)
        if not 0.0 <= self.luciferin_decay <= 1.0:
            raise ValueError(f"luciferin_decay must be in [0, 1], got {self.luciferin_decay}")


class GlowwormSwarm(Optimizer):
    """Glowworm swarm optimization with uniform random steps instead of Levy flights.

    Glowworms move one after another, so later glowworms see the updated
    positions of earlier ones within the same iteration.
    """

    name = "Glowworm swarm"

    def __init__(self, config: Optional[GlowwormConfig] = None) -> None:
        self.config = config if config is not None else GlowwormConfig()

    def _neighbours(self, g: int, positions: Array, qualities: Array, visibility: float) -> List[int]:
        """Indices of better glowworms within ``(0, visibility]`` of glowworm ``g``."""
        result = []
        for h in range(len(positions)):
            if qualities[h] < qualities[g]:
                d = np.linalg.norm(positions[h] - positions[g])
                if 0 < d <= visibility:
                    result.append(h)
        return result

    def _select(self, rng: np.random.Generator, g: int, neighbours: List[int], qualities: Array) -> Optional[int]:
        """Pick a neighbour with probability proportional to its quality advantage."""
        gaps = [qualities[g] - qualities[h] for h in neighbours]
        target = rng.random() * sum(gaps)
        if not neighbours:
            return None
        j = 0
        acc = 0.0
        while j < len(neighbours) - 1 and acc + gaps[j] < target:
            acc += gaps[j]
            j += 1
        return neighbours[j]

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        low, high = bounds_arrays(cfg.boundaries, arity)
        swarm = [
            evaluate_point(evaluator, uniform_in_box(rng, low, high))
            for _ in range(cfg.swarm_size)
        ]
        luciferin = np.full(cfg.swarm_size, cfg.initial_luciferin)
        visibility = np.full(cfg.swarm_size, cfg.initial_visibility)

        for it in range(cfg.max_iterations):
            if _spread(swarm) < cfg.diff:
                logger.debug("glowworm swarm converged after %d iterations", it)
                break
            positions = np.array([p.x for p in swarm])
            qualities = np.array([p.quality for p in swarm])
            for g in range(cfg.swarm_size):
                neighbours = self._neighbours(g, positions, qualities, visibility[g])
                visibility[g] = min(
                    cfg.max_visibility,
                    max(visibility[g], cfg.beta * (cfg.nt - len(neighbours))),
                )
                target = self._select(rng, g, neighbours, qualities)
                if target is not None:
                    d = np.linalg.norm(positions[target] - positions[g])
                    positions[g] += cfg.step * (positions[target] - positions[g]) / d
                else:
                    positions[g] += uniform_step(rng, arity, cfg.step / 2)
            swarm = [evaluate_point(evaluator, x) for x in positions]
            luciferin = luciferin * (1 - cfg.luciferin_decay) + cfg.gamma * np.array(
                [p.quality for p in swarm]
            )
            logger.debug(
                "glowworm iteration %d: luciferin in [%.4g, %.4g]",
                it,
                luciferin.min(),
                luciferin.max(),
            )
        return min(swarm)


__all__ = [
    "FireflyAlgorithm",
    "FireflyConfig",
    "GlowwormConfig",
    "GlowwormSwarm",
    "ParticleSwarm",
    "ParticleSwarmConfig",
]
