"""Deterministic coordinate-wise search methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .core import Array, Optimizer, Point, evaluate_point
from .logging import get_logger
from .utils import as_point, check_arity, check_non_negative, check_positive

logger = get_logger(__name__)

Evaluator = Callable[[Array], float]


@dataclass(frozen=True)
class LocalSearchConfig:
    """
    Configuration for :class:`LocalSearch`.

    Args:
        step: Size of the probe along every axis.
        init: Starting point.
    """

    step: float = 0.1
    init: Tuple[float, ...] = (2.0, 2.0)

    def __post_init__(self) -> None:
        check_non_negative("step", self.step)
        object.__setattr__(self, "init", as_point(self.init))


def probe_axes(evaluator: Evaluator, best: Point, step: float) -> tuple[Point, bool]:
    """Probe ``best +/- step`` along every axis, keeping each strict improvement.

    Both probes of axis ``i`` are taken around the best point known when axis
    ``i`` is reached. The plus probe is compared first, then the minus probe is
    compared against the possibly updated best.
    """
    improved = False
    for i in range(best.x.size):
        plus_x = best.x.copy()
        plus_x[i] += step
        minus_x = best.x.copy()
        minus_x[i] -= step
        plus = evaluate_point(evaluator, plus_x)
        minus = evaluate_point(evaluator, minus_x)
        if plus < best:
            best = plus
            improved = True
        if minus < best:
            best = minus
            improved = True
    return best, improved


class LocalSearch(Optimizer):
    """Fixed-step axis search: sweep all axes until a sweep brings no improvement."""

    name = "Local search"

    def __init__(self, config: Optional[LocalSearchConfig] = None) -> None:
        self.config = config if config is not None else LocalSearchConfig()

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        check_arity("init", len(self.config.init), arity)
        best = evaluate_point(evaluator, self.config.init)
        improved = True
        sweeps = 0
        while improved:
            best, improved = probe_axes(evaluator, best, self.config.step)
            sweeps += 1
        logger.debug("local search stopped after %d sweeps", sweeps)
        return best


@dataclass(frozen=True)
class PatternSearchConfig:
    """
    Configuration for :class:`PatternSearch`.

    Args:
        init: Starting point.
        init_step: Initial exploration step.
        min_step: Stop once the exploration step falls below this value.
        iterations: Exploratory passes before each pattern move.
    """

    init: Tuple[float, ...] = (2.0, 2.0)
    init_step: float = 1.0
    min_step: float = 1e-4
    iterations: int = 5

    def __post_init__(self) -> None:
        object.__setattr__(self, "init", as_point(self.init))
        check_non_negative("init_step", self.init_step)
        check_positive("min_step", self.min_step)
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")


class PatternSearch(Optimizer):
    """Hooke-Jeeves pattern search.

    Each round runs up to ``iterations`` exploratory passes (every axis is
    probed by ``-step`` and then ``+step``, improvements are kept in place and
    the step is halved after a pass if the round has not improved yet). If the
    exploration improved, the move from the current point is extrapolated
    ``k + 1`` times for as long as that keeps improving.
    """

    name = "Pattern Search"

    def __init__(self, config: Optional[PatternSearchConfig] = None) -> None:
        self.config = config if config is not None else PatternSearchConfig()

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        check_arity("init", len(cfg.init), arity)
        current = evaluate_point(evaluator, cfg.init)
        step = cfg.init_step
        while step >= cfg.min_step:
            improved = False
            trial = current.x.copy()
            trial_quality = current.quality
            it = 0
            while it < cfg.iterations and step >= cfg.min_step:
                for i in range(arity):
                    for sign in (-1.0, 1.0):
                        trial[i] += sign * step
                        quality = evaluator(trial)
                        if quality < trial_quality:
                            trial_quality = quality
                            improved = True
                        else:
                            trial[i] -= sign * step
                if not improved:
                    step /= 2
                it += 1

            best_x, best_quality = trial, trial_quality
            direction = trial - current.x
            pattern_steps = 1
            while improved:
                candidate = current.x + (pattern_steps + 1) * direction
                quality = evaluator(candidate)
                improved = quality < best_quality
                if improved:
                    pattern_steps += 1
                    best_x, best_quality = candidate, quality
            current = Point(best_x, best_quality)
            logger.debug(
                "pattern search: step=%.3g, quality=%.6g, pattern steps=%d",
                step,
                best_quality,
                pattern_steps,
            )
        return current


__all__ = [
    "LocalSearch",
    "LocalSearchConfig",
    "PatternSearch",
    "PatternSearchConfig",
    "probe_axes",
]
