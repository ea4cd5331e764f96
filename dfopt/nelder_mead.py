"""Nelder-Mead simplex minimizer with concurrent vertex evaluation.

The simplex is transformed by the calling thread only. Evaluation of several
vertices at once (the initial simplex and every shrink) is spread over a
thread pool; the workers and the calling thread then meet on a reusable
:class:`threading.Barrier`, so no transformation ever reads a quality that is
still being computed.

References:
    Nelder, J. A., & Mead, R. (1965). A simplex method for function
    minimization. The Computer Journal, 7(4), 308-313.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .core import Array, Optimizer, Point, evaluate_point
from .logging import get_logger
from .utils import as_point, check_non_negative, check_positive, max_squared_distance

logger = get_logger(__name__)

Evaluator = Callable[[Array], float]
StepCallback = Callable[[str, List[Point]], None]


@dataclass(frozen=True)
class NelderMeadConfig:
    """
    Configuration of the simplex engine.

    Args:
        alpha: Reflection coefficient.
        gamma: Expansion coefficient.
        rho: Contraction coefficient. Negative, so the contracted point lies
            between the worst vertex and the centroid.
        sigma: Reduction coefficient used when the whole simplex shrinks
            toward its best vertex.
        init: Initial simplex, ``arity + 1`` vertices of ``arity`` coordinates.
        eps: Stop once the largest distance between two vertices is below eps.
        diff: Stop once the gap between the worst and the best quality is
            below diff.
        threads: Size of the worker pool, must be >= 1.
    """

    alpha: float = 1.0
    gamma: float = 2.0
    rho: float = -0.5
    sigma: float = 0.5
    init: Tuple[Tuple[float, ...], ...] = ((-8.0, 8.0), (-8.0, -8.0), (16.0, 0.0))
    eps: float = 1e-3
    diff: float = 0.05
    threads: int = 8

    def __post_init__(self) -> None:
        """Validate simplex parameters."""
        if self.threads < 1:
            raise ValueError(f"threads must be >= 1, got {self.threads}")
        if len(self.init) < 2:
            raise ValueError(
                f"init must contain at least two vertices, got {len(self.init)}"
            )
        object.__setattr__(self, "init", tuple(as_point(v) for v in self.init))
        check_positive("alpha", self.alpha)
        check_positive("gamma", self.gamma)
        check_positive("sigma", self.sigma)
        check_positive("eps", self.eps)
        check_non_negative("diff", self.diff)


def _evaluate_and_wait(
    evaluator: Evaluator, points: Sequence[Point], barrier: threading.Barrier
) -> None:
    """Worker task: evaluate the handed points, then rendezvous."""
    try:
        for point in points:
            point.quality = evaluator(point.x)
    except BaseException:
        barrier.abort()
        raise
    barrier.wait()


class NelderMead(Optimizer):
    """Nelder-Mead downhill simplex with a thread pool for batch evaluations.

    Each batch of ``n`` points is split round-robin into ``min(threads, n)``
    tasks, so every task owns a pool thread while it waits on the barrier and
    a pool smaller than the simplex cannot deadlock. The sequence of
    transformations depends only on the evaluated qualities, never on the
    pool size.

    Args:
        config: Engine configuration; defaults to :class:`NelderMeadConfig`.
        callback: Optional ``callback(step, simplex)`` invoked after every
            transformation, where step is one of ``"reflect"``, ``"expand"``,
            ``"contract"`` or ``"shrink"`` and simplex is a copy of the
            vertex list.
    """

    name = "Nelder-Mead"

    def __init__(
        self,
        config: Optional[NelderMeadConfig] = None,
        callback: Optional[StepCallback] = None,
    ) -> None:
        self.config = config if config is not None else NelderMeadConfig()
        self.callback = callback

    def _initial_simplex(self, arity: int) -> List[Point]:
        init = self.config.init
        if len(init) != arity + 1:
            raise ValueError(
                f"init has {len(init)} vertices but arity {arity} needs {arity + 1}"
            )
        for i, vertex in enumerate(init):
            if len(vertex) != arity:
                raise ValueError(
                    f"init vertex {i} has {len(vertex)} coordinates, expected {arity}"
                )
        return [Point(vertex) for vertex in init]

    def _evaluate_batch(
        self,
        pool: ThreadPoolExecutor,
        barrier: threading.Barrier,
        evaluator: Evaluator,
        points: Sequence[Point],
        own: Optional[Point] = None,
    ) -> None:
        """Evaluate ``points`` on the pool and ``own`` here, then rendezvous."""
        tasks = barrier.parties - 1
        futures: List[Future] = [
            pool.submit(_evaluate_and_wait, evaluator, points[k::tasks], barrier)
            for k in range(tasks)
        ]
        if own is not None:
            try:
                own.quality = evaluator(own.x)
            except BaseException:
                barrier.abort()
                raise
        try:
            barrier.wait()
        except threading.BrokenBarrierError as exc:
            for future in futures:
                error = future.exception()
                if error is not None and not isinstance(error, threading.BrokenBarrierError):
                    raise error
            raise RuntimeError("simplex evaluation barrier was broken") from exc

    def _notify(self, step: str, simplex: List[Point]) -> None:
        if self.callback is not None:
            self.callback(step, list(simplex))

    def minimize(self, evaluator: Evaluator, arity: int) -> Point:
        cfg = self.config
        simplex = self._initial_simplex(arity)
        barrier = threading.Barrier(min(cfg.threads, arity) + 1)

        with ThreadPoolExecutor(
            max_workers=cfg.threads, thread_name_prefix="nelder-mead"
        ) as pool:
            self._evaluate_batch(pool, barrier, evaluator, simplex[:arity], own=simplex[arity])
            iteration = 0
            while True:
                simplex.sort()
                best, worst = simplex[0], simplex[arity]
                if worst.quality - best.quality < cfg.diff:
                    logger.debug("quality gap below diff after %d iterations", iteration)
                    break
                if max_squared_distance([p.x for p in simplex]) < cfg.eps**2:
                    logger.debug("simplex size below eps after %d iterations", iteration)
                    break
                iteration += 1

                centroid = np.sum([p.x for p in simplex[:arity]], axis=0) / arity

                reflected = evaluate_point(evaluator, (1 + cfg.alpha) * worst.x - cfg.alpha * centroid)
                if best.quality <= reflected.quality < simplex[arity - 1].quality:
                    simplex[arity] = reflected
                    self._notify("reflect", simplex)
                    continue

                if reflected.quality < best.quality:
                    expanded = evaluate_point(evaluator, (1 + cfg.gamma) * worst.x - cfg.gamma * centroid)
                    simplex[arity] = expanded if expanded.quality < reflected.quality else reflected
                    self._notify("expand", simplex)
                    continue

                contracted = evaluate_point(evaluator, (1 + cfg.rho) * worst.x - cfg.rho * centroid)
                if contracted.quality < worst.quality:
                    simplex[arity] = contracted
                    self._notify("contract", simplex)
                    continue

                shrunk = [
                    Point((1 - cfg.sigma) * best.x + cfg.sigma * p.x) for p in simplex[1:]
                ]
                simplex[1:] = shrunk
                self._evaluate_batch(pool, barrier, evaluator, shrunk)
                self._notify("shrink", simplex)
                logger.debug("iteration %d: shrink, best=%.6g", iteration, best.quality)

        return simplex[0]


__all__ = ["NelderMead", "NelderMeadConfig"]
