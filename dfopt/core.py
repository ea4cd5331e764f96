"""Core interfaces shared across all derivative-free minimizers.

Every strategy in this package implements :class:`Optimizer`. The strategy only
ever sees an :class:`Evaluator` that records each call and hides whether the
caller asked for a minimum or a maximum, so ``minimize`` implementations can
always assume they are minimizing.

Example
-------
>>> from dfopt import LocalSearch
>>> res = LocalSearch().optimize(lambda x: (x[0] - 1) ** 2 + x[1] ** 2, arity=2)
>>> res.nfev == len(res.log)
True
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, ClassVar, List, Optional, Sequence

import numpy as np

from .logging import get_logger

Array = np.ndarray
Objective = Callable[[Array], float]

logger = get_logger(__name__)


class Point:
    """A position in the search space together with the objective value there.

    The coordinates are copied on construction and stored read-only, so a
    Point never aliases the array it was built from. ``quality`` is assigned
    once the position has been evaluated; Points order by it ascending.
    """

    __slots__ = ("x", "quality")

    def __init__(self, x: Sequence[float] | Array, quality: Optional[float] = None) -> None:
        arr = np.array(x, dtype=float)
        if arr.ndim != 1:
            raise ValueError(f"Point coordinates must be 1D, got shape {arr.shape}")
        arr.flags.writeable = False
        self.x: Array = arr
        self.quality: Optional[float] = quality

    def _key(self) -> float:
        if self.quality is None:
            raise ValueError("cannot order a Point that has not been evaluated")
        return self.quality

    def __lt__(self, other: Point) -> bool:
        return self._key() < other._key()

    def __le__(self, other: Point) -> bool:
        return self._key() <= other._key()

    def __gt__(self, other: Point) -> bool:
        return self._key() > other._key()

    def __ge__(self, other: Point) -> bool:
        return self._key() >= other._key()

    def __len__(self) -> int:
        return self.x.size

    def __repr__(self) -> str:
        return f"Point(x={self.x.tolist()}, quality={self.quality})"


class Evaluator:
    """Objective wrapper that logs every call and adapts the optimization sense.

    Calling the evaluator computes ``y = function(x)``, appends ``Point(x, y)``
    to :attr:`calls` and returns ``y`` when minimizing or ``-y`` when
    maximizing. The append happens under a lock so several worker threads may
    share one evaluator. Exceptions raised by ``function`` propagate untouched.
    """

    def __init__(self, function: Objective, minimize: bool = True) -> None:
        self.function = function
        self.minimize = minimize
        self._calls: List[Point] = []
        self._lock = threading.Lock()

    def __call__(self, x: Sequence[float] | Array) -> float:
        arr = np.array(x, dtype=float)
        y = float(self.function(arr))
        with self._lock:
            self._calls.append(Point(arr, y))
        return y if self.minimize else -y

    @property
    def calls(self) -> List[Point]:
        """Points evaluated so far, in the order they entered the log."""
        return self._calls

    @property
    def nfev(self) -> int:
        with self._lock:
            return len(self._calls)


def evaluate_point(evaluator: Callable[[Array], float], x: Sequence[float] | Array) -> Point:
    """Build a Point at ``x`` and fill in its quality with one evaluator call."""
    point = Point(x)
    point.quality = evaluator(point.x)
    return point


@dataclass
class OptimizationResult:
    """Best point suggested by a strategy plus the log of every objective call."""

    result: Point
    log: List[Point] = field(default_factory=list)

    @property
    def nfev(self) -> int:
        """Total number of objective evaluations performed."""
        return len(self.log)


class Optimizer(ABC):
    """Base class for derivative-free minimization strategies.

    Subclasses implement :meth:`minimize` and set :attr:`name`. Callers use
    :meth:`optimize`, which wraps the raw objective in an :class:`Evaluator`.
    """

    name: ClassVar[str] = "optimizer"

    @abstractmethod
    def minimize(self, evaluator: Callable[[Array], float], arity: int) -> Point:
        """Return a (local) minimum of ``evaluator``.

        Implementations must call ``evaluator`` only with arrays of length
        ``arity`` and return a Point whose quality came from an evaluator call
        at exactly that position.
        """

    def optimize(
        self, objective: Objective, arity: int, minimize: bool = True
    ) -> OptimizationResult:
        """Minimize (or maximize) ``objective`` over ``arity`` real variables.

        Args:
            objective: Function mapping a coordinate array to a real value.
            arity: Dimensionality of the search space.
            minimize: Search for a minimum if True, a maximum otherwise.

        Returns:
            OptimizationResult holding the best point, with its true objective
            value, and every evaluation made during the search.
        """
        if arity < 1:
            raise ValueError(f"arity must be >= 1, got {arity}")
        evaluator = Evaluator(objective, minimize)
        point = self.minimize(evaluator, arity)
        if not minimize:
            point.quality = -point.quality
        logger.info(
            "%s finished (arity %d): quality=%.6g after %d evaluations",
            self.name,
            arity,
            point.quality,
            evaluator.nfev,
        )
        return OptimizationResult(result=point, log=evaluator.calls)

    def __repr__(self) -> str:
        config = getattr(self, "config", None)
        return f"{type(self).__name__}({config!r})" if config is not None else f"{type(self).__name__}()"


__all__ = [
    "Array",
    "Objective",
    "Point",
    "Evaluator",
    "evaluate_point",
    "OptimizationResult",
    "Optimizer",
]
