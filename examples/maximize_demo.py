"""
Example: minimizing and maximizing with dfopt

Shows the shared ``optimize`` entry point on the concurrent Nelder-Mead
engine and a seeded particle swarm, and how the call log doubles as an
evaluation counter.
"""

import numpy as np

from dfopt import NelderMead, NelderMeadConfig, ParticleSwarm, ParticleSwarmConfig, himmelblau


def bump(x: np.ndarray) -> float:
    """Gaussian bump with its peak of 3 at (1, -2)."""
    return float(3.0 * np.exp(-((x[0] - 1.0) ** 2 + (x[1] + 2.0) ** 2) / 4.0))


def example_minimize():
    print("=" * 60)
    print("Example 1: Nelder-Mead on Himmelblau's function")
    print("=" * 60)
    engine = NelderMead(NelderMeadConfig(eps=1e-6, diff=1e-9, threads=2))
    res = engine.optimize(himmelblau, arity=2)
    print(f"Best point: {res.result.x}")
    print(f"Best value: {res.result.quality:.3e}")
    print(f"Evaluations: {res.nfev}")
    print()


def example_maximize():
    print("=" * 60)
    print("Example 2: Particle swarm maximizing a bump")
    print("=" * 60)
    swarm = ParticleSwarm(ParticleSwarmConfig(swarm_size=10, diff=1e-4, max_iterations=500, seed=7))
    res = swarm.optimize(bump, arity=2, minimize=False)
    print(f"Peak location: {res.result.x}")
    print(f"Peak value: {res.result.quality:.4f}")
    print(f"Evaluations: {res.nfev}")
    print()


if __name__ == "__main__":
    example_minimize()
    example_maximize()
    print("Done.")
