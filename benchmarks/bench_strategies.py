"""Benchmark every strategy on every test objective."""

import argparse
import time
from typing import Dict, List, Optional

import dfopt as df


def benchmark_strategies(
    functions: Optional[List[str]] = None,
    seed: Optional[int] = 0,
    arity: int = 2,
) -> List[Dict[str, object]]:
    """Run all default strategies on the selected objectives.

    Args:
        functions: Names from ``dfopt.TEST_FUNCTIONS``; None runs all of them.
        seed: Seed for the stochastic strategies.
        arity: Dimensionality of the search space.

    Returns:
        One row per (objective, strategy) with the best point, its quality,
        the evaluation count and the wall-clock time.
    """
    names = functions or list(df.TEST_FUNCTIONS)
    rows = []
    for fname in names:
        objective = df.TEST_FUNCTIONS[fname]
        for strategy in df.default_strategies(seed=seed):
            start = time.perf_counter()
            res = strategy.optimize(objective, arity)
            elapsed = time.perf_counter() - start
            rows.append(
                {
                    "function": fname,
                    "strategy": strategy.name,
                    "x": res.result.x.tolist(),
                    "quality": res.result.quality,
                    "nfev": res.nfev,
                    "seconds": elapsed,
                }
            )
    return rows


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("functions", nargs="*", help="objectives to run (default: all)")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    df.configure_logging(level=args.log_level)

    print("Strategy benchmark")
    print("=" * 80)
    current = None
    for row in benchmark_strategies(args.functions, seed=args.seed):
        if row["function"] != current:
            current = row["function"]
            print(f"\n{current}")
            print("-" * 80)
        x = ", ".join(f"{v:.5f}" for v in row["x"])
        print(
            f"{row['strategy']:<26} x=[{x}]  f={row['quality']:<12.6g} "
            f"nfev={row['nfev']:<6} {row['seconds'] * 1000:.1f}ms"
        )


if __name__ == "__main__":
    main()
