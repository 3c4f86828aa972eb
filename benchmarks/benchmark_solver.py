"""Benchmark the filter search: NumPy reference loss vs Numba loss, and full solves.

Measures per-evaluation cost of the loss and end-to-end solve time for each
solver preset.
"""

from __future__ import annotations

import time

import numpy as np

from cssfilter.color.space import TargetColor
from cssfilter.config.operations import max_vector
from cssfilter.config.presets import SOLVER_PRESETS
from cssfilter.config.values import FilterValues
from cssfilter.solver.loss import FilterLoss
from cssfilter.solver.solve import FilterSolver

TARGETS = ["#FF5733", "#00A3FF", "#2ECC71", "#000000", "#FFFFFF", "#7F7F7F"]


def benchmark_loss(iterations: int = 20_000):
    """Compare NumPy and Numba loss evaluation.

    :param iterations: Number of parameter vectors to evaluate
    :returns: Tuple of (numpy_time, numba_time, speedup) per evaluation
    """
    loss = FilterLoss(TargetColor.from_string("#FF5733"))
    rng = np.random.default_rng(0)
    params = rng.random((iterations, 6)) * max_vector()
    values = [FilterValues.from_vector(p) for p in params]

    # Warmup (JIT compile)
    loss(params[0])
    loss.reference(values[0])

    start = time.perf_counter()
    for v in values:
        loss.reference(v)
    numpy_time = (time.perf_counter() - start) / iterations

    start = time.perf_counter()
    for p in params:
        loss(p)
    numba_time = (time.perf_counter() - start) / iterations

    speedup = numpy_time / numba_time

    print("\nLoss evaluation:")
    print(f"  NumPy:  {numpy_time * 1e6:.2f} us")
    print(f"  Numba:  {numba_time * 1e6:.2f} us")
    print(f"  Speedup: {speedup:.2f}x")

    return numpy_time, numba_time, speedup


def benchmark_presets(seed: int = 42):
    """Time full solves for every preset and report the resulting losses."""
    for name, config in SOLVER_PRESETS.items():
        print(f"\n{'-' * 70}")
        print(f"Preset: {name}")
        print(f"{'-' * 70}")

        solver = FilterSolver(config, seed=seed)
        # Warmup
        solver.solve("#000000")

        losses = []
        start = time.perf_counter()
        for target in TARGETS:
            result = solver.solve_detailed(target)
            losses.append(result.loss)
            print(f"  {target}: loss {result.loss:7.3f} ({result.quality}, {result.restarts} restarts)")
        elapsed = (time.perf_counter() - start) / len(TARGETS)

        print(f"  Mean solve time: {elapsed * 1000:.1f} ms")
        print(f"  Mean loss: {np.mean(losses):.3f}")


def main():
    """Run benchmarks."""
    print("=" * 70)
    print("CSS Filter Solver Benchmark")
    print("=" * 70)

    benchmark_loss()
    benchmark_presets()

    print(f"\n{'=' * 70}")
    print("Benchmark Complete!")
    print(f"{'=' * 70}")


if __name__ == "__main__":
    main()
