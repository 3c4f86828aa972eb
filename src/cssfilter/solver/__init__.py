"""
Solver - SPSA search for the filter chain that reproduces a target color.

Example:
    >>> from cssfilter.solver import FilterSolver
    >>> result = FilterSolver(seed=1).solve_detailed("#FF5733")
    >>> print(result.declaration, result.quality)
"""

from cssfilter.solver.loss import FilterLoss
from cssfilter.solver.solve import (
    EXCELLENT_LOSS,
    GOOD_LOSS,
    PERFECT_LOSS,
    FilterSolver,
    SolveResult,
    classify_loss,
    solve,
)
from cssfilter.solver.spsa import SPSAOptimizer, SPSAResult, SPSAState, spsa

__all__ = [
    # Entry points
    "solve",
    "FilterSolver",
    "SolveResult",
    "classify_loss",
    "PERFECT_LOSS",
    "EXCELLENT_LOSS",
    "GOOD_LOSS",
    # Loss
    "FilterLoss",
    # Optimizer
    "SPSAOptimizer",
    "SPSAResult",
    "SPSAState",
    "spsa",
]
