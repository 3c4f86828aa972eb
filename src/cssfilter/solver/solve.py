"""Two-phase filter search: wide exploration, then narrow refinement.

The wide phase starts every restart from the same initial guess with large
gains and keeps the best of up to ``restarts`` independent runs, stopping
early once one is good enough. The narrow phase restarts from that best
vector with gains scaled to its loss, so dimensions that are already close
move gently.

Example:
    >>> from cssfilter.solver import solve
    >>> css, loss = solve("#FF5733", seed=42)
    >>> css.split("(")[0]
    'invert'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from cssfilter.color.space import TargetColor
from cssfilter.config.operations import fix_parameter_vector
from cssfilter.config.solver import DEFAULT_CONFIG, SolverConfig
from cssfilter.config.values import FilterValues
from cssfilter.solver.loss import FilterLoss
from cssfilter.solver.spsa import SPSAOptimizer, SPSAResult

logger = logging.getLogger(__name__)

# Quality thresholds (upper bounds, exclusive)
PERFECT_LOSS = 1.0
EXCELLENT_LOSS = 5.0
GOOD_LOSS = 15.0

SeedLike = int | np.random.SeedSequence | None
TargetLike = str | TargetColor | tuple[float, float, float]


def classify_loss(loss: float) -> str:
    """Map a final loss to a quality label.

    :returns: One of "perfect", "excellent", "good", "poor"
    """
    if loss < PERFECT_LOSS:
        return "perfect"
    if loss < EXCELLENT_LOSS:
        return "excellent"
    if loss < GOOD_LOSS:
        return "good"
    return "poor"


def _as_target(target: TargetLike) -> TargetColor:
    if isinstance(target, TargetColor):
        return target
    if isinstance(target, str):
        return TargetColor.from_string(target)
    return TargetColor.from_rgb(*target)


@dataclass
class SolveResult:
    """Result of one solve.

    Attributes:
        target: Target color
        values: Best filter values found (unrounded, native units)
        loss: Loss at ``values``
        rounded_loss: Loss of the integer values actually emitted in CSS
        wide: Best wide-phase run
        narrow: Narrow-phase run
        restarts: Number of wide-phase restarts actually run
    """

    target: TargetColor
    values: FilterValues
    loss: float
    rounded_loss: float
    wide: SPSAResult
    narrow: SPSAResult
    restarts: int

    @property
    def filter(self) -> str:
        """CSS filter function list, every argument rounded to an integer."""
        return self.values.to_css()

    @property
    def declaration(self) -> str:
        return self.values.to_declaration()

    @property
    def quality(self) -> str:
        return classify_loss(self.loss)


class FilterSolver:
    """Find a CSS filter chain that turns black into a target color.

    :param config: Solver settings (default: DEFAULT_CONFIG)
    :param seed: Seed for the random streams. None draws fresh entropy per solve;
        an int makes every solve with this solver reproducible.

    Example:
        >>> solver = FilterSolver(seed=7)
        >>> result = solver.solve_detailed("#00A3FF")
        >>> result.quality in ("perfect", "excellent", "good", "poor")
        True
    """

    def __init__(self, config: SolverConfig | None = None, seed: SeedLike = None):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.seed = seed

    def _spawn_rngs(self, n: int) -> list[np.random.Generator]:
        if isinstance(self.seed, np.random.SeedSequence):
            seed_seq = self.seed
        else:
            seed_seq = np.random.SeedSequence(self.seed)
        return [np.random.default_rng(child) for child in seed_seq.spawn(n)]

    def solve_wide(
        self, loss: FilterLoss, rngs: list[np.random.Generator]
    ) -> tuple[SPSAResult, int]:
        """Run the wide phase.

        :param loss: Loss for the target
        :param rngs: One independent generator per allowed restart
        :returns: Tuple of (best run, number of restarts run)
        """
        wide = self.config.wide
        initial = wide.initial_vector()
        best: SPSAResult | None = None
        runs = 0

        for rng in rngs[: wide.restarts]:
            optimizer = SPSAOptimizer(
                loss,
                A=wide.A,
                c=wide.c,
                a=wide.a,
                iterations=wide.iterations,
                rng=rng,
                alpha=self.config.alpha,
                gamma=self.config.gamma,
                fixup=fix_parameter_vector,
            )
            result = optimizer.run(initial)
            runs += 1
            logger.debug(
                "[FilterSolver] Wide restart %d/%d: loss %.4f", runs, wide.restarts, result.loss
            )

            if best is None or result.loss < best.loss:
                best = result
            if best.loss <= wide.early_exit_loss:
                break

        return best, runs

    def solve_narrow(
        self, loss: FilterLoss, wide: SPSAResult, rng: np.random.Generator
    ) -> SPSAResult:
        """Refine a wide-phase result.

        The stability offset A is the wide loss and the step sizes are
        fractions of ``(A + 1)``.
        """
        narrow = self.config.narrow
        optimizer = SPSAOptimizer(
            loss,
            A=wide.loss,
            c=narrow.c,
            a=narrow.gains(wide.loss),
            iterations=narrow.iterations,
            rng=rng,
            alpha=self.config.alpha,
            gamma=self.config.gamma,
            fixup=fix_parameter_vector,
        )
        return optimizer.run(wide.x)

    def solve_detailed(self, target: TargetLike) -> SolveResult:
        """Solve for ``target`` and return the full result.

        :param target: Hex / ``r,g,b`` string, RGB tuple or TargetColor
        :raises InvalidColorFormat: If the target cannot be parsed
        """
        target = _as_target(target)
        loss = FilterLoss(target)
        logger.info("[FilterSolver] Solving for %s", target.hex)

        rngs = self._spawn_rngs(self.config.wide.restarts + 1)

        wide, restarts = self.solve_wide(loss, rngs[:-1])
        logger.info(
            "[FilterSolver] Wide phase: loss %.4f after %d restart(s)", wide.loss, restarts
        )

        narrow = self.solve_narrow(loss, wide, rngs[-1])
        logger.info("[FilterSolver] Narrow phase: loss %.4f", narrow.loss)

        best = narrow if narrow.loss <= wide.loss else wide
        values = FilterValues.from_vector(best.x)

        result = SolveResult(
            target=target,
            values=values,
            loss=best.loss,
            rounded_loss=loss.evaluate(values.rounded()),
            wide=wide,
            narrow=narrow,
            restarts=restarts,
        )
        logger.info(
            "[FilterSolver] %s -> %s (loss %.4f, %s, %d evaluations)",
            target.hex,
            result.filter,
            result.loss,
            result.quality,
            loss.calls,
        )
        return result

    def solve(self, target: TargetLike) -> tuple[str, float]:
        """Solve for ``target``.

        :returns: Tuple of (CSS filter function list, loss)
        """
        result = self.solve_detailed(target)
        return result.filter, result.loss


def solve(
    target: TargetLike,
    *,
    seed: SeedLike = None,
    config: SolverConfig | None = None,
) -> tuple[str, float]:
    """Find a CSS filter chain turning black into ``target``.

    :param target: Hex (``#FF5733``, ``f53``) or ``r,g,b`` string, RGB tuple or TargetColor
    :param seed: Seed for reproducible output (None = fresh entropy)
    :param config: Solver settings (default: DEFAULT_CONFIG)
    :returns: Tuple of (CSS filter function list, loss)
    :raises InvalidColorFormat: If the target cannot be parsed
    """
    return FilterSolver(config=config, seed=seed).solve(target)
