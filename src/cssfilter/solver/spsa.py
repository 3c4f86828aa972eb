"""Simultaneous perturbation stochastic approximation (SPSA).

Gradient-free minimization of a scalar loss over a fixed-size parameter
vector. Each iteration perturbs every dimension at once by a random
±ck and estimates the gradient from just two loss evaluations,
regardless of dimensionality.

Gain schedules (k is the 0-based iteration index):
    ck    = c / (k + 1) ** gamma
    ak[i] = a[i] / (A + k + 1) ** alpha

References:
- Spall, "Implementation of the Simultaneous Perturbation Algorithm for
  Stochastic Optimization", IEEE TAES 34(3), 1998
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 1.0
DEFAULT_GAMMA = 1.0 / 6.0

LossFn = Callable[[NDArray[np.float64]], float]
FixupFn = Callable[[NDArray[np.float64]], NDArray[np.float64]]


@dataclass
class SPSAState:
    """Mutable state of one optimizer run.

    Owned by a single run() call and discarded when it returns.
    """

    x: NDArray[np.float64]
    best_x: NDArray[np.float64]
    best_loss: float = math.inf
    k: int = 0
    history: list[float] = field(default_factory=list)


@dataclass
class SPSAResult:
    """Outcome of one optimizer run.

    Attributes:
        x: Best parameter vector seen
        loss: Loss at ``x``
        iterations: Number of iterations run
        history: Best-ever loss after each iteration (non-increasing)
        evaluations: Number of loss evaluations made
    """

    x: NDArray[np.float64]
    loss: float
    iterations: int
    history: NDArray[np.float64]
    evaluations: int


class SPSAOptimizer:
    """SPSA minimizer with per-dimension step sizes and a domain fixup.

    :param loss: Scalar loss over a parameter vector
    :param A: Stability offset of the step-size schedule
    :param c: Perturbation scale
    :param a: Per-dimension step-size numerators
    :param iterations: Iteration budget
    :param rng: Random generator for the perturbation signs (None = fresh entropy)
    :param alpha: Step-size decay exponent
    :param gamma: Perturbation decay exponent
    :param fixup: Maps an updated vector back into the valid domain (None = identity)

    Example:
        >>> opt = SPSAOptimizer(
        ...     lambda x: float(np.sum((x - 3.0) ** 2)),
        ...     A=5, c=1.0, a=[1.0, 1.0], iterations=200,
        ...     rng=np.random.default_rng(0),
        ... )
        >>> result = opt.run([0.0, 0.0])
    """

    def __init__(
        self,
        loss: LossFn,
        *,
        A: float,
        c: float,
        a: Sequence[float],
        iterations: int,
        rng: np.random.Generator | None = None,
        alpha: float = DEFAULT_ALPHA,
        gamma: float = DEFAULT_GAMMA,
        fixup: FixupFn | None = None,
    ):
        if iterations <= 0:
            raise ValueError(f"iterations must be > 0, got {iterations}")
        if c <= 0:
            raise ValueError(f"c must be > 0, got {c}")

        self.loss = loss
        self.A = float(A)
        self.c = float(c)
        self.a = np.asarray(a, dtype=np.float64)
        self.iterations = int(iterations)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.alpha = float(alpha)
        self.gamma = float(gamma)
        self.fixup = fixup
        self._evaluations = 0

    def gains(self, k: int) -> tuple[float, NDArray[np.float64]]:
        """Perturbation size ck and step sizes ak for iteration ``k``."""
        ck = self.c / (k + 1) ** self.gamma
        ak = self.a / (self.A + k + 1) ** self.alpha
        return ck, ak

    def _evaluate(self, x: NDArray[np.float64]) -> float:
        self._evaluations += 1
        return float(self.loss(x))

    def _draw_signs(self) -> NDArray[np.float64]:
        # Fair coin per dimension, never zero
        bits = self.rng.integers(0, 2, size=self.a.shape[0])
        return np.where(bits == 0, 1.0, -1.0)

    def step(self, state: SPSAState) -> None:
        """Advance ``state`` by one iteration."""
        k = state.k
        ck, ak = self.gains(k)
        delta = self._draw_signs()

        loss_high = self._evaluate(state.x + ck * delta)
        loss_low = self._evaluate(state.x - ck * delta)
        grad = (loss_high - loss_low) / (2.0 * ck * delta)

        x = state.x - ak * grad
        if self.fixup is not None:
            x = np.asarray(self.fixup(x), dtype=np.float64)
        state.x = x

        loss = self._evaluate(x)
        if loss < state.best_loss:
            state.best_x = x.copy()
            state.best_loss = loss

        state.history.append(state.best_loss)
        state.k = k + 1

    def run(self, initial: Sequence[float] | NDArray[np.float64]) -> SPSAResult:
        """Run the full iteration budget from ``initial``.

        :param initial: Starting vector, same length as ``a``
        :returns: Best vector and loss over all iterations (not the final iterate)
        :raises ValueError: If ``initial`` and ``a`` differ in length
        """
        x0 = np.array(initial, dtype=np.float64)
        if x0.shape != self.a.shape:
            raise ValueError(f"initial must be shape {self.a.shape}, got {x0.shape}")

        self._evaluations = 0
        state = SPSAState(x=x0, best_x=x0.copy())

        while state.k < self.iterations:
            self.step(state)

        logger.debug(
            "[SPSA] %d iterations, %d evaluations, best loss %.4f",
            state.k,
            self._evaluations,
            state.best_loss,
        )

        return SPSAResult(
            x=state.best_x,
            loss=state.best_loss,
            iterations=state.k,
            history=np.array(state.history, dtype=np.float64),
            evaluations=self._evaluations,
        )


def spsa(
    loss: LossFn,
    initial: Sequence[float] | NDArray[np.float64],
    *,
    A: float,
    c: float,
    a: Sequence[float],
    iterations: int,
    rng: np.random.Generator | None = None,
    alpha: float = DEFAULT_ALPHA,
    gamma: float = DEFAULT_GAMMA,
    fixup: FixupFn | None = None,
) -> SPSAResult:
    """Functional shortcut for ``SPSAOptimizer(...).run(initial)``."""
    optimizer = SPSAOptimizer(
        loss,
        A=A,
        c=c,
        a=a,
        iterations=iterations,
        rng=rng,
        alpha=alpha,
        gamma=gamma,
        fixup=fixup,
    )
    return optimizer.run(initial)
