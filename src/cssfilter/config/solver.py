"""Solver configuration.

Holds the gain schedules, iteration budgets, restart count and early-exit
threshold of the two-phase (wide then narrow) filter search. Every constant
is a named field so callers can override it without touching the solver.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field

from cssfilter.config.operations import N_PARAMS, PARAMETER_SPECS

# Wide phase
WIDE_A = 5.0
WIDE_C = 15.0
WIDE_GAINS = (60.0, 180.0, 18000.0, 600.0, 1.2, 1.2)
WIDE_ITERATIONS = 1000
WIDE_RESTARTS = 3
WIDE_EARLY_EXIT_LOSS = 25.0

# Narrow phase
NARROW_C = 2.0
NARROW_GAIN_WEIGHTS = (0.25, 0.25, 1.0, 0.25, 0.2, 0.2)
NARROW_ITERATIONS = 500

# Shared SPSA exponents
SPSA_ALPHA = 1.0
SPSA_GAMMA = 1.0 / 6.0


def _as_float(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return float(value)


def _as_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _as_vector(name: str, values) -> tuple[float, ...]:
    if isinstance(values, (str, bytes)):
        raise ValueError(f"{name} must be a sequence of {N_PARAMS} numbers, got {values!r}")
    try:
        vector = tuple(_as_float(name, v) for v in values)
    except TypeError as e:
        raise ValueError(f"{name} must be a sequence of {N_PARAMS} numbers, got {values!r}") from e
    if len(vector) != N_PARAMS:
        raise ValueError(f"{name} must have {N_PARAMS} elements, got {len(vector)}")
    return vector


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")


@dataclass(frozen=True)
class WideSearchConfig:
    """Configuration for the wide (exploratory) search phase.

    :param A: SPSA stability offset
    :param c: SPSA perturbation scale
    :param a: Per-dimension step sizes, scaled to each domain's size
    :param initial: Starting vector (None = midpoint of every domain)
    :param iterations: Iterations per restart
    :param restarts: Maximum number of independent restarts
    :param early_exit_loss: Stop restarting once the best loss is at or below this
    """

    A: float = WIDE_A
    c: float = WIDE_C
    a: tuple[float, ...] = WIDE_GAINS
    initial: tuple[float, ...] | None = None
    iterations: int = WIDE_ITERATIONS
    restarts: int = WIDE_RESTARTS
    early_exit_loss: float = WIDE_EARLY_EXIT_LOSS

    def __post_init__(self):
        object.__setattr__(self, "A", _as_float("A", self.A))
        object.__setattr__(self, "c", _as_float("c", self.c))
        object.__setattr__(self, "a", _as_vector("a", self.a))
        if self.initial is not None:
            object.__setattr__(self, "initial", _as_vector("initial", self.initial))
        object.__setattr__(self, "iterations", _as_int("iterations", self.iterations))
        object.__setattr__(self, "restarts", _as_int("restarts", self.restarts))
        object.__setattr__(
            self, "early_exit_loss", _as_float("early_exit_loss", self.early_exit_loss)
        )

        # A + k + 1 must stay positive from k = 0
        if self.A < 0:
            raise ValueError(f"A must be >= 0, got {self.A}")
        _check_positive("c", self.c)
        _check_positive("iterations", self.iterations)
        _check_positive("restarts", self.restarts)

    def initial_vector(self) -> tuple[float, ...]:
        if self.initial is not None:
            return self.initial
        return tuple(spec.midpoint for spec in PARAMETER_SPECS)


@dataclass(frozen=True)
class NarrowSearchConfig:
    """Configuration for the narrow (refinement) search phase.

    The stability offset A is the wide phase's best loss, and the step
    sizes are ``a_weights`` scaled by ``(A + 1)``.

    :param c: SPSA perturbation scale
    :param a_weights: Per-dimension fractions of ``(A + 1)``
    :param iterations: Iteration budget (single run)
    """

    c: float = NARROW_C
    a_weights: tuple[float, ...] = NARROW_GAIN_WEIGHTS
    iterations: int = NARROW_ITERATIONS

    def __post_init__(self):
        object.__setattr__(self, "c", _as_float("c", self.c))
        object.__setattr__(self, "a_weights", _as_vector("a_weights", self.a_weights))
        object.__setattr__(self, "iterations", _as_int("iterations", self.iterations))
        _check_positive("c", self.c)
        _check_positive("iterations", self.iterations)

    def gains(self, wide_loss: float) -> tuple[float, ...]:
        """Step sizes for a narrow run seeded with ``wide_loss``."""
        scale = wide_loss + 1.0
        return tuple(w * scale for w in self.a_weights)


@dataclass(frozen=True)
class SolverConfig:
    """Top-level solver configuration.

    Attributes:
        wide: Wide phase settings
        narrow: Narrow phase settings
        alpha: Step-size decay exponent
        gamma: Perturbation decay exponent
    """

    wide: WideSearchConfig = field(default_factory=WideSearchConfig)
    narrow: NarrowSearchConfig = field(default_factory=NarrowSearchConfig)
    alpha: float = SPSA_ALPHA
    gamma: float = SPSA_GAMMA

    def __post_init__(self):
        if not isinstance(self.wide, WideSearchConfig):
            raise ValueError(f"wide must be a WideSearchConfig, got {type(self.wide).__name__}")
        if not isinstance(self.narrow, NarrowSearchConfig):
            raise ValueError(
                f"narrow must be a NarrowSearchConfig, got {type(self.narrow).__name__}"
            )
        object.__setattr__(self, "alpha", _as_float("alpha", self.alpha))
        object.__setattr__(self, "gamma", _as_float("gamma", self.gamma))
        _check_positive("alpha", self.alpha)
        _check_positive("gamma", self.gamma)

    def to_dict(self) -> dict:
        return {
            "wide": {
                "A": self.wide.A,
                "c": self.wide.c,
                "a": list(self.wide.a),
                "initial": list(self.wide.initial) if self.wide.initial is not None else None,
                "iterations": self.wide.iterations,
                "restarts": self.wide.restarts,
                "early_exit_loss": self.wide.early_exit_loss,
            },
            "narrow": {
                "c": self.narrow.c,
                "a_weights": list(self.narrow.a_weights),
                "iterations": self.narrow.iterations,
            },
            "alpha": self.alpha,
            "gamma": self.gamma,
        }


DEFAULT_CONFIG = SolverConfig()
