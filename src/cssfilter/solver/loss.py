"""Loss function for the filter search.

The loss is the unnormalized L1 distance between the color produced by a
candidate filter chain and the target, summed over R, G, B (0-255) and
H, S, L (degrees / percent). The RGB terms dominate numerically; the SPSA
gain schedules are tuned against exactly this scale, so it is not
normalized.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from cssfilter.color.space import TargetColor, rgb_to_hsl
from cssfilter.config.operations import N_PARAMS
from cssfilter.config.values import FilterValues
from cssfilter.filter.apply import apply_filter_chain
from cssfilter.filter.kernels import filter_loss_numba


class FilterLoss:
    """Scalar loss over a 6-element native-unit parameter vector.

    Example:
        >>> loss = FilterLoss(TargetColor.from_string("#FFFFFF"))
        >>> round(loss(np.array([100.0, 0.0, 100.0, 0.0, 100.0, 100.0])), 6)
        0.0
    """

    def __init__(self, target: TargetColor):
        self.target = target
        self._target_vec = np.array(target.rgb + target.hsl, dtype=np.float64)
        self.calls = 0

    def __call__(self, x: NDArray[np.float64]) -> float:
        x = np.ascontiguousarray(x, dtype=np.float64)
        if x.shape != (N_PARAMS,):
            raise ValueError(f"Parameter vector must be shape ({N_PARAMS},), got {x.shape}")
        self.calls += 1
        return float(filter_loss_numba(x, self._target_vec))

    def evaluate(self, values: FilterValues) -> float:
        return self(values.to_vector())

    def reference(self, values: FilterValues) -> float:
        """Compute the same loss through the NumPy filter pipeline."""
        rgb = apply_filter_chain(values)
        hsl = rgb_to_hsl(*rgb)
        return float(
            sum(abs(a - b) for a, b in zip(rgb, self.target.rgb))
            + sum(abs(a - b) for a, b in zip(hsl, self.target.hsl))
        )
