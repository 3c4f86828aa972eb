"""Filter parameter values.

FilterValues holds the six chained filter magnitudes in native units,
in the fixed chain order invert, sepia, saturate, hue_rotate,
brightness, contrast.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass

import numpy as np
from numpy.typing import NDArray

from cssfilter.config.operations import N_PARAMS, PARAMETER_SPECS, fix_parameter_vector


@dataclass(frozen=True)
class FilterValues:
    """Filter chain magnitudes in native units.

    Units:
    - invert, sepia: percent [0, 100]
    - saturate: percent [0, 7500]
    - hue_rotate: hundredths of a turn [0, 100), x3.6 for degrees
    - brightness, contrast: percent [0, 200]

    The neutral chain (no visible change) is invert=0, sepia=0,
    saturate=100, hue_rotate=0, brightness=100, contrast=100.

    Example:
        >>> values = FilterValues(invert=100)
        >>> values.to_css()
        'invert(100%) sepia(0%) saturate(100%) hue-rotate(0deg) brightness(100%) contrast(100%)'
    """

    invert: float = 0.0
    sepia: float = 0.0
    saturate: float = 100.0
    hue_rotate: float = 0.0
    brightness: float = 100.0
    contrast: float = 100.0

    @classmethod
    def from_vector(cls, x: NDArray[np.float64] | list[float]) -> FilterValues:
        """Create FilterValues from a 6-element vector in chain order.

        :raises ValueError: If the vector does not have exactly six elements
        """
        arr = np.asarray(x, dtype=np.float64)
        if arr.shape != (N_PARAMS,):
            raise ValueError(f"Parameter vector must be shape ({N_PARAMS},), got {arr.shape}")
        return cls(*(float(v) for v in arr))

    def to_vector(self) -> NDArray[np.float64]:
        return np.array(astuple(self), dtype=np.float64)

    def fixup(self) -> FilterValues:
        """Clamp into each domain, wrapping hue_rotate.

        :returns: New FilterValues inside the valid domains
        """
        return FilterValues.from_vector(fix_parameter_vector(self.to_vector()))

    def is_neutral(self) -> bool:
        """Check if applying these values would leave a color unchanged."""
        return self == FilterValues()

    def rounded(self) -> FilterValues:
        """Round every value to the integer emitted in the CSS declaration.

        hue_rotate is kept in native units, rounded to the nearest whole degree
        below a full turn.
        """
        kwargs = {}
        for spec, value in zip(PARAMETER_SPECS, astuple(self)):
            kwargs[spec.name] = spec.css_value(value) / spec.css_scale
        return FilterValues(**kwargs)

    def to_css(self) -> str:
        """Format as the space-separated CSS filter function list."""
        return " ".join(spec.to_css(value) for spec, value in zip(PARAMETER_SPECS, astuple(self)))

    def to_declaration(self) -> str:
        """Format as a full ``filter: ...;`` CSS declaration."""
        return f"filter: {self.to_css()};"

    def to_dict(self) -> dict[str, float]:
        return dict(zip((spec.name for spec in PARAMETER_SPECS), astuple(self)))
