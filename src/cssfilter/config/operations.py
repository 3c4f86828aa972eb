"""Parameter specifications for the six chained filter operations.

This module defines the ParameterSpec dataclass that describes the valid
domain of each filter parameter in native (CLI) units, how it maps to the
CSS function argument, and how out-of-range values are fixed up.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

N_PARAMS = 6


@dataclass(frozen=True)
class ParameterSpec:
    """Specification for one filter parameter.

    Attributes:
        name: Field name on FilterValues (e.g., "hue_rotate")
        css_name: CSS filter function name (e.g., "hue-rotate")
        max_value: Upper end of the native domain (lower end is always 0)
        wraps: True if values wrap modulo max_value instead of clamping
        css_scale: Factor from native units to the CSS function argument
        css_unit: Unit suffix of the CSS argument ("%" or "deg")
        kernel_scale: Factor from native units to the filter kernel argument
        description: Human-readable description
    """

    name: str
    css_name: str
    max_value: float
    wraps: bool = False
    css_scale: float = 1.0
    css_unit: str = "%"
    kernel_scale: float = 0.01
    description: str = ""

    @property
    def midpoint(self) -> float:
        return self.max_value / 2.0

    def fix(self, value: float) -> float:
        """Bring a native value back into the domain.

        :param value: Native value, possibly out of range
        :returns: Wrapped value in [0, max) if ``wraps``, else clamped to [0, max]
        """
        if self.wraps:
            value = value % self.max_value
            # float modulo of a tiny negative can round up to max_value
            return 0.0 if value >= self.max_value else value
        return max(0.0, min(self.max_value, value))

    def css_value(self, value: float) -> int:
        """Integer CSS argument for a native value.

        Wrapping parameters stay below a full turn (360deg becomes 0deg).
        """
        css = int(round(value * self.css_scale))
        if self.wraps:
            css %= int(round(self.max_value * self.css_scale))
        return css

    def to_css(self, value: float) -> str:
        """Format a native value as the CSS function call, rounded to an integer."""
        return f"{self.css_name}({self.css_value(value)}{self.css_unit})"

    def __repr__(self) -> str:
        kind = "wrap" if self.wraps else "clamp"
        return f"ParameterSpec({self.name}, range=[0, {self.max_value}], {kind})"


INVERT = ParameterSpec(
    name="invert",
    css_name="invert",
    max_value=100.0,
    description="Invert amount: 0=none, 100=full inversion",
)
SEPIA = ParameterSpec(
    name="sepia",
    css_name="sepia",
    max_value=100.0,
    description="Sepia amount: 0=none, 100=full sepia",
)
SATURATE = ParameterSpec(
    name="saturate",
    css_name="saturate",
    max_value=7500.0,
    description="Saturation: 0=grayscale, 100=identity, >100=oversaturate",
)
HUE_ROTATE = ParameterSpec(
    name="hue_rotate",
    css_name="hue-rotate",
    max_value=100.0,
    wraps=True,
    css_scale=3.6,
    css_unit="deg",
    kernel_scale=3.6,
    description="Hue rotation in hundredths of a turn (x3.6 = degrees)",
)
BRIGHTNESS = ParameterSpec(
    name="brightness",
    css_name="brightness",
    max_value=200.0,
    description="Brightness multiplier in percent: 100=identity",
)
CONTRAST = ParameterSpec(
    name="contrast",
    css_name="contrast",
    max_value=200.0,
    description="Contrast in percent: 100=identity",
)

# Fixed chain order
PARAMETER_SPECS: tuple[ParameterSpec, ...] = (
    INVERT,
    SEPIA,
    SATURATE,
    HUE_ROTATE,
    BRIGHTNESS,
    CONTRAST,
)

PARAMETER_NAMES: tuple[str, ...] = tuple(spec.name for spec in PARAMETER_SPECS)

HUE_INDEX = PARAMETER_NAMES.index("hue_rotate")


def max_vector() -> NDArray[np.float64]:
    """Upper domain bound of every parameter, in chain order."""
    return np.array([spec.max_value for spec in PARAMETER_SPECS], dtype=np.float64)


def midpoint_vector() -> NDArray[np.float64]:
    """Midpoint of every parameter domain, in chain order."""
    return np.array([spec.midpoint for spec in PARAMETER_SPECS], dtype=np.float64)


def kernel_scale_vector() -> NDArray[np.float64]:
    """Native-to-kernel unit factors (÷100, or ×3.6 for hue), in chain order."""
    return np.array([spec.kernel_scale for spec in PARAMETER_SPECS], dtype=np.float64)


def fix_parameter_vector(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Apply the domain fixup to a full parameter vector.

    Clamps every dimension into [0, max] except hue_rotate, which wraps
    modulo its range.

    :param x: Parameter vector [6]
    :returns: New fixed-up vector [6]
    :raises ValueError: If the vector does not have exactly six elements
    """
    x = np.asarray(x, dtype=np.float64)
    if x.shape != (N_PARAMS,):
        raise ValueError(f"Parameter vector must be shape ({N_PARAMS},), got {x.shape}")
    return np.array([spec.fix(float(v)) for spec, v in zip(PARAMETER_SPECS, x)], dtype=np.float64)
