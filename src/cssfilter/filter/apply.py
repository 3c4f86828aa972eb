"""Apply the six CSS color filters to a single RGB color.

Each filter is a pure function: it takes an RGB array [3] on the 0-255
scale and returns a new array, clamped to [0, 255] the way browsers clip
after every stage of a filter chain.

Chain order (fixed, stages do not commute):
1. invert
2. sepia
3. saturate
4. hue-rotate
5. brightness
6. contrast

The matrices follow the W3C Filter Effects reference coefficients.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from cssfilter.config.operations import kernel_scale_vector
from cssfilter.config.values import FilterValues

# =============================================================================
# Constants
# =============================================================================

# Luminance weights used by the CSS filter matrices
LUMA_R = 0.213
LUMA_G = 0.715
LUMA_B = 0.072

BLACK = np.zeros(3, dtype=np.float64)


def _clamp(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.clip(rgb, 0.0, 255.0)


# =============================================================================
# Matrix Builders
# =============================================================================


def build_sepia_matrix(value: float) -> NDArray[np.float64]:
    """Build 3×3 sepia matrix.

    :param value: Sepia amount (0 = identity, 1 = full sepia)
    :returns: 3×3 matrix
    """
    t = 1.0 - value
    return np.array(
        [
            [0.393 + 0.607 * t, 0.769 - 0.769 * t, 0.189 - 0.189 * t],
            [0.349 - 0.349 * t, 0.686 + 0.314 * t, 0.168 - 0.168 * t],
            [0.272 - 0.272 * t, 0.534 - 0.534 * t, 0.131 + 0.869 * t],
        ],
        dtype=np.float64,
    )


def build_saturate_matrix(value: float) -> NDArray[np.float64]:
    """Build 3×3 luminance-preserving saturation matrix.

    :param value: Saturation factor (1 = identity, 0 = grayscale, >1 = oversaturate)
    :returns: 3×3 matrix
    """
    s = value
    return np.array(
        [
            [LUMA_R + (1.0 - LUMA_R) * s, LUMA_G - LUMA_G * s, LUMA_B - LUMA_B * s],
            [LUMA_R - LUMA_R * s, LUMA_G + (1.0 - LUMA_G) * s, LUMA_B - LUMA_B * s],
            [LUMA_R - LUMA_R * s, LUMA_G - LUMA_G * s, LUMA_B + (1.0 - LUMA_B) * s],
        ],
        dtype=np.float64,
    )


def build_hue_rotate_matrix(angle_deg: float) -> NDArray[np.float64]:
    """Build 3×3 hue rotation matrix.

    Reproduces the browser reference matrix coefficient for coefficient.

    :param angle_deg: Rotation in degrees
    :returns: 3×3 matrix
    """
    angle = angle_deg / 180.0 * math.pi
    sin_a = math.sin(angle)
    cos_a = math.cos(angle)
    return np.array(
        [
            [
                0.213 + cos_a * 0.787 - sin_a * 0.213,
                0.715 - cos_a * 0.715 - sin_a * 0.715,
                0.072 - cos_a * 0.072 + sin_a * 0.928,
            ],
            [
                0.213 - cos_a * 0.213 + sin_a * 0.143,
                0.715 + cos_a * 0.285 + sin_a * 0.140,
                0.072 - cos_a * 0.072 - sin_a * 0.283,
            ],
            [
                0.213 - cos_a * 0.213 - sin_a * 0.787,
                0.715 - cos_a * 0.715 + sin_a * 0.715,
                0.072 + cos_a * 0.928 + sin_a * 0.072,
            ],
        ],
        dtype=np.float64,
    )


# =============================================================================
# Filters
# =============================================================================


def apply_matrix(rgb: NDArray[np.float64], matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Multiply a color by a 3×3 matrix and clamp."""
    return _clamp(matrix @ np.asarray(rgb, dtype=np.float64))


def invert(rgb: NDArray[np.float64], value: float) -> NDArray[np.float64]:
    """Invert by ``value`` (0 = identity, 1 = full inversion)."""
    rgb = np.asarray(rgb, dtype=np.float64)
    return _clamp((value + rgb / 255.0 * (1.0 - 2.0 * value)) * 255.0)


def sepia(rgb: NDArray[np.float64], value: float) -> NDArray[np.float64]:
    return apply_matrix(rgb, build_sepia_matrix(value))


def saturate(rgb: NDArray[np.float64], value: float) -> NDArray[np.float64]:
    return apply_matrix(rgb, build_saturate_matrix(value))


def hue_rotate(rgb: NDArray[np.float64], angle_deg: float) -> NDArray[np.float64]:
    return apply_matrix(rgb, build_hue_rotate_matrix(angle_deg))


def brightness(rgb: NDArray[np.float64], value: float) -> NDArray[np.float64]:
    """Scale every channel by ``value`` (1 = identity)."""
    return _clamp(np.asarray(rgb, dtype=np.float64) * value)


def contrast(rgb: NDArray[np.float64], value: float) -> NDArray[np.float64]:
    """Stretch around mid-gray by ``value`` (1 = identity)."""
    intercept = -(0.5 * value) + 0.5
    return _clamp(np.asarray(rgb, dtype=np.float64) * value + intercept * 255.0)


def apply_filter_chain(
    values: FilterValues,
    base: NDArray[np.float64] | None = None,
) -> NDArray[np.float64]:
    """Run the full filter chain.

    :param values: Filter magnitudes in native units
    :param base: Starting color [3] (default black)
    :returns: Resulting RGB [3] in [0, 255]

    Example:
        >>> apply_filter_chain(FilterValues(invert=100))
        array([255., 255., 255.])
    """
    rgb = BLACK if base is None else _clamp(np.asarray(base, dtype=np.float64))

    inv, sep, sat, hue, bri, con = values.to_vector() * kernel_scale_vector()

    rgb = invert(rgb, inv)
    rgb = sepia(rgb, sep)
    rgb = saturate(rgb, sat)
    rgb = hue_rotate(rgb, hue)
    rgb = brightness(rgb, bri)
    rgb = contrast(rgb, con)

    return rgb
