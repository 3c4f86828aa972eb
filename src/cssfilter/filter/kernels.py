"""Numba-optimized kernels for the filter chain and loss.

The solver evaluates the loss three times per SPSA iteration, so the full
chain (black -> six filters -> HSL -> L1 distance) is compiled into scalar
kernels. Results match cssfilter.filter.apply to floating point precision.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Helpers
# =============================================================================


@njit(cache=True, nogil=True)
def _clamp255(v: float) -> float:
    if v < 0.0:
        return 0.0
    if v > 255.0:
        return 255.0
    return v


@njit(cache=True, nogil=True)
def _matrix3(
    r: float,
    g: float,
    b: float,
    m00: float,
    m01: float,
    m02: float,
    m10: float,
    m11: float,
    m12: float,
    m20: float,
    m21: float,
    m22: float,
) -> tuple[float, float, float]:
    return (
        _clamp255(r * m00 + g * m01 + b * m02),
        _clamp255(r * m10 + g * m11 + b * m12),
        _clamp255(r * m20 + g * m21 + b * m22),
    )


# =============================================================================
# Core Kernels
# =============================================================================


@njit(cache=True, nogil=True)
def filter_chain_numba(params: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Run the six-stage chain from black.

    :param params: Native-unit vector [6] (invert, sepia, saturate, hue_rotate, brightness, contrast)
    :param out: Output RGB [3]
    """
    r = 0.0
    g = 0.0
    b = 0.0

    # invert
    v = params[0] / 100.0
    r = _clamp255((v + r / 255.0 * (1.0 - 2.0 * v)) * 255.0)
    g = _clamp255((v + g / 255.0 * (1.0 - 2.0 * v)) * 255.0)
    b = _clamp255((v + b / 255.0 * (1.0 - 2.0 * v)) * 255.0)

    # sepia
    t = 1.0 - params[1] / 100.0
    r, g, b = _matrix3(
        r,
        g,
        b,
        0.393 + 0.607 * t,
        0.769 - 0.769 * t,
        0.189 - 0.189 * t,
        0.349 - 0.349 * t,
        0.686 + 0.314 * t,
        0.168 - 0.168 * t,
        0.272 - 0.272 * t,
        0.534 - 0.534 * t,
        0.131 + 0.869 * t,
    )

    # saturate
    s = params[2] / 100.0
    r, g, b = _matrix3(
        r,
        g,
        b,
        0.213 + 0.787 * s,
        0.715 - 0.715 * s,
        0.072 - 0.072 * s,
        0.213 - 0.213 * s,
        0.715 + 0.285 * s,
        0.072 - 0.072 * s,
        0.213 - 0.213 * s,
        0.715 - 0.715 * s,
        0.072 + 0.928 * s,
    )

    # hue-rotate
    angle = params[3] * 3.6 / 180.0 * math.pi
    sin_a = math.sin(angle)
    cos_a = math.cos(angle)
    r, g, b = _matrix3(
        r,
        g,
        b,
        0.213 + cos_a * 0.787 - sin_a * 0.213,
        0.715 - cos_a * 0.715 - sin_a * 0.715,
        0.072 - cos_a * 0.072 + sin_a * 0.928,
        0.213 - cos_a * 0.213 + sin_a * 0.143,
        0.715 + cos_a * 0.285 + sin_a * 0.140,
        0.072 - cos_a * 0.072 - sin_a * 0.283,
        0.213 - cos_a * 0.213 - sin_a * 0.787,
        0.715 - cos_a * 0.715 + sin_a * 0.715,
        0.072 + cos_a * 0.928 + sin_a * 0.072,
    )

    # brightness
    v = params[4] / 100.0
    r = _clamp255(r * v)
    g = _clamp255(g * v)
    b = _clamp255(b * v)

    # contrast
    v = params[5] / 100.0
    intercept = (-(0.5 * v) + 0.5) * 255.0
    out[0] = _clamp255(r * v + intercept)
    out[1] = _clamp255(g * v + intercept)
    out[2] = _clamp255(b * v + intercept)


@njit(cache=True, nogil=True)
def rgb_to_hsl_numba(r: float, g: float, b: float) -> tuple[float, float, float]:
    """RGB (0-255) to HSL (degrees, percent, percent)."""
    r = r / 255.0
    g = g / 255.0
    b = b / 255.0

    max_c = max(r, max(g, b))
    min_c = min(r, min(g, b))
    delta = max_c - min_c

    h = 0.0
    s = 0.0
    l = (max_c + min_c) / 2.0

    if delta != 0.0:
        if l < 0.5:
            s = delta / (max_c + min_c)
        else:
            s = delta / (2.0 - max_c - min_c)

        if max_c == r:
            h = (g - b) / delta
            if g < b:
                h += 6.0
        elif max_c == g:
            h = (b - r) / delta + 2.0
        else:
            h = (r - g) / delta + 4.0

        h = (h * 60.0) % 360.0

    return h, s * 100.0, l * 100.0


@njit(cache=True, nogil=True)
def filter_loss_numba(params: NDArray[np.float64], target: NDArray[np.float64]) -> float:
    """Unnormalized L1 distance between the chain output and the target.

    :param params: Native-unit vector [6]
    :param target: Target (r, g, b, h, s, l) [6]
    :returns: |dR| + |dG| + |dB| + |dH| + |dS| + |dL|
    """
    rgb = np.empty(3, dtype=np.float64)
    filter_chain_numba(params, rgb)
    h, s, l = rgb_to_hsl_numba(rgb[0], rgb[1], rgb[2])

    return (
        abs(rgb[0] - target[0])
        + abs(rgb[1] - target[1])
        + abs(rgb[2] - target[2])
        + abs(h - target[3])
        + abs(s - target[4])
        + abs(l - target[5])
    )
