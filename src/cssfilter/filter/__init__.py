"""
Filter pipeline - the six chained CSS color filters.

Example:
    >>> from cssfilter.filter import apply_filter_chain
    >>> from cssfilter.config import FilterValues
    >>> apply_filter_chain(FilterValues(invert=100, brightness=50))
    array([127.5, 127.5, 127.5])
"""

from cssfilter.filter.apply import (
    BLACK,
    apply_filter_chain,
    apply_matrix,
    brightness,
    build_hue_rotate_matrix,
    build_saturate_matrix,
    build_sepia_matrix,
    contrast,
    hue_rotate,
    invert,
    saturate,
    sepia,
)
from cssfilter.filter.kernels import filter_chain_numba, filter_loss_numba, rgb_to_hsl_numba

__all__ = [
    "BLACK",
    # Chain
    "apply_filter_chain",
    # Individual filters
    "invert",
    "sepia",
    "saturate",
    "hue_rotate",
    "brightness",
    "contrast",
    "apply_matrix",
    # Matrix builders
    "build_sepia_matrix",
    "build_saturate_matrix",
    "build_hue_rotate_matrix",
    # Compiled kernels
    "filter_chain_numba",
    "filter_loss_numba",
    "rgb_to_hsl_numba",
]
