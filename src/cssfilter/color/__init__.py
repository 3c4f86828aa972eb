"""
Color space helpers - hex/RGB/HSL parsing, conversion and formatting.

Example:
    >>> from cssfilter.color import TargetColor, rgb_to_hex
    >>> target = TargetColor.from_string("255,87,51")
    >>> rgb_to_hex(*target.rgb)
    '#FF5733'
"""

from cssfilter.color.space import (
    TargetColor,
    hex_to_rgb,
    is_hex,
    normalize_hex,
    parse_color,
    rgb_to_hex,
    rgb_to_hsl,
)

__all__ = [
    "TargetColor",
    "hex_to_rgb",
    "is_hex",
    "normalize_hex",
    "parse_color",
    "rgb_to_hex",
    "rgb_to_hsl",
]
