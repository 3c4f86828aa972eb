"""Hex, RGB and HSL parsing, conversion and formatting.

All channel values are on the 0-255 scale. HSL is returned as
``(h, s, l)`` with h in degrees [0, 360) and s, l in percent [0, 100].
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cssfilter.exceptions import InvalidColorFormat

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
_RGB_RE = re.compile(r"^\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*$")


def is_hex(text: str) -> bool:
    """Check whether ``text`` is a 3- or 6-digit hex color."""
    return _HEX_RE.match(text.strip()) is not None


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Convert a hex color to an RGB triple.

    :param hex_str: 3- or 6-digit hex string, leading ``#`` optional
    :returns: Tuple of (r, g, b) integers in [0, 255]
    :raises InvalidColorFormat: If the string is not a valid hex color

    Example:
        >>> hex_to_rgb("#f53")
        (255, 85, 51)
    """
    match = _HEX_RE.match(hex_str.strip())
    if match is None:
        raise InvalidColorFormat(hex_str, "expected 3 or 6 hex digits")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format an RGB triple as uppercase ``#RRGGBB``.

    Channels are rounded to the nearest integer and clamped to [0, 255].
    """
    channels = (max(0, min(255, int(round(c)))) for c in (r, g, b))
    return "#{:02X}{:02X}{:02X}".format(*channels)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB (0-255) to HSL.

    :returns: Tuple of (h, s, l) with h in [0, 360), s and l in [0, 100]
    """
    r /= 255.0
    g /= 255.0
    b /= 255.0

    max_c = max(r, g, b)
    min_c = min(r, g, b)
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
            h = (g - b) / delta + (6.0 if g < b else 0.0)
        elif max_c == g:
            h = (b - r) / delta + 2.0
        else:
            h = (r - g) / delta + 4.0

        h = (h * 60.0) % 360.0

    return h, s * 100.0, l * 100.0


def parse_color(text: str) -> tuple[int, int, int]:
    """Parse a user supplied color.

    Accepts hex (``#FF5733``, ``ff5733``, ``f53``) or a decimal triple
    (``255,87,51``) whose channels are each at most 255.

    :param text: Color string
    :returns: Tuple of (r, g, b) integers
    :raises InvalidColorFormat: If the string matches neither form
    """
    if not isinstance(text, str):
        raise InvalidColorFormat(repr(text), f"expected str, got {type(text).__name__}")

    if is_hex(text):
        return hex_to_rgb(text)

    match = _RGB_RE.match(text)
    if match is None:
        raise InvalidColorFormat(text)

    r, g, b = (int(part) for part in match.groups())
    if r > 255 or g > 255 or b > 255:
        raise InvalidColorFormat(text, "channels must be at most 255")
    return r, g, b


def normalize_hex(text: str) -> str:
    """Return the canonical ``#RRGGBB`` form of any accepted color string."""
    return rgb_to_hex(*parse_color(text))


@dataclass(frozen=True)
class TargetColor:
    """Immutable target of one solve: the RGB triple and its HSL."""

    rgb: tuple[float, float, float]
    hsl: tuple[float, float, float]

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> TargetColor:
        for value in (r, g, b):
            if not 0 <= value <= 255:
                raise InvalidColorFormat(f"{r},{g},{b}", "channels must be in [0, 255]")
        return cls(rgb=(float(r), float(g), float(b)), hsl=rgb_to_hsl(r, g, b))

    @classmethod
    def from_string(cls, text: str) -> TargetColor:
        """Build a target from a hex or ``r,g,b`` string."""
        return cls.from_rgb(*parse_color(text))

    @property
    def hex(self) -> str:
        return rgb_to_hex(*self.rgb)
