"""Exceptions raised by cssfilter."""

from __future__ import annotations


class InvalidColorFormat(ValueError):
    """Raised when a color string is neither hex nor an ``r,g,b`` triple."""

    def __init__(self, value: str, reason: str | None = None):
        self.value = value
        message = f"Invalid color format: {value!r}. Use hex (e.g. #FF0000) or RGB (e.g. 255,0,0)"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
