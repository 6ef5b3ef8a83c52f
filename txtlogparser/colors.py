"""Colour values and the allocator that hands out colours to filters and searches."""

from __future__ import annotations

import re
from dataclasses import dataclass

_PREDEFINED_COLORS = (
    "#F44336",
    "#DFEE15",
    "#37B027",
    "#187DCA",
    "#CA692D",
    "#2195F3",
    "#03F4D8",
    "#D400C9",
    "#002396",
    "#37F73D",
    "#67AE4A",
    "#39C6DC",
    "#FFEB3B",
    "#FFC107",
    "#2600FF",
    "#FF5722",
    "#E22ED3",
    "#67E1AC",
    "#C3F748",
    "#2D5E71",
)

_DEFAULT_COLOR = "#000000"
_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]+")


def predefined_colors() -> list[str]:
    """The built-in palette, in allocation order."""
    return list(_PREDEFINED_COLORS)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format components as ``#rrggbb`` in lower case."""
    if min(r, g, b) < 0:
        raise ValueError("colour components must not be negative")
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb`` or ``rrggbb`` into an ``(r, g, b)`` tuple."""
    digits = hex_str[1:] if hex_str.startswith("#") else hex_str
    if not _HEX_DIGITS.fullmatch(digits):
        raise ValueError(f"not a hex colour: {hex_str!r}")
    value = int(digits, 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def calculate_luminance(r: int, g: int, b: int) -> float:
    """Relative luminance as defined by WCAG 2.0, between 0 and 1."""

    def channel(c: int) -> float:
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def is_color_valid(hex_str: str) -> bool:
    """True for a well-formed hex colour of medium luminance (0.2 to 0.8)."""
    if not hex_str:
        return False
    expected = 7 if hex_str[0] == "#" else 6
    if len(hex_str) != expected:
        return False
    try:
        r, g, b = hex_to_rgb(hex_str)
    except ValueError:
        return False
    return 0.2 <= calculate_luminance(r, g, b) <= 0.8


@dataclass(frozen=True, order=True)
class ColorData:
    """An RGB colour; ordering compares red, then green, then blue."""

    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def from_hex(cls, hex_str: str) -> "ColorData":
        return cls(*hex_to_rgb(hex_str))

    def luminance(self) -> float:
        """Perceived brightness, 0.299R + 0.587G + 0.114B, on a 0-255 scale."""
        return 0.299 * self.red + 0.587 * self.green + 0.114 * self.blue

    def contrast_ratio(self, background: "ColorData") -> float:
        """WCAG-style contrast ratio between this colour and ``background``."""
        fg = self.luminance() / 255.0
        bg = background.luminance() / 255.0
        lighter, darker = max(fg, bg), min(fg, bg)
        return (lighter + 0.05) / (darker + 0.05)

    def to_hex(self) -> str:
        return rgb_to_hex(self.red, self.green, self.blue)


class FilterSearchColorManager:
    """Tracks which colours are in use and proposes the next free one."""

    def __init__(self) -> None:
        self._index_to_color = dict(enumerate(_PREDEFINED_COLORS))
        self._color_to_index = {color: i for i, color in self._index_to_color.items()}
        self._used_predefined: set[int] = set()
        self._unused_predefined: set[int] = set(self._index_to_color)
        self._used_custom: set[str] = set()
        self._unused_custom: set[str] = set()

    def next_color(self) -> str:
        """Suggest a colour without reserving it.

        Released custom colours come first, then the palette in order,
        and black when everything is taken.
        """
        if self._unused_custom:
            return min(self._unused_custom)
        if self._unused_predefined:
            return self._index_to_color[min(self._unused_predefined)]
        return _DEFAULT_COLOR

    def push_color(self, color: str) -> None:
        """Return a colour to the free pool."""
        upper = color.upper()
        if upper == _DEFAULT_COLOR:
            return
        index = self._color_to_index.get(upper)
        if index is not None:
            self._unused_predefined.add(index)
            self._used_predefined.discard(index)
            return
        self._unused_custom.add(upper)
        self._used_custom.discard(upper)

    def pop_color(self, color: str) -> None:
        """Mark a colour as taken."""
        upper = color.upper()
        index = self._color_to_index.get(upper)
        if index is not None:
            self._unused_predefined.discard(index)
            self._used_predefined.add(index)
            return
        self._unused_custom.discard(upper)
        self._used_custom.add(upper)