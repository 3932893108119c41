"""Colours and the built-in themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Rgba:
    """A colour with components in the range 0.0 to 1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def blend(self, other: Rgba) -> Rgba:
        """Draw ``other`` over this colour, keeping this colour's alpha."""
        if other.a >= 1.0:
            return other
        if other.a <= 0.0:
            return self
        keep = 1.0 - other.a
        return Rgba(
            r=self.r * keep + other.r * other.a,
            g=self.g * keep + other.g * other.a,
            b=self.b * keep + other.b * other.a,
            a=self.a,
        )


def _channel(value: int, shift: int) -> float:
    return ((value >> shift) & 0xFF) / 255.0


def rgb(hex_value: int) -> Rgba:
    """Build an opaque colour from ``0xRRGGBB``."""
    return Rgba(_channel(hex_value, 16), _channel(hex_value, 8), _channel(hex_value, 0), 1.0)


def rgba(hex_value: int) -> Rgba:
    """Build a colour from ``0xRRGGBBAA``."""
    return Rgba(
        _channel(hex_value, 24),
        _channel(hex_value, 16),
        _channel(hex_value, 8),
        _channel(hex_value, 0),
    )


class ThemeMode(Enum):
    LIGHT = "Light"
    DARK = "Dark"


@dataclass(frozen=True)
class Theme:
    id: str
    mode: ThemeMode
    background: Rgba
    editor_text: Rgba
    editor_background: Rgba
    cursor: Rgba
    selection_bg: Rgba
    hover_bg: Rgba
    scroll_bar_bg: Rgba
    scroll_bar_border: Rgba
    scroll_bar_handle_bg: Rgba
    scroll_bar_cursor_highlight: Rgba
    error: Rgba


DEFAULT_THEME = Theme(
    id="Default",
    mode=ThemeMode.DARK,
    background=rgb(0x1E1E2E),
    editor_text=rgb(0xCDD6F4),
    editor_background=rgb(0x1A1A29),
    cursor=rgb(0xCDD6F4),
    selection_bg=rgba(0x7F849C64),
    hover_bg=rgb(0x000000),
    scroll_bar_bg=rgba(0x14142033),
    scroll_bar_border=rgba(0x2E2E4D66),
    scroll_bar_handle_bg=rgba(0xAEAECD44),
    scroll_bar_cursor_highlight=rgba(0x89B4FADD),
    error=rgb(0xF38BA8),
)

OTHER_THEME = Theme(
    id="Other theme",
    mode=ThemeMode.LIGHT,
    background=rgb(0x9CA0B0),
    editor_text=rgb(0x343648),
    editor_background=rgb(0xEFF1F5),
    cursor=rgb(0xE64553),
    selection_bg=rgba(0x7C7F93AA),
    hover_bg=rgb(0x7C7F93),
    scroll_bar_bg=rgb(0xCCD0DA),
    scroll_bar_border=rgb(0x9CA0B0),
    scroll_bar_handle_bg=rgb(0x5C5F77),
    scroll_bar_cursor_highlight=rgb(0xD20F39),
    error=rgb(0xD20F39),
)


class ThemeManager:
    """Holds the available themes and the active one."""

    def __init__(self) -> None:
        self._themes: tuple[Theme, ...] = (DEFAULT_THEME, OTHER_THEME)
        self.active_theme: Theme = DEFAULT_THEME

    def themes(self) -> tuple[Theme, ...]:
        return self._themes

    def set_theme(self, new_theme: Theme) -> None:
        self.active_theme = new_theme