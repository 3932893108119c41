"""Icons shipped with the editor."""

from __future__ import annotations

from enum import Enum


class Icons(Enum):
    CLOSE = "close"
    CHARACTER_SENTENCE_CASE = "character-sentence-case"
    RADIO_BUTTON = "radio-button"
    RADIO_BUTTON_CHECKED = "radio-button-checked"

    def __str__(self) -> str:
        return self.value

    def path(self) -> str:
        """Asset path of the icon's SVG file."""
        return f"icons/{self}.svg"