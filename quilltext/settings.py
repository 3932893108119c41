"""Editor settings and access to themes."""

from __future__ import annotations

from dataclasses import dataclass

from quilltext.theme import Theme, ThemeManager


@dataclass(frozen=True)
class Settings:
    font_family: str = "Iosevka"


class SettingsManager:
    """Owns the settings and the theme manager."""

    def __init__(self, theme_manager: ThemeManager | None = None) -> None:
        self.theme_manager = theme_manager if theme_manager is not None else ThemeManager()
        self.settings = Settings()

    @property
    def theme(self) -> Theme:
        """The active theme."""
        return self.theme_manager.active_theme

    def themes(self) -> tuple[Theme, ...]:
        return self.theme_manager.themes()

    def change_theme(self, new_theme: Theme) -> None:
        self.theme_manager.set_theme(new_theme)