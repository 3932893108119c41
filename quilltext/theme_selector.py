"""Modal list for choosing the active theme."""

from __future__ import annotations

from typing import Callable, NamedTuple

from quilltext.settings import SettingsManager


class ThemeEntry(NamedTuple):
    theme_id: str
    mode_label: str
    selected: bool
    active: bool


class ThemeSelector:
    """Keyboard-driven theme list; Enter applies, Escape dismisses."""

    def __init__(self, settings_manager: SettingsManager) -> None:
        self.settings_manager = settings_manager
        self.themes = list(settings_manager.themes())
        self.selection_idx = 0
        self._dismiss_listeners: list[Callable[[], None]] = []

    def up(self) -> None:
        if not self.themes:
            return
        if self.selection_idx == 0:
            self.selection_idx = len(self.themes) - 1
        else:
            self.selection_idx -= 1

    def down(self) -> None:
        if not self.themes:
            return
        if self.selection_idx == len(self.themes) - 1:
            self.selection_idx = 0
        else:
            self.selection_idx += 1

    def select(self) -> None:
        """Make the highlighted theme the active one."""
        if 0 <= self.selection_idx < len(self.themes):
            self.settings_manager.change_theme(self.themes[self.selection_idx])

    def close(self) -> None:
        """Ask the owner to dismiss the selector."""
        for callback in list(self._dismiss_listeners):
            callback()

    def subscribe_dismiss(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a dismiss listener; returns a function that removes it."""
        self._dismiss_listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._dismiss_listeners:
                self._dismiss_listeners.remove(callback)

        return unsubscribe

    def entries(self) -> list[ThemeEntry]:
        """Rows to display, marking the highlighted and the active theme."""
        active_id = self.settings_manager.theme.id
        return [
            ThemeEntry(
                theme_id=theme.id,
                mode_label=theme.mode.value,
                selected=idx == self.selection_idx,
                active=theme.id == active_id,
            )
            for idx, theme in enumerate(self.themes)
        ]