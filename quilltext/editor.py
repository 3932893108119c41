"""A document window: text area, bars, search, theme picker and file handling."""

from __future__ import annotations

import functools
import logging
import os
import uuid
from enum import Enum
from pathlib import Path
from typing import Callable, NamedTuple, Optional, Union

from quilltext.db import Bounds, Database
from quilltext.modal import ModalManager
from quilltext.search import SearchView
from quilltext.settings import SettingsManager
from quilltext.status_bar import StatusBar
from quilltext.text_input import CONTENT_CHANGED, TextInput, TextInputMode
from quilltext.theme_selector import ThemeSelector
from quilltext.title_bar import TitleBar

logger = logging.getLogger(__name__)

PathArg = Union[str, "os.PathLike[str]"]
PathPrompt = Callable[[], Optional[PathArg]]


class CloseChoice(Enum):
    """Answers to the unsaved-changes prompt, in button order."""

    SAVE = 0
    DONT_SAVE = 1
    ABORT = 2


class Prompt(NamedTuple):
    message: str
    detail: str
    buttons: tuple[str, ...]


ABOUT_PROMPT = Prompt("text", "a little #DecemberAdventure text editor", ("Ok",))
CLOSE_PROMPT = Prompt(
    "Close without saving?", "Data will be lost", ("Save", "Don't Save", "Abort")
)


def _read_text(path: PathArg) -> Optional[str]:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return None


class Editor:
    """One open document and the views around it.

    Every recorded edit is stored as unsaved content under ``file_id`` until
    the document is saved.
    """

    def __init__(
        self,
        file_id: uuid.UUID,
        db: Database,
        settings_manager: Optional[SettingsManager] = None,
        text_input: Optional[TextInput] = None,
        on_close: Optional[Callable[[Editor], None]] = None,
    ) -> None:
        self.file_id = file_id
        self.db = db
        self.settings_manager = (
            settings_manager if settings_manager is not None else SettingsManager()
        )
        self.text_input = text_input if text_input is not None else TextInput(TextInputMode.FULL)
        self.title_bar = TitleBar(self.text_input)
        self.status_bar = StatusBar(self.text_input)
        self.search_view = SearchView(self.text_input)
        self.modal_manager = ModalManager()
        self.pending_prompt: Optional[Prompt] = None
        self.closed = False
        self._on_close = on_close
        self._unsubscribe = self.text_input.subscribe(CONTENT_CHANGED, self._store_unsaved)

    def _store_unsaved(self, source: TextInput) -> None:
        self.db.tmp_file_save(self.file_id, source.content.text)

    def read_file(self, path: PathArg, previous_content: Optional[str] = None) -> None:
        """Load a file, or the unsaved content kept for it, into the text area."""
        is_dirty = previous_content is not None
        new_content = previous_content if is_dirty else _read_text(path)

        text_input = self.text_input
        text_input.set_file_path(path)
        if new_content is not None:
            text_input.insert(new_content)
        text_input.mark_dirty(is_dirty)
        text_input.move_to(0)

        settings = self.db.path_settings(path)
        if settings is not None:
            text_input.set_soft_wrap(settings.word_wrap)

    def save(self, prompt_for_path: Optional[PathPrompt] = None) -> bool:
        """Save to the current file, asking for a path when there is none."""
        path = self.text_input.file_path
        if path is not None:
            return self.save_file(path)
        chosen = prompt_for_path() if prompt_for_path is not None else None
        return self.save_as(chosen)

    def save_as(self, path: Optional[PathArg]) -> bool:
        """Save under a new path; a missing path means the prompt was cancelled."""
        if path is None:
            return False
        self.text_input.set_file_path(path)
        return self.save_file(path)

    def save_file(self, path: PathArg) -> bool:
        """Write the content to ``path``; returns whether the write succeeded."""
        try:
            with open(path, "w", encoding="utf-8", newline="") as handle:
                handle.write(self.text_input.content.text)
        except (OSError, UnicodeEncodeError) as error:
            logger.error("could not save %s: %s", path, error)
            saved = False
        else:
            self.text_input.mark_dirty(False)
            saved = True

        self.db.update_path_settings(path, self.text_input.soft_wrap_enabled).tmp_file_delete(
            self.file_id
        )
        return saved

    def allowed_to_close_window(self) -> bool:
        """True when clean; otherwise raise the unsaved-changes prompt and refuse."""
        if not self.text_input.is_dirty:
            return True
        self.pending_prompt = CLOSE_PROMPT
        return False

    def resolve_close(
        self, choice: Optional[CloseChoice], prompt_for_path: Optional[PathPrompt] = None
    ) -> bool:
        """Act on the answer to the close prompt; returns whether the window closed."""
        self.pending_prompt = None
        if choice is CloseChoice.SAVE:
            self.save(prompt_for_path)
            self._close()
            return True
        if choice is CloseChoice.DONT_SAVE:
            self._close()
            return True
        return False

    def window_should_close(self) -> bool:
        """The platform asks to close the window: forget it for the next session."""
        self.db.open_windows_remove(self.file_id)
        return self.allowed_to_close_window()

    def close_window(self) -> bool:
        if self.allowed_to_close_window():
            self._close()
            return True
        return False

    def _close(self) -> None:
        self.closed = True
        self._unsubscribe()
        if self._on_close is not None:
            self._on_close(self)

    def save_window_bounds(self, display_id: uuid.UUID, bounds: Bounds) -> None:
        """Remember where this file's window sits on a display."""
        path = self.text_input.file_path
        self.db.update_window_position(str(path) if path is not None else "", display_id, bounds)

    def about(self) -> Prompt:
        self.pending_prompt = ABOUT_PROMPT
        return ABOUT_PROMPT

    def toggle_theme(self) -> Optional[ThemeSelector]:
        """Open the theme selector, or close it if it is showing."""
        return self.modal_manager.toggle_modal(
            functools.partial(ThemeSelector, self.settings_manager)
        )

    def open_search(self) -> None:
        self.search_view.show()


__all__ = ["ABOUT_PROMPT", "CLOSE_PROMPT", "CloseChoice", "Editor", "Path", "Prompt"]