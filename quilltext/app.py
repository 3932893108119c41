"""Application session: windows, restoring them, and files opened from outside."""

from __future__ import annotations

import os
import queue
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from quilltext.db import Bounds, Database
from quilltext.editor import Editor
from quilltext.settings import SettingsManager

FILE_URL_PREFIX = "file://"
DEFAULT_WINDOW_SIZE = (400.0, 320.0)
MIN_WINDOW_SIZE = (200.0, 160.0)

PathArg = Union[str, "os.PathLike[str]"]


class OpenListener:
    """Receives batches of URLs the system asks the application to open."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[list[str]] = queue.SimpleQueue()

    def open_urls(self, urls: Iterable[str]) -> None:
        """Queue the paths of the ``file://`` URLs; others are dropped."""
        paths = [url[len(FILE_URL_PREFIX):] for url in urls if url.startswith(FILE_URL_PREFIX)]
        self._queue.put(paths)

    def try_next(self) -> Optional[list[str]]:
        """The next queued batch of paths, or None when nothing is waiting."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def __iter__(self) -> Iterator[list[str]]:
        while (batch := self.try_next()) is not None:
            yield batch


def bounds_for_path(
    db: Database, path: Optional[PathArg], display_ids: Iterable[Optional[uuid.UUID]]
) -> Optional[Bounds]:
    """Stored bounds of ``path`` on the first listed display that has some.

    None means the window should be centred at ``DEFAULT_WINDOW_SIZE``.
    """
    if path is None:
        return None
    positions = db.window_positions(path)
    for display_id in display_ids:
        if display_id is None:
            continue
        for position in positions:
            if position.display_id == display_id:
                return position.bounds
    return None


@dataclass
class Window:
    editor: Editor
    bounds: Optional[Bounds]


class Application:
    """All open document windows and the state they share."""

    def __init__(
        self,
        db: Database,
        settings_manager: Optional[SettingsManager] = None,
        display_ids: Iterable[Optional[uuid.UUID]] = (),
    ) -> None:
        self.db = db
        self.settings_manager = (
            settings_manager if settings_manager is not None else SettingsManager()
        )
        self.display_ids = tuple(display_ids)
        self.windows: list[Window] = []

    def open_window(
        self, file_id: Optional[uuid.UUID] = None, file_path: Optional[PathArg] = None
    ) -> Window:
        """Open a window for a file, or an empty one, and record it for the session."""
        bounds = bounds_for_path(self.db, file_path, self.display_ids)
        file_id = self.db.open_windows_add(file_id, file_path)
        unsaved = self.db.tmp_file_load(file_id)

        editor = Editor(file_id, self.db, self.settings_manager, on_close=self._forget)
        if file_path is not None:
            editor.read_file(file_path, unsaved)

        window = Window(editor, bounds)
        self.windows.append(window)
        return window

    def _forget(self, editor: Editor) -> None:
        self.windows = [window for window in self.windows if window.editor is not editor]

    def file_new(self) -> Window:
        return self.open_window(None, None)

    def open_file(self, path: PathArg) -> Window:
        return self.open_window(None, Path(path))

    def restore_session(self, listener: Optional[OpenListener] = None) -> list[Window]:
        """Reopen last session's windows, then any queued files.

        An empty window is opened when there was nothing to restore or open.
        """
        opened: list[Window] = []
        for old in self.db.open_windows():
            path = Path(old.file_path) if old.file_path is not None else None
            opened.append(self.open_window(old.file_id, path))

        urls = listener.try_next() if listener is not None else None
        if urls is not None:
            opened.extend(self.open_window(None, Path(url)) for url in urls)
        elif not opened:
            opened.append(self.open_window(None, None))
        return opened

    def process_pending(self, listener: OpenListener) -> list[Window]:
        """Open a window for every path queued on ``listener``."""
        return [self.open_window(None, Path(url)) for batch in listener for url in batch]