"""Editable text field: cursor, selection, clipboard, undo and word movement."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from quilltext.blink import BlinkManager
from quilltext.buffer import TextBuffer
from quilltext.char_kind import CharKind
from quilltext.command import Command, DeleteCommand, InsertCommand

NEW_LINE = "new_line"
CONTENT_CHANGED = "content_changed"
EVENTS = frozenset({NEW_LINE, CONTENT_CHANGED})

_LINE_BREAK_CHARS = "\n\x0b\x0c\r\x85\u2028\u2029"

Listener = Callable[["TextInput"], None]


class TextInputMode(Enum):
    SINGLE_LINE = "single_line"
    FULL = "full"


class Clipboard:
    """A plain in-process clipboard holding at most one string."""

    def __init__(self, text: Optional[str] = None) -> None:
        self._text = text

    def write(self, text: str) -> None:
        self._text = text

    def read(self) -> Optional[str]:
        return self._text


class TextInput:
    """A text field addressed by character offsets.

    Emits ``"new_line"`` when Enter is pressed and ``"content_changed"``
    whenever an edit is recorded in the undo history.
    """

    def __init__(
        self,
        mode: TextInputMode = TextInputMode.FULL,
        clipboard: Optional[Clipboard] = None,
        blink_manager: Optional[BlinkManager] = None,
    ) -> None:
        self.mode = mode
        self.clipboard = clipboard if clipboard is not None else Clipboard()
        self.blink_manager = blink_manager if blink_manager is not None else BlinkManager()
        self.content = TextBuffer()
        self.selected_range = range(0, 0)
        self.selection_reversed = False
        self.marked_range: Optional[range] = None
        self.highlights: list[range] = []
        self._file_path: Optional[Path] = None
        self._is_dirty = False
        self._soft_wrap = False
        self._listeners: dict[str, list[Listener]] = {event: [] for event in EVENTS}

    # -- state -------------------------------------------------------------

    @property
    def file_path(self) -> Optional[Path]:
        return self._file_path

    @property
    def is_dirty(self) -> bool:
        return self._is_dirty

    @property
    def soft_wrap_enabled(self) -> bool:
        return self._soft_wrap

    def set_file_path(self, path: Union[str, "os.PathLike[str]"]) -> None:
        self._file_path = Path(path)

    def set_soft_wrap(self, enabled: bool) -> None:
        self._soft_wrap = bool(enabled)

    def mark_dirty(self, value: bool) -> None:
        self._is_dirty = bool(value)

    def highlight(self, highlights) -> None:
        """Set the byte ranges to highlight."""
        self.highlights = list(highlights)

    def clear_highlights(self) -> None:
        self.highlights.clear()

    # -- events ------------------------------------------------------------

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        if event not in EVENTS:
            raise ValueError(f"unknown event {event!r}")
        listeners = self._listeners[event]
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def _emit(self, event: str) -> None:
        for callback in list(self._listeners[event]):
            callback(self)

    # -- editing -----------------------------------------------------------

    def _execute_command(self, command: Command) -> None:
        self.content.execute(command)
        self._is_dirty = True
        self._emit(CONTENT_CHANGED)

    def insert(self, text: str) -> None:
        self.replace_text_in_range(None, text)

    def replace_text_in_range(self, char_range: Optional[range], text: str) -> None:
        """Replace the given range, else the marked range, else the selection."""
        if char_range is not None:
            target = char_range
        elif self.marked_range is not None:
            target = self.marked_range
        else:
            target = self.selected_range

        if target.start != target.stop:
            old_text = self.content.slice(target.start, target.stop)
            self._execute_command(DeleteCommand(target.start, old_text, self.selected_range))

        if text:
            self._execute_command(InsertCommand(target.start, text, self.selected_range))

        end = target.start + len(text)
        self._update_selected_range(range(end, end))

    def replace_and_mark_text_in_range(
        self,
        char_range: Optional[range],
        new_text: str,
        new_selected_range: Optional[range],
    ) -> None:
        """Input-method composition: replace text and mark it as provisional."""
        if self.marked_range is not None:
            marked = self.marked_range
            self.marked_range = None
            self.replace_text_in_range(marked, "")
            return

        target = char_range if char_range is not None else self.selected_range
        self.content.splice(target.start, target.stop, new_text)
        length = len(new_text)
        self.marked_range = range(target.start, target.start + length)
        if new_selected_range is None:
            self.selected_range = range(target.start + length, target.start + length)
        else:
            self.selected_range = range(
                new_selected_range.start + target.start,
                new_selected_range.stop + target.stop,
            )

    def unmark_text(self) -> None:
        self.marked_range = None

    def text_for_range(self, start: int, end: int) -> str:
        return self.content.slice(start, end)

    def new_line(self) -> None:
        self._emit(NEW_LINE)
        if self.mode is not TextInputMode.FULL:
            return
        self.replace_text_in_range(None, "\n")

    def new_line_without_split(self) -> None:
        if self.mode is not TextInputMode.FULL:
            return
        self.move_to(self._end_of_line(self.cursor_offset()))
        self.replace_text_in_range(None, "\n")

    def backspace(self) -> None:
        if not self.selected_range:
            self.select_to(self._previous_boundary(self.cursor_offset()))
        self.replace_text_in_range(None, "")

    def delete(self) -> None:
        if not self.selected_range:
            self.select_to(self._next_boundary(self.cursor_offset()))
        self.replace_text_in_range(None, "")

    def undo(self) -> None:
        selection = self.content.undo()
        if selection is not None:
            self._update_selected_range(selection)

    def redo(self) -> None:
        selection = self.content.redo()
        if selection is not None:
            self._update_selected_range(selection)

    # -- clipboard ---------------------------------------------------------

    def _current_line_span(self) -> range:
        start = self._start_of_line()
        end = self._next_boundary(self._end_of_line(self.cursor_offset()))
        return range(start, end)

    def copy(self) -> None:
        """Copy the selection, or the whole current line when nothing is selected."""
        span = self.selected_range if self.selected_range else self._current_line_span()
        self.clipboard.write(self.content.slice(span.start, span.stop))

    def paste(self) -> None:
        text = self.clipboard.read()
        if text is not None:
            self.replace_text_in_range(None, text)

    def cut(self) -> None:
        """Cut the selection, or the whole current line when nothing is selected."""
        if self.selected_range:
            span = self.selected_range
            self.clipboard.write(self.content.slice(span.start, span.stop))
            self.replace_text_in_range(None, "")
        else:
            span = self._current_line_span()
            self.clipboard.write(self.content.slice(span.start, span.stop))
            self.replace_text_in_range(span, "")

    # -- movement ----------------------------------------------------------

    def left(self) -> None:
        if not self.selected_range:
            self.move_to(self._previous_boundary(self.cursor_offset()))
        else:
            self.move_to(self.selected_range.start)

    def right(self) -> None:
        if not self.selected_range:
            self.move_to(self._next_boundary(self.selected_range.stop))
        else:
            self.move_to(self.selected_range.stop)

    def home(self) -> None:
        self.move_to(0)

    def end(self) -> None:
        self.move_to(len(self.content))

    def select_left(self) -> None:
        self.select_to(self._previous_boundary(self.cursor_offset()))

    def select_right(self) -> None:
        self.select_to(self._next_boundary(self.cursor_offset()))

    def select_all(self) -> None:
        self.move_to(0)
        self.select_to(len(self.content))

    def select_word_start(self) -> None:
        self.select_to(self.start_of_word(self.cursor_offset()))

    def select_word_end(self) -> None:
        self.select_to(self.end_of_word(self.cursor_offset()))

    def select_line_start(self) -> None:
        self.select_to(self._start_of_line())

    def select_line_end(self) -> None:
        self.select_to(self._end_of_line(self.cursor_offset()))

    def select_doc_start(self) -> None:
        self.select_to(0)

    def select_doc_end(self) -> None:
        self.select_to(len(self.content))

    def move_to_word_start(self) -> None:
        self.move_to(self.start_of_word(self.cursor_offset()))

    def move_to_word_end(self) -> None:
        self.move_to(self.end_of_word(self.cursor_offset()))

    def move_to_line_start(self) -> None:
        self.move_to(self._start_of_line())

    def move_to_line_end(self) -> None:
        self.move_to(self._end_of_line(self.cursor_offset()))

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset <= len(self.content):
            raise IndexError(f"offset {offset} out of range for length {len(self.content)}")

    def move_to(self, offset: int) -> None:
        """Collapse the selection to ``offset``."""
        self._check_offset(offset)
        self.selected_range = range(offset, offset)
        self.blink_manager.pause()

    def select_to(self, offset: int) -> None:
        """Move the cursor end of the selection to ``offset``."""
        self._check_offset(offset)
        start, end = self.selected_range.start, self.selected_range.stop
        if self.selection_reversed:
            start = offset
        else:
            end = offset
        if end < start:
            self.selection_reversed = not self.selection_reversed
            start, end = end, start
        self.selected_range = range(start, end)

    def cursor_offset(self) -> int:
        if self.selection_reversed:
            return self.selected_range.start
        return self.selected_range.stop

    def update_selected_range_bytes(self, start: int, end: int) -> None:
        """Select a range given in UTF-8 byte offsets."""
        self._update_selected_range(
            range(self.content.byte_to_char(start), self.content.byte_to_char(end))
        )

    def _update_selected_range(self, selection: range) -> None:
        self.selected_range = selection
        self.marked_range = None
        self.blink_manager.pause()

    # -- helpers -----------------------------------------------------------

    def _start_of_line(self) -> int:
        return self.content.line_to_char(self.content.char_to_line(self.cursor_offset()))

    def _end_of_line(self, position: int) -> int:
        line_idx = self.content.char_to_line(position)
        line = self.content.line(line_idx)
        if line.endswith("\r\n"):
            line = line[:-2]
        else:
            line = line.rstrip(_LINE_BREAK_CHARS)[: len(line)] if line and line[-1] in _LINE_BREAK_CHARS else line
            if line and line[-1] in _LINE_BREAK_CHARS:
                line = line[:-1]
        return self.content.line_to_char(line_idx) + len(line)

    def _previous_boundary(self, offset: int) -> int:
        return offset - 1 if offset > 0 else 0

    def _next_boundary(self, offset: int) -> int:
        length = len(self.content)
        return offset + 1 if offset < length else length

    def start_of_word(self, offset: int) -> int:
        """Offset where the word before ``offset`` starts."""
        self._check_offset(offset)
        position = offset
        prev: Optional[str] = None
        consumed_punctuation = False
        for ch in reversed(self.content.text[:offset]):
            if not consumed_punctuation:
                consumed_punctuation = CharKind.of(ch) is not CharKind.PUNCTUATION
            elif prev is not None:
                prev_kind = CharKind.of(prev)
                if prev_kind is not CharKind.of(ch) and prev_kind is not CharKind.WHITESPACE:
                    break
            position -= 1
            prev = ch
        return position

    def end_of_word(self, offset: int) -> int:
        """Offset where the word after ``offset`` ends."""
        self._check_offset(offset)
        position = offset
        prev: Optional[str] = None
        consumed_punctuation = False
        for ch in self.content.text[offset:]:
            if not consumed_punctuation:
                consumed_punctuation = CharKind.of(ch) is not CharKind.PUNCTUATION
            elif prev is not None:
                prev_kind = CharKind.of(prev)
                if prev_kind is not CharKind.of(ch) and prev_kind is not CharKind.WHITESPACE:
                    break
            position += 1
            prev = ch
        return position