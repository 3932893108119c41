"""Text storage with character, byte and line indexing and an undo history."""

from __future__ import annotations

from bisect import bisect_right
from itertools import accumulate
from typing import Optional

from quilltext.command import Command

_LINE_BREAKS = frozenset("\n\x0b\x0c\r\x85\u2028\u2029")


def _line_starts(text: str) -> list[int]:
    starts = [0]
    length = len(text)
    for idx, ch in enumerate(text):
        if ch not in _LINE_BREAKS:
            continue
        if ch == "\r" and idx + 1 < length and text[idx + 1] == "\n":
            continue
        starts.append(idx + 1)
    return starts


class TextBuffer:
    """A document addressed by character offsets.

    Line breaks are LF, CR, CRLF, VT, FF, NEL, LS and PS; a line holds its
    trailing break. Edits made through commands are recorded for undo.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._line_starts: Optional[list[int]] = None
        self._byte_offsets: Optional[list[int]] = None
        self.undo_stack: list[Command] = []
        self.redo_stack: list[Command] = []

    @property
    def text(self) -> str:
        return self._text

    def _set_text(self, text: str) -> None:
        self._text = text
        self._line_starts = None
        self._byte_offsets = None

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    @property
    def len_bytes(self) -> int:
        return self._offsets()[-1]

    def _starts(self) -> list[int]:
        if self._line_starts is None:
            self._line_starts = _line_starts(self._text)
        return self._line_starts

    def _offsets(self) -> list[int]:
        if self._byte_offsets is None:
            self._byte_offsets = list(
                accumulate((len(ch.encode("utf-8", "surrogatepass")) for ch in self._text), initial=0)
            )
        return self._byte_offsets

    def _check_char(self, char_idx: int) -> None:
        if not 0 <= char_idx <= len(self._text):
            raise IndexError(f"char index {char_idx} out of range for length {len(self._text)}")

    def char_to_line(self, char_idx: int) -> int:
        """Index of the line that holds ``char_idx``."""
        self._check_char(char_idx)
        return bisect_right(self._starts(), char_idx) - 1

    def line_to_char(self, line_idx: int) -> int:
        """Character offset where a line starts; one past the last line gives the end."""
        starts = self._starts()
        if line_idx == len(starts):
            return len(self._text)
        if not 0 <= line_idx < len(starts):
            raise IndexError(f"line index {line_idx} out of range for {len(starts)} lines")
        return starts[line_idx]

    def char_to_byte(self, char_idx: int) -> int:
        self._check_char(char_idx)
        return self._offsets()[char_idx]

    def byte_to_char(self, byte_idx: int) -> int:
        """Index of the character that contains ``byte_idx``."""
        offsets = self._offsets()
        if not 0 <= byte_idx <= offsets[-1]:
            raise IndexError(f"byte index {byte_idx} out of range for {offsets[-1]} bytes")
        return bisect_right(offsets, byte_idx) - 1

    def line_count(self) -> int:
        return len(self._starts())

    def line(self, line_idx: int) -> str:
        """Text of a line, including its line break."""
        starts = self._starts()
        if not 0 <= line_idx < len(starts):
            raise IndexError(f"line index {line_idx} out of range for {len(starts)} lines")
        end = starts[line_idx + 1] if line_idx + 1 < len(starts) else len(self._text)
        return self._text[starts[line_idx]:end]

    def slice(self, start: int, end: int) -> str:
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"range {start}..{end} out of range for length {len(self._text)}")
        return self._text[start:end]

    def splice(self, start: int, end: int, text: str) -> None:
        """Replace a character range without recording history."""
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"range {start}..{end} out of range for length {len(self._text)}")
        self._set_text(self._text[:start] + text + self._text[end:])

    def execute(self, command: Command) -> range:
        """Apply a command, record it for undo and return the new selection."""
        new_text, selection = command.execute(self._text)
        self._set_text(new_text)
        self.undo_stack.append(command)
        self.redo_stack.clear()
        return selection

    def undo(self) -> Optional[range]:
        """Revert the last command; return the selection before it, or None."""
        if not self.undo_stack:
            return None
        command = self.undo_stack.pop()
        new_text, selection = command.undo(self._text)
        self._set_text(new_text)
        self.redo_stack.append(command)
        return selection

    def redo(self) -> Optional[range]:
        """Reapply the last undone command; return the selection after it, or None."""
        if not self.redo_stack:
            return None
        command = self.redo_stack.pop()
        new_text, selection = command.execute(self._text)
        self._set_text(new_text)
        self.undo_stack.append(command)
        return selection