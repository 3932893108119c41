"""Undoable edits of a text document.

Positions are character offsets. Commands take the current text and return
the new text together with the selection that follows the edit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


def _insert(content: str, position: int, text: str) -> str:
    if not 0 <= position <= len(content):
        raise IndexError(f"insert position {position} out of range for length {len(content)}")
    return content[:position] + text + content[position:]


def _remove(content: str, start: int, end: int) -> str:
    if not 0 <= start <= end <= len(content):
        raise IndexError(f"range {start}..{end} out of range for length {len(content)}")
    return content[:start] + content[end:]


@dataclass(frozen=True)
class Command(ABC):
    position: int
    text: str
    old_selection: range

    @abstractmethod
    def execute(self, content: str) -> tuple[str, range]:
        """Apply the edit; return the new text and the new selection."""

    @abstractmethod
    def undo(self, content: str) -> tuple[str, range]:
        """Revert the edit; return the old text and the old selection."""

    def char_range(self) -> range:
        """Characters covered by the command's text."""
        return range(self.position, self.position + len(self.text))


class InsertCommand(Command):
    def execute(self, content: str) -> tuple[str, range]:
        new_pos = self.position + len(self.text)
        return _insert(content, self.position, self.text), range(new_pos, new_pos)

    def undo(self, content: str) -> tuple[str, range]:
        span = self.char_range()
        return _remove(content, span.start, span.stop), self.old_selection


class DeleteCommand(Command):
    def execute(self, content: str) -> tuple[str, range]:
        span = self.char_range()
        return _remove(content, span.start, span.stop), range(self.position, self.position)

    def undo(self, content: str) -> tuple[str, range]:
        return _insert(content, self.position, self.text), self.old_selection