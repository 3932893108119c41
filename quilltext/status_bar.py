"""Status line: soft-wrap toggle and cursor/selection position."""

from __future__ import annotations

from typing import Optional

from quilltext.text_input import TextInput


class StatusBar:
    """Reports on, and toggles settings of, a text input."""

    def __init__(self, text_input: Optional[TextInput]) -> None:
        self.text_input = text_input

    def toggle_soft_wrap(self) -> None:
        if self.text_input is None:
            return
        self.text_input.set_soft_wrap(not self.text_input.soft_wrap_enabled)

    def soft_wrap_status(self) -> bool:
        if self.text_input is None:
            return False
        return self.text_input.soft_wrap_enabled

    def selection_format(self) -> str:
        """``line:column`` of the cursor, one-based, plus the selection size."""
        text_input = self.text_input
        if text_input is None:
            return ""

        content = text_input.content
        cursor = text_input.cursor_offset()
        line_idx = content.char_to_line(cursor)
        column = cursor - content.line_to_char(line_idx)

        selected = text_input.selected_range
        if not selected:
            selection = ""
        else:
            start_line = content.char_to_line(selected.start)
            end_line = content.char_to_line(selected.stop)
            line_count = abs(start_line - end_line)
            chars = abs(selected.start - selected.stop)
            if line_count > 0:
                selection = f" ({line_count + 1} lines, {chars} chars)"
            else:
                selection = f" ({chars} chars)"

        return f"{line_idx + 1}:{column + 1}{selection}"