"""Window title: file name with an unsaved-changes marker."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Optional, Union

from quilltext.text_input import TextInput

DIRTY_MARKER = "🞄"


def file_name(path: Optional[Union[str, "os.PathLike[str]"]]) -> str:
    """Final component of ``path``, or an empty string when there is none."""
    if path is None:
        return ""
    name = PurePath(path).name
    if name in ("", ".", ".."):
        return ""
    return name


class TitleBar:
    def __init__(self, text_input: Optional[TextInput]) -> None:
        self.text_input = text_input

    def title(self) -> str:
        if self.text_input is None:
            return ""
        marker = DIRTY_MARKER if self.text_input.is_dirty else ""
        return f"{marker}{file_name(self.text_input.file_path)}"