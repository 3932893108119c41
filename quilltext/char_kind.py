"""Classification of characters for word movement."""

from __future__ import annotations

from enum import Enum

# str.isspace() also accepts these separators, which are not Unicode white space.
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


class CharKind(Enum):
    WHITESPACE = "whitespace"
    WORD = "word"
    PUNCTUATION = "punctuation"

    @classmethod
    def of(cls, c: str) -> CharKind:
        """Classify a single character."""
        if c.isspace() and c not in _NOT_WHITESPACE:
            return cls.WHITESPACE
        if c.isalnum() or c == "_":
            return cls.WORD
        return cls.PUNCTUATION