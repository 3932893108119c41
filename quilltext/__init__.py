"""Model of a small text editor: buffer with undo, selections, search, themes and session storage."""

__version__ = "0.1.0"