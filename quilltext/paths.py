"""Location of the per-user application data directory."""

from __future__ import annotations

from pathlib import Path

import platformdirs

APP_DIR_NAME = "quilltext"
DEBUG_APP_DIR_NAME = "quilltext-debug"


def app_data_path(debug: bool = False) -> Path:
    """Return the application's data directory, creating it if it is missing.

    Creation failures are ignored; the path is returned either way.
    """
    base = Path(platformdirs.user_data_path())
    path = base / (DEBUG_APP_DIR_NAME if debug else APP_DIR_NAME)
    if not path.exists():
        try:
            path.mkdir()
        except OSError:
            pass
    return path