"""SQLite storage for window positions, file settings and unsaved content."""

from __future__ import annotations

import os
import sqlite3
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Union

from quilltext.paths import app_data_path

DB_FILE_NAME = "db.sqlite"

PathLike = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


class _Migration(NamedTuple):
    name: str
    statement: str


_MIGRATIONS = (
    _Migration(
        "0_create_window_positions",
        """CREATE TABLE window_positions (
            id          INTEGER PRIMARY KEY,
            file_path   TEXT NOT NULL,
            display_id  BLOB NOT NULL,
            origin_x    REAL NOT NULL,
            origin_y    REAL NOT NULL,
            size_width  REAL NOT NULL,
            size_height REAL NOT NULL,
            created_at  TEXT DEFAULT current_timestamp,
            UNIQUE(file_path, display_id)
        )""",
    ),
    _Migration(
        "1_create_file_settings",
        """CREATE TABLE file_settings (
            id          INTEGER PRIMARY KEY,
            file_path   TEXT NOT NULL UNIQUE,
            word_wrap   INTEGER DEFAULT 0,
            created_at  TEXT DEFAULT current_timestamp
        )""",
    ),
    _Migration(
        "2_create_tmp_files",
        """CREATE TABLE tmp_files (
            id          INTEGER PRIMARY KEY,
            file_id     BLOB NOT NULL UNIQUE,
            content     TEXT,
            created_at  TEXT DEFAULT current_timestamp
        )""",
    ),
    _Migration(
        "3_create_open_windows",
        """CREATE TABLE open_windows (
            id          INTEGER PRIMARY KEY,
            file_id     BLOB NOT NULL UNIQUE,
            file_path   TEXT DEFAULT NULL,
            created_at  TEXT DEFAULT current_timestamp
        )""",
    ),
)


@dataclass(frozen=True)
class Bounds:
    origin_x: float
    origin_y: float
    width: float
    height: float


@dataclass(frozen=True)
class WindowPosition:
    display_id: uuid.UUID
    bounds: Bounds


@dataclass(frozen=True)
class PathSettings:
    word_wrap: bool


@dataclass(frozen=True)
class OpenWindow:
    file_id: uuid.UUID
    file_path: str | None


def _path_str(path: PathLike) -> str | None:
    """Return the path as valid UTF-8 text, or None when it is not representable."""
    raw = os.fspath(path)
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return raw


def _uuid_from_blob(value: object) -> uuid.UUID | None:
    if isinstance(value, (bytes, bytearray, memoryview)) and len(value) == 16:
        return uuid.UUID(bytes=bytes(value))
    return None


class Database:
    """Application state kept between runs."""

    def __init__(self, path: PathLike = ":memory:") -> None:
        self._connection = sqlite3.connect(os.fspath(path), isolation_level=None)
        try:
            self._migrate()
            self._cleanup()
        except sqlite3.Error:
            self._connection.close()
            raise

    @classmethod
    def open_default(cls, debug: bool = False) -> Database:
        """Open the database in the application's data directory."""
        return cls(Path(app_data_path(debug)) / DB_FILE_NAME)

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _execute_quietly(self, sql: str, params: tuple = ()) -> None:
        try:
            self._connection.execute(sql, params)
        except sqlite3.Error:
            pass

    def window_positions(self, file_path: PathLike) -> list[WindowPosition]:
        """Stored positions for a file, one per display."""
        path_str = _path_str(file_path)
        if path_str is None:
            return []
        try:
            rows = self._connection.execute(
                """SELECT display_id, origin_x, origin_y, size_width, size_height
                FROM window_positions
                WHERE file_path = ?""",
                (path_str,),
            ).fetchall()
        except sqlite3.Error:
            return []
        positions = []
        for blob, x, y, width, height in rows:
            display_id = _uuid_from_blob(blob)
            if display_id is None:
                continue
            positions.append(
                WindowPosition(display_id, Bounds(float(x), float(y), float(width), float(height)))
            )
        return positions

    def update_window_position(
        self, file_path: PathLike, display_id: uuid.UUID, bounds: Bounds
    ) -> None:
        path_str = _path_str(file_path)
        if path_str is None:
            return
        self._execute_quietly(
            """INSERT INTO window_positions
                (file_path, display_id, origin_x, origin_y, size_width, size_height)
            VALUES (?1, ?2, ?3, ?4, ?5, ?6)
            ON CONFLICT (file_path, display_id) DO
            UPDATE SET origin_x = ?3, origin_y = ?4, size_width = ?5, size_height = ?6""",
            (
                path_str,
                display_id.bytes,
                float(bounds.origin_x),
                float(bounds.origin_y),
                float(bounds.width),
                float(bounds.height),
            ),
        )

    def path_settings(self, file_path: PathLike) -> PathSettings | None:
        path_str = _path_str(file_path)
        if path_str is None:
            return None
        try:
            row = self._connection.execute(
                "SELECT word_wrap FROM file_settings WHERE file_path = ?", (path_str,)
            ).fetchone()
        except sqlite3.Error:
            return None
        if row is None or row[0] is None:
            return None
        return PathSettings(word_wrap=bool(row[0]))

    def update_path_settings(self, file_path: PathLike, word_wrap: bool) -> Database:
        """Store the word-wrap setting for a file; returns self for chaining."""
        path_str = _path_str(file_path)
        if path_str is None:
            return self
        self._execute_quietly(
            """INSERT INTO file_settings (file_path, word_wrap)
            VALUES (?1, ?2)
            ON CONFLICT (file_path) DO
            UPDATE SET word_wrap = ?2""",
            (path_str, int(bool(word_wrap))),
        )
        return self

    def tmp_file_load(self, file_id: uuid.UUID) -> str | None:
        try:
            row = self._connection.execute(
                "SELECT content FROM tmp_files WHERE file_id = ?", (file_id.bytes,)
            ).fetchone()
        except sqlite3.Error:
            return None
        if row is None or not isinstance(row[0], str):
            return None
        return row[0]

    def tmp_file_save(self, file_id: uuid.UUID, content: str) -> None:
        self._execute_quietly(
            """INSERT INTO tmp_files (file_id, content)
            VALUES (?1, ?2)
            ON CONFLICT (file_id) DO
            UPDATE SET content = ?2""",
            (file_id.bytes, content),
        )

    def tmp_file_delete(self, file_id: uuid.UUID) -> None:
        self._execute_quietly("DELETE FROM tmp_files WHERE file_id = ?", (file_id.bytes,))

    def open_windows(self) -> list[OpenWindow]:
        """Windows that were open when the application last ran."""
        try:
            rows = self._connection.execute(
                "SELECT file_id, file_path FROM open_windows"
            ).fetchall()
        except sqlite3.Error:
            return []
        windows = []
        for blob, file_path in rows:
            file_id = _uuid_from_blob(blob)
            if file_id is None:
                continue
            windows.append(
                OpenWindow(file_id, file_path if isinstance(file_path, str) else None)
            )
        return windows

    def open_windows_add(
        self, file_id: uuid.UUID | None = None, file_path: PathLike | None = None
    ) -> uuid.UUID:
        """Record an open window, generating an id when none is given."""
        if file_id is None:
            file_id = uuid.uuid4()
        if file_path is not None:
            self._execute_quietly(
                "INSERT INTO open_windows (file_id, file_path) VALUES (?, ?)",
                (file_id.bytes, _path_str(file_path)),
            )
        else:
            self._execute_quietly(
                "INSERT INTO open_windows (file_id) VALUES (?)", (file_id.bytes,)
            )
        return file_id

    def open_windows_remove(self, file_id: uuid.UUID) -> None:
        self._execute_quietly("DELETE FROM open_windows WHERE file_id = ?", (file_id.bytes,))

    def _cleanup(self) -> None:
        self._connection.executescript(
            """
            DELETE FROM window_positions WHERE created_at < datetime('now', '-6 month');
            DELETE FROM file_settings WHERE created_at < datetime('now', '-6 month');
            """
        )

    def _migrate(self) -> None:
        self._execute_quietly(
            """CREATE TABLE IF NOT EXISTS migrations (
                id          INTEGER PRIMARY KEY,
                migration   TEXT
            )"""
        )
        done = {
            row[0]
            for row in self._connection.execute("SELECT migration FROM migrations")
            if isinstance(row[0], str)
        }
        for migration in sorted(_MIGRATIONS, key=lambda m: m.name):
            if migration.name in done:
                continue
            self._connection.execute(migration.statement)
            self._connection.execute(
                "INSERT INTO migrations (migration) VALUES (?)", (migration.name,)
            )