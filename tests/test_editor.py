import uuid

import pytest

from quilltext.db import Bounds, Database, WindowPosition
from quilltext.editor import ABOUT_PROMPT, CLOSE_PROMPT, CloseChoice, Editor
from quilltext.theme_selector import ThemeSelector
from quilltext.title_bar import DIRTY_MARKER


@pytest.fixture
def db():
    database = Database()
    yield database
    database.close()


@pytest.fixture
def editor(db):
    return Editor(uuid.uuid4(), db)


@pytest.fixture
def note(tmp_path):
    path = tmp_path / "note.md"
    path.write_bytes(b"hello\nworld")
    return path


def test_read_file_loads_clean_content(editor, note):
    editor.read_file(note)
    assert editor.text_input.content.text == "hello\nworld"
    assert editor.text_input.is_dirty is False
    assert editor.text_input.cursor_offset() == 0
    assert editor.text_input.file_path == note


def test_read_file_prefers_unsaved_content(editor, note):
    editor.read_file(note, "unsaved")
    assert editor.text_input.content.text == "unsaved"
    assert editor.text_input.is_dirty is True
    assert editor.title_bar.title() == DIRTY_MARKER + "note.md"


def test_read_missing_file_leaves_text_empty(editor, tmp_path):
    missing = tmp_path / "missing.txt"
    editor.read_file(missing)
    assert editor.text_input.content.text == ""
    assert editor.text_input.file_path == missing


def test_read_file_applies_stored_word_wrap(db, editor, note):
    db.update_path_settings(note, True)
    editor.read_file(note)
    assert editor.text_input.soft_wrap_enabled is True


def test_edits_are_kept_as_unsaved_content(db, editor):
    editor.text_input.insert("draft")
    assert db.tmp_file_load(editor.file_id) == "draft"


def test_save_file_writes_and_clears_unsaved(db, editor, note):
    editor.read_file(note)
    editor.text_input.insert("new ")
    editor.text_input.set_soft_wrap(True)
    assert editor.save() is True
    assert note.read_bytes() == b"new hello\nworld"
    assert editor.text_input.is_dirty is False
    assert db.tmp_file_load(editor.file_id) is None
    assert db.path_settings(note).word_wrap is True


def test_save_round_trips_crlf(editor, tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"a\r\nb")
    editor.read_file(path)
    assert editor.save_file(path) is True
    assert path.read_bytes() == b"a\r\nb"


def test_save_without_path_uses_prompt(editor, tmp_path):
    target = tmp_path / "out.txt"
    editor.text_input.insert("abc")
    assert editor.save(lambda: target) is True
    assert target.read_text(encoding="utf-8") == "abc"
    assert editor.text_input.file_path == target


def test_cancelled_save_writes_nothing(editor, tmp_path):
    editor.text_input.insert("abc")
    assert editor.save(lambda: None) is False
    assert editor.text_input.is_dirty is True
    assert list(tmp_path.iterdir()) == []


def test_failed_write_keeps_document_dirty(editor, tmp_path):
    editor.text_input.insert("abc")
    assert editor.save_file(tmp_path) is False
    assert editor.text_input.is_dirty is True


def test_clean_editor_may_close(editor):
    assert editor.allowed_to_close_window() is True
    assert editor.pending_prompt is None


def test_dirty_editor_asks_before_closing(editor):
    editor.text_input.insert("abc")
    assert editor.allowed_to_close_window() is False
    assert editor.pending_prompt == CLOSE_PROMPT
    assert CLOSE_PROMPT.buttons == ("Save", "Don't Save", "Abort")


def test_dont_save_closes_without_writing(db, tmp_path):
    closed = []
    editor = Editor(uuid.uuid4(), db, on_close=closed.append)
    editor.text_input.insert("abc")
    editor.allowed_to_close_window()
    assert editor.resolve_close(CloseChoice.DONT_SAVE) is True
    assert closed == [editor]
    assert editor.closed is True
    assert list(tmp_path.iterdir()) == []


def test_abort_keeps_window_open(editor):
    editor.text_input.insert("abc")
    editor.allowed_to_close_window()
    assert editor.resolve_close(CloseChoice.ABORT) is False
    assert editor.closed is False
    assert editor.pending_prompt is None


def test_save_choice_writes_then_closes(editor, note):
    editor.read_file(note)
    editor.text_input.insert("x")
    assert editor.resolve_close(CloseChoice.SAVE) is True
    assert note.read_bytes() == b"xhello\nworld"
    assert editor.closed is True


def test_window_should_close_forgets_window(db):
    file_id = db.open_windows_add()
    editor = Editor(file_id, db)
    assert editor.window_should_close() is True
    assert db.open_windows() == []


def test_close_window_refuses_when_dirty(editor):
    editor.text_input.insert("abc")
    assert editor.close_window() is False
    assert editor.closed is False


def test_save_window_bounds_under_file_path(db, editor, note):
    editor.read_file(note)
    display = uuid.uuid4()
    bounds = Bounds(1.0, 2.0, 300.0, 200.0)
    editor.save_window_bounds(display, bounds)
    assert db.window_positions(note) == [WindowPosition(display, bounds)]


def test_save_window_bounds_without_path_uses_empty_path(db, editor):
    display = uuid.uuid4()
    bounds = Bounds(5.0, 6.0, 400.0, 320.0)
    editor.save_window_bounds(display, bounds)
    assert db.window_positions("") == [WindowPosition(display, bounds)]


def test_about_prompt(editor):
    assert editor.about() == ABOUT_PROMPT
    assert ABOUT_PROMPT.detail == "a little #DecemberAdventure text editor"


def test_toggle_theme_opens_then_closes(editor):
    view = editor.toggle_theme()
    assert isinstance(view, ThemeSelector)
    assert editor.modal_manager.active_view is view
    assert editor.toggle_theme() is None
    assert editor.modal_manager.active_view is None


def test_open_search_shows_bar(editor):
    editor.open_search()
    assert editor.search_view.visible is True