import pytest

from quilltext.blink import BlinkManager
from quilltext.text_input import (
    CONTENT_CHANGED,
    NEW_LINE,
    Clipboard,
    TextInput,
    TextInputMode,
)


def make(text="", mode=TextInputMode.FULL, clipboard=None):
    blink = BlinkManager(schedule=lambda delay, callback: None)
    field = TextInput(mode=mode, clipboard=clipboard, blink_manager=blink)
    if text:
        field.insert(text)
    return field


def test_insert_places_cursor_after_text_and_marks_dirty():
    field = make("hello")
    assert field.content.text == "hello"
    assert field.selected_range == range(5, 5)
    assert field.cursor_offset() == len("hello")
    assert field.is_dirty is True


def test_content_changed_fires_for_each_recorded_edit():
    field = make()
    seen = []
    field.subscribe(CONTENT_CHANGED, lambda f: seen.append(f.content.text))
    field.insert("ab")
    field.select_all()
    field.insert("c")
    assert seen == ["ab", "", "c"]


def test_unsubscribe_stops_notifications():
    field = make()
    seen = []
    stop = field.subscribe(CONTENT_CHANGED, lambda f: seen.append(1))
    field.insert("a")
    stop()
    field.insert("b")
    assert seen == [1]


def test_subscribe_unknown_event_raises():
    with pytest.raises(ValueError):
        make().subscribe("nope", lambda f: None)


def test_new_line_in_single_line_mode_only_emits():
    field = make("abc", mode=TextInputMode.SINGLE_LINE)
    events = []
    field.subscribe(NEW_LINE, lambda f: events.append(f.content.text))
    field.new_line()
    assert events == ["abc"]
    assert field.content.text == "abc"


def test_new_line_in_full_mode_inserts_break():
    field = make("ab")
    field.move_to(1)
    field.new_line()
    assert field.content.text == "a\nb"
    assert field.cursor_offset() == 2


def test_new_line_without_split_goes_to_line_end():
    text = "ab\ncd"
    field = make(text)
    field.move_to(0)
    field.new_line_without_split()
    assert field.content.text == "ab\n\ncd"
    assert field.cursor_offset() == text.index("\n") + 1


def test_replace_selection_and_undo_redo():
    field = make("hello world")
    start = "hello world".index("world")
    field.move_to(start)
    field.select_to(len("hello world"))
    field.insert("there")
    assert field.content.text == "hello there"
    field.undo()
    assert field.content.text == "hello "
    field.undo()
    assert field.content.text == "hello world"
    assert field.selected_range == range(start, len("hello world"))
    field.redo()
    assert field.content.text == "hello "


def test_backspace_and_delete():
    field = make("abc")
    field.backspace()
    assert field.content.text == "ab"
    field.move_to(0)
    field.delete()
    assert field.content.text == "b"
    assert field.cursor_offset() == 0


def test_backspace_at_start_changes_nothing():
    field = make("abc")
    field.move_to(0)
    field.backspace()
    assert field.content.text == "abc"
    assert field.selected_range == range(0, 0)


def test_select_to_before_anchor_reverses_selection():
    field = make("abcdef")
    field.move_to(5)
    field.select_to(2)
    assert field.selected_range == range(2, 5)
    assert field.selection_reversed is True
    assert field.cursor_offset() == 2


def test_left_and_right_collapse_selection():
    field = make("abcdef")
    field.move_to(1)
    field.select_to(4)
    field.left()
    assert field.selected_range == range(1, 1)
    field.select_to(4)
    field.right()
    assert field.selected_range == range(4, 4)
    field.right()
    assert field.cursor_offset() == 5


def test_home_end_and_select_all():
    text = "one\ntwo"
    field = make(text)
    field.home()
    assert field.cursor_offset() == 0
    field.end()
    assert field.cursor_offset() == len(text)
    field.select_all()
    assert field.selected_range == range(0, len(text))


def test_word_boundaries():
    text = "foo bar"
    field = make(text)
    assert field.start_of_word(len(text)) == text.index("bar")
    assert field.end_of_word(0) == text.index(" ")
    dotted = make("foo.bar")
    assert dotted.start_of_word(len("foo.bar")) == "foo.bar".index("bar")


def test_move_and_select_by_word():
    text = "foo bar"
    field = make(text)
    field.move_to_word_start()
    assert field.cursor_offset() == text.index("bar")
    field.move_to(0)
    field.select_word_end()
    assert field.selected_range == range(0, text.index(" "))


def test_line_start_and_end():
    text = "one\ntwo"
    field = make(text)
    field.move_to(text.index("w"))
    field.move_to_line_start()
    assert field.cursor_offset() == text.index("t")
    field.move_to(1)
    field.select_line_end()
    assert field.selected_range == range(1, text.index("\n"))
    field.move_to(2)
    field.select_line_start()
    assert field.selected_range == range(0, 2)


def test_select_doc_start_and_end():
    field = make("abcdef")
    field.move_to(3)
    field.select_doc_end()
    assert field.selected_range == range(3, 6)
    field.move_to(3)
    field.select_doc_start()
    assert field.selected_range == range(0, 3)


def test_copy_without_selection_copies_line():
    clipboard = Clipboard()
    field = make("one\ntwo", clipboard=clipboard)
    field.move_to(1)
    field.copy()
    assert clipboard.read() == "one\n"


def test_cut_without_selection_removes_line():
    clipboard = Clipboard()
    field = make("one\ntwo", clipboard=clipboard)
    field.move_to(1)
    field.cut()
    assert clipboard.read() == "one\n"
    assert field.content.text == "two"


def test_cut_and_paste_selection_round_trip():
    field = make("hello world")
    field.move_to(0)
    field.select_to(len("hello "))
    field.cut()
    assert field.content.text == "world"
    field.end()
    field.paste()
    assert field.content.text == "worldhello "


def test_paste_with_empty_clipboard_does_nothing():
    field = make("abc")
    field.paste()
    assert field.content.text == "abc"


def test_replace_and_mark_then_clear_marked_text():
    field = make("ab")
    field.replace_and_mark_text_in_range(None, "xy", None)
    assert field.content.text == "abxy"
    assert field.marked_range == range(2, 4)
    assert field.selected_range == range(4, 4)
    field.replace_and_mark_text_in_range(None, "zz", None)
    assert field.content.text == "ab"
    assert field.marked_range is None


def test_unmark_and_text_for_range():
    field = make("abc")
    field.replace_and_mark_text_in_range(range(0, 1), "q", None)
    field.unmark_text()
    assert field.marked_range is None
    assert field.text_for_range(0, 2) == "qb"


def test_update_selected_range_bytes_converts_to_chars():
    text = "héllo"
    field = make(text)
    start = len("hé".encode("utf-8"))
    field.update_selected_range_bytes(start, len(text.encode("utf-8")))
    assert field.selected_range == range(text.index("l"), len(text))


def test_move_to_out_of_range_raises():
    field = make("abc")
    with pytest.raises(IndexError):
        field.move_to(10)
    with pytest.raises(IndexError):
        field.select_to(-1)


def test_move_to_shows_cursor():
    field = make("abc")
    field.move_to(1)
    assert field.blink_manager.show is True
    assert field.blink_manager.paused is True


def test_settings_state():
    field = make()
    field.set_soft_wrap(True)
    field.mark_dirty(False)
    field.set_file_path("notes/today.md")
    field.highlight([range(0, 2)])
    assert field.soft_wrap_enabled is True
    assert field.is_dirty is False
    assert field.file_path.name == "today.md"
    assert field.highlights == [range(0, 2)]
    field.clear_highlights()
    assert field.highlights == []