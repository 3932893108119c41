import pytest

from quilltext.buffer import TextBuffer
from quilltext.command import DeleteCommand, InsertCommand


def test_lines_of_simple_text():
    buf = TextBuffer("hello\nworld")
    assert buf.line_count() == 2
    assert buf.line(0) == "hello\n"
    assert buf.line(1) == "world"
    assert buf.line_to_char(1) == 6
    assert buf.char_to_line(6) == 1
    assert buf.char_to_line(5) == 0


def test_empty_buffer_has_one_line():
    buf = TextBuffer()
    assert buf.line_count() == 1
    assert buf.line(0) == ""
    assert buf.char_to_line(0) == 0
    assert len(buf) == 0


def test_trailing_newline_makes_empty_last_line():
    buf = TextBuffer("a\n")
    assert buf.line_count() == 2
    assert buf.line(1) == ""
    assert buf.char_to_line(2) == 1


def test_crlf_is_one_break():
    buf = TextBuffer("a\r\nb")
    assert buf.line_count() == 2
    assert buf.char_to_line(2) == 0
    assert buf.line(0) == "a\r\n"
    assert buf.line_to_char(1) == 3


def test_line_to_char_past_last_line_is_end():
    buf = TextBuffer("ab\ncd")
    assert buf.line_to_char(buf.line_count()) == len(buf)
    with pytest.raises(IndexError):
        buf.line_to_char(buf.line_count() + 1)


def test_lines_join_back_to_text():
    text = "one\ntwo\r\nthree\rfour\u2028five"
    buf = TextBuffer(text)
    assert "".join(buf.line(i) for i in range(buf.line_count())) == text
    for i in range(buf.line_count()):
        assert buf.char_to_line(buf.line_to_char(i)) == i


def test_byte_char_round_trip():
    text = "aé€😀\nz"
    buf = TextBuffer(text)
    assert buf.len_bytes == len(text.encode("utf-8"))
    for i in range(len(text) + 1):
        assert buf.byte_to_char(buf.char_to_byte(i)) == i


def test_byte_inside_multibyte_char_maps_to_that_char():
    buf = TextBuffer("aé")
    start = buf.char_to_byte(1)
    assert buf.byte_to_char(start + 1) == 1


def test_index_errors():
    buf = TextBuffer("abc")
    with pytest.raises(IndexError):
        buf.char_to_line(4)
    with pytest.raises(IndexError):
        buf.char_to_byte(-1)
    with pytest.raises(IndexError):
        buf.byte_to_char(10)
    with pytest.raises(IndexError):
        buf.line(1)
    with pytest.raises(IndexError):
        buf.slice(2, 1)


def test_slice():
    buf = TextBuffer("hello world")
    assert buf.slice(6, 11) == "world"
    assert buf.slice(3, 3) == ""


def test_execute_insert_and_undo_redo():
    buf = TextBuffer("hello")
    sel = buf.execute(InsertCommand(5, " world", range(5, 5)))
    assert str(buf) == "hello world"
    assert sel == range(11, 11)
    assert buf.line_count() == 1

    assert buf.undo() == range(5, 5)
    assert str(buf) == "hello"

    assert buf.redo() == range(11, 11)
    assert str(buf) == "hello world"


def test_execute_delete_and_undo():
    buf = TextBuffer("ab\ncd")
    sel = buf.execute(DeleteCommand(1, "b\nc", range(1, 4)))
    assert str(buf) == "ad"
    assert sel == range(1, 1)
    assert buf.line_count() == 1
    assert buf.undo() == range(1, 4)
    assert str(buf) == "ab\ncd"
    assert buf.line_count() == 2


def test_execute_clears_redo():
    buf = TextBuffer("x")
    buf.execute(InsertCommand(1, "y", range(1, 1)))
    buf.undo()
    assert len(buf.redo_stack) == 1
    buf.execute(InsertCommand(1, "z", range(1, 1)))
    assert buf.redo_stack == []
    assert buf.redo() is None
    assert str(buf) == "xz"


def test_undo_on_empty_history_returns_none():
    buf = TextBuffer("text")
    assert buf.undo() is None
    assert str(buf) == "text"


def test_undo_all_restores_original():
    buf = TextBuffer("start")
    buf.execute(InsertCommand(0, ">> ", range(0, 0)))
    buf.execute(DeleteCommand(3, "st", range(3, 5)))
    buf.execute(InsertCommand(len(buf), "\nend", range(0, 0)))
    while buf.undo() is not None:
        pass
    assert str(buf) == "start"
    assert len(buf.redo_stack) == 3


def test_splice_does_not_touch_history():
    buf = TextBuffer("abcdef")
    buf.splice(1, 3, "XY\n")
    assert str(buf) == "aXY\ndef"
    assert buf.line_count() == 2
    assert buf.undo_stack == []
    with pytest.raises(IndexError):
        buf.splice(5, 100, "")