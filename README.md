# quilltext

quilltext is the model of a small plain-text editor, kept apart from any
windowing toolkit. It holds the state and behaviour of editor windows, but
draws nothing.

## What is in it

- `quilltext.buffer` — `TextBuffer`: text addressed by character offsets,
  with conversions between characters, UTF-8 bytes and lines, and undo/redo
  stacks.
- `quilltext.command` — `InsertCommand` and `DeleteCommand`, the undoable
  edits the buffer records.
- `quilltext.text_input` — `TextInput`, `TextInputMode` and `Clipboard`:
  cursor and selection, character, word, line and document movement,
  backspace and delete, copy, cut and paste (the whole current line when
  nothing is selected), marked text for input methods, a dirty flag, a
  soft-wrap flag, highlight ranges, and `"new_line"` / `"content_changed"`
  events via `subscribe`.
- `quilltext.char_kind` — `CharKind.of(c)` classifies a character as
  whitespace, word or punctuation for word movement.
- `quilltext.blink` — `BlinkManager`: cursor blinking driven by epochs; the
  timer can be replaced by passing a `schedule` function.
- `quilltext.search` — `find_matches` returns the UTF-8 byte ranges of a term,
  optionally ASCII case-insensitive; `SearchView` runs a query against a
  `TextInput`, highlights the matches and steps through them on repeat.
- `quilltext.status_bar` — `StatusBar.selection_format()` gives
  `line:column` plus the selection size; it also toggles soft wrap.
- `quilltext.title_bar` — `file_name` and `TitleBar.title()`, which prefixes
  a marker when there are unsaved changes.
- `quilltext.theme`, `quilltext.settings` — `Rgba`, `rgb`, `rgba`, `Theme`,
  `ThemeMode`, `ThemeManager` with a dark and a light built-in theme, and
  `SettingsManager` holding the font family and the active theme.
- `quilltext.theme_selector`, `quilltext.modal` — `ThemeSelector` (up, down,
  select, close) and `ModalManager`, which shows at most one modal at a time.
- `quilltext.db` — `Database`: SQLite storage for window positions per file
  and display, per-file word-wrap settings, unsaved content and the set of
  open windows.
- `quilltext.paths` — `app_data_path(debug)`, the per-user data directory.
- `quilltext.editor` — `Editor`: one document with reading, saving, the
  unsaved-changes close prompt (`CloseChoice`) and storage of unsaved
  content on every edit.
- `quilltext.app` — `Application`, `OpenListener` and `bounds_for_path`:
  opening windows, restoring the last session and opening files handed over
  as `file://` URLs.

## Requirements

Python 3.10 or later. The only dependency is `platformdirs`, used to find the
per-user data directory.

## Examples

Editing with undo:

```python
from quilltext.text_input import TextInput

field = TextInput()
field.insert("hello world")
field.move_to_word_start()
field.select_word_end()
field.cut()
field.content.text      # "hello "
field.undo()
field.content.text      # "hello world"
```

Searching:

```python
from quilltext.search import find_matches

find_matches("fox", "The Fox and the fox", case_insensitive=True)
# [range(4, 7), range(16, 19)]
```

Window titles:

```python
from quilltext.title_bar import file_name

file_name("notes/today.md")   # "today.md"
```

Themes:

```python
from quilltext.theme import ThemeManager

manager = ThemeManager()
dark, light = manager.themes()
manager.set_theme(light)
```

Session storage:

```python
from quilltext.db import Database

with Database() as db:            # in memory; Database.open_default() uses the data directory
    file_id = db.open_windows_add(None, "notes/today.md")
    db.tmp_file_save(file_id, "unsaved draft")
    db.tmp_file_load(file_id)     # "unsaved draft"
    db.open_windows_remove(file_id)
```

`Database.open_default()` opens `db.sqlite` in the per-user data directory;
with `debug=True` a separate directory is used. Window positions and file
settings older than six months are removed whenever a database is opened.

## What it does not do

- It has no graphical interface and no command to start: nothing is drawn,
  there are no menus or key bindings, and file dialogs are stood in for by
  functions passed to `Editor.save` and `Editor.resolve_close`.
- There is no text layout, so no vertical cursor movement by visual line,
  no mouse hit-testing and no scrolling; soft wrap is only a stored flag.
- There is no syntax highlighting.
- `Clipboard` is in-process only; it does not reach the system clipboard.

## Running the tests

Install the `test` extra and run `pytest` from the project root.