"""Tests for editor key dispatch, cursor movement and file handling."""

from pathlib import Path

import pytest

from termpad.config import EditorConfig
from termpad.core.editor import Editor
from termpad.core.keys import Key, ctrl_key
from termpad.core.syntax import C_PROFILE


def type_text(editor: Editor, text: str) -> None:
    for ch in text:
        editor.process_key(ord(ch))


def contents(editor: Editor) -> list:
    return editor.buffer.lines()


@pytest.fixture
def editor() -> Editor:
    return Editor(EditorConfig(), screenrows=5, screencols=20)


class TestEditing:
    """Tests for text entry through process_key."""

    def test_typing_and_enter(self, editor: Editor) -> None:
        type_text(editor, "hi")
        editor.process_key(Key.ENTER)
        type_text(editor, "x")
        assert contents(editor) == [b"hi", b"x"]
        assert (editor.cy, editor.cx) == (1, 1)

    def test_backspace_joins_rows(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"ab", b"cd"])
        editor.cy, editor.cx = 1, 0
        editor.process_key(Key.BACKSPACE)
        assert contents(editor) == [b"abcd"]
        assert (editor.cy, editor.cx) == (0, 2)

    def test_delete_removes_char_under_cursor(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"abc"])
        editor.cx = 1
        editor.process_key(Key.DEL)
        assert contents(editor) == [b"ac"]
        assert editor.cx == 1

    def test_control_keys_not_inserted(self, editor: Editor) -> None:
        editor.process_key(ctrl_key('l'))
        editor.process_key(Key.ESCAPE)
        editor.process_key(ctrl_key('a'))
        assert contents(editor) == []

    def test_home_and_end(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"hello"])
        editor.process_key(Key.END)
        assert editor.cx == 5
        editor.process_key(Key.HOME)
        assert editor.cx == 0


class TestCursor:
    """Tests for cursor movement and scrolling."""

    def test_left_wraps_to_previous_row(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"abc", b"de"])
        editor.cy, editor.cx = 1, 0
        editor.move_cursor(Key.ARROW_LEFT)
        assert (editor.cy, editor.cx) == (0, 3)

    def test_right_wraps_to_next_row(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"abc", b"de"])
        editor.cx = 3
        editor.move_cursor(Key.ARROW_RIGHT)
        assert (editor.cy, editor.cx) == (1, 0)

    def test_vertical_move_clamps_column(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"abcdef", b"ab"])
        editor.cx = 6
        editor.move_cursor(Key.ARROW_DOWN)
        assert (editor.cy, editor.cx) == (1, 2)

    def test_down_stops_past_last_row(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"a"])
        for _ in range(3):
            editor.move_cursor(Key.ARROW_DOWN)
        assert editor.cy == 1

    def test_scroll_follows_cursor(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"line"] * 20)
        editor.cy = 12
        editor.scroll()
        assert editor.rowoff == 8

        editor.cy = 2
        editor.scroll()
        assert editor.rowoff == 2

    def test_scroll_uses_rendered_column(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"\t\t\tx"])
        editor.cx = 3
        editor.scroll()
        assert editor.rx == 24
        assert editor.coloff == 5

    def test_page_down(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"x"] * 30)
        editor.process_key(Key.PAGE_DOWN)
        assert editor.cy == 9


class TestQuit:
    """Tests for the unsaved changes guard."""

    def test_clean_buffer_quits(self, editor: Editor) -> None:
        assert editor.process_key(ctrl_key('q')) is False

    def test_dirty_buffer_needs_confirmation(self, editor: Editor) -> None:
        type_text(editor, "x")
        assert editor.process_key(ctrl_key('q')) is True
        assert "3 more times" in editor.get_message()
        assert editor.process_key(ctrl_key('q')) is True
        assert editor.process_key(ctrl_key('q')) is True
        assert editor.process_key(ctrl_key('q')) is False

    def test_other_key_resets_counter(self, editor: Editor) -> None:
        type_text(editor, "x")
        editor.process_key(ctrl_key('q'))
        editor.process_key(ctrl_key('q'))
        editor.process_key(Key.ARROW_LEFT)
        assert editor.quit_times == 3


class TestFiles:
    """Tests for open and save."""

    def test_open(self, editor: Editor, tmp_path: Path) -> None:
        path = tmp_path / "main.c"
        path.write_bytes(b"int a;\r\n\tb\n")

        editor.open(str(path))
        assert contents(editor) == [b"int a;", b"\tb"]
        assert editor.buffer.dirty == 0
        assert editor.buffer.profile is C_PROFILE

    def test_save(self, editor: Editor, tmp_path: Path) -> None:
        path = tmp_path / "out.txt"
        editor.filename = str(path)
        type_text(editor, "ab")

        editor.process_key(ctrl_key('s'))
        assert path.read_bytes() == b"ab\n"
        assert editor.buffer.dirty == 0
        assert editor.get_message() == "3 bytes written to disk"

    def test_save_failure_keeps_dirty(self, editor: Editor, tmp_path: Path) -> None:
        editor.filename = str(tmp_path / "missing" / "out.txt")
        type_text(editor, "ab")
        dirty = editor.buffer.dirty

        editor.process_key(ctrl_key('s'))
        assert editor.buffer.dirty == dirty
        assert editor.get_message().startswith("Can't save! I/O error")

    def test_save_as_prompt(self, editor: Editor, tmp_path: Path) -> None:
        type_text(editor, "int")
        editor.process_key(ctrl_key('s'))
        assert editor.save_prompt is not None

        type_text(editor, str(tmp_path / "new.c"))
        editor.process_key(Key.ENTER)

        assert editor.save_prompt is None
        assert (tmp_path / "new.c").read_bytes() == b"int\n"
        assert editor.buffer.profile is C_PROFILE
        assert editor.buffer.dirty == 0

    def test_save_as_cancel(self, editor: Editor) -> None:
        type_text(editor, "x")
        editor.process_key(ctrl_key('s'))
        editor.process_key(Key.ESCAPE)
        assert editor.save_prompt is None
        assert editor.filename is None
        assert editor.get_message() == "Save aborted"


class TestDrawing:
    """Tests for the data handed to the screen painter."""

    def test_draw_rows_past_end(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"a", b"b"])
        lines = editor.draw_rows()
        assert len(lines) == 5
        assert lines[2:] == [None, None, None]
        assert lines[0][0][0] == b"a"

    def test_draw_rows_horizontal_offset(self, editor: Editor) -> None:
        editor.buffer.load_lines([b"0123456789" * 3])
        editor.coloff = 25
        assert editor.draw_rows()[0][0][0] == b"56789"

    def test_status_bar(self, editor: Editor) -> None:
        left, right = editor.status_bar()
        assert left.startswith("[No Name] - 0 lines")
        assert right == "no ft | 1/0"

        type_text(editor, "x")
        left, _ = editor.status_bar()
        assert left.endswith("(modified)")

    def test_welcome_message(self, editor: Editor) -> None:
        assert editor.welcome_message().startswith("termpad -- v")
