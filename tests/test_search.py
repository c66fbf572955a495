"""Tests for the search engine and the incremental search prompt."""

import pytest

from termpad.core.buffer import Buffer
from termpad.core.editor import Editor
from termpad.core.highlight import Highlight
from termpad.core.keys import Key
from termpad.core.prompt import Prompt, PromptStatus
from termpad.core.syntax import C_PROFILE
from termpad.utils.search import BACKWARD, FORWARD, SearchEngine, SearchMatch, SearchSession


@pytest.fixture
def buf() -> Buffer:
    buffer = Buffer()
    buffer.load_lines([b"foo", b"bar", b"baz"])
    return buffer


def match_tags(buffer: Buffer) -> list:
    return [row.index for row in buffer.rows if Highlight.MATCH in row.highlight]


class TestSearchEngine:
    """Tests for SearchEngine.advance."""

    def test_wraps_back_to_same_row(self, buf: Buffer) -> None:
        session = SearchSession(last_match=0)
        match = SearchEngine(buf).advance("foo", FORWARD, session)
        assert match is not None
        assert match.row == 0
        assert session.last_match == 0

    def test_first_search_starts_at_top(self, buf: Buffer) -> None:
        session = SearchSession()
        match = SearchEngine(buf).advance("foo", FORWARD, session)
        assert match.row == 0

    def test_forward_and_backward(self, buf: Buffer) -> None:
        engine = SearchEngine(buf)
        session = SearchSession()

        assert engine.advance("ba", FORWARD, session).row == 1
        assert engine.advance("ba", FORWARD, session).row == 2
        assert engine.advance("ba", FORWARD, session).row == 1
        assert engine.advance("ba", BACKWARD, session).row == 2
        assert engine.advance("ba", BACKWARD, session).row == 1

    def test_backward_without_previous_match_goes_forward(self, buf: Buffer) -> None:
        session = SearchSession()
        match = SearchEngine(buf).advance("ba", BACKWARD, session)
        assert match.row == 1
        assert session.direction == FORWARD

    def test_no_match(self, buf: Buffer) -> None:
        session = SearchSession()
        assert SearchEngine(buf).advance("zzz", FORWARD, session) is None
        assert session.last_match is None
        assert match_tags(buf) == []

    def test_empty_query(self, buf: Buffer) -> None:
        assert SearchEngine(buf).advance("", FORWARD, SearchSession()) is None

    def test_empty_buffer(self) -> None:
        assert SearchEngine(Buffer()).advance("x", FORWARD, SearchSession()) is None

    def test_match_is_tagged(self, buf: Buffer) -> None:
        session = SearchSession()
        SearchEngine(buf).advance("az", FORWARD, session)
        assert buf.rows[2].highlight == [Highlight.NORMAL, Highlight.MATCH, Highlight.MATCH]

    def test_overlay_restored_on_next_match(self) -> None:
        buffer = Buffer(profile=C_PROFILE)
        buffer.load_lines([b"int a;", b"int b;"])
        before = [list(row.highlight) for row in buffer.rows]

        engine = SearchEngine(buffer)
        session = SearchSession()
        engine.advance("int", FORWARD, session)
        assert buffer.rows[0].highlight[:3] == [Highlight.MATCH] * 3

        engine.advance("int", FORWARD, session)
        assert buffer.rows[0].highlight == before[0]
        assert buffer.rows[1].highlight[:3] == [Highlight.MATCH] * 3

        engine.end(session)
        assert [row.highlight for row in buffer.rows] == before
        assert session.saved_overlay is None

    def test_match_column_is_raw_offset(self) -> None:
        buffer = Buffer()
        buffer.load_lines([b"\tfoo"])
        match = SearchEngine(buffer).advance("foo", FORWARD, SearchSession())
        assert match == SearchMatch(row=0, column=1, rendered_column=8)

    def test_searches_rendered_text(self) -> None:
        buffer = Buffer(tab_stop=4)
        buffer.load_lines([b"a\tb"])
        match = SearchEngine(buffer).advance("a   b", FORWARD, SearchSession())
        assert match is not None
        assert match.row == 0


class TestPrompt:
    """Tests for Prompt."""

    def test_typing_and_backspace(self) -> None:
        prompt = Prompt("Find: {}")
        for ch in "abc":
            assert prompt.feed(ord(ch)) is PromptStatus.EDITING
        prompt.feed(Key.BACKSPACE)
        assert prompt.text == "ab"
        assert prompt.message == "Find: ab"

    def test_enter_needs_text(self) -> None:
        prompt = Prompt("{}")
        assert prompt.feed(Key.ENTER) is PromptStatus.EDITING
        prompt.feed(ord('x'))
        assert prompt.feed(Key.ENTER) is PromptStatus.CONFIRMED

    def test_escape_cancels(self) -> None:
        assert Prompt("{}").feed(Key.ESCAPE) is PromptStatus.CANCELLED

    def test_control_keys_ignored(self) -> None:
        prompt = Prompt("{}")
        prompt.feed(1)
        prompt.feed(Key.ARROW_UP)
        assert prompt.text == ""


class TestIncrementalSearch:
    """Tests for the search prompt driven through the editor."""

    @pytest.fixture
    def editor(self) -> Editor:
        editor = Editor()
        editor.buffer.load_lines([b"one", b"two", b"three", b"two again"])
        return editor

    def type_keys(self, editor: Editor, keys) -> None:
        for key in keys:
            editor.process_key(key)

    def test_moves_cursor_to_match(self, editor: Editor) -> None:
        editor.start_search()
        self.type_keys(editor, [ord('t'), ord('w')])
        assert (editor.cy, editor.cx) == (1, 0)
        assert editor.get_message().startswith("Search: tw")

    def test_arrows_step_between_matches(self, editor: Editor) -> None:
        editor.start_search()
        self.type_keys(editor, [ord('t'), ord('w'), ord('o')])
        assert editor.cy == 1

        editor.process_key(Key.ARROW_DOWN)
        assert editor.cy == 3

        editor.process_key(Key.ARROW_DOWN)
        assert editor.cy == 1

        editor.process_key(Key.ARROW_UP)
        assert editor.cy == 3

    def test_cancel_restores_cursor_and_highlight(self, editor: Editor) -> None:
        editor.start_search()
        self.type_keys(editor, [ord('t'), ord('h')])
        assert editor.cy == 2

        editor.process_key(Key.ESCAPE)
        assert editor.search is None
        assert (editor.cy, editor.cx) == (0, 0)
        assert match_tags(editor.buffer) == []

    def test_confirm_keeps_cursor(self, editor: Editor) -> None:
        editor.start_search()
        self.type_keys(editor, [ord('a'), ord('g'), Key.ENTER])
        assert editor.search is None
        assert (editor.cy, editor.cx) == (3, 4)
        assert match_tags(editor.buffer) == []
