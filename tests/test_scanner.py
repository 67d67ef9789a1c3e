"""Tests for the documentation comment scanner."""

import textwrap
from pathlib import Path

import pytest

from apidoc.parsers.scanner import (
    CommentScanner,
    ScannedComment,
    is_word_char,
    scan_chunks,
    scan_file,
    scan_source,
)


class TestWordChars:
    """Tests for token character classification."""

    @pytest.mark.parametrize("ch", ["a", "Z", "7", ".", "_"])
    def test_word_chars(self, ch: str) -> None:
        assert is_word_char(ch)

    @pytest.mark.parametrize("ch", [" ", "\n", ":", "=", "(", "*", "/", "'"])
    def test_separators(self, ch: str) -> None:
        assert not is_word_char(ch)


class TestScanSource:
    """Tests for scanning complete source strings."""

    def test_no_comments(self) -> None:
        assert scan_source("var a = 1;\n") == []

    def test_single_comment_flushed_at_end(self) -> None:
        result = scan_source("/** Hello */\nfoo: function() {}")
        assert result == [ScannedComment(" Hello ", "foo", "function")]

    def test_comments_in_file_order(self) -> None:
        source = textwrap.dedent("""\
            /** first */
            Ext.Panel = Ext.extend(Ext.Container, {
            /** second */
            title: 'x',
        """)
        result = scan_source(source)
        assert [c.body for c in result] == [" first ", " second "]
        assert result[0].first_token == "Ext.Panel"
        assert result[0].second_token == "Ext.extend"
        assert result[1].first_token == "title"
        assert result[1].second_token == "x"

    def test_missing_tokens_are_empty(self) -> None:
        result = scan_source("/** a */ /** b */")
        assert result[0] == ScannedComment(" a ", "", "")
        assert result[1] == ScannedComment(" b ", "", "")

    def test_single_trailing_token(self) -> None:
        result = scan_source("/** doc */\nshow;")
        assert result[0].first_token == "show"
        assert result[0].second_token == ""

    def test_only_two_tokens_captured(self) -> None:
        result = scan_source("/** doc */ one two three")
        assert (result[0].first_token, result[0].second_token) == ("one", "two")

    def test_underscore_and_dot_in_tokens(self) -> None:
        result = scan_source("/** doc */ this._el.dom = my_value;")
        assert result[0].first_token == "this._el.dom"
        assert result[0].second_token == "my_value"

    def test_function_declaration_tokens(self) -> None:
        result = scan_source("/** doc */\nfunction doLayout(a) {}")
        assert result[0].first_token == "function"
        assert result[0].second_token == "doLayout"

    def test_plain_block_comment_is_code(self) -> None:
        result = scan_source("/* plain */ /** doc */ x")
        assert len(result) == 1
        assert result[0].body == " doc "

    def test_multiline_body_preserved(self) -> None:
        source = "/**\n * @class Foo\n * Bar\n */\n"
        result = scan_source(source)
        assert result[0].body == "\n * @class Foo\n * Bar\n "

    def test_unterminated_comment_not_emitted_twice(self) -> None:
        result = scan_source("/** a */ x /** never closed")
        assert result == [ScannedComment(" a ", "x", "")]

    def test_empty_comment(self) -> None:
        result = scan_source("/***/ y")
        assert result == [ScannedComment("", "y", "")]


class TestIncrementalFeed:
    """Tests for feeding the scanner in chunks."""

    def test_markers_split_across_chunks(self) -> None:
        chunks = ["/", "*", "* body *", "/ na", "me: fun", "ction"]
        result = list(scan_chunks(chunks))
        assert result == [ScannedComment(" body ", "name", "function")]

    def test_feed_yields_previous_comment_on_open(self) -> None:
        scanner = CommentScanner()
        assert list(scanner.feed("/** one */ a b ")) == []
        emitted = list(scanner.feed("/** two */"))
        assert emitted == [ScannedComment(" one ", "a", "b")]
        assert list(scanner.close()) == [ScannedComment(" two ", "", "")]

    def test_close_without_comments(self) -> None:
        scanner = CommentScanner()
        list(scanner.feed("var x;"))
        assert list(scanner.close()) == []


class TestScanFile:
    """Tests for file-based scanning."""

    def test_scan_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Panel.js"
        path.write_text("/** @class Ext.Panel */\n/** @cfg {String} title */\n")
        result = list(scan_file(str(path)))
        assert len(result) == 2
        assert result[0].body == " @class Ext.Panel "

    def test_missing_file_logs_and_yields_nothing(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        result = list(scan_file(str(tmp_path / "missing.js")))
        assert result == []
        assert "Failed to read" in caplog.text

    def test_undecodable_file_aborts(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "bad.js"
        path.write_bytes(b"/** ok */ a /** \xff\xfe */")
        result = list(scan_file(str(path), encoding="ascii"))
        assert result == []
        assert "Failed to read" in caplog.text
