"""Test error messages, position accuracy, and context snippets."""

import pytest

from loxcore.errors import LexError, ParseError
from loxcore.lexer import lex as tokenize
from loxcore.parser import parse_source
from loxcore.tokens import Position


class TestLexErrors:
    def test_unterminated_string(self):
        with pytest.raises(LexError, match="unterminated string"):
            tokenize('"unterminated')

    def test_unexpected_character(self):
        with pytest.raises(LexError, match="unexpected character '@'"):
            tokenize("1 + @")

    def test_trailing_dot_is_not_a_token(self):
        with pytest.raises(LexError, match="unexpected character '.'"):
            tokenize("1.")

    def test_non_ascii_identifier_rejected(self):
        with pytest.raises(LexError, match="unexpected character 'é'"):
            tokenize("é")

    def test_no_partial_result(self):
        # The error surfaces even though valid tokens preceded it
        with pytest.raises(LexError):
            tokenize("1 + 2 + 3 $")


class TestErrorPositions:
    def test_unexpected_character_position(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1 + @")
        err = exc_info.value
        assert err.position.line == 1
        assert err.position.start == 4
        assert err.position.column(err.source) == 5

    def test_error_on_second_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1 +\n  #")
        err = exc_info.value
        assert err.position.line == 2
        assert err.position.column(err.source) == 3

    def test_unterminated_string_spans_from_quote(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('1 + "abc')
        err = exc_info.value
        assert err.position.start == 4
        assert err.position.current == 8


class TestErrorFormatting:
    def test_format_contains_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("some + text @ more")
        formatted = exc_info.value.format()
        assert "some + text @ more" in formatted

    def test_format_contains_carets(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('"abc')
        formatted = exc_info.value.format()
        assert "^^^^" in formatted

    def test_format_contains_error_prefix(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("@")
        formatted = exc_info.value.format()
        assert formatted.startswith("error: unexpected character")

    def test_format_contains_position(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("@")
        formatted = exc_info.value.format()
        assert "<input>:1:1" in formatted

    def test_format_with_custom_filename(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("@")
        formatted = exc_info.value.format("test.lox")
        assert "test.lox:1:1" in formatted

    def test_multiline_error_position(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1\n+\n@")
        formatted = exc_info.value.format()
        assert "3:1" in formatted

    def test_str_is_formatted(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("(1")
        assert str(exc_info.value).startswith("error: expected ')'")

    def test_multiline_span_underlines_to_end_of_line(self):
        err = LexError("test error", Position(0, 9, 2), '"ab\ncd" +')
        formatted = err.format("test.lox")
        assert "error: test error" in formatted
        assert '"ab' in formatted
        assert formatted.endswith("^^^")

    def test_parse_error_without_source(self):
        err = ParseError("invalid expression", Position(3, 4, 1))
        assert "error: invalid expression" in err.format()
