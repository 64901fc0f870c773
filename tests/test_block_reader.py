"""
Tests for the brace block reader.

The reader must not be fooled by braces or quotes that belong to embedded
script, style or markup text:
    - braces inside any quote mode never change depth
    - escaped quotes never toggle quote mode
    - reading stops at the brace that brings depth to 0
"""

import pytest

from sqe.block_reader import read_block
from sqe.errors import UnterminatedBlockError, SQEParseError


class TestSingleLine:
    """Blocks closed on the directive's own line."""

    def test_inline_block(self):
        """Text between the braces is returned untouched."""
        assert read_block(iter([]), " Hi }") == " Hi "

    def test_brace_inside_double_quotes(self):
        """A quoted '{' does not open a nested block."""
        assert read_block(iter([]), '"{"}') == '"{"'

    def test_brace_inside_single_quotes_and_backticks(self):
        assert read_block(iter([]), "'}' `{` }") == "'}' `{` "

    def test_trailing_text_after_close_is_discarded(self):
        assert read_block(iter([]), " a } trailing") == " a "

    def test_lines_after_close_are_not_consumed(self):
        lines = iter(["next line"])
        read_block(lines, " a }")
        assert next(lines) == "next line"


class TestMultiLine:
    """Blocks spanning several lines."""

    def test_newlines_reappended(self):
        """Every fully consumed line ends with a newline, the last one doesn't."""
        lines = iter(["first", "second", "}"])
        assert read_block(lines, "") == "\nfirst\nsecond\n"

    def test_nested_braces(self):
        lines = iter(["if (x) {", "  y();", "}", "}"])
        assert read_block(lines, "") == "\nif (x) {\n  y();\n}\n"

    def test_closing_line_content_kept(self):
        lines = iter(["a", "b }"])
        assert read_block(lines, " start") == " start\na\nb "

    def test_escaped_quote_does_not_toggle(self):
        """A \\" stays inside the string; the brace after it is still quoted."""
        lines = iter(['"she said \\"still inside\\" }"', "}"])
        body = read_block(lines, "")
        assert body == '\n"she said \\"still inside\\" }"\n'

    def test_escaped_brace_outside_quotes(self):
        lines = iter(["\\} x", "}"])
        assert read_block(lines, "") == "\n\\} x\n"

    def test_quotes_do_not_nest(self):
        """A double quote inside a backtick string does not start a new mode."""
        lines = iter(['`he said "hi` }'])
        assert read_block(lines, "") == '\n`he said "hi` '

    def test_quoted_string_spanning_lines(self):
        lines = iter(["`line one }", "line two`", "}"])
        assert read_block(lines, "") == "\n`line one }\nline two`\n"

    def test_script_with_braces_and_strings(self):
        lines = iter([
            'const o = { a: "}", b: \'{\' };',
            "function f() { return `${o.a}`; }",
            "}",
        ])
        body = read_block(lines, "")
        assert "function f() { return `${o.a}`; }" in body
        assert body.endswith("}`; }\n")


class TestUnterminated:
    """Input ending before depth reaches 0."""

    def test_raises_with_start_line(self):
        with pytest.raises(UnterminatedBlockError) as exc_info:
            read_block(iter(["a", "b"]), "", start_line=7)
        assert exc_info.value.line == 7
        assert exc_info.value.kind == "unterminated-block"

    def test_is_parse_error(self):
        with pytest.raises(SQEParseError):
            read_block(iter([]), "{")

    def test_open_quote_hides_close(self):
        """A closing brace inside an unfinished string never ends the block."""
        with pytest.raises(UnterminatedBlockError):
            read_block(iter(["'oops }"]), "")

    def test_error_message_mentions_line(self):
        with pytest.raises(UnterminatedBlockError) as exc_info:
            read_block(iter([]), "", start_line=3)
        assert "line 3" in str(exc_info.value)
