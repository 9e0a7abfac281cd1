"""Tests for the JavaScript data literal reader/writer."""

from __future__ import annotations

import pytest

from docindex_tools.shared import (
    DocIndexParseError,
    JsLiteralError,
    dump_js_string,
    parse_js_literal,
    skip_whitespace,
)


class TestParseValues:

    def test_mixed_quotes_and_trailing_comma(self) -> None:
        text = """{"+":[{'crate':'nom','ty':8,'name':'Add'}],}"""
        value, end = parse_js_literal(text)
        assert value == {"+": [{"crate": "nom", "ty": 8, "name": "Add"}]}
        assert end == len(text)

    def test_identifier_keys(self) -> None:
        value, _ = parse_js_literal("{crate: 'x', $ty_1: 3}")
        assert value == {"crate": "x", "$ty_1": 3}

    def test_keywords_and_numbers(self) -> None:
        value, _ = parse_js_literal("[true, false, null, undefined, -4, 2.5, 1e3, 0x1F]")
        assert value == [True, False, None, None, -4, 2.5, 1000.0, 31]

    def test_trailing_comma_in_array(self) -> None:
        value, _ = parse_js_literal("[1, 2, ]")
        assert value == [1, 2]

    def test_key_order_preserved_and_later_duplicate_wins(self) -> None:
        value, _ = parse_js_literal('{"b": 1, "a": 2, "b": 3}')
        assert list(value) == ["b", "a"]
        assert value["b"] == 3

    def test_comments_between_tokens(self) -> None:
        text = "{ // line\n 'a' /* block */ : [1 /* x */] }"
        value, _ = parse_js_literal(text)
        assert value == {"a": [1]}

    def test_start_offset_and_end(self) -> None:
        text = "initSidebarItems({\"fn\":[]});"
        value, end = parse_js_literal(text, len("initSidebarItems("))
        assert value == {"fn": []}
        assert text[end:] == ");"


class TestStrings:

    def test_simple_escapes(self) -> None:
        value, _ = parse_js_literal(r"'a\'b\"c\\d\n\t'")
        assert value == "a'b\"c\\d\n\t"

    def test_unicode_escapes(self) -> None:
        value, _ = parse_js_literal(r'"… \x41 \u{1F600}"')
        assert value == "… A \U0001F600"

    def test_surrogate_pair_is_combined(self) -> None:
        value, _ = parse_js_literal(r'"\ud83d\ude00"')
        assert value == "\U0001F600"

    def test_lone_high_surrogate_rejected(self) -> None:
        with pytest.raises(JsLiteralError, match="unpaired surrogate"):
            parse_js_literal(r"'x\uD800'")

    def test_lone_low_surrogate_rejected(self) -> None:
        with pytest.raises(JsLiteralError, match="unpaired surrogate") as excinfo:
            parse_js_literal(r"['ab\udc00']")
        assert excinfo.value.column == 5

    def test_braced_surrogate_rejected(self) -> None:
        with pytest.raises(JsLiteralError, match="unpaired surrogate"):
            parse_js_literal(r"'\u{D83D}'")

    def test_line_continuation(self) -> None:
        value, _ = parse_js_literal("'ab\\\ncd'")
        assert value == "abcd"

    def test_non_ascii_passes_through(self) -> None:
        value, _ = parse_js_literal("'in…'")
        assert value == "in…"

    def test_unterminated_string(self) -> None:
        with pytest.raises(JsLiteralError, match="unterminated string"):
            parse_js_literal("'abc")

    def test_raw_newline_in_string(self) -> None:
        with pytest.raises(JsLiteralError):
            parse_js_literal("'ab\ncd'")


class TestErrors:

    def test_error_reports_line_and_column(self) -> None:
        with pytest.raises(JsLiteralError) as excinfo:
            parse_js_literal('{\n  "a": 1\n  "b": 2\n}')
        assert excinfo.value.line == 3
        assert excinfo.value.column == 3
        assert "expected ',' or '}'" in str(excinfo.value)

    def test_is_a_parse_error_and_value_error(self) -> None:
        with pytest.raises(DocIndexParseError):
            parse_js_literal("[1, 2")
        with pytest.raises(ValueError):
            parse_js_literal("@")

    def test_empty_input(self) -> None:
        with pytest.raises(JsLiteralError, match="unexpected end of input"):
            parse_js_literal("   ")

    def test_bare_identifier_value_rejected(self) -> None:
        with pytest.raises(JsLiteralError, match="unexpected character"):
            parse_js_literal("[foo]")


class TestDumpString:

    def test_single_quote_escaping(self) -> None:
        assert dump_js_string("render pass' internals") == "'render pass\\' internals'"

    def test_double_quote_leaves_single_quotes(self) -> None:
        assert dump_js_string("it's", '"') == '"it\'s"'

    def test_non_ascii_written_through(self) -> None:
        assert dump_js_string("like in `*v =…") == "'like in `*v =…'"

    def test_control_characters(self) -> None:
        assert dump_js_string("a\nb\x01") == "'a\\nb\\u0001'"

    def test_backslash_and_quote_read_back(self) -> None:
        raw = "C:\\path 'quoted'"
        value, _ = parse_js_literal(dump_js_string(raw))
        assert value == raw

    def test_rejects_other_quotes(self) -> None:
        with pytest.raises(ValueError):
            dump_js_string("x", "`")


def test_skip_whitespace_handles_bom_and_comments() -> None:
    text = "\ufeff  // c\n/* d */ x"
    assert text[skip_whitespace(text, 0)] == "x"
