"""
Reader and writer for the JavaScript data literals rustdoc emits.

rustdoc's search and sidebar files are JavaScript, not JSON: object keys
may be single-quoted, records use single-quoted strings, and objects end
with a trailing comma. This module reads exactly the literal subset those
files use:

    value   := object | array | string | number | true | false | null
    object  := '{' [ key ':' value { ',' key ':' value } [','] ] '}'
    key     := string | identifier | number
    array   := '[' [ value { ',' value } [','] ] ']'
    string  := '...' | "..."   (JS escapes)

Whitespace and // or /* */ comments may appear between tokens. Objects
become dicts (insertion order kept, later duplicate keys win) and arrays
become lists.
"""

import re
from typing import Any

from .errors import JsLiteralError


NUMBER_PATTERN = re.compile(
    r'-?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'
)
IDENTIFIER_PATTERN = re.compile(r'[A-Za-z_$][A-Za-z0-9_$]*')

KEYWORDS = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

LINE_TERMINATORS = "\n\r\u2028\u2029"


def line_col(text: str, pos: int) -> tuple[int, int]:
    """Convert an offset into 1-based (line, column)."""
    line = text.count("\n", 0, pos) + 1
    last_newline = text.rfind("\n", 0, pos)
    return line, pos - last_newline


def make_error(text: str, pos: int, message: str) -> JsLiteralError:
    """Build a JsLiteralError positioned at `pos` in `text`."""
    line, column = line_col(text, min(pos, len(text)))
    return JsLiteralError(message, line=line, column=column)


def skip_whitespace(text: str, pos: int) -> int:
    """Advance past whitespace and comments; returns the new offset."""
    length = len(text)
    while pos < length:
        char = text[pos]
        if char.isspace() or char == "\ufeff":
            pos += 1
        elif text.startswith("//", pos):
            end = text.find("\n", pos)
            pos = length if end == -1 else end + 1
        elif text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            if end == -1:
                raise make_error(text, pos, "unterminated comment")
            pos = end + 2
        else:
            break
    return pos


def parse_js_literal(text: str, start: int = 0) -> tuple[Any, int]:
    """
    Parse one literal beginning at `start` (leading whitespace allowed).

    Returns (value, end) where `end` is the offset just past the literal.
    """
    return _Reader(text).value(start)


def parse_js_string(text: str, start: int = 0) -> tuple[str, int]:
    """Parse a quoted string literal beginning exactly at `start`."""
    return _Reader(text).string(start)


def dump_js_string(value: str, quote: str = "'") -> str:
    """
    Quote a string as a JS literal.

    Only the quote character, backslashes and control/line-terminator
    characters are escaped; everything else (including non-ASCII such as
    the generator's '…' truncation mark) is written through.
    """
    if quote not in ("'", '"'):
        raise ValueError(f"Unsupported quote character: {quote!r}")

    parts = [quote]
    for char in value:
        if char == "\\":
            parts.append("\\\\")
        elif char == quote:
            parts.append("\\" + char)
        elif char == "\n":
            parts.append("\\n")
        elif char == "\r":
            parts.append("\\r")
        elif char == "\t":
            parts.append("\\t")
        elif ord(char) < 0x20 or char in "\u2028\u2029":
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(char)
    parts.append(quote)
    return "".join(parts)


class _Reader:
    """Recursive-descent reader over a single text buffer."""

    def __init__(self, text: str):
        self.text = text

    def error(self, pos: int, message: str) -> JsLiteralError:
        return make_error(self.text, pos, message)

    def value(self, pos: int) -> tuple[Any, int]:
        text = self.text
        pos = skip_whitespace(text, pos)
        if pos >= len(text):
            raise self.error(pos, "unexpected end of input, expected a value")

        char = text[pos]
        if char == "{":
            return self.object(pos)
        if char == "[":
            return self.array(pos)
        if char in "'\"":
            return self.string(pos)

        match = NUMBER_PATTERN.match(text, pos)
        if match:
            return self.number(match.group(0)), match.end()

        match = IDENTIFIER_PATTERN.match(text, pos)
        if match and match.group(0) in KEYWORDS:
            return KEYWORDS[match.group(0)], match.end()

        raise self.error(pos, f"unexpected character {char!r}")

    def number(self, token: str) -> int | float:
        sign = -1 if token.startswith("-") else 1
        digits = token.lstrip("-")
        if digits[:2].lower() == "0x":
            return sign * int(digits, 16)
        if any(c in digits for c in ".eE"):
            return float(token)
        return int(token)

    def key(self, pos: int) -> tuple[str, int]:
        text = self.text
        if pos < len(text) and text[pos] in "'\"":
            return self.string(pos)

        match = IDENTIFIER_PATTERN.match(text, pos) or NUMBER_PATTERN.match(text, pos)
        if not match:
            raise self.error(pos, "expected an object key")
        return match.group(0), match.end()

    def object(self, pos: int) -> tuple[dict, int]:
        text = self.text
        result: dict[str, Any] = {}
        pos = skip_whitespace(text, pos + 1)

        while True:
            if pos >= len(text):
                raise self.error(pos, "unterminated object")
            if text[pos] == "}":
                return result, pos + 1

            key, pos = self.key(pos)
            pos = skip_whitespace(text, pos)
            if pos >= len(text) or text[pos] != ":":
                raise self.error(pos, f"expected ':' after key {key!r}")

            value, pos = self.value(pos + 1)
            result[key] = value

            pos = skip_whitespace(text, pos)
            if pos < len(text) and text[pos] == ",":
                pos = skip_whitespace(text, pos + 1)
            elif pos < len(text) and text[pos] == "}":
                continue
            else:
                raise self.error(pos, "expected ',' or '}' in object")

    def array(self, pos: int) -> tuple[list, int]:
        text = self.text
        result: list[Any] = []
        pos = skip_whitespace(text, pos + 1)

        while True:
            if pos >= len(text):
                raise self.error(pos, "unterminated array")
            if text[pos] == "]":
                return result, pos + 1

            value, pos = self.value(pos)
            result.append(value)

            pos = skip_whitespace(text, pos)
            if pos < len(text) and text[pos] == ",":
                pos = skip_whitespace(text, pos + 1)
            elif pos < len(text) and text[pos] == "]":
                continue
            else:
                raise self.error(pos, "expected ',' or ']' in array")

    def string(self, pos: int) -> tuple[str, int]:
        text = self.text
        if pos >= len(text) or text[pos] not in "'\"":
            raise self.error(pos, "expected a string")

        quote = text[pos]
        start = pos
        pos += 1
        chunks = []
        length = len(text)

        while True:
            if pos >= length:
                raise self.error(start, "unterminated string")
            char = text[pos]

            if char == quote:
                return "".join(chunks), pos + 1
            if char in "\n\r":
                raise self.error(start, "unterminated string")
            if char != "\\":
                chunks.append(char)
                pos += 1
                continue

            # Escape sequence
            if pos + 1 >= length:
                raise self.error(pos, "unterminated escape sequence")
            escaped = text[pos + 1]
            pos += 2

            if escaped in SIMPLE_ESCAPES:
                if escaped == "0" and pos < length and text[pos].isdigit():
                    raise self.error(pos - 2, "octal escapes are not supported")
                chunks.append(SIMPLE_ESCAPES[escaped])
            elif escaped == "x":
                digits = text[pos:pos + 2]
                if not re.fullmatch(r'[0-9a-fA-F]{2}', digits):
                    raise self.error(pos - 2, "invalid \\x escape")
                chunks.append(chr(int(digits, 16)))
                pos += 2
            elif escaped == "u":
                code, pos = self.unicode_escape(pos)
                chunks.append(code)
            elif escaped == "\r":
                # Line continuation; \r\n counts as one terminator
                if pos < length and text[pos] == "\n":
                    pos += 1
            elif escaped in LINE_TERMINATORS:
                pass
            else:
                chunks.append(escaped)

    def unicode_escape(self, pos: int) -> tuple[str, int]:
        """Decode the body of a \\u escape; `pos` points just past the 'u'."""
        text = self.text
        if text.startswith("{", pos):
            end = text.find("}", pos)
            digits = text[pos + 1:end] if end != -1 else ""
            if not re.fullmatch(r'[0-9a-fA-F]{1,6}', digits) or int(digits, 16) > 0x10FFFF:
                raise self.error(pos - 2, "invalid \\u{...} escape")
            code = int(digits, 16)
            if 0xD800 <= code <= 0xDFFF:
                raise self.error(pos - 2, "unpaired surrogate in \\u escape")
            return chr(code), end + 1

        digits = text[pos:pos + 4]
        if not re.fullmatch(r'[0-9a-fA-F]{4}', digits):
            raise self.error(pos - 2, "invalid \\u escape")
        code = int(digits, 16)
        pos += 4

        # Combine a UTF-16 surrogate pair into one code point
        if 0xD800 <= code <= 0xDBFF and text.startswith("\\u", pos):
            low_digits = text[pos + 2:pos + 6]
            if re.fullmatch(r'[0-9a-fA-F]{4}', low_digits):
                low = int(low_digits, 16)
                if 0xDC00 <= low <= 0xDFFF:
                    combined = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                    return chr(combined), pos + 6
        if 0xD800 <= code <= 0xDFFF:
            raise self.error(pos - 6, "unpaired surrogate in \\u escape")
        return chr(code), pos
