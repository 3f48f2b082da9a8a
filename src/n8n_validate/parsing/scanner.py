"""Tokenizer shared by the object-literal parser and the source map.

One scanner serves every dialect; the dialect flags decide whether comments,
single-quoted strings and bare identifier keys are tokens or errors.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Dialect:
    """Syntax relaxations accepted on top of JSON."""

    name: str = "json"
    allow_comments: bool = False
    allow_trailing_commas: bool = False
    allow_single_quotes: bool = False
    allow_identifier_keys: bool = False
    allow_numeric_keys: bool = False
    allow_loose_numbers: bool = False  # .5 and 5.
    allow_empty_content: bool = False


STRICT = Dialect()

# Comment and trailing-comma tolerant JSON, used to locate values in raw text
JSONC = Dialect(
    name="jsonc",
    allow_comments=True,
    allow_trailing_commas=True,
    allow_empty_content=True,
)

# JavaScript object-literal data syntax. Values are data only: no expressions,
# signs other than a leading minus, hex or octal literals, or computed keys.
OBJECT_LITERAL = Dialect(
    name="object-literal",
    allow_comments=True,
    allow_trailing_commas=True,
    allow_single_quotes=True,
    allow_identifier_keys=True,
    allow_numeric_keys=True,
    allow_loose_numbers=True,
)


class TokenKind(str, Enum):
    """Lexical token kinds."""

    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    OPEN_BRACKET = "["
    CLOSE_BRACKET = "]"
    COLON = ":"
    COMMA = ","
    STRING = "string"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    EOF = "eof"
    INVALID = "invalid"


@dataclass(frozen=True)
class Token:
    """Token with its position in the source text."""

    kind: TokenKind
    offset: int
    length: int
    value: Any = None
    error: str | None = None

    @property
    def end(self) -> int:
        return self.offset + self.length


_PUNCTUATION = {
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "[": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}

_WHITESPACE = " \t\n\r"

_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_LOOSE_NUMBER_RE = re.compile(
    r"-?(?:(?:0|[1-9][0-9]*)(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class Scanner:
    """Turns source text into tokens for one dialect."""

    def __init__(self, text: str, dialect: Dialect = STRICT):
        self.text = text
        self.dialect = dialect
        self.pos = 0

    def next_token(self) -> Token:
        """Scan the next significant token.

        Returns:
            Next token; EOF at the end, INVALID (with ``error``) on bad input
        """
        problem = self._skip_trivia()
        if problem is not None:
            return problem

        if self.pos >= len(self.text):
            return Token(TokenKind.EOF, len(self.text), 0)

        start = self.pos
        char = self.text[start]

        if char in _PUNCTUATION:
            self.pos += 1
            return Token(_PUNCTUATION[char], start, 1)

        if char == '"' or (char == "'" and self.dialect.allow_single_quotes):
            return self._scan_string(char)

        loose = self.dialect.allow_loose_numbers
        if char == "-" or char.isdigit() or (char == "." and loose):
            match = (_LOOSE_NUMBER_RE if loose else _NUMBER_RE).match(self.text, start)
            if match is None:
                self.pos += 1
                return Token(TokenKind.INVALID, start, 1, error="Invalid number")
            text = match.group()
            self.pos = match.end()
            # A number glued to more word characters (1abc, 0x1F) is not a number
            if self.pos < len(self.text) and (
                self.text[self.pos].isalnum() or self.text[self.pos] in "_$."
            ):
                return Token(TokenKind.INVALID, start, self.pos - start + 1, error="Invalid number")
            try:
                value = _to_number(text)
            except ValueError:
                # Past the interpreter's integer digit limit
                return Token(TokenKind.INVALID, start, len(text), error="Number too large")
            return Token(TokenKind.NUMBER, start, len(text), value=value)

        match = _IDENTIFIER_RE.match(self.text, start)
        if match is not None:
            self.pos = match.end()
            return Token(TokenKind.IDENTIFIER, start, self.pos - start, value=match.group())

        self.pos += 1
        return Token(TokenKind.INVALID, start, 1, error=f"Unexpected character {char!r}")

    def _skip_trivia(self) -> Token | None:
        """Skip whitespace and, where allowed, comments."""
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char in _WHITESPACE:
                self.pos += 1
                continue
            if char == "/" and self.pos + 1 < len(text) and text[self.pos + 1] in "/*":
                start = self.pos
                if not self.dialect.allow_comments:
                    return Token(TokenKind.INVALID, start, 2, error="Comments are not permitted")
                if text[self.pos + 1] == "/":
                    newline = text.find("\n", self.pos)
                    self.pos = len(text) if newline == -1 else newline + 1
                else:
                    close = text.find("*/", self.pos + 2)
                    if close == -1:
                        self.pos = len(text)
                        return Token(
                            TokenKind.INVALID, start, len(text) - start,
                            error="Unterminated comment",
                        )
                    self.pos = close + 2
                continue
            break
        return None

    def _scan_string(self, quote: str) -> Token:
        """Scan a quoted string starting at the current position."""
        text = self.text
        start = self.pos
        self.pos += 1
        units: list[str] = []

        while self.pos < len(text):
            char = text[self.pos]
            if char == quote:
                self.pos += 1
                return Token(TokenKind.STRING, start, self.pos - start, value=_join_units(units))
            if char in "\n\r":
                return Token(
                    TokenKind.INVALID, start, self.pos - start, error="Unterminated string"
                )
            if char == "\\":
                escape = text[self.pos + 1 : self.pos + 2]
                if escape == "u":
                    digits = text[self.pos + 2 : self.pos + 6]
                    if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                        self.pos += 2
                        return Token(
                            TokenKind.INVALID, start, self.pos - start,
                            error="Invalid unicode escape",
                        )
                    units.append(chr(int(digits, 16)))
                    self.pos += 6
                    continue
                if escape in _ESCAPES:
                    units.append(_ESCAPES[escape])
                elif escape == "'" and self.dialect.allow_single_quotes:
                    units.append("'")
                else:
                    self.pos += 2
                    return Token(
                        TokenKind.INVALID, start, self.pos - start,
                        error="Invalid escape character in string",
                    )
                self.pos += 2
                continue
            if ord(char) < 0x20 and self.dialect == STRICT:
                return Token(
                    TokenKind.INVALID, start, self.pos - start + 1,
                    error="Invalid control character in string",
                )
            units.append(char)
            self.pos += 1

        return Token(TokenKind.INVALID, start, self.pos - start, error="Unterminated string")


def _to_number(text: str) -> int | float:
    if any(c in text for c in ".eE"):
        return float(text)
    return int(text)


def _join_units(units: list[str]) -> str:
    """Join decoded characters, combining UTF-16 surrogate pairs like json.loads."""
    result: list[str] = []
    i = 0
    while i < len(units):
        unit = units[i]
        if (
            "\ud800" <= unit <= "\udbff"
            and i + 1 < len(units)
            and "\udc00" <= units[i + 1] <= "\udfff"
        ):
            high = ord(unit) - 0xD800
            low = ord(units[i + 1]) - 0xDC00
            result.append(chr(0x10000 + (high << 10) + low))
            i += 2
            continue
        result.append(unit)
        i += 1
    return "".join(result)
