"""Bounded syntactic repair of near-JSON text.

The repairer only removes noise or closes what is already open:

- strips ``//`` and ``/* */`` comments
- drops commas directly followed by a closing bracket or the end of input
- closes a string left open at a line break or at the end of input
- appends the closers of containers still open at the end of input

Anything that would require choosing between readings is declined: a closer
that does not match the innermost open container, a closer with nothing open,
or input that ends after a key or a colon (closing there would invent a value).
"""

from dataclasses import dataclass, field

_OPENERS = {"{": "}", "[": "]"}
_CLOSERS = {"}", "]"}
_WHITESPACE = " \t\n\r"
_STRUCTURAL = set("{}[],:\"'/") | set(_WHITESPACE)

# Object frame states
_KEY = "key"  # after "{" or ","
_COLON = "colon"  # after a key
_VALUE = "value"  # after ":"
_NEXT = "next"  # after a value; "," or "}" expected


@dataclass
class RepairResult:
    """Outcome of a repair attempt."""

    text: str | None
    repairs: list[str] = field(default_factory=list)
    declined: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


@dataclass
class _Frame:
    closer: str
    state: str


class _Declined(Exception):
    pass


class JsonRepairer:
    """Single left-to-right pass over the text; deterministic."""

    def __init__(self, text: str, allow_single_quotes: bool = False):
        self.text = text
        self.allow_single_quotes = allow_single_quotes
        self.pos = 0
        self.out: list[str] = []
        self.stack: list[_Frame] = []
        self.repairs: list[str] = []

    def repair(self) -> RepairResult:
        if not self.text.strip():
            return RepairResult(text=None, declined="Input is empty")
        try:
            self._run()
        except _Declined as declined:
            return RepairResult(text=None, repairs=self.repairs, declined=str(declined))
        if not self.repairs:
            return RepairResult(text=None, declined="No applicable repair")
        return RepairResult(text="".join(self.out), repairs=self.repairs)

    def _note(self, repair: str) -> None:
        if repair not in self.repairs:
            self.repairs.append(repair)

    def _run(self) -> None:
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char in _WHITESPACE:
                self.out.append(char)
                self.pos += 1
            elif char == "/" and text[self.pos + 1 : self.pos + 2] in ("/", "*"):
                self._skip_comment()
                self._note("removed comments")
            elif char == '"' or (char == "'" and self.allow_single_quotes):
                self._copy_string(char)
                self._after_value()
            elif char in _OPENERS:
                # The container is the parent's value from here on
                self._after_value()
                self.out.append(char)
                self.stack.append(
                    _Frame(_OPENERS[char], _KEY if char == "{" else _VALUE)
                )
                self.pos += 1
            elif char in _CLOSERS:
                self._close(char)
            elif char == ",":
                self._comma()
            elif char == ":":
                if self.stack and self.stack[-1].closer == "}":
                    self.stack[-1].state = _VALUE
                self.out.append(char)
                self.pos += 1
            else:
                self._copy_bare_word()

        self._finish()

    def _skip_comment(self) -> None:
        text = self.text
        if text[self.pos + 1] == "/":
            newline = text.find("\n", self.pos)
            self.pos = len(text) if newline == -1 else newline
        else:
            close = text.find("*/", self.pos + 2)
            self.pos = len(text) if close == -1 else close + 2

    def _copy_string(self, quote: str) -> None:
        text = self.text
        self.out.append(quote)
        self.pos += 1
        while self.pos < len(text):
            char = text[self.pos]
            if char == "\\":
                if self.pos + 1 >= len(text):
                    raise _Declined("Input ends inside an escape sequence")
                self.out.append(text[self.pos : self.pos + 2])
                self.pos += 2
                continue
            if char == quote:
                self.out.append(char)
                self.pos += 1
                return
            if char in "\n\r":
                # Close the string at the end of its line
                self.out.append(quote)
                self._note("closed unterminated string")
                return
            self.out.append(char)
            self.pos += 1
        self.out.append(quote)
        self._note("closed unterminated string")

    def _copy_bare_word(self) -> None:
        text = self.text
        start = self.pos
        while self.pos < len(text) and text[self.pos] not in _STRUCTURAL:
            self.pos += 1
        if self.pos == start:
            # Lone "/" that does not start a comment
            self.pos += 1
        self.out.append(text[start : self.pos])
        self._after_value()

    def _after_value(self) -> None:
        if not self.stack:
            return
        frame = self.stack[-1]
        if frame.closer == "}" and frame.state == _KEY:
            # Quoted keys, and bare keys in the object-literal dialect
            frame.state = _COLON
        else:
            frame.state = _NEXT

    def _next_significant(self, start: int) -> str | None:
        """First character after ``start`` that is not whitespace or a comment."""
        text = self.text
        pos = start
        while pos < len(text):
            char = text[pos]
            if char in _WHITESPACE:
                pos += 1
            elif char == "/" and text[pos + 1 : pos + 2] == "/":
                newline = text.find("\n", pos)
                if newline == -1:
                    return None
                pos = newline
            elif char == "/" and text[pos + 1 : pos + 2] == "*":
                close = text.find("*/", pos + 2)
                if close == -1:
                    return None
                pos = close + 2
            else:
                return char
        return None

    def _comma(self) -> None:
        following = self._next_significant(self.pos + 1)
        self.pos += 1
        if following is None or following in _CLOSERS:
            self._note("removed trailing comma")
            return
        self.out.append(",")
        if self.stack:
            frame = self.stack[-1]
            frame.state = _KEY if frame.closer == "}" else _VALUE

    def _close(self, char: str) -> None:
        if not self.stack:
            raise _Declined(f"Unmatched '{char}' at offset {self.pos}")
        frame = self.stack[-1]
        if frame.closer != char:
            raise _Declined(
                f"'{char}' at offset {self.pos} does not match the open '{frame.closer}'"
            )
        if frame.closer == "}" and frame.state in (_COLON, _VALUE):
            raise _Declined(f"Property without a value before offset {self.pos}")
        self.stack.pop()
        self.out.append(char)
        self.pos += 1
        self._after_value()

    def _finish(self) -> None:
        if not self.stack:
            return
        for frame in reversed(self.stack):
            if frame.closer == "}" and frame.state in (_COLON, _VALUE):
                raise _Declined("Input ends inside a property without a value")
        closers = "".join(frame.closer for frame in reversed(self.stack))
        self.out.append(closers)
        self.stack.clear()
        self._note("closed unclosed brackets")


def repair_json_text(text: str, allow_single_quotes: bool = False) -> RepairResult:
    """Attempt a bounded repair of near-JSON text.

    Args:
        text: Raw text
        allow_single_quotes: Treat single quotes as string delimiters

    Returns:
        RepairResult with the repaired text, or ``declined`` set
    """
    return JsonRepairer(text, allow_single_quotes=allow_single_quotes).repair()
