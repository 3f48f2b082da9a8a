"""Position-tagged syntax tree for JSON and its relaxed dialects.

Every node records the character offset and length of the text it was built
from, so a logical path can be mapped back to the raw source. Building is
error tolerant: on the first syntax error the tree built so far is kept and
the unfinished containers are closed at the error offset.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .scanner import JSONC, Dialect, Scanner, Token, TokenKind

_LITERALS = {"true": True, "false": False, "null": None}


class NodeType(str, Enum):
    """Syntax tree node kinds."""

    OBJECT = "object"
    ARRAY = "array"
    PROPERTY = "property"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(eq=False)
class JsonNode:
    """Syntax tree node.

    A PROPERTY node has the key (STRING) as first child and, once parsed,
    the value as second child.
    """

    type: NodeType
    offset: int
    length: int = 0
    value: Any = None
    children: list["JsonNode"] = field(default_factory=list)
    parent: "JsonNode | None" = field(default=None, repr=False)
    colon_offset: int | None = None

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def key(self) -> str | None:
        """Property key, for PROPERTY nodes."""
        if self.type == NodeType.PROPERTY and self.children:
            return self.children[0].value
        return None


@dataclass(frozen=True)
class SyntaxProblem:
    """Syntax error found while building a tree."""

    message: str
    offset: int
    length: int = 0

    def __str__(self) -> str:
        return f"{self.message} at offset {self.offset}"


@dataclass
class ParseTree:
    """Root node (None for empty or unreadable input) plus syntax problems."""

    root: JsonNode | None
    errors: list[SyntaxProblem] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class _Abort(Exception):
    def __init__(self, problem: SyntaxProblem):
        super().__init__(problem.message)
        self.problem = problem


class _TreeBuilder:
    """Recursive-descent builder. Nodes are attached before their content is
    parsed so that a partial tree survives an abort."""

    def __init__(self, text: str, dialect: Dialect):
        self._scanner = Scanner(text, dialect)
        self._dialect = dialect
        self._token: Token = Token(TokenKind.EOF, 0, 0)
        self._last_end = 0
        self._open: list[JsonNode] = []
        self.root: JsonNode | None = None
        self.errors: list[SyntaxProblem] = []

    def build(self) -> ParseTree:
        try:
            self._advance()
            if self._token.kind == TokenKind.EOF:
                if not self._dialect.allow_empty_content:
                    self.errors.append(SyntaxProblem("Value expected", self._token.offset))
                return ParseTree(root=None, errors=self.errors)

            self._parse_value(None)

            if self._token.kind != TokenKind.EOF:
                self.errors.append(
                    SyntaxProblem(
                        "End of file expected", self._token.offset, self._token.length
                    )
                )
        except _Abort as abort:
            self.errors.append(abort.problem)
            for node in self._open:
                node.length = max(node.length, abort.problem.offset - node.offset)
        except RecursionError:
            self.errors.append(SyntaxProblem("Nesting too deep", self._token.offset))
            self._open.clear()

        return ParseTree(root=self.root, errors=self.errors)

    def _advance(self) -> None:
        self._last_end = self._token.end
        self._token = self._scanner.next_token()
        if self._token.kind == TokenKind.INVALID:
            raise _Abort(
                SyntaxProblem(
                    self._token.error or "Invalid token", self._token.offset, self._token.length
                )
            )

    def _fail(self, message: str) -> None:
        raise _Abort(SyntaxProblem(message, self._token.offset, self._token.length))

    def _attach(self, parent: JsonNode | None, node: JsonNode) -> None:
        node.parent = parent
        if parent is None:
            self.root = node
        else:
            parent.children.append(node)

    def _parse_value(self, parent: JsonNode | None) -> None:
        token = self._token
        kind = token.kind

        if kind == TokenKind.OPEN_BRACE:
            self._parse_object(parent)
        elif kind == TokenKind.OPEN_BRACKET:
            self._parse_array(parent)
        elif kind == TokenKind.STRING:
            self._attach(parent, JsonNode(NodeType.STRING, token.offset, token.length, token.value))
            self._advance()
        elif kind == TokenKind.NUMBER:
            self._attach(parent, JsonNode(NodeType.NUMBER, token.offset, token.length, token.value))
            self._advance()
        elif kind == TokenKind.IDENTIFIER and token.value in _LITERALS:
            literal = _LITERALS[token.value]
            node_type = NodeType.NULL if literal is None else NodeType.BOOLEAN
            self._attach(parent, JsonNode(node_type, token.offset, token.length, literal))
            self._advance()
        elif kind == TokenKind.IDENTIFIER:
            # Only data literals are accepted; identifiers would need evaluation
            self._fail(f"Unexpected identifier '{token.value}'")
        else:
            self._fail("Value expected")

    def _parse_object(self, parent: JsonNode | None) -> None:
        node = JsonNode(NodeType.OBJECT, self._token.offset)
        self._attach(parent, node)
        self._open.append(node)
        self._advance()

        while self._token.kind != TokenKind.CLOSE_BRACE:
            self._parse_property(node)
            if self._token.kind == TokenKind.COMMA:
                self._advance()
                if (
                    self._token.kind == TokenKind.CLOSE_BRACE
                    and not self._dialect.allow_trailing_commas
                ):
                    self._fail("Trailing comma")
            elif self._token.kind != TokenKind.CLOSE_BRACE:
                self._fail("Expected comma or closing brace")

        node.length = self._token.end - node.offset
        self._open.pop()
        self._advance()

    def _parse_property(self, obj: JsonNode) -> None:
        token = self._token
        if token.kind == TokenKind.STRING:
            key = token.value
        elif token.kind == TokenKind.IDENTIFIER and self._dialect.allow_identifier_keys:
            key = token.value
        elif (
            token.kind == TokenKind.NUMBER
            and self._dialect.allow_numeric_keys
            and not self._scanner.text.startswith("-", token.offset)
        ):
            key = _number_key(token.value)
        else:
            self._fail("Property name expected")

        prop = JsonNode(NodeType.PROPERTY, token.offset)
        self._attach(obj, prop)
        self._open.append(prop)
        key_node = JsonNode(NodeType.STRING, token.offset, token.length, key, parent=prop)
        prop.children.append(key_node)
        self._advance()

        if self._token.kind != TokenKind.COLON:
            self._fail("Colon expected")
        prop.colon_offset = self._token.offset
        self._advance()

        self._parse_value(prop)
        prop.length = self._last_end - prop.offset
        self._open.pop()

    def _parse_array(self, parent: JsonNode | None) -> None:
        node = JsonNode(NodeType.ARRAY, self._token.offset)
        self._attach(parent, node)
        self._open.append(node)
        self._advance()

        while self._token.kind != TokenKind.CLOSE_BRACKET:
            self._parse_value(node)
            if self._token.kind == TokenKind.COMMA:
                self._advance()
                if (
                    self._token.kind == TokenKind.CLOSE_BRACKET
                    and not self._dialect.allow_trailing_commas
                ):
                    self._fail("Trailing comma")
            elif self._token.kind != TokenKind.CLOSE_BRACKET:
                self._fail("Expected comma or closing bracket")

        node.length = self._token.end - node.offset
        self._open.pop()
        self._advance()


def _number_key(value: int | float) -> str:
    """Property name a numeric key stands for: ``1.0: x`` names "1", ``.5: x`` names "0.5"."""
    if isinstance(value, float) and value.is_integer() and value < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def parse_tree(text: str, dialect: Dialect = JSONC) -> ParseTree:
    """Build a position-tagged tree from text.

    Args:
        text: Source text
        dialect: Accepted syntax relaxations (defaults to JSONC)

    Returns:
        ParseTree; ``errors`` is empty when the whole text was well formed
    """
    return _TreeBuilder(text, dialect).build()


def node_value(node: JsonNode) -> Any:
    """Decode a tree node into plain Python values.

    Duplicate keys keep the last value, as ``json.loads`` does.
    """
    if node.type == NodeType.OBJECT:
        result: dict[str, Any] = {}
        for prop in node.children:
            if len(prop.children) == 2:
                result[prop.children[0].value] = node_value(prop.children[1])
        return result
    if node.type == NodeType.ARRAY:
        return [node_value(child) for child in node.children]
    if node.type == NodeType.PROPERTY:
        return node_value(node.children[1]) if len(node.children) == 2 else None
    return node.value


def find_node_at_location(root: JsonNode | None, segments: Sequence[str | int]) -> JsonNode | None:
    """Walk the tree along a logical path.

    Args:
        root: Tree root
        segments: Keys (str) and array indices (int)

    Returns:
        Value node at the path, or None if any segment is missing
    """
    node = root
    for segment in segments:
        if node is None:
            return None
        if isinstance(segment, str):
            if node.type != NodeType.OBJECT:
                return None
            found: JsonNode | None = None
            # Last duplicate wins, matching the decoded document
            for prop in node.children:
                if len(prop.children) == 2 and prop.children[0].value == segment:
                    found = prop.children[1]
            node = found
        elif isinstance(segment, int) and not isinstance(segment, bool):
            if node.type != NodeType.ARRAY or not 0 <= segment < len(node.children):
                return None
            node = node.children[segment]
        else:
            return None
    return node
