"""Source position types shared by the source map and validation issues."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SourceLocation:
    """Position of a value in the raw workflow text (1-indexed)."""

    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None
    offset: int | None = None  # Character offset from start of source
    length: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset fields."""
        data: dict[str, Any] = {"line": self.line, "column": self.column}
        if self.end_line is not None:
            data["endLine"] = self.end_line
        if self.end_column is not None:
            data["endColumn"] = self.end_column
        if self.offset is not None:
            data["offset"] = self.offset
        if self.length is not None:
            data["length"] = self.length
        return data


@dataclass(frozen=True)
class SnippetLine:
    """One line of a source snippet."""

    line_number: int
    content: str
    is_highlighted: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "lineNumber": self.line_number,
            "content": self.content,
            "isHighlighted": self.is_highlighted,
        }


@dataclass(frozen=True)
class SourceSnippet:
    """Window of source lines around a highlighted line."""

    lines: tuple[SnippetLine, ...] = field(default_factory=tuple)
    start_line: int = 0
    end_line: int = 0
    highlight_line: int = 0

    @property
    def highlighted(self) -> SnippetLine | None:
        """The highlighted line, if the snippet is not empty."""
        for line in self.lines:
            if line.is_highlighted:
                return line
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "startLine": self.start_line,
            "endLine": self.end_line,
            "highlightLine": self.highlight_line,
        }
