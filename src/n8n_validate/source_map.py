"""Map logical workflow paths back to positions in the raw text.

A path such as ``nodes[4].parameters.options`` names a value in the decoded
document. The source map resolves it against a position-tagged syntax tree of
the raw text, so issues can point at a line and column and quote a snippet.
"""

import bisect
import json
import re
from collections.abc import Sequence
from dataclasses import dataclass

from n8n_validate.parsing import JSONC, JsonNode, SyntaxProblem, find_node_at_location, parse_tree
from n8n_validate.types import SnippetLine, SourceLocation, SourceSnippet

_PATH_SEGMENT = re.compile(r"([^.\[\]]+)|\[(\d+)\]")

TRUNCATION_MARKER = "... (truncated)"


@dataclass(frozen=True)
class SourceMap:
    """Syntax tree, raw text and line list of one input."""

    ast: JsonNode | None
    source: str
    lines: tuple[str, ...]
    errors: tuple[SyntaxProblem, ...] = ()


def create_source_map(source: str) -> SourceMap:
    """Build a source map for raw workflow text.

    Comments and trailing commas are tolerated. When the text has a syntax
    error the tree built up to that point is kept.

    Args:
        source: Raw text exactly as received

    Returns:
        SourceMap (``ast`` is None for empty or unreadable text)
    """
    tree = parse_tree(source, JSONC)
    lines = tuple(source.split("\n")) if source else ()
    return SourceMap(ast=tree.root, source=source, lines=lines, errors=tuple(tree.errors))


def offset_to_line_column(source: str, offset: int) -> tuple[int, int]:
    """Convert a character offset to a 1-indexed (line, column).

    A newline belongs to the line it terminates. Offsets past the end clamp to
    the last line.
    """
    offset = max(offset, 0)
    lines = source.split("\n")
    starts = [0]
    for line in lines[:-1]:
        starts.append(starts[-1] + len(line) + 1)

    if offset >= len(source) + 1:
        last = lines[-1]
        return len(lines), len(last) or 1

    index = bisect.bisect_right(starts, offset) - 1
    return index + 1, offset - starts[index] + 1


def parse_json_path(path: str) -> list[str | int]:
    """Split ``nodes[4].parameters.options`` into ``["nodes", 4, "parameters", "options"]``."""
    segments: list[str | int] = []
    for match in _PATH_SEGMENT.finditer(path):
        key, index = match.groups()
        if key is not None:
            segments.append(key)
        else:
            segments.append(int(index))
    return segments


def _resolve(source_map: SourceMap, path: str | Sequence[str | int]) -> JsonNode | None:
    if source_map.ast is None:
        return None
    segments = parse_json_path(path) if isinstance(path, str) else list(path)
    return find_node_at_location(source_map.ast, segments)


def find_source_location(
    source_map: SourceMap, path: str | Sequence[str | int]
) -> SourceLocation | None:
    """Locate the value at a logical path.

    Args:
        source_map: Source map of the raw text
        path: Dotted/bracketed path string or list of segments

    Returns:
        SourceLocation of the value, or None if any segment is missing
    """
    node = _resolve(source_map, path)
    if node is None:
        return None

    line, column = offset_to_line_column(source_map.source, node.offset)
    end_line, end_column = offset_to_line_column(source_map.source, node.end)
    return SourceLocation(
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
        offset=node.offset,
        length=node.length,
    )


def extract_snippet(source_map: SourceMap, line: int, context_lines: int = 3) -> SourceSnippet:
    """Cut a window of lines around ``line``.

    Args:
        source_map: Source map of the raw text
        line: 1-indexed line to highlight (clamped into the document)
        context_lines: Lines of context on each side

    Returns:
        SourceSnippet with exactly one highlighted line, or an empty snippet
        for an empty document
    """
    total = len(source_map.lines)
    if total == 0:
        return SourceSnippet()

    target = min(max(line, 1), total)
    context_lines = max(context_lines, 0)
    start = max(1, target - context_lines)
    end = min(total, target + context_lines)

    lines = tuple(
        SnippetLine(
            line_number=number,
            content=source_map.lines[number - 1],
            is_highlighted=number == target,
        )
        for number in range(start, end + 1)
    )
    return SourceSnippet(lines=lines, start_line=start, end_line=end, highlight_line=target)


def get_source_text(source_map: SourceMap, path: str | Sequence[str | int]) -> str | None:
    """Raw text of the value at a path, exactly as written."""
    node = _resolve(source_map, path)
    if node is None:
        return None
    return source_map.source[node.offset : node.end]


def get_formatted_value(
    source_map: SourceMap, path: str | Sequence[str | int], max_length: int = 500
) -> str | None:
    """Display form of the value at a path.

    Standalone-parsable JSON is pretty-printed with two-space indentation;
    anything else (comments, trailing commas) is returned as written. Longer
    results are cut at ``max_length`` and end with a truncation marker.
    """
    text = get_source_text(source_map, path)
    if not text:
        return None

    try:
        formatted = json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        if len(text) > max_length:
            return text[:max_length] + TRUNCATION_MARKER
        return text

    if len(formatted) > max_length:
        return formatted[:max_length] + "\n" + TRUNCATION_MARKER
    return formatted
