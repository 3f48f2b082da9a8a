"""Tests for mapping workflow paths to raw text positions."""

import json

import pytest

from n8n_validate.source_map import (
    TRUNCATION_MARKER,
    create_source_map,
    extract_snippet,
    find_source_location,
    get_formatted_value,
    get_source_text,
    offset_to_line_column,
    parse_json_path,
)

WORKFLOW_TEXT = """{
  "name": "Demo",
  "nodes": [
    {
      "name": "Start",
      "parameters": {
        "options": {}
      }
    }
  ],
  "connections": {}
}"""


@pytest.fixture
def source_map():
    return create_source_map(WORKFLOW_TEXT)


@pytest.mark.unit
class TestOffsetToLineColumn:
    """Tests for offset_to_line_column."""

    @pytest.mark.parametrize(
        "offset,expected",
        [(0, (1, 1)), (2, (1, 3)), (3, (2, 1)), (5, (2, 3)), (99, (2, 2)), (-4, (1, 1))],
    )
    def test_positions(self, offset, expected):
        """Test 1-indexed conversion, newline ownership and clamping."""
        assert offset_to_line_column("ab\ncd", offset) == expected


@pytest.mark.unit
class TestParseJsonPath:
    """Tests for parse_json_path."""

    def test_mixed_path(self):
        """Test keys and indices are split into typed segments."""
        assert parse_json_path("nodes[4].parameters.options") == [
            "nodes",
            4,
            "parameters",
            "options",
        ]

    def test_empty_path(self):
        """Test the empty path has no segments."""
        assert parse_json_path("") == []


@pytest.mark.unit
class TestFindSourceLocation:
    """Tests for find_source_location."""

    def test_nested_value_location(self, source_map):
        """Test a nested value resolves to the line and column of its first character."""
        location = find_source_location(source_map, "nodes[0].parameters.options")
        assert (location.line, location.column) == (7, 20)
        assert (location.end_line, location.end_column) == (7, 22)
        assert WORKFLOW_TEXT[location.offset : location.offset + location.length] == "{}"

    def test_segment_list_accepted(self, source_map):
        """Test a list of segments works like the path string."""
        assert find_source_location(source_map, ["nodes", 0, "name"]) == find_source_location(
            source_map, "nodes[0].name"
        )

    @pytest.mark.parametrize("path", ["nodes[3]", "missing", "name.inner"])
    def test_missing_path_is_none(self, source_map, path):
        """Test unresolvable paths return None."""
        assert find_source_location(source_map, path) is None

    def test_comments_tolerated(self):
        """Test locations are found in text with comments and trailing commas."""
        text = '{\n  // exported\n  "nodes": [],\n}'
        location = find_source_location(create_source_map(text), "nodes")
        assert (location.line, location.column) == (3, 12)

    def test_partial_tree_after_syntax_error(self):
        """Test values before a syntax error can still be located."""
        source_map = create_source_map('{\n  "nodes": [1,\n  "broken": }')
        assert source_map.errors
        assert find_source_location(source_map, "nodes[0]").line == 2

    def test_empty_source(self):
        """Test an empty document has no tree and no lines."""
        source_map = create_source_map("")
        assert source_map.ast is None
        assert source_map.lines == ()
        assert find_source_location(source_map, "nodes") is None


@pytest.mark.unit
class TestExtractSnippet:
    """Tests for extract_snippet."""

    def test_window_around_line(self, source_map):
        """Test context lines on both sides with one highlighted line."""
        snippet = extract_snippet(source_map, 7, context_lines=2)
        assert (snippet.start_line, snippet.end_line) == (5, 9)
        assert [line.line_number for line in snippet.lines] == [5, 6, 7, 8, 9]
        assert [line.line_number for line in snippet.lines if line.is_highlighted] == [7]
        assert snippet.highlighted.content == '        "options": {}'

    def test_window_clipped_at_document_edges(self, source_map):
        """Test the window stops at the first and last lines."""
        assert extract_snippet(source_map, 1).start_line == 1
        assert extract_snippet(source_map, 12).end_line == 12

    @pytest.mark.parametrize("line,expected", [(0, 1), (-3, 1), (40, 12)])
    def test_out_of_range_line_clamped(self, source_map, line, expected):
        """Test the highlighted line is clamped into the document."""
        snippet = extract_snippet(source_map, line)
        assert snippet.highlight_line == expected
        assert snippet.highlighted.line_number == expected

    def test_empty_document(self):
        """Test an empty document yields an empty snippet."""
        snippet = extract_snippet(create_source_map(""), 1)
        assert snippet.lines == ()
        assert snippet.highlighted is None


@pytest.mark.unit
class TestSourceText:
    """Tests for get_source_text and get_formatted_value."""

    def test_raw_text_as_written(self, source_map):
        """Test the raw slice keeps original whitespace."""
        assert get_source_text(source_map, "nodes[0].parameters") == (
            '{\n        "options": {}\n      }'
        )

    def test_formatted_value_reindented(self, source_map):
        """Test parsable values are pretty-printed with two spaces."""
        assert get_formatted_value(source_map, "nodes[0].parameters") == (
            '{\n  "options": {}\n}'
        )

    def test_formatted_value_keeps_comments(self):
        """Test values that are not standalone JSON are returned raw."""
        source_map = create_source_map('{"a": [1, /* c */ 2]}')
        assert get_formatted_value(source_map, "a") == "[1, /* c */ 2]"

    def test_truncated_json(self):
        """Test long JSON is cut and marked on its own line."""
        document = {"items": list(range(200))}
        source_map = create_source_map(json.dumps(document))
        formatted = get_formatted_value(source_map, "items", max_length=50)
        assert formatted.endswith("\n" + TRUNCATION_MARKER)
        assert len(formatted) == 50 + 1 + len(TRUNCATION_MARKER)

    def test_truncated_raw_text(self):
        """Test long raw text is cut and marked inline."""
        source_map = create_source_map('{"a": [' + "1, " * 100 + "2,]}")
        formatted = get_formatted_value(source_map, "a", max_length=20)
        assert formatted.endswith(TRUNCATION_MARKER)
        assert not formatted.endswith("\n" + TRUNCATION_MARKER)

    def test_missing_path(self, source_map):
        """Test missing paths yield None."""
        assert get_source_text(source_map, "nope") is None
        assert get_formatted_value(source_map, "nope") is None
