"""Tests for the position-tagged syntax tree and the repairer."""

import pytest

from n8n_validate.parsing import (
    JSONC,
    OBJECT_LITERAL,
    STRICT,
    NodeType,
    find_node_at_location,
    node_value,
    parse_tree,
    repair_json_text,
)


@pytest.mark.unit
class TestParseTree:
    """Tests for parse_tree."""

    def test_offsets_cover_source_text(self):
        """Test node offsets and lengths slice the original text."""
        text = '{"a": [1, "two"], "b": null}'
        tree = parse_tree(text)
        assert tree.ok
        array = find_node_at_location(tree.root, ["a"])
        assert array.type == NodeType.ARRAY
        assert text[array.offset : array.end] == '[1, "two"]'
        second = find_node_at_location(tree.root, ["a", 1])
        assert text[second.offset : second.end] == '"two"'
        assert second.value == "two"

    def test_comments_and_trailing_commas_in_jsonc(self):
        """Test the JSONC dialect tolerates comments and trailing commas."""
        tree = parse_tree('{\n  // note\n  "a": 1,\n}', JSONC)
        assert tree.ok
        assert node_value(tree.root) == {"a": 1}

    def test_strict_dialect_rejects_comments(self):
        """Test comments are errors in strict JSON."""
        tree = parse_tree('{"a": 1 /* c */}', STRICT)
        assert not tree.ok

    def test_partial_tree_kept_after_error(self):
        """Test paths before a syntax error still resolve."""
        tree = parse_tree('{"a": 1, "b": [1, 2')
        assert not tree.ok
        assert find_node_at_location(tree.root, ["a"]).value == 1
        assert find_node_at_location(tree.root, ["b", 1]).value == 2

    def test_empty_content(self):
        """Test empty input has no root, and is an error only when not allowed."""
        assert parse_tree("", JSONC).root is None
        assert parse_tree("", JSONC).ok
        assert not parse_tree("", OBJECT_LITERAL).ok

    def test_trailing_content_is_error(self):
        """Test text after the root value is reported."""
        tree = parse_tree('{"a": 1} 2')
        assert [problem.message for problem in tree.errors] == ["End of file expected"]

    def test_duplicate_keys_last_wins(self):
        """Test lookups and decoding agree with json.loads on duplicate keys."""
        text = '{"a": 1, "a": 2}'
        tree = parse_tree(text)
        assert node_value(tree.root) == {"a": 2}
        assert find_node_at_location(tree.root, ["a"]).value == 2

    def test_unicode_escapes_decoded(self):
        """Test \\u escapes, including surrogate pairs."""
        tree = parse_tree('"caf\\u00e9 \\ud83d\\ude00"')
        assert tree.root.value == "café 😀"


@pytest.mark.unit
class TestFindNodeAtLocation:
    """Tests for path lookups in the tree."""

    @pytest.fixture
    def root(self):
        return parse_tree('{"nodes": [{"name": "A"}], "connections": {}}').root

    def test_empty_path_is_root(self, root):
        """Test the empty path resolves to the root node."""
        assert find_node_at_location(root, []) is root

    @pytest.mark.parametrize(
        "segments",
        [["missing"], ["nodes", 1], ["nodes", "0"], ["connections", 0], ["nodes", 0, "name", "x"]],
    )
    def test_missing_segments_return_none(self, root, segments):
        """Test any missing segment fails the whole lookup."""
        assert find_node_at_location(root, segments) is None

    def test_bool_is_not_an_index(self, root):
        """Test True is not treated as index 1."""
        assert find_node_at_location(root, ["nodes", False]) is None


@pytest.mark.unit
class TestRepairJsonText:
    """Tests for the repairer itself."""

    def test_nothing_to_repair_declines(self):
        """Test valid JSON is not 'repaired'."""
        result = repair_json_text('{"a": 1}')
        assert not result.ok
        assert result.declined == "No applicable repair"

    def test_blank_input_declines(self):
        """Test blank input is declined."""
        assert repair_json_text("   ").declined == "Input is empty"

    def test_string_closed_at_line_break(self):
        """Test an unterminated string is closed at the end of its line."""
        result = repair_json_text('{"a": "abc\n}')
        assert result.ok
        assert result.text == '{"a": "abc"\n}'

    def test_comment_markers_inside_strings_kept(self):
        """Test // inside a string is not a comment."""
        result = repair_json_text('{"url": "https://example.com",}')
        assert result.text == '{"url": "https://example.com"}'

    def test_single_quotes_only_when_allowed(self):
        """Test single-quoted strings are opaque only in the object-literal mode."""
        result = repair_json_text("{a: 'x, }'", allow_single_quotes=True)
        assert result.ok
        assert result.text == "{a: 'x, }'}"
