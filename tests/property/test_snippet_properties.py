"""Property-based tests for snippets and line/column conversion."""

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from n8n_validate.source_map import create_source_map, extract_snippet, offset_to_line_column

source_lines = st.lists(
    st.text(alphabet=st.characters(blacklist_characters="\n"), max_size=15),
    min_size=1,
    max_size=30,
)


@pytest.mark.property
class TestSnippetProperties:
    """Property tests for extract_snippet."""

    @given(source_lines, st.integers(-50, 100), st.integers(0, 6))
    @settings(max_examples=200)
    def test_window_bounds(self, lines, line, context_lines):
        """The window stays in the document and highlights exactly one line."""
        source = "\n".join(lines)
        assume(source)
        source_map = create_source_map(source)
        total = len(source_map.lines)
        snippet = extract_snippet(source_map, line, context_lines)

        assert 1 <= snippet.start_line <= snippet.highlight_line <= snippet.end_line <= total
        assert len(snippet.lines) == snippet.end_line - snippet.start_line + 1
        assert len(snippet.lines) <= 2 * context_lines + 1
        highlighted = [s.line_number for s in snippet.lines if s.is_highlighted]
        assert highlighted == [snippet.highlight_line]
        for snippet_line in snippet.lines:
            assert snippet_line.content == source_map.lines[snippet_line.line_number - 1]


@pytest.mark.property
class TestLineColumnProperties:
    """Property tests for offset_to_line_column."""

    @given(source_lines, st.data())
    @settings(max_examples=200)
    def test_offsets_round_trip(self, lines, data):
        """Every in-range offset maps back to the same character."""
        source = "\n".join(lines)
        offset = data.draw(st.integers(0, len(source)))
        line, column = offset_to_line_column(source, offset)

        assert 1 <= line <= len(lines)
        assert 1 <= column <= len(lines[line - 1]) + 1
        starts = [sum(len(text) + 1 for text in lines[:index]) for index in range(len(lines))]
        assert starts[line - 1] + column - 1 == offset
