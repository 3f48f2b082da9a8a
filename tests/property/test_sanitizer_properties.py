"""Property-based tests for node id normalization."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from n8n_validate.sanitize import sanitize_workflow

# Ids as they show up in real exports, plus broken ones
node_ids = st.none() | st.sampled_from(["", "a", "b", "c"]) | st.integers(0, 3)


def make_document(ids):
    return {
        "nodes": [
            {
                "id": node_id,
                "name": f"Node {index}",
                "type": "n8n-nodes-base.set",
                "typeVersion": 1,
                "position": [index * 100, 0],
                "parameters": {},
            }
            for index, node_id in enumerate(ids)
        ],
        "connections": {},
    }


@pytest.mark.property
class TestSanitizerProperties:
    """Property tests for sanitize_workflow."""

    @given(st.lists(node_ids, max_size=12))
    @settings(max_examples=100)
    def test_ids_unique_non_empty_strings(self, ids):
        """After sanitizing every node has a distinct non-empty string id."""
        result = sanitize_workflow(make_document(ids))
        new_ids = [node["id"] for node in result.workflow["nodes"]]
        assert all(isinstance(node_id, str) and node_id for node_id in new_ids)
        assert len(set(new_ids)) == len(new_ids)

    @given(st.lists(node_ids, max_size=12))
    @settings(max_examples=100)
    def test_first_occurrence_kept(self, ids):
        """The first node carrying a valid id keeps it."""
        result = sanitize_workflow(make_document(ids))
        new_ids = [node["id"] for node in result.workflow["nodes"]]
        seen = set()
        for old, new in zip(ids, new_ids):
            if isinstance(old, str) and old and old not in seen:
                assert new == old
                seen.add(old)

    @given(st.lists(node_ids, max_size=12))
    @settings(max_examples=100)
    def test_idempotent(self, ids):
        """A second pass changes nothing and warns about nothing."""
        first = sanitize_workflow(make_document(ids))
        second = sanitize_workflow(first.workflow)
        assert second.workflow == first.workflow
        assert second.warnings == []

    @given(st.lists(node_ids, max_size=12))
    @settings(max_examples=100)
    def test_one_warning_per_change(self, ids):
        """Every changed id is reported exactly once."""
        result = sanitize_workflow(make_document(ids))
        new_ids = [node["id"] for node in result.workflow["nodes"]]
        changed = sum(1 for old, new in zip(ids, new_ids) if old != new)
        assert len(result.warnings) == changed
