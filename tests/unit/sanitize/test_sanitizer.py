"""Tests for node id normalization."""

import copy
import itertools

import pytest

from n8n_validate.errors import ValidatorError
from n8n_validate.sanitize import (
    MAX_ID_ATTEMPTS,
    SanitizeOptions,
    generate_node_id,
    sanitize_workflow,
)


def counter_ids():
    counter = itertools.count(1)
    return lambda: f"gen-{next(counter)}"


@pytest.mark.unit
class TestSanitizeWorkflow:
    """Tests for sanitize_workflow."""

    def test_clean_workflow_unchanged(self, valid_workflow):
        """Test a workflow with unique ids passes through as-is."""
        result = sanitize_workflow(valid_workflow)
        assert result.workflow == valid_workflow
        assert result.warnings == []

    def test_key_order_preserved(self, valid_workflow):
        """Test document and node keys keep their original order."""
        result = sanitize_workflow(valid_workflow)
        assert list(result.workflow) == list(valid_workflow)
        assert list(result.workflow["nodes"][0]) == list(valid_workflow["nodes"][0])

    def test_unknown_keys_kept(self, make_node):
        """Test metadata the model does not know about is written back."""
        node = make_node(webhookId="w-1", notes="keep me")
        document = {
            "meta": {"instanceId": "abc"},
            "nodes": [node],
            "connections": {},
            "pinData": {},
        }
        result = sanitize_workflow(document)
        assert result.workflow == document

    @pytest.mark.parametrize("bad_id", [None, "", 42])
    def test_missing_ids_assigned(self, make_node, bad_id):
        """Test nodes without a usable id get a fresh one."""
        node = make_node(id=bad_id)
        result = sanitize_workflow({"nodes": [node], "connections": {}}, id_factory=counter_ids())
        assert result.workflow["nodes"][0]["id"] == "gen-1"
        assert result.warnings == ['Assigned new id "gen-1" to node "Set fields"']

    def test_absent_id_key_added(self, make_node):
        """Test a node with no id key receives one."""
        node = make_node()
        del node["id"]
        result = sanitize_workflow({"nodes": [node], "connections": {}})
        new_id = result.workflow["nodes"][0]["id"]
        assert isinstance(new_id, str) and new_id

    def test_duplicates_replaced_first_kept(self, make_node):
        """Test later duplicates get new ids, the first occurrence keeps its id."""
        document = {
            "nodes": [make_node(name="A"), make_node(name="B"), make_node(name="C")],
            "connections": {},
        }
        result = sanitize_workflow(document, id_factory=counter_ids())
        assert [node["id"] for node in result.workflow["nodes"]] == ["n1", "gen-1", "gen-2"]
        assert result.warnings == [
            'Replaced duplicate id "n1" on node "B" with "gen-1"',
            'Replaced duplicate id "n1" on node "C" with "gen-2"',
        ]

    def test_duplicates_kept_when_regeneration_off(self, make_node):
        """Test duplicate ids survive when regeneration is disabled."""
        document = {"nodes": [make_node(name="A"), make_node(name="B")], "connections": {}}
        result = sanitize_workflow(document, SanitizeOptions(regenerate_ids=False))
        assert [node["id"] for node in result.workflow["nodes"]] == ["n1", "n1"]
        assert result.warnings == []

    def test_new_ids_avoid_existing_ids(self, make_node):
        """Test a generated id never collides with a later node's id."""
        document = {
            "nodes": [make_node(id=None, name="A"), make_node(id="gen-1", name="B")],
            "connections": {},
        }
        result = sanitize_workflow(document, id_factory=counter_ids())
        assert [node["id"] for node in result.workflow["nodes"]] == ["gen-2", "gen-1"]

    def test_label_falls_back_to_index(self, make_node):
        """Test unnamed nodes are named by position in warnings."""
        node = make_node(id="")
        del node["name"]
        result = sanitize_workflow({"nodes": [node], "connections": {}}, id_factory=counter_ids())
        assert result.warnings == ['Assigned new id "gen-1" to node "#0"']

    def test_input_not_modified(self, make_node):
        """Test the caller's document is left alone."""
        document = {"nodes": [make_node(), make_node()], "connections": {}}
        snapshot = copy.deepcopy(document)
        sanitize_workflow(document)
        assert document == snapshot

    def test_deeply_nested_parameters(self, make_node, nested_lists):
        """Test nesting deeper than the recursion limit is passed through."""
        deep = nested_lists(5000)
        node = make_node(id=None, parameters={"v": deep})
        result = sanitize_workflow({"nodes": [node], "connections": {}}, id_factory=counter_ids())
        assert result.workflow["nodes"][0]["id"] == "gen-1"
        assert result.workflow["nodes"][0]["parameters"]["v"] is deep
        assert node["id"] is None

    def test_idempotent(self, make_node):
        """Test a second pass changes nothing."""
        document = {"nodes": [make_node(id=None), make_node(), make_node()], "connections": {}}
        first = sanitize_workflow(document)
        second = sanitize_workflow(first.workflow)
        assert second.workflow == first.workflow
        assert second.warnings == []

    @pytest.mark.parametrize("document", [None, [], {"nodes": "x"}, {"nodes": ["x"]}])
    def test_unsanitizable_documents_returned(self, document):
        """Test documents without a node object list are returned unchanged."""
        result = sanitize_workflow(document)
        assert result.workflow is document
        assert result.warnings == []


@pytest.mark.unit
class TestGenerateNodeId:
    """Tests for generate_node_id."""

    def test_default_ids_are_unique_strings(self):
        """Test UUID ids are generated by default."""
        first = generate_node_id(set())
        assert isinstance(first, str) and len(first) == 36
        assert generate_node_id({first}) != first

    def test_skips_taken_and_empty_candidates(self):
        """Test candidates already in use or empty are skipped."""
        candidates = iter(["a", "", "b"])
        assert generate_node_id({"a"}, lambda: next(candidates)) == "b"

    def test_gives_up_after_attempt_limit(self):
        """Test a factory that only repeats itself fails loudly."""
        calls = []

        def stuck():
            calls.append(1)
            return "same"

        with pytest.raises(ValidatorError) as exc_info:
            generate_node_id({"same"}, stuck)
        assert exc_info.value.code == "INTERNAL_ERROR"
        assert len(calls) == MAX_ID_ATTEMPTS
