"""Tests for the auto-fixer."""

import pytest

from n8n_validate.fixing import (
    FixRegistry,
    FixRule,
    IfSwitchEmptyOptionsRule,
    fix_invalid_options_fields,
)
from n8n_validate.validation import DEFAULT_NODE_TYPES, NodeTypeSpec


class UppercaseNameRule(FixRule):
    name = "uppercase-name"

    def matches(self, node):
        name = node.get("name") if isinstance(node, dict) else None
        return isinstance(name, str) and name.islower()

    def apply(self, node, index):
        node["name"] = node["name"].upper()
        return f"Renamed node #{index}"


@pytest.mark.unit
class TestFixInvalidOptionsFields:
    """Tests for fix_invalid_options_fields."""

    def test_empty_options_removed(self, make_node):
        """Test empty options are dropped from IF and Switch nodes."""
        document = {
            "nodes": [
                make_node(
                    name="Check",
                    type="n8n-nodes-base.if",
                    parameters={"options": {}, "conditions": {}},
                ),
                make_node(name="Route", type="n8n-nodes-base.switch", parameters={"options": {}}),
            ],
            "connections": {},
        }
        result = fix_invalid_options_fields(document)
        assert result.fixed == 2
        assert result.warnings == [
            'Removed empty "options" from parameters of node "Check" (n8n-nodes-base.if)',
            'Removed empty "options" from parameters of node "Route" (n8n-nodes-base.switch)',
        ]
        assert document["nodes"][0]["parameters"] == {"conditions": {}}
        assert document["nodes"][1]["parameters"] == {}

    @pytest.mark.parametrize(
        "overrides",
        [
            {"type": "n8n-nodes-base.if", "parameters": {"options": {"caseSensitive": True}}},
            {"type": "n8n-nodes-base.if", "parameters": {"options": []}},
            {"type": "n8n-nodes-base.if", "parameters": {"conditions": {}}},
            {"type": "n8n-nodes-base.webhook", "parameters": {"options": {}}},
            {"type": 5, "parameters": {"options": {}}},
            {"type": "n8n-nodes-base.if", "parameters": None},
        ],
    )
    def test_other_nodes_untouched(self, make_node, overrides):
        """Test nodes outside the exact pattern are not changed."""
        node = make_node(**overrides)
        before = repr(node)
        result = fix_invalid_options_fields({"nodes": [node], "connections": {}})
        assert result.fixed == 0
        assert repr(node) == before

    @pytest.mark.parametrize("document", [None, [], "x", {}, {"nodes": {}}, {"nodes": "x"}])
    def test_documents_without_node_list(self, document):
        """Test documents without a nodes array are a no-op."""
        result = fix_invalid_options_fields(document)
        assert result.fixed == 0
        assert result.warnings == []

    def test_non_object_nodes_skipped(self, make_node):
        """Test malformed entries are ignored, not fixed or raised on."""
        document = {
            "nodes": [
                "text",
                None,
                make_node(type="n8n-nodes-base.if", parameters={"options": {}}),
            ]
        }
        assert fix_invalid_options_fields(document).fixed == 1

    def test_label_falls_back_to_id_then_index(self, make_node):
        """Test warnings name the node by name, id or position."""
        with_id = make_node(name="", type="n8n-nodes-base.if", parameters={"options": {}})
        bare = make_node(type="n8n-nodes-base.if", parameters={"options": {}})
        del bare["name"]
        del bare["id"]
        result = fix_invalid_options_fields({"nodes": [with_id, bare]})
        assert result.warnings == [
            'Removed empty "options" from parameters of node "n1" (n8n-nodes-base.if)',
            'Removed empty "options" from parameters of node "#1" (n8n-nodes-base.if)',
        ]

    def test_second_run_is_noop(self, make_node):
        """Test fixing is idempotent."""
        document = {"nodes": [make_node(type="n8n-nodes-base.if", parameters={"options": {}})]}
        fix_invalid_options_fields(document)
        assert fix_invalid_options_fields(document).fixed == 0


@pytest.mark.unit
class TestFixRegistry:
    """Tests for FixRegistry."""

    def test_builtin_rules(self):
        """Test the default registry holds the IF/Switch rule."""
        assert FixRegistry().list_rules() == ["if-switch-empty-options"]

    def test_register_replaces_by_name(self):
        """Test registering a rule with the same name replaces it."""
        registry = FixRegistry()
        registry.register(IfSwitchEmptyOptionsRule())
        assert registry.list_rules() == ["if-switch-empty-options"]

    def test_custom_rules_applied_in_order(self, make_node):
        """Test every matching rule runs on each node."""
        registry = FixRegistry([IfSwitchEmptyOptionsRule(), UppercaseNameRule()])
        node = make_node(name="check", type="n8n-nodes-base.if", parameters={"options": {}})
        result = fix_invalid_options_fields({"nodes": [node]}, registry)
        assert result.fixed == 2
        assert result.warnings[1] == "Renamed node #0"
        assert node["name"] == "CHECK"

    def test_rule_uses_given_node_types(self, make_node):
        """Test a custom branching type is fixed when registered."""
        node_types = DEFAULT_NODE_TYPES.with_specs(NodeTypeSpec("acme.router", branching=True))
        registry = FixRegistry([IfSwitchEmptyOptionsRule(node_types)])
        node = make_node(type="acme.router", parameters={"options": {}})
        assert fix_invalid_options_fields({"nodes": [node]}, registry).fixed == 1
        assert fix_invalid_options_fields(
            {"nodes": [make_node(type="acme.router", parameters={"options": {}})]}
        ).fixed == 0
