"""Auto-fix rules.

A rule recognizes one known defect pattern on a single node and corrects it in
place. Rules must leave nodes they do not recognize untouched.
"""

from abc import ABC, abstractmethod
from typing import Any

from n8n_validate.validation import DEFAULT_NODE_TYPES, NodeTypeRegistry


class FixRule(ABC):
    """Base class for auto-fix rules."""

    name: str = "rule"

    @abstractmethod
    def matches(self, node: Any) -> bool:
        """Check if the rule applies to a node.

        Args:
            node: Decoded node entry (any shape)

        Returns:
            True if ``apply`` would change the node
        """

    @abstractmethod
    def apply(self, node: dict[str, Any], index: int) -> str:
        """Fix the node in place.

        Args:
            node: Node the rule matched
            index: Position of the node in ``nodes``

        Returns:
            Warning describing the change
        """


class IfSwitchEmptyOptionsRule(FixRule):
    """Drop an empty ``options`` object from the parameters root of IF/Switch nodes."""

    name = "if-switch-empty-options"

    def __init__(self, node_types: NodeTypeRegistry | None = None):
        self.node_types = node_types if node_types is not None else DEFAULT_NODE_TYPES

    def matches(self, node: Any) -> bool:
        if not isinstance(node, dict):
            return False
        node_type = node.get("type")
        if not isinstance(node_type, str) or not self.node_types.is_branching(node_type):
            return False
        parameters = node.get("parameters")
        if not isinstance(parameters, dict) or "options" not in parameters:
            return False
        options = parameters["options"]
        # Non-empty options may carry real settings; leave them alone
        return isinstance(options, dict) and not options

    def apply(self, node: dict[str, Any], index: int) -> str:
        del node["parameters"]["options"]
        label = node.get("name") or node.get("id") or f"#{index}"
        return f'Removed empty "options" from parameters of node "{label}" ({node["type"]})'
