"""Workflow document model types.

Documents are open records: known fields are typed, everything else is kept
in ``extra`` and written back in the original key order.
"""

from dataclasses import dataclass, field
from typing import Any

# JSON key -> attribute name
_NODE_FIELDS = {
    "id": "id",
    "name": "name",
    "type": "type",
    "typeVersion": "type_version",
    "position": "position",
    "parameters": "parameters",
    "credentials": "credentials",
    "disabled": "disabled",
}

_WORKFLOW_FIELDS = {
    "name": "name",
    "nodes": "nodes",
    "connections": "connections",
}


@dataclass
class WorkflowNode:
    """Workflow node (one typed unit of the graph)."""

    type: str
    type_version: int | float
    position: list[int | float]
    parameters: dict[str, Any] = field(default_factory=dict)
    id: str | None = None
    name: str | None = None
    disabled: bool | None = None
    credentials: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: list[str] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkflowNode":
        """Build a node from a decoded node mapping.

        Absent fields stay None and are not written back by ``to_dict``.

        Args:
            data: Decoded node object

        Returns:
            WorkflowNode with unknown keys preserved in ``extra``
        """
        known = {attr: data.get(key) for key, attr in _NODE_FIELDS.items()}
        extra = {key: value for key, value in data.items() if key not in _NODE_FIELDS}
        return cls(**known, extra=extra, key_order=list(data))

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the n8n JSON shape, keeping the original key order."""
        values: dict[str, Any] = {}
        for key, attr in _NODE_FIELDS.items():
            value = getattr(self, attr)
            if value is not None or key in self.key_order:
                values[key] = value
        values.update(self.extra)
        return _ordered(values, self.key_order)


@dataclass
class Workflow:
    """Decoded workflow document (nodes + connections + passthrough metadata)."""

    nodes: list[WorkflowNode] = field(default_factory=list)
    connections: dict[str, Any] = field(default_factory=dict)
    name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: list[str] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Workflow":
        """Build a workflow from a structurally valid document.

        Args:
            data: Decoded workflow object

        Returns:
            Workflow instance
        """
        extra = {key: value for key, value in data.items() if key not in _WORKFLOW_FIELDS}
        return cls(
            nodes=[WorkflowNode.from_dict(node) for node in data.get("nodes", [])],
            connections=data.get("connections", {}),
            name=data.get("name"),
            extra=extra,
            key_order=list(data),
        )

    def to_dict(self) -> dict[str, Any]:
        values: dict[str, Any] = {"nodes": [node.to_dict() for node in self.nodes]}
        if self.connections or "connections" in self.key_order:
            values["connections"] = self.connections
        if self.name is not None or "name" in self.key_order:
            values["name"] = self.name
        values.update(self.extra)
        return _ordered(values, self.key_order)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes if node.id]


def _ordered(values: dict[str, Any], key_order: list[str]) -> dict[str, Any]:
    """Order keys as originally seen, new keys last."""
    result = {key: values[key] for key in key_order if key in values}
    for key, value in values.items():
        if key not in result:
            result[key] = value
    return result
