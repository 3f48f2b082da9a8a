"""Registry of known n8n node types.

Holds the root-level parameter names each node type accepts and which types
are branch nodes. Validator rules consult the registry, so supporting a new
node type is a registry entry rather than a rule change.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class NodeTypeSpec:
    """What the validator knows about one node type."""

    type: str  # e.g., "n8n-nodes-base.if"
    known_parameters: tuple[str, ...] = ()
    branching: bool = False  # IF / Switch style nodes

    @property
    def short_name(self) -> str:
        """Type without its package prefix ("if" for "n8n-nodes-base.if")."""
        return self.type.rsplit(".", 1)[-1]


class NodeTypeRegistry(Mapping[str, NodeTypeSpec]):
    """Immutable mapping of node type string to NodeTypeSpec.

    Extension returns a new registry; existing registries are never changed.
    """

    def __init__(self, specs: Iterable[NodeTypeSpec] = ()):
        self._specs = MappingProxyType({spec.type: spec for spec in specs})

    def __getitem__(self, node_type: str) -> NodeTypeSpec:
        return self._specs[node_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def with_specs(self, *specs: NodeTypeSpec) -> "NodeTypeRegistry":
        """Return a registry with ``specs`` added (or replaced by type)."""
        return NodeTypeRegistry([*self._specs.values(), *specs])

    def known_parameters(self, node_type: str) -> tuple[str, ...]:
        spec = self._specs.get(node_type)
        return spec.known_parameters if spec else ()

    def is_branching(self, node_type: str) -> bool:
        spec = self._specs.get(node_type)
        return bool(spec and spec.branching)

    def types_named(self, short_name: str) -> list[str]:
        """Full type strings whose part after the package prefix is ``short_name``.

        Matching ignores case, so "IF" finds "n8n-nodes-base.if".
        """
        wanted = short_name.lower()
        return [t for t, spec in self._specs.items() if spec.short_name.lower() == wanted]


DEFAULT_NODE_TYPES = NodeTypeRegistry(
    [
        NodeTypeSpec(
            "n8n-nodes-base.if",
            known_parameters=("conditions", "looseTypeValidation"),
            branching=True,
        ),
        NodeTypeSpec(
            "n8n-nodes-base.switch",
            known_parameters=("rules", "fallbackOutput"),
            branching=True,
        ),
        NodeTypeSpec(
            "n8n-nodes-base.code",
            known_parameters=("mode", "jsCode", "language", "workflowMode"),
        ),
        NodeTypeSpec(
            "n8n-nodes-base.webhook",
            known_parameters=(
                "path",
                "responseMode",
                "responseCode",
                "responseData",
                "options",
                "authentication",
                "httpMethod",
            ),
        ),
    ]
)
