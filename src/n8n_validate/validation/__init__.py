"""Structural validation of workflow documents."""

from .issues import DEFAULT_ISSUE_REGISTRY, IssueRegistry, IssueTemplate
from .node_types import DEFAULT_NODE_TYPES, NodeTypeRegistry, NodeTypeSpec
from .validator import (
    ValidateOptions,
    WorkflowStructureValidator,
    json_type_name,
    validate_workflow_structure,
)

__all__ = [
    "ValidateOptions",
    "WorkflowStructureValidator",
    "validate_workflow_structure",
    "json_type_name",
    "IssueRegistry",
    "IssueTemplate",
    "DEFAULT_ISSUE_REGISTRY",
    "NodeTypeRegistry",
    "NodeTypeSpec",
    "DEFAULT_NODE_TYPES",
]
