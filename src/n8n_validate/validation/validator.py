"""Structural validation of decoded workflow documents."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from n8n_validate.source_map import (
    SourceMap,
    create_source_map,
    extract_snippet,
    find_source_location,
)
from n8n_validate.types import (
    FixAction,
    IssueLocation,
    SuggestedFix,
    ValidationIssue,
    ValidationResult,
)

from .issues import DEFAULT_ISSUE_REGISTRY, IssueRegistry
from .node_types import DEFAULT_NODE_TYPES, NodeTypeRegistry

logger = logging.getLogger(__name__)

DEPRECATED_TYPE_PREFIX = "nodes-base."


@dataclass(frozen=True)
class ValidateOptions:
    """Validation options."""

    raw_source: str | None = None  # Text the document was decoded from
    snippet_context_lines: int = 3
    node_types: NodeTypeRegistry | None = None


@dataclass
class _Walk:
    """Per-call state of one validation walk."""

    source_map: SourceMap | None
    issues: list[ValidationIssue] = field(default_factory=list)
    node_type_issues: list[str] = field(default_factory=list)


def json_type_name(value: Any) -> str:
    """JSON type name of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class WorkflowStructureValidator:
    """Validate the structural contract of a workflow document.

    The walk is flat and never stops early, except when the root is not an
    object. Every rule reports through the issue registry; issues are then
    enriched with a source location and snippet when raw text is available.
    The document is only read; issue context refers to its values without
    copying them.
    """

    def __init__(
        self,
        node_types: NodeTypeRegistry | None = None,
        issue_registry: IssueRegistry | None = None,
        snippet_context_lines: int = 3,
    ):
        """Initialize validator.

        Args:
            node_types: Known node types (defaults to DEFAULT_NODE_TYPES)
            issue_registry: Issue templates (defaults to DEFAULT_ISSUE_REGISTRY)
            snippet_context_lines: Lines of context around highlighted lines
        """
        self.node_types = node_types if node_types is not None else DEFAULT_NODE_TYPES
        self.issue_registry = issue_registry or DEFAULT_ISSUE_REGISTRY
        self.snippet_context_lines = snippet_context_lines

    def validate(self, data: Any, raw_source: str | None = None) -> ValidationResult:
        """Validate a decoded document.

        Checks:
        - Root is an object
        - ``nodes`` is an array and ``connections`` an object
        - Each node has type, name, typeVersion, position and parameters
        - Node type format (package prefix, deprecated prefix)
        - Type-specific parameter shapes (IF / Switch root ``options``)

        Args:
            data: Decoded document (never modified)
            raw_source: Raw text, for source locations and snippets

        Returns:
            ValidationResult; valid iff no error-severity issue
        """
        walk = _Walk(source_map=create_source_map(raw_source) if raw_source else None)

        if not isinstance(data, dict):
            self._report(
                walk, "ROOT_NOT_OBJECT", lookup=None, value=json_type_name(data)
            )
            return ValidationResult.from_issues(walk.issues)

        self._check_nodes_property(walk, data)
        self._check_connections_property(walk, data)

        nodes = data.get("nodes")
        if isinstance(nodes, list):
            for index, node in enumerate(nodes):
                self._check_node(walk, index, node)

        result = ValidationResult.from_issues(walk.issues, walk.node_type_issues)
        logger.debug(
            "Validated workflow: %d issue(s), valid=%s", len(result.issues), result.valid
        )
        return result

    def _report(
        self,
        walk: _Walk,
        rule: str,
        lookup: str | None,
        **kwargs: Any,
    ) -> None:
        """Create an issue, enrich it and record it."""
        issue = self.issue_registry.create(rule, **kwargs)
        issue = self._enrich(walk, issue, lookup)
        walk.issues.append(issue)

        template = self.issue_registry.get_template(rule)
        if template is not None and template.node_type_channel:
            walk.node_type_issues.append(issue.message)

    def _enrich(
        self, walk: _Walk, issue: ValidationIssue, lookup: str | None
    ) -> ValidationIssue:
        """Attach source location and snippet when the path resolves."""
        if walk.source_map is None or not lookup:
            return issue

        location = find_source_location(walk.source_map, lookup)
        if location is None:
            return issue

        snippet = extract_snippet(walk.source_map, location.line, self.snippet_context_lines)
        return replace(issue, source_location=location, source_snippet=snippet)

    def _check_nodes_property(self, walk: _Walk, data: dict[str, Any]) -> None:
        if "nodes" not in data:
            self._report(
                walk, "NODES_MISSING", lookup=None, location=IssueLocation(path="nodes")
            )
        elif not isinstance(data["nodes"], list):
            self._report(
                walk,
                "NODES_NOT_ARRAY",
                lookup="nodes",
                location=IssueLocation(path="nodes"),
                value=json_type_name(data["nodes"]),
            )

    def _check_connections_property(self, walk: _Walk, data: dict[str, Any]) -> None:
        location = IssueLocation(path="connections")
        if "connections" not in data:
            self._report(walk, "CONNECTIONS_MISSING", lookup=None, location=location)
        elif isinstance(data["connections"], list):
            self._report(
                walk, "CONNECTIONS_IS_ARRAY", lookup="connections", location=location,
                value="array",
            )
        elif not isinstance(data["connections"], dict):
            self._report(
                walk, "CONNECTIONS_NOT_OBJECT", lookup="connections", location=location,
                value=json_type_name(data["connections"]),
            )

    def _check_node(self, walk: _Walk, index: int, node: Any) -> None:
        node_path = f"nodes[{index}]"

        if not isinstance(node, dict):
            self._report(
                walk,
                "NODE_NOT_OBJECT",
                lookup=node_path,
                location=IssueLocation(path=node_path, node_index=index),
                value=json_type_name(node),
                index=index,
            )
            return

        raw_name = node.get("name")
        raw_type = node.get("type")
        node_name = str(raw_name) if raw_name else "unnamed"
        node_type = str(raw_type) if raw_type else "unknown"
        node_id = node.get("id")

        def location(suffix: str) -> IssueLocation:
            return IssueLocation(
                path=f"{node_path}.{suffix}",
                node_name=node_name,
                node_id=str(node_id) if node_id is not None else None,
                node_type=node_type,
                node_index=index,
            )

        names = {"index": index, "node_name": node_name, "node_type": node_type}

        self._check_type(walk, node_path, raw_type, location, names, node)

        if raw_name is None or raw_name == "":
            self._report(
                walk, "NODE_NAME_MISSING", lookup=node_path, location=location("name"),
                full_object=node, **names,
            )

        if "typeVersion" not in node:
            self._report(
                walk, "TYPE_VERSION_MISSING", lookup=node_path,
                location=location("typeVersion"), full_object=node, **names,
            )
        elif not _is_number(node["typeVersion"]):
            self._report(
                walk, "TYPE_VERSION_NOT_NUMBER", lookup=f"{node_path}.typeVersion",
                location=location("typeVersion"),
                value=json_type_name(node["typeVersion"]), full_object=node, **names,
            )

        position = node.get("position")
        if position is None:
            self._report(
                walk, "POSITION_MISSING", lookup=node_path, location=location("position"),
                full_object=node, **names,
            )
        elif not (
            isinstance(position, list)
            and len(position) == 2
            and all(_is_number(coordinate) for coordinate in position)
        ):
            self._report(
                walk, "POSITION_INVALID", lookup=f"{node_path}.position",
                location=location("position"), value=position,
                full_object=node, **names,
            )

        if "parameters" not in node:
            self._report(
                walk, "PARAMETERS_MISSING", lookup=node_path,
                location=location("parameters"), full_object=node, **names,
            )
        elif not isinstance(node["parameters"], dict):
            self._report(
                walk, "PARAMETERS_NOT_OBJECT", lookup=f"{node_path}.parameters",
                location=location("parameters"),
                value=json_type_name(node["parameters"]), full_object=node, **names,
            )
        elif isinstance(raw_type, str):
            self._check_branch_options(
                walk, node_path, raw_type, node["parameters"], location, names
            )

    def _check_type(
        self,
        walk: _Walk,
        node_path: str,
        raw_type: Any,
        location: Callable[[str], IssueLocation],
        names: dict[str, Any],
        node: dict[str, Any],
    ) -> None:
        type_path = f"{node_path}.type"

        if raw_type is None or raw_type == "":
            self._report(
                walk, "NODE_TYPE_MISSING", lookup=node_path, location=location("type"),
                full_object=node, **names,
            )
        elif not isinstance(raw_type, str):
            self._report(
                walk, "NODE_TYPE_NOT_STRING", lookup=type_path, location=location("type"),
                value=json_type_name(raw_type), full_object=node, **names,
            )
        elif "." not in raw_type:
            candidates = self.node_types.types_named(raw_type)
            fix = None
            if len(candidates) == 1:
                fix = SuggestedFix(
                    action=FixAction.REPLACE,
                    description=f'Use the fully qualified node type "{candidates[0]}"',
                    target=type_path,
                    before=raw_type,
                    after=candidates[0],
                )
            self._report(
                walk, "NODE_TYPE_MISSING_PACKAGE", lookup=type_path, location=location("type"),
                value=raw_type, full_object=node,
                valid_alternatives=candidates or None, suggested_fix=fix, **names,
            )
        elif raw_type.startswith(DEPRECATED_TYPE_PREFIX):
            self._report(
                walk, "NODE_TYPE_DEPRECATED_PREFIX", lookup=type_path, location=location("type"),
                value=raw_type, full_object=node,
                suggested_fix=SuggestedFix(
                    action=FixAction.REPLACE,
                    description='Prefix the node type with "n8n-"',
                    target=type_path,
                    before=raw_type,
                    after=f"n8n-{raw_type}",
                ),
                **names,
            )

    def _check_branch_options(
        self,
        walk: _Walk,
        node_path: str,
        node_type: str,
        parameters: dict[str, Any],
        location: Callable[[str], IssueLocation],
        names: dict[str, Any],
    ) -> None:
        """IF / Switch nodes reject an empty ``options`` object at the parameters root."""
        if not self.node_types.is_branching(node_type):
            return
        options = parameters.get("options")
        if not isinstance(options, dict) or options:
            return

        options_path = f"{node_path}.parameters.options"
        known = self.node_types.known_parameters(node_type)
        self._report(
            walk,
            "IF_SWITCH_OPTIONS_ROOT",
            lookup=options_path,
            location=location("parameters.options"),
            value={},
            full_object=parameters,
            valid_alternatives=known,
            suggested_fix=SuggestedFix(
                action=FixAction.DELETE,
                description='Remove the empty "options" key from the node parameters',
                target=options_path,
                before='"options": {}',
            ),
            observed_keys=", ".join(parameters),
            known_keys=", ".join(known),
            **names,
        )


def validate_workflow_structure(
    data: Any, options: ValidateOptions | None = None, **overrides: Any
) -> ValidationResult:
    """Validate a decoded workflow document.

    Args:
        data: Decoded document
        options: Validation options
        **overrides: Individual option overrides (raw_source,
            snippet_context_lines, node_types)

    Returns:
        ValidationResult
    """
    options = options or ValidateOptions()
    if overrides:
        options = replace(options, **overrides)

    validator = WorkflowStructureValidator(
        node_types=options.node_types,
        snippet_context_lines=options.snippet_context_lines,
    )
    return validator.validate(data, raw_source=options.raw_source)
