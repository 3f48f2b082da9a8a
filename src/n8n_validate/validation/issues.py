"""Issue templates for structural validation.

Every finding the validator can emit is registered here under a rule id. The
validator only picks a rule and supplies context; wording, code, severity,
expected text and runtime error live in the template.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from n8n_validate.errors import create_error
from n8n_validate.types import (
    IssueContext,
    IssueLocation,
    IssueSeverity,
    SuggestedFix,
    ValidationIssue,
)


@dataclass(frozen=True)
class IssueTemplate:
    """Template for one validation rule."""

    rule: str
    code: str
    severity: IssueSeverity
    message_template: str
    expected_template: str | None = None
    n8n_error: str | None = None
    hint_template: str | None = None
    node_type_channel: bool = False  # Also reported through node_type_issues


class IssueRegistry:
    """Immutable registry of issue templates, keyed by rule id.

    Extension returns a new registry; existing registries are never changed.
    """

    def __init__(self, templates: Iterable[IssueTemplate] | None = None):
        """Initialize registry.

        Args:
            templates: Templates to use (defaults to the built-in templates)
        """
        if templates is None:
            templates = self._builtin_templates()
        self._templates = MappingProxyType({template.rule: template for template in templates})

    def get_template(self, rule: str) -> IssueTemplate | None:
        return self._templates.get(rule)

    def list_rules(self) -> list[str]:
        return list(self._templates.keys())

    def with_templates(self, *templates: IssueTemplate) -> "IssueRegistry":
        """Return a registry with ``templates`` added (or replaced by rule)."""
        return IssueRegistry([*self._templates.values(), *templates])

    def create(
        self,
        rule: str,
        *,
        location: IssueLocation | None = None,
        value: Any = None,
        full_object: Any = None,
        valid_alternatives: list[str] | tuple[str, ...] | None = None,
        suggested_fix: SuggestedFix | None = None,
        **context: Any,
    ) -> ValidationIssue:
        """Create an issue from a rule template.

        Args:
            rule: Rule id (e.g. "NODE_TYPE_MISSING")
            location: Structural location
            value: Offending value for the context record
            full_object: Enclosing object for the context record
            valid_alternatives: Accepted values, when known
            suggested_fix: Edit that would resolve the issue
            **context: Template variables

        Returns:
            ValidationIssue without source enrichment

        Raises:
            ValidatorError: UNKNOWN_ISSUE_CODE if the rule is not registered
        """
        template = self.get_template(rule)
        if template is None:
            raise create_error("UNKNOWN_ISSUE_CODE", issue_code=rule)

        expected = _interpolate(template.expected_template, context)
        issue_context = None
        if any(item is not None for item in (value, expected, template.n8n_error, full_object)):
            issue_context = IssueContext(
                value=value,
                expected=expected,
                n8n_error=template.n8n_error,
                full_object=full_object,
            )

        return ValidationIssue(
            code=template.code,
            severity=template.severity,
            message=_interpolate(template.message_template, context) or template.code,
            location=location,
            context=issue_context,
            valid_alternatives=(
                tuple(valid_alternatives) if valid_alternatives is not None else None
            ),
            hint=_interpolate(template.hint_template, context),
            suggested_fix=suggested_fix,
        )

    @staticmethod
    def _builtin_templates() -> list[IssueTemplate]:
        error = IssueSeverity.ERROR
        warning = IssueSeverity.WARNING
        templates = [
            # Document root
            IssueTemplate(
                "ROOT_NOT_OBJECT", "INVALID_JSON_TYPE", error,
                "Workflow must be a JSON object",
                expected_template="object",
            ),
            IssueTemplate(
                "NODES_MISSING", "MISSING_PROPERTY", error,
                "Missing required property: nodes",
                expected_template="Array of node objects",
            ),
            IssueTemplate(
                "NODES_NOT_ARRAY", "INVALID_TYPE", error,
                'Property "nodes" must be an array',
                expected_template="array",
            ),
            IssueTemplate(
                "CONNECTIONS_MISSING", "MISSING_PROPERTY", error,
                "Missing required property: connections",
                expected_template="Object mapping node names to their output connections",
            ),
            IssueTemplate(
                "CONNECTIONS_NOT_OBJECT", "INVALID_TYPE", error,
                'Property "connections" must be an object',
                expected_template="object",
            ),
            IssueTemplate(
                "CONNECTIONS_IS_ARRAY", "INVALID_TYPE", error,
                'Property "connections" must be an object, not an array',
                expected_template="object",
            ),
            # Node entries
            IssueTemplate(
                "NODE_NOT_OBJECT", "INVALID_NODE_TYPE", error,
                "Node at index {index} is not an object",
                expected_template="object",
            ),
            IssueTemplate(
                "NODE_TYPE_MISSING", "MISSING_NODE_TYPE", error,
                "Node at index {index} ({node_name}) missing required field: type",
            ),
            IssueTemplate(
                "NODE_TYPE_NOT_STRING", "INVALID_NODE_TYPE_FORMAT", error,
                "Node at index {index} ({node_name}) field 'type' must be a string",
            ),
            IssueTemplate(
                "NODE_TYPE_MISSING_PACKAGE", "INVALID_NODE_TYPE_FORMAT", warning,
                'Node "{node_name}" has invalid type "{node_type}" - must include '
                'package prefix (e.g., "n8n-nodes-base.webhook")',
                expected_template='Format: "package-name.nodeName"',
                node_type_channel=True,
            ),
            IssueTemplate(
                "NODE_TYPE_DEPRECATED_PREFIX", "DEPRECATED_NODE_TYPE_PREFIX", warning,
                'Node "{node_name}" has invalid type "{node_type}" - should be "n8n-{node_type}"',
                expected_template="n8n-{node_type}",
                node_type_channel=True,
            ),
            IssueTemplate(
                "NODE_NAME_MISSING", "MISSING_NODE_NAME", warning,
                "Node at index {index} (type: {node_type}) missing 'name' field - "
                "will be auto-generated",
            ),
            # Required node fields
            IssueTemplate(
                "TYPE_VERSION_MISSING", "MISSING_TYPE_VERSION", error,
                'Node "{node_name}" missing required field: typeVersion',
            ),
            IssueTemplate(
                "TYPE_VERSION_NOT_NUMBER", "INVALID_TYPE_VERSION", error,
                "Node \"{node_name}\" field 'typeVersion' must be a number",
                expected_template="number",
            ),
            IssueTemplate(
                "POSITION_MISSING", "MISSING_POSITION", error,
                'Node "{node_name}" missing required field: position',
            ),
            IssueTemplate(
                "POSITION_INVALID", "INVALID_POSITION", error,
                "Node \"{node_name}\" field 'position' must be an array of [x, y]",
                expected_template="[number, number]",
            ),
            IssueTemplate(
                "PARAMETERS_MISSING", "MISSING_PARAMETERS", error,
                'Node "{node_name}" missing required field: parameters',
            ),
            IssueTemplate(
                "PARAMETERS_NOT_OBJECT", "INVALID_PARAMETERS", error,
                "Node \"{node_name}\" field 'parameters' must be an object",
                expected_template="object",
            ),
            # Type-specific
            IssueTemplate(
                "IF_SWITCH_OPTIONS_ROOT", "INVALID_IF_SWITCH_OPTIONS_ROOT", error,
                'Node "{node_name}" ({node_type}): Found unexpected "options" key at '
                "parameters root level.",
                expected_template=(
                    'This node type does not define "options" as a root-level parameter. '
                    'The "options" key found here with value {{}} is not recognized by '
                    "n8n's parameter schema for {node_type}."
                ),
                n8n_error="Could not find property option",
                hint_template=(
                    "Observed parameter keys: [{observed_keys}]. Known valid keys for "
                    '{node_type}: [{known_keys}]. The key "options" is not among the '
                    "valid root-level parameters."
                ),
            ),
        ]
        return templates


def _interpolate(template: str | None, context: dict[str, Any]) -> str | None:
    if template is None:
        return None
    try:
        return template.format(**context)
    except (KeyError, IndexError):
        # Missing context variable - return template as-is
        return template


DEFAULT_ISSUE_REGISTRY = IssueRegistry()
