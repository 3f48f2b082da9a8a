"""Shared validation types for n8n-validate.

Issues are tagged records: the optional sub-records (location, source
location, snippet, context, suggested fix) are either present as a whole or
absent, so consumers can check which enrichment a given issue carries.
"""

from dataclasses import dataclass, field
from typing import Any

from .enums import FixAction, InputSource, IssueSeverity
from .source import SourceLocation, SourceSnippet


@dataclass(frozen=True)
class IssueLocation:
    """Structural location of an issue inside the workflow."""

    path: str | None = None  # e.g., "nodes[4].parameters.options"
    node_name: str | None = None
    node_id: str | None = None
    node_type: str | None = None
    node_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.node_name is not None:
            data["nodeName"] = self.node_name
        if self.node_id is not None:
            data["nodeId"] = self.node_id
        if self.node_type is not None:
            data["nodeType"] = self.node_type
        if self.node_index is not None:
            data["nodeIndex"] = self.node_index
        if self.path is not None:
            data["path"] = self.path
        return data


@dataclass(frozen=True)
class IssueContext:
    """Root-cause context attached to an issue."""

    value: Any = None  # The problematic value (or its JSON type name)
    expected: str | None = None
    n8n_error: str | None = None  # Equivalent n8n runtime error text
    full_object: Any = None  # Whole offending node / parameters object

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.value is not None:
            data["value"] = self.value
        if self.expected is not None:
            data["expected"] = self.expected
        if self.n8n_error is not None:
            data["n8nError"] = self.n8n_error
        if self.full_object is not None:
            data["fullObject"] = self.full_object
        return data


@dataclass(frozen=True)
class SuggestedFix:
    """Description of an edit that would resolve an issue."""

    action: FixAction
    description: str
    target: str | None = None  # What to modify, e.g. "nodes[2].parameters.options"
    before: str | None = None
    after: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"action": self.action.value, "description": self.description}
        if self.target is not None:
            data["target"] = self.target
        if self.before is not None:
            data["before"] = self.before
        if self.after is not None:
            data["after"] = self.after
        return data


@dataclass(frozen=True)
class ValidationIssue:
    """Single structural finding against a workflow document."""

    code: str  # e.g., "MISSING_NODE_TYPE"
    severity: IssueSeverity
    message: str
    location: IssueLocation | None = None
    source_location: SourceLocation | None = None
    source_snippet: SourceSnippet | None = None
    context: IssueContext | None = None
    valid_alternatives: tuple[str, ...] | None = None
    hint: str | None = None
    suggested_fix: SuggestedFix | None = None

    @property
    def path(self) -> str | None:
        """Logical path of the issue, if it has a location."""
        return self.location.path if self.location else None

    @property
    def is_error(self) -> bool:
        return self.severity == IssueSeverity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON reports.

        Returns:
            Dictionary with camelCase keys; absent sub-records are omitted
        """
        data: dict[str, Any] = {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.location is not None:
            data["location"] = self.location.to_dict()
        if self.source_location is not None:
            data["sourceLocation"] = self.source_location.to_dict()
        if self.source_snippet is not None:
            data["sourceSnippet"] = self.source_snippet.to_dict()
        if self.context is not None:
            data["context"] = self.context.to_dict()
        if self.valid_alternatives is not None:
            data["validAlternatives"] = list(self.valid_alternatives)
        if self.suggested_fix is not None:
            data["suggestedFix"] = self.suggested_fix.to_dict()
        if self.hint is not None:
            data["hint"] = self.hint
        return data


@dataclass
class ValidationResult:
    """Result of validation (workflow structure or configuration).

    Used by:
    - WorkflowStructureValidator.validate()
    - ConfigLoader.validate()
    """

    valid: bool
    errors: list[str] = field(default_factory=list)  # Legacy, message text only
    warnings: list[str] = field(default_factory=list)  # Legacy
    issues: list[ValidationIssue] = field(default_factory=list)
    node_type_issues: list[str] | None = None

    def __post_init__(self) -> None:
        """Ensure valid is False if there are error issues."""
        if any(issue.is_error for issue in self.issues):
            self.valid = False

    @classmethod
    def from_issues(
        cls,
        issues: list[ValidationIssue],
        node_type_issues: list[str] | None = None,
    ) -> "ValidationResult":
        """Build a result whose legacy lists mirror the issue messages.

        Args:
            issues: Issues in emission order
            node_type_issues: Messages surfaced on the node-type channel

        Returns:
            ValidationResult
        """
        errors = [i.message for i in issues if i.severity == IssueSeverity.ERROR]
        warnings = [i.message for i in issues if i.severity == IssueSeverity.WARNING]
        return cls(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            issues=list(issues),
            node_type_issues=node_type_issues or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "issues": [issue.to_dict() for issue in self.issues],
        }
        if self.node_type_issues:
            data["nodeTypeIssues"] = list(self.node_type_issues)
        return data


@dataclass
class ValidationSummary:
    """End-to-end outcome for one input, as handed to the report renderer."""

    input: str
    source_type: InputSource
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)
    sanitized: bool = False
    fixed: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "input": self.input,
            "sourceType": self.source_type.value,
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "issues": [issue.to_dict() for issue in self.issues],
            "sanitized": self.sanitized,
        }
        if self.fixed:
            data["fixed"] = self.fixed
        return data
