"""Shared types for n8n-validate.

Import from here rather than submodules:
    from n8n_validate.types import IssueSeverity, ValidationIssue, Workflow
"""

from .enums import (
    FixAction,
    InputSource,
    IssueSeverity,
    LogFormat,
    LogLevel,
    ParseStrategy,
)
from .source import SnippetLine, SourceLocation, SourceSnippet
from .validation import (
    IssueContext,
    IssueLocation,
    SuggestedFix,
    ValidationIssue,
    ValidationResult,
    ValidationSummary,
)
from .workflow import Workflow, WorkflowNode

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "IssueSeverity",
    "FixAction",
    "InputSource",
    "ParseStrategy",
    # Source positions
    "SourceLocation",
    "SourceSnippet",
    "SnippetLine",
    # Validation
    "IssueLocation",
    "IssueContext",
    "SuggestedFix",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSummary",
    # Workflow model
    "Workflow",
    "WorkflowNode",
]
