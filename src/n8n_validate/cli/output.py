"""Report rendering for validation summaries."""

import json
import sys
from typing import Any, TextIO

from n8n_validate.logging.colors import (
    ANALYSIS,
    BOLD,
    CAUTION,
    DIM,
    FIXED,
    HIGHLIGHT,
    INVALID,
    RESET,
    SUGGESTION,
    VALID,
)
from n8n_validate.types import IssueSeverity, SourceSnippet, ValidationIssue, ValidationSummary

SEPARATOR = "─" * 80
HEAVY_SEPARATOR = "━" * 80
MAX_OBJECT_LINES = 25
MAX_SNIPPET_WIDTH = 70
MAX_VALUE_WIDTH = 100


class ReportWriter:
    """Writes the human-readable report to a stream."""

    def __init__(self, stream: TextIO, color: bool = True):
        self.stream = stream
        self.color = color

    def _paint(self, color: str, text: str) -> str:
        return f"{color}{text}{RESET}" if self.color else text

    def _line(self, text: str = "") -> None:
        print(text, file=self.stream)

    def summary(self, summary: ValidationSummary) -> None:
        if summary.valid:
            status = self._paint(VALID + BOLD, "✅ VALID")
        else:
            status = self._paint(INVALID + BOLD, "❌ INVALID")
        self._line(f"\n{status}: {summary.input}")
        self._line(HEAVY_SEPARATOR)

        if summary.fixed:
            self._line(self._paint(FIXED, f"🔧 Fixed {summary.fixed} issue(s)"))

        if summary.issues:
            errors = [i for i in summary.issues if i.severity == IssueSeverity.ERROR]
            warnings = [i for i in summary.issues if i.severity == IssueSeverity.WARNING]
            if errors:
                self._line(self._paint(INVALID, f"\n🛑 ERRORS ({len(errors)})\n"))
                for number, issue in enumerate(errors, 1):
                    self.issue(issue, number)
            if warnings:
                self._line(self._paint(CAUTION, f"\n⚠️  WARNINGS ({len(warnings)})\n"))
                for number, issue in enumerate(warnings, 1):
                    self.issue(issue, number)
        else:
            # Parse and read failures carry messages only
            if summary.errors:
                self._line("\nErrors:")
                for message in summary.errors:
                    self._line(f"  - {message}")
            if summary.warnings:
                self._line("\nWarnings:")
                for message in summary.warnings:
                    self._line(f"  - {message}")

        self._line("\n" + HEAVY_SEPARATOR + "\n")

    def issue(self, issue: ValidationIssue, number: int) -> None:
        self._line(SEPARATOR)
        color = INVALID if issue.is_error else CAUTION
        self._line(f"[{number}] " + self._paint(color + BOLD, issue.code))

        if issue.path:
            self._line(f"    Path: {issue.path}")
        if issue.source_location:
            location = issue.source_location
            self._line(f"    Location: Line {location.line}, Column {location.column}")

        where = issue.location
        if where and (where.node_name or where.node_type):
            parts = [
                f'"{where.node_name}"' if where.node_name else None,
                f"({where.node_type})" if where.node_type else None,
                f"[id: {where.node_id}]" if where.node_id else None,
            ]
            self._line("    Node: " + " ".join(p for p in parts if p))

        self._line(f"\n    Message: {issue.message}")

        if issue.source_snippet and issue.source_snippet.lines:
            self._line("\n    Source:")
            self.snippet(issue.source_snippet)

        context = issue.context
        if context:
            self._line("\n    " + self._paint(ANALYSIS, "Root Cause Analysis:"))
            if context.n8n_error:
                self._line(f'      • n8n Runtime Error: "{context.n8n_error}"')
            if context.expected:
                self._line(f"      • Expected: {format_context_value(context.expected)}")
            if context.value is not None:
                self._line(f"      • Found: {format_context_value(context.value)}")
            if context.full_object is not None:
                self._line("\n    Full Context (the problematic object):")
                self.full_object(context.full_object)

        if issue.valid_alternatives:
            self._line(f"\n    Valid Alternatives: [{', '.join(issue.valid_alternatives)}]")

        if issue.suggested_fix:
            fix = issue.suggested_fix
            header = f"\n    Suggested Fix ({fix.action.value}): {fix.description}"
            self._line(self._paint(SUGGESTION, header))

        if issue.hint:
            self._line(f"\n    Note: {issue.hint}")

        self._line()

    def snippet(self, snippet: SourceSnippet) -> None:
        width = len(str(snippet.end_line))
        self._line("    ┌" + "─" * (width + 3) + "┬" + "─" * 60)
        for line in snippet.lines:
            number = str(line.line_number).rjust(width)
            content = line.content
            if len(content) > MAX_SNIPPET_WIDTH:
                content = content[: MAX_SNIPPET_WIDTH - 3] + "..."
            if line.is_highlighted:
                self._line(f"    │ {number} │" + self._paint(HIGHLIGHT, f">>> {content}"))
            else:
                self._line(f"    │ {number} │    {content}")
        self._line("    └" + "─" * (width + 3) + "┴" + "─" * 60)

    def full_object(self, obj: Any) -> None:
        try:
            lines = json.dumps(obj, indent=2, ensure_ascii=False).split("\n")
        except (TypeError, ValueError):
            self._line(f"    {obj}")
            return
        except RecursionError:
            self._line("    (object nested too deeply to display)")
            return

        self._line("    ```json")
        for line in lines[:MAX_OBJECT_LINES]:
            self._line(self._paint(DIM, "    " + line))
        if len(lines) > MAX_OBJECT_LINES:
            self._line(f"    ... ({len(lines) - MAX_OBJECT_LINES} more lines)")
        self._line("    ```")


def format_context_value(value: Any) -> str:
    """One-line display of a context value."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        try:
            text = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
        except RecursionError:
            return "(nested too deeply to display)"
        return text[: MAX_VALUE_WIDTH - 3] + "..." if len(text) > MAX_VALUE_WIDTH else text
    return json.dumps(value) if value is None or isinstance(value, bool) else str(value)


def output_summary(
    summary: ValidationSummary,
    json_output: bool = False,
    stream: TextIO | None = None,
    color: bool | None = None,
) -> None:
    """Print a validation summary.

    Args:
        summary: Pipeline summary
        json_output: Print the summary as indented JSON instead of the report
        stream: Output stream (defaults to sys.stdout)
        color: Use ANSI colors (defaults to whether the stream is a terminal)
    """
    stream = stream or sys.stdout
    if json_output:
        print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False), file=stream)
        return

    if color is None:
        color = hasattr(stream, "isatty") and stream.isatty()
    ReportWriter(stream, color=color).summary(summary)
