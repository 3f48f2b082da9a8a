"""End-to-end validation of one workflow input.

parse -> [fix] -> validate -> [sanitize] -> summary
"""

import json
from collections import Counter
from dataclasses import dataclass
from typing import Any, TextIO

from n8n_validate.config import LoggingConfig, ValidatorConfig
from n8n_validate.errors import ValidatorError
from n8n_validate.fixing import fix_invalid_options_fields
from n8n_validate.logging import LogConfig, ValidatorLogger
from n8n_validate.parsing import ParseOptions, ParseOutcome, parse_json_text
from n8n_validate.sanitize import SanitizeOptions, sanitize_workflow
from n8n_validate.types import InputSource, ValidationResult, ValidationSummary
from n8n_validate.validation import ValidateOptions, validate_workflow_structure

PARSE_FAILURE_MESSAGE = "Could not parse workflow JSON"
READ_FAILURE_PREFIX = "Failed to read input: "


@dataclass
class PipelineOutcome:
    """Summary for the report plus the document to persist."""

    summary: ValidationSummary
    workflow: Any = None  # Fixed and sanitized document (None if unparsable)
    parse: ParseOutcome | None = None

    @property
    def writable(self) -> bool:
        """Whether the document may be written out (no errors)."""
        return self.summary.valid and self.workflow is not None


def log_config_from(config: LoggingConfig, output: TextIO | None = None) -> LogConfig:
    """Build the logger configuration from the loaded settings."""
    log_config = LogConfig(
        level=config.level,
        format=config.format,
        show_context=config.show_context,
        truncate_at=config.truncate_at,
        components={
            "run": config.components.run,
            "parse": config.components.parse,
            "fix": config.components.fix,
            "validate": config.components.validate,
            "sanitize": config.components.sanitize,
        },
    )
    if output is not None:
        log_config.output = output
    return log_config


def serialize_workflow(workflow: Any) -> str:
    """Render a document as 2-space indented JSON."""
    return json.dumps(workflow, indent=2, ensure_ascii=False)


def _without(messages: list[str], removed: list[str]) -> list[str]:
    """Drop one occurrence of each removed message, keeping order."""
    pending = Counter(removed)
    kept = []
    for message in messages:
        if pending[message]:
            pending[message] -= 1
            continue
        kept.append(message)
    return kept


class ValidationPipeline:
    """Runs the parse, fix, validate and sanitize stages for one input."""

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        logger: ValidatorLogger | None = None,
    ):
        """Initialize pipeline.

        Args:
            config: Configuration (defaults to ValidatorConfig())
            logger: Logger facade (defaults to one built from ``config.logging``)
        """
        self.config = config or ValidatorConfig()
        self.logger = logger or ValidatorLogger(log_config_from(self.config.logging))

    def run(
        self,
        raw: str,
        label: str = "<stdin>",
        source_type: InputSource = InputSource.STDIN,
    ) -> PipelineOutcome:
        """Validate raw workflow text.

        Args:
            raw: Text exactly as read
            label: Input label for the report (path, URL or <stdin>)
            source_type: Where the text came from

        Returns:
            PipelineOutcome
        """
        run_log = self.logger.run(label)
        run_log.started(len(raw))

        parsed = parse_json_text(
            raw.strip(),
            ParseOptions(
                accept_js_object=self.config.parse.accept_js_object,
                repair_json=self.config.parse.repair_json,
                fallback_value=None,
            ),
        )
        if not parsed.ok:
            run_log.parse().failed(parsed.errors)
            summary = ValidationSummary(
                input=label,
                source_type=source_type,
                valid=False,
                errors=[PARSE_FAILURE_MESSAGE],
            )
            run_log.completed(False, 1, 0)
            return PipelineOutcome(summary=summary, parse=parsed)

        run_log.parse().succeeded(parsed.strategy, parsed.repairs)
        document = parsed.value
        warnings: list[str] = []

        fixed = 0
        if self.config.fix.enabled:
            fix_log = run_log.fix()
            fix_result = fix_invalid_options_fields(document)
            for warning in fix_result.warnings:
                fix_log.applied(warning)
            fix_log.completed(fix_result.fixed)
            fixed = fix_result.fixed
            warnings.extend(fix_result.warnings)

        structure = validate_workflow_structure(
            document,
            ValidateOptions(
                raw_source=raw,
                snippet_context_lines=self.config.validate.snippet_context_lines,
            ),
        )
        run_log.validation().completed(structure)

        errors = list(structure.errors)
        warnings.extend(self._node_type_escalation(structure, errors))

        workflow_out = document
        sanitized = structure.valid and self.config.sanitize.enabled
        if sanitized:
            sanitize_log = run_log.sanitize()
            result = sanitize_workflow(
                document, SanitizeOptions(regenerate_ids=self.config.sanitize.regenerate_ids)
            )
            for warning in result.warnings:
                sanitize_log.changed(warning)
            sanitize_log.completed(len(result.warnings))
            workflow_out = result.workflow
            warnings.extend(result.warnings)

        summary = ValidationSummary(
            input=label,
            source_type=source_type,
            valid=not errors,
            errors=errors,
            warnings=warnings,
            issues=list(structure.issues),
            sanitized=sanitized,
            fixed=fixed or None,
        )
        run_log.completed(summary.valid, len(summary.errors), len(summary.warnings))
        return PipelineOutcome(summary=summary, workflow=workflow_out, parse=parsed)

    def _node_type_escalation(self, structure: ValidationResult, errors: list[str]) -> list[str]:
        """Move node-type warnings into ``errors`` when strict; return remaining warnings."""
        node_type_issues = structure.node_type_issues or []
        if not self.config.validate.strict_node_types or not node_type_issues:
            return list(structure.warnings)
        errors.extend(node_type_issues)
        return _without(structure.warnings, node_type_issues)

    def failed_input(
        self, label: str, source_type: InputSource, error: Exception
    ) -> PipelineOutcome:
        """Summary for an input that could not be read.

        Args:
            label: Input label
            source_type: Where the text was to come from
            error: Read failure

        Returns:
            PipelineOutcome with a single error
        """
        self.logger.run(label).failed(error)
        if isinstance(error, ValidatorError):
            reason = error.detail or error.message
        else:
            reason = str(error) or type(error).__name__
        summary = ValidationSummary(
            input=label,
            source_type=source_type,
            valid=False,
            errors=[f"{READ_FAILURE_PREFIX}{reason}"],
        )
        return PipelineOutcome(summary=summary)
