"""n8n-validate logger - Hierarchical colored logging for validation runs."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from n8n_validate.logging.colors import ANALYSIS, COMPONENT_COLORS, LEVEL_COLORS, RESET
from n8n_validate.types import LogFormat, LogLevel, ParseStrategy, ValidationResult


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.WARN
    format: LogFormat = LogFormat.COLORED
    show_context: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    # None writes to the current sys.stderr, keeping JSON reports on stdout clean
    output: TextIO | None = None

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "run": True,
                "parse": True,
                "fix": True,
                "validate": True,
                "sanitize": True,
            }


class ValidatorLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def run(self, source: str) -> "RunLogger":
        """Get a logger scoped to one validation run.

        Args:
            source: Input label (path, URL or <stdin>)

        Returns:
            RunLogger instance
        """
        return RunLogger(self, source)

    def configure(self, config: LogConfig) -> None:
        """Replace the configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def _stream(self) -> TextIO:
        return self.config.output or sys.stderr

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (run, parse, fix, validate, sanitize)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self._stream())

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        color = LEVEL_COLORS.get(level, RESET)
        component_color = COMPONENT_COLORS.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_context:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {ANALYSIS}{context_str}{RESET}"

        print(output, file=self._stream())


class RunLogger:
    """Logger for run-level events."""

    def __init__(self, parent: ValidatorLogger, source: str):
        self.parent = parent
        self.source = source

    def started(self, length: int) -> None:
        """Log run start.

        Args:
            length: Number of characters read
        """
        context = {"source": self.source, "event": "run_started", "length": length}
        self.parent._log(LogLevel.INFO, "run", f"Validating '{self.source}'", context)

    def completed(self, valid: bool, error_count: int, warning_count: int) -> None:
        """Log run completion with summary."""
        context = {
            "source": self.source,
            "event": "run_completed",
            "valid": valid,
            "error_count": error_count,
            "warning_count": warning_count,
        }
        status = "valid ✓" if valid else "invalid ✗"
        message = (
            f"'{self.source}' is {status} ({error_count} errors, {warning_count} warnings)"
        )
        self.parent._log(LogLevel.INFO, "run", message, context)

    def failed(self, error: Exception) -> None:
        """Log a run that could not produce a result."""
        context = {
            "source": self.source,
            "event": "run_failed",
            "error": str(error),
            "error_type": type(error).__name__,
        }
        self.parent._log(LogLevel.ERROR, "run", f"'{self.source}' failed: {error}", context)

    def parse(self) -> "ParseLogger":
        return ParseLogger(self)

    def fix(self) -> "FixLogger":
        return FixLogger(self)

    def validation(self) -> "ValidationLogger":
        return ValidationLogger(self)

    def sanitize(self) -> "SanitizeLogger":
        return SanitizeLogger(self)


class ParseLogger:
    """Logger for tolerant parser events."""

    def __init__(self, parent: RunLogger):
        self.parent = parent

    def succeeded(self, strategy: ParseStrategy, repairs: list[str] | tuple[str, ...] = ()) -> None:
        """Log which parser pass decoded the input.

        Args:
            strategy: Parser pass that succeeded
            repairs: Repairs applied (repair pass only)
        """
        context: dict[str, Any] = {
            "source": self.parent.source,
            "event": "parse_succeeded",
            "strategy": strategy.value,
        }
        if repairs:
            context["repairs"] = list(repairs)

        if strategy == ParseStrategy.STRICT:
            self.parent.parent._log(LogLevel.DEBUG, "parse", "Parsed as strict JSON", context)
        elif strategy == ParseStrategy.REPAIRED:
            message = f"Parsed after {len(repairs)} repair(s): {', '.join(repairs)}"
            self.parent.parent._log(LogLevel.WARN, "parse", message, context)
        else:
            message = f"Parsed with relaxed syntax ({strategy.value})"
            self.parent.parent._log(LogLevel.INFO, "parse", message, context)

    def failed(self, errors: list[str] | tuple[str, ...]) -> None:
        """Log a total parse failure.

        Args:
            errors: Error messages collected from every attempted pass
        """
        context = {
            "source": self.parent.source,
            "event": "parse_failed",
            "errors": list(errors),
        }
        self.parent.parent._log(LogLevel.ERROR, "parse", "Could not parse workflow JSON", context)


class FixLogger:
    """Logger for auto-fix events."""

    def __init__(self, parent: RunLogger):
        self.parent = parent

    def applied(self, warning: str) -> None:
        context = {"source": self.parent.source, "event": "fix_applied"}
        self.parent.parent._log(LogLevel.INFO, "fix", warning, context)

    def completed(self, fixed: int) -> None:
        context = {"source": self.parent.source, "event": "fix_completed", "fixed": fixed}
        self.parent.parent._log(LogLevel.DEBUG, "fix", f"Applied {fixed} fix(es)", context)


class ValidationLogger:
    """Logger for structural validation events."""

    def __init__(self, parent: RunLogger):
        self.parent = parent

    def completed(self, result: ValidationResult) -> None:
        """Log validation outcome.

        Args:
            result: Validation result
        """
        codes = sorted({issue.code for issue in result.issues})
        context = {
            "source": self.parent.source,
            "event": "validation_completed",
            "valid": result.valid,
            "issue_count": len(result.issues),
            "codes": codes,
        }
        level = LogLevel.DEBUG if result.valid else LogLevel.INFO
        message = f"Structure check found {len(result.issues)} issue(s)"
        self.parent.parent._log(level, "validate", message, context)


class SanitizeLogger:
    """Logger for sanitizer events."""

    def __init__(self, parent: RunLogger):
        self.parent = parent

    def changed(self, warning: str) -> None:
        context = {"source": self.parent.source, "event": "id_changed"}
        self.parent.parent._log(LogLevel.INFO, "sanitize", warning, context)

    def completed(self, changes: int) -> None:
        context = {"source": self.parent.source, "event": "sanitize_completed", "changes": changes}
        message = f"Sanitized node ids ({changes} change(s))"
        self.parent.parent._log(LogLevel.DEBUG, "sanitize", message, context)
