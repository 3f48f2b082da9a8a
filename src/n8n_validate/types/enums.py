"""Shared enumerations for n8n-validate."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class IssueSeverity(str, Enum):
    """Severity of a validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FixAction(str, Enum):
    """Kind of edit a suggested fix describes."""

    DELETE = "delete"
    REPLACE = "replace"
    ADD = "add"
    MOVE = "move"


class InputSource(str, Enum):
    """Where the workflow text was read from."""

    FILE = "file"
    URL = "url"
    STDIN = "stdin"


class ParseStrategy(str, Enum):
    """Which parser pass produced a value."""

    STRICT = "strict"
    OBJECT_LITERAL = "object_literal"
    REPAIRED = "repaired"
    FALLBACK = "fallback"
