"""n8n-validate logging - Hierarchical colored logging for validation runs."""

from .colors import (
    COMPONENT_COLORS,
    LEVEL_COLORS,
    RESET,
)
from .logger import (
    FixLogger,
    LogConfig,
    ParseLogger,
    RunLogger,
    SanitizeLogger,
    ValidationLogger,
    ValidatorLogger,
)

__all__ = [
    # Logger classes
    "ValidatorLogger",
    "RunLogger",
    "ParseLogger",
    "FixLogger",
    "ValidationLogger",
    "SanitizeLogger",
    "LogConfig",
    # Colors
    "RESET",
    "LEVEL_COLORS",
    "COMPONENT_COLORS",
]
