"""Auto-fixes for known workflow defect patterns."""

from .fixer import FixRegistry, FixResult, fix_invalid_options_fields
from .rules import FixRule, IfSwitchEmptyOptionsRule

__all__ = [
    "FixRegistry",
    "FixResult",
    "FixRule",
    "IfSwitchEmptyOptionsRule",
    "fix_invalid_options_fields",
]
