"""ANSI styles shared by the log stream and the text report.

Styles are named for what they mark, not for their hue. Escape codes use
the 256-color palette.
"""

from n8n_validate.types import LogLevel

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

VALID = "\033[38;5;82m"
INVALID = "\033[38;5;196m"
CAUTION = "\033[38;5;226m"
FIXED = "\033[38;5;208m"
ANALYSIS = "\033[38;5;153m"
SUGGESTION = "\033[38;5;51m"
HIGHLIGHT = "\033[38;5;201m"

LEVEL_COLORS = {
    LogLevel.DEBUG: ANALYSIS,
    LogLevel.INFO: SUGGESTION,
    LogLevel.WARN: CAUTION,
    LogLevel.ERROR: INVALID,
}

# Pipeline stage tags in the log stream
COMPONENT_COLORS = {
    "run": HIGHLIGHT,
    "parse": SUGGESTION,
    "fix": FIXED,
    "validate": VALID,
    "sanitize": ANALYSIS,
}

__all__ = [
    "RESET",
    "BOLD",
    "DIM",
    "VALID",
    "INVALID",
    "CAUTION",
    "FIXED",
    "ANALYSIS",
    "SUGGESTION",
    "HIGHLIGHT",
    "LEVEL_COLORS",
    "COMPONENT_COLORS",
]
