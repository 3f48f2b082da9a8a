"""Read workflow text from a file, a URL or stdin."""

import sys
from pathlib import Path
from typing import TextIO

import httpx

from n8n_validate.errors import get_error_factory
from n8n_validate.types import InputSource

STDIN_LABEL = "<stdin>"
DEFAULT_TIMEOUT = 30.0


def classify_input(arg: str | None) -> InputSource:
    """Classify a CLI input argument.

    ``http://`` and ``https://`` are URLs; a missing argument or ``-`` is
    stdin; anything else is a file path.
    """
    if arg is None or arg == "-":
        return InputSource.STDIN
    if arg.lower().startswith(("http://", "https://")):
        return InputSource.URL
    return InputSource.FILE


def read_input(
    arg: str | None,
    source_type: InputSource,
    stdin: TextIO | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Read workflow text.

    Args:
        arg: Path or URL (ignored for stdin)
        source_type: Result of ``classify_input``
        stdin: Stream to read for stdin input (defaults to sys.stdin)
        timeout: HTTP timeout in seconds

    Returns:
        Text exactly as read

    Raises:
        ValidatorError: INPUT_UNREADABLE on any read failure
    """
    label = arg or STDIN_LABEL
    try:
        if source_type == InputSource.URL:
            response = httpx.get(arg, follow_redirects=True, timeout=timeout)
            response.raise_for_status()
            return response.text
        if source_type == InputSource.FILE:
            return Path(arg).read_text(encoding="utf-8")
        return (stdin or sys.stdin).read()
    except (OSError, httpx.HTTPError, UnicodeDecodeError) as e:
        raise get_error_factory().from_exception(e, source=label) from e
