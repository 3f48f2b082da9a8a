"""Error matchers for converting exceptions to ValidatorErrors."""

import httpx
import yaml

from .errors import ErrorMatcher, MatchResult


class InputErrorMatcher(ErrorMatcher):
    """Matches failures while acquiring workflow text."""

    def matches(self, error: Exception) -> bool:
        """Check if error came from reading a file, URL or stream.

        Args:
            error: Exception to check

        Returns:
            True for OS, HTTP and decoding errors
        """
        return isinstance(error, (OSError, httpx.HTTPError, UnicodeDecodeError))

    def extract(self, error: Exception) -> MatchResult:
        """Extract input error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with INPUT_UNREADABLE code
        """
        return MatchResult(
            error_code="INPUT_UNREADABLE",
            context={"detail": str(error) or type(error).__name__},
        )


class ConfigErrorMatcher(ErrorMatcher):
    """Matches YAML errors raised while loading configuration."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, yaml.YAMLError)

    def extract(self, error: Exception) -> MatchResult:
        return MatchResult(
            error_code="CONFIG_INVALID",
            context={"detail": f"Invalid YAML in config file: {error}"},
        )


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception."""

    def matches(self, error: Exception) -> bool:
        """Always matches."""
        return True

    def extract(self, error: Exception) -> MatchResult:
        """Extract generic error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with INTERNAL_ERROR code
        """
        return MatchResult(
            error_code="INTERNAL_ERROR",
            context={"detail": str(error), "error_type": type(error).__name__},
        )


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        # Should never reach here due to GenericErrorMatcher
        return MatchResult(error_code="INTERNAL_ERROR", context={"detail": str(error)})

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        self.matchers = [
            InputErrorMatcher(),
            ConfigErrorMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]
