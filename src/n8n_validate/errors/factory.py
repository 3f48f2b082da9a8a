"""Error factory for creating ValidatorErrors from any exception type."""

from typing import Any

from .errors import ValidatorError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates ValidatorErrors from any exception type."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matcher_chain: ErrorMatcherChain | None = None,
    ):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
            matcher_chain: Matcher chain (defaults to new ErrorMatcherChain())
        """
        self.registry = registry or ErrorRegistry()
        self.matcher_chain = matcher_chain or ErrorMatcherChain()

    def from_exception(self, error: Exception, source: str | None = None) -> ValidatorError:
        """Convert any exception to ValidatorError.

        Args:
            error: Exception to convert
            source: Optional input label

        Returns:
            ValidatorError instance
        """
        # If already a ValidatorError, just add context
        if isinstance(error, ValidatorError):
            return error.with_context(source=source)

        match_result = self.matcher_chain.match(error)

        context = match_result.context.copy()
        if source:
            context["source"] = source

        return self.registry.create(code=match_result.error_code, context=context)

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> ValidatorError:
        """Create ValidatorError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            ValidatorError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton.

    Returns:
        Default ErrorFactory instance
    """
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> ValidatorError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        ValidatorError instance
    """
    return get_error_factory().create(code, context)
