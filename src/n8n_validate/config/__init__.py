"""n8n-validate configuration - Config loading and management."""

from .loader import (
    ConfigLoader,
    deep_merge,
    resolve_env_vars,
)
from .models import (
    FixConfig,
    LoggingComponentsConfig,
    LoggingConfig,
    OutputConfig,
    ParseConfig,
    SanitizeConfig,
    ValidateConfig,
    ValidatorConfig,
)

__all__ = [
    # Config models
    "ValidatorConfig",
    "ParseConfig",
    "FixConfig",
    "ValidateConfig",
    "SanitizeConfig",
    "OutputConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    # Loader
    "ConfigLoader",
    "resolve_env_vars",
    "deep_merge",
]
