"""n8n-validate configuration loader."""

import os
import re
import types
import typing
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from n8n_validate.errors import create_error
from n8n_validate.types import IssueLocation, IssueSeverity, ValidationIssue, ValidationResult

from .models import ValidatorConfig

CONFIG_PATH_ENV = "N8N_VALIDATE_CONFIG_PATH"
LOCAL_CONFIG_NAME = "n8n-validate.yaml"


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        ValidatorError: CONFIG_INVALID if a required var is not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    if isinstance(data, str):
        return resolve_env_vars(data)
    return data


def _enum_member(enum_type: type[Enum], value: Any) -> Enum | None:
    """Enum member for a config value, ignoring case."""
    if isinstance(value, enum_type):
        return value
    if not isinstance(value, str):
        return None
    for member in enum_type:
        if str(member.value).lower() == value.lower():
            return member
    return None


def _type_label(field_type: Any) -> str:
    if isinstance(field_type, type) and issubclass(field_type, Enum):
        return "one of " + ", ".join(str(m.value) for m in field_type)
    if field_type is bool:
        return "a boolean"
    if field_type is int:
        return "a non-negative integer"
    if field_type is str:
        return "a string"
    return str(field_type)


class ConfigLoader:
    """Load and validate n8n-validate configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional standard library logger
        """
        self._config: ValidatorConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    @property
    def config_path(self) -> Path | None:
        """Path of the last loaded file (None for defaults)."""
        return self._config_path

    def load(
        self,
        path: str | Path | None = None,
        use_defaults: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> ValidatorConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. N8N_VALIDATE_CONFIG_PATH environment variable
        2. ./n8n-validate.yaml
        3. ~/.n8n-validate/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found
            overrides: Values applied on top of the file (e.g. CLI flags)

        Returns:
            Loaded ValidatorConfig instance

        Raises:
            ValidatorError: If file not found (when use_defaults=False) or invalid
        """
        explicit = path is not None
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults and not explicit:
                if self._logger:
                    self._logger.debug("No config file found, using default configuration")
                return self.load_from_dict(overrides or {})
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file must contain a mapping: {config_path}",
            )

        data = _resolve_env_vars_recursive(data)
        if overrides:
            data = deep_merge(data, overrides)

        return self.load_from_dict(data, config_path)

    def load_from_dict(
        self, data: dict[str, Any], config_path: Path | None = None
    ) -> ValidatorConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded ValidatorConfig instance

        Raises:
            ValidatorError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {message}" for message in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )
        if self._logger:
            for warning in validation.warnings:
                self._logger.warning(warning)

        config = self._dict_to_config(data)
        self._config = config
        self._config_path = config_path

        if self._logger:
            self._logger.debug("Configuration loaded from %s", config_path or "defaults")

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Unknown keys are warnings; values of the wrong type are errors.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        issues: list[ValidationIssue] = []
        self._validate_section(ValidatorConfig, data, "", issues)
        return ValidationResult.from_issues(issues)

    def _validate_section(
        self,
        section_type: Any,
        data: Any,
        prefix: str,
        issues: list[ValidationIssue],
    ) -> None:
        if not isinstance(data, dict):
            issues.append(
                ValidationIssue(
                    code="CONFIG_INVALID_TYPE",
                    severity=IssueSeverity.ERROR,
                    message=f"{prefix} must be a mapping",
                    location=IssueLocation(path=prefix),
                )
            )
            return

        known = {f.name: f.type for f in fields(section_type)}
        for key, value in data.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            if key not in known:
                issues.append(
                    ValidationIssue(
                        code="CONFIG_UNKNOWN_KEY",
                        severity=IssueSeverity.WARNING,
                        message=f"Unknown configuration key: {path}",
                        location=IssueLocation(path=path),
                    )
                )
                continue

            field_type = known[key]
            if is_dataclass(field_type):
                self._validate_section(field_type, value, path, issues)
            elif not self._value_matches(field_type, value):
                issues.append(
                    ValidationIssue(
                        code="CONFIG_INVALID_TYPE",
                        severity=IssueSeverity.ERROR,
                        message=f"{path} must be {_type_label(field_type)}",
                        location=IssueLocation(path=path),
                    )
                )

    def _value_matches(self, field_type: Any, value: Any) -> bool:
        """Check a scalar config value against its field type."""
        if isinstance(field_type, types.UnionType):
            return any(
                value is None if arg is type(None) else self._value_matches(arg, value)
                for arg in typing.get_args(field_type)
            )
        if isinstance(field_type, type) and issubclass(field_type, Enum):
            return _enum_member(field_type, value) is not None
        if field_type is bool:
            return isinstance(value, bool)
        if field_type is int:
            return isinstance(value, int) and not isinstance(value, bool) and value >= 0
        if field_type is str:
            return isinstance(value, str)
        return True

    def get(self) -> ValidatorConfig:
        """Get current configuration.

        Raises:
            ValidatorError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _resolve_config_path(self) -> Path:
        """Resolve config file path using resolution order."""
        # 1. Environment variable
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)

        # 2. ./n8n-validate.yaml
        local_path = Path(LOCAL_CONFIG_NAME)
        if local_path.exists():
            return local_path

        # 3. ~/.n8n-validate/config.yaml
        home_path = Path.home() / ".n8n-validate" / "config.yaml"
        if home_path.exists():
            return home_path

        # Not found - use local path as default
        return local_path

    def _dict_to_config(self, data: dict[str, Any]) -> ValidatorConfig:
        """Convert dictionary to ValidatorConfig, using dataclass defaults for gaps."""
        return self._convert_field(ValidatorConfig, data)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert field value to appropriate type.

        Args:
            field_type: Expected field type
            value: Value to convert

        Returns:
            Converted value
        """
        if value is None:
            return None

        if is_dataclass(field_type):
            if isinstance(value, dict):
                kwargs = {}
                for f in fields(field_type):
                    if f.name in value:
                        kwargs[f.name] = self._convert_field(f.type, value[f.name])
                return field_type(**kwargs)
            return value

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            return _enum_member(field_type, value) or value

        return value
