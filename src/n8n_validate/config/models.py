"""n8n-validate configuration data models."""

from dataclasses import dataclass, field

from n8n_validate.types import LogFormat, LogLevel


@dataclass
class ParseConfig:
    """Tolerant parser configuration."""

    accept_js_object: bool = False
    repair_json: bool = False


@dataclass
class FixConfig:
    """Auto-fix configuration."""

    enabled: bool = False


@dataclass
class ValidateConfig:
    """Structural validation configuration."""

    snippet_context_lines: int = 3
    strict_node_types: bool = True  # Node-type format warnings fail the run


@dataclass
class SanitizeConfig:
    """Sanitizer configuration."""

    enabled: bool = True
    regenerate_ids: bool = True


@dataclass
class OutputConfig:
    """Report output configuration."""

    json: bool = False
    out: str | None = None  # Path for the corrected workflow


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    run: bool = True
    parse: bool = True
    fix: bool = True
    validate: bool = True
    sanitize: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.WARN
    format: LogFormat = LogFormat.COLORED
    show_context: bool = True
    truncate_at: int = 200
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)


@dataclass
class ValidatorConfig:
    """Root configuration object."""

    parse: ParseConfig = field(default_factory=ParseConfig)
    fix: FixConfig = field(default_factory=FixConfig)
    validate: ValidateConfig = field(default_factory=ValidateConfig)
    sanitize: SanitizeConfig = field(default_factory=SanitizeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
