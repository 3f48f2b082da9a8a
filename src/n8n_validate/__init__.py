"""n8n-validate - Validate, repair and normalize n8n workflow documents.

Tolerant parsing of workflow text, structural validation with source
locations, auto-fixes for known defects and node id normalization.
"""

from n8n_validate.fixing import FixResult, fix_invalid_options_fields
from n8n_validate.parsing import ParseOptions, ParseOutcome, json_parse, parse_json_text
from n8n_validate.pipeline import PipelineOutcome, ValidationPipeline, serialize_workflow
from n8n_validate.sanitize import SanitizeOptions, SanitizeResult, sanitize_workflow
from n8n_validate.source_map import (
    SourceMap,
    create_source_map,
    extract_snippet,
    find_source_location,
    get_formatted_value,
    get_source_text,
)
from n8n_validate.validation import ValidateOptions, validate_workflow_structure

__version__ = "1.0.0"
__all__ = [
    "__version__",
    # Parsing
    "ParseOptions",
    "ParseOutcome",
    "json_parse",
    "parse_json_text",
    # Source map
    "SourceMap",
    "create_source_map",
    "find_source_location",
    "extract_snippet",
    "get_source_text",
    "get_formatted_value",
    # Validation
    "ValidateOptions",
    "validate_workflow_structure",
    # Fixing and sanitizing
    "FixResult",
    "fix_invalid_options_fields",
    "SanitizeOptions",
    "SanitizeResult",
    "sanitize_workflow",
    # Pipeline
    "ValidationPipeline",
    "PipelineOutcome",
    "serialize_workflow",
]
