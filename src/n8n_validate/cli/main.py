"""Command-line entry point: n8n-validate <file-or-url> [options]."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from n8n_validate.config import ConfigLoader
from n8n_validate.errors import ValidatorError, get_error_factory
from n8n_validate.pipeline import ValidationPipeline, serialize_workflow
from n8n_validate.types import LogLevel

from .input_reader import STDIN_LABEL, classify_input, read_input
from .output import output_summary

config_logger = logging.getLogger("n8n_validate.config")

EPILOG = """\
Examples:
  n8n-validate workflow.json
  n8n-validate workflow.json --fix --out fixed.json
  n8n-validate "https://example.com/workflow.json" --json
  cat workflow.json | n8n-validate --json
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="n8n-validate",
        description="n8n Workflow JSON Validator",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", help="Workflow file, URL, or '-' for stdin")
    parser.add_argument("--repair", action="store_true", help="Attempt to repair malformed JSON")
    parser.add_argument(
        "--accept-js-object", action="store_true", help="Accept JavaScript object literal syntax"
    )
    parser.add_argument(
        "--fix", action="store_true", help="Auto-fix known issues (invalid options fields)"
    )
    parser.add_argument("--no-sanitize", action="store_true", help="Disable workflow sanitization")
    parser.add_argument(
        "--no-regenerate-ids", action="store_true", help="Do not regenerate duplicate node IDs"
    )
    parser.add_argument("--json", action="store_true", help="Output result as JSON")
    parser.add_argument(
        "--out", "--output", dest="out", metavar="FILE", help="Write fixed workflow to FILE"
    )
    parser.add_argument("--config", metavar="FILE", help="Configuration file (YAML)")
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
        help="Diagnostic log level (written to stderr)",
    )
    return parser


def config_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Configuration values set by CLI flags. Unset flags keep file values."""
    overrides: dict[str, Any] = {}

    def put(section: str, key: str, value: Any) -> None:
        overrides.setdefault(section, {})[key] = value

    if args.repair:
        put("parse", "repair_json", True)
    if args.accept_js_object:
        put("parse", "accept_js_object", True)
    if args.fix:
        put("fix", "enabled", True)
    if args.no_sanitize:
        put("sanitize", "enabled", False)
    if args.no_regenerate_ids:
        put("sanitize", "regenerate_ids", False)
    if args.json:
        put("output", "json", True)
    if args.out:
        put("output", "out", args.out)
    if args.log_level:
        put("logging", "level", args.log_level)
    return overrides


def main(argv: list[str] | None = None) -> int:
    """Run the validator.

    Args:
        argv: Arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 when the workflow is valid, 1 otherwise
    """
    args = build_parser().parse_args(argv)

    try:
        loader = ConfigLoader(logger=config_logger)
        config = loader.load(args.config, overrides=config_overrides(args))
    except ValidatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    pipeline = ValidationPipeline(config)
    source_type = classify_input(args.input)
    label = args.input if args.input and args.input != "-" else STDIN_LABEL

    try:
        try:
            raw = read_input(args.input, source_type)
        except ValidatorError as e:
            outcome = pipeline.failed_input(label, source_type, e)
            output_summary(outcome.summary, config.output.json)
            return 1

        outcome = pipeline.run(raw, label, source_type)

        if config.output.out and outcome.writable:
            out_path = Path(config.output.out).resolve()
            out_path.write_text(serialize_workflow(outcome.workflow), encoding="utf-8")

        output_summary(outcome.summary, config.output.json)
        return 0 if outcome.summary.valid else 1
    except Exception as e:
        error = get_error_factory().from_exception(e, source=label)
        pipeline.logger.run(label).failed(error)
        print(f"Fatal error: {error}", file=sys.stderr)
        return 1
