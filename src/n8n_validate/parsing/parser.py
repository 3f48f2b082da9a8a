"""Tolerant workflow text parser.

Passes, in order, each only when the previous one failed:

1. strict JSON (``json.loads``; NaN/Infinity rejected)
2. object-literal dialect, when ``accept_js_object`` is set
3. bounded repair followed by a strict retry, when ``repair_json`` is set

The parser never raises for bad text. Callers branch on ``ParseOutcome.ok``
or, through ``json_parse``, on the configured fallback value.
"""

import json
import logging
from dataclasses import dataclass, replace
from typing import Any

from n8n_validate.types import ParseStrategy

from .repair import repair_json_text
from .scanner import OBJECT_LITERAL
from .tree import node_value, parse_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOptions:
    """Parser configuration."""

    accept_js_object: bool = False
    repair_json: bool = False
    fallback_value: Any = None


@dataclass(frozen=True)
class ParseOutcome:
    """Either a decoded value or a failure carrying the fallback value."""

    value: Any
    strategy: ParseStrategy
    errors: tuple[str, ...] = ()
    repairs: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.strategy != ParseStrategy.FALLBACK


class _Failed(Exception):
    pass


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads_strict(text: str) -> Any:
    """Decode standard JSON only.

    Raises:
        ValueError: If the text is not standard JSON
    """
    return json.loads(text, parse_constant=_reject_constant)


def _strict(text: str) -> Any:
    try:
        return loads_strict(text)
    except ValueError as e:
        raise _Failed(f"JSON: {e}") from e
    except RecursionError as e:
        raise _Failed("JSON: nesting too deep") from e


def _object_literal(text: str) -> Any:
    tree = parse_tree(text, OBJECT_LITERAL)
    if tree.errors or tree.root is None:
        problem = tree.errors[0] if tree.errors else "empty input"
        raise _Failed(f"object literal: {problem}")
    return node_value(tree.root)


def parse_json_text(text: str, options: ParseOptions | None = None) -> ParseOutcome:
    """Decode workflow text with the configured tolerance.

    Args:
        text: Raw text
        options: Parser options (defaults to strict JSON only)

    Returns:
        ParseOutcome; on total failure ``value`` is the fallback value
    """
    options = options or ParseOptions()
    errors: list[str] = []

    try:
        return ParseOutcome(value=_strict(text), strategy=ParseStrategy.STRICT)
    except _Failed as e:
        errors.append(str(e))

    if options.accept_js_object:
        try:
            value = _object_literal(text)
            logger.debug("Decoded input with the object-literal dialect")
            return ParseOutcome(
                value=value, strategy=ParseStrategy.OBJECT_LITERAL, errors=tuple(errors)
            )
        except _Failed as e:
            errors.append(str(e))

    if options.repair_json:
        result = repair_json_text(text, allow_single_quotes=options.accept_js_object)
        if result.ok:
            attempts = [_strict]
            if options.accept_js_object:
                attempts.append(_object_literal)
            for attempt in attempts:
                try:
                    value = attempt(result.text)
                    logger.debug("Decoded input after repairs: %s", ", ".join(result.repairs))
                    return ParseOutcome(
                        value=value,
                        strategy=ParseStrategy.REPAIRED,
                        errors=tuple(errors),
                        repairs=tuple(result.repairs),
                    )
                except _Failed as e:
                    errors.append(f"after repair, {e}")
        else:
            errors.append(f"repair declined: {result.declined}")

    return ParseOutcome(
        value=options.fallback_value,
        strategy=ParseStrategy.FALLBACK,
        errors=tuple(errors),
    )


def json_parse(text: str, options: ParseOptions | None = None, **overrides: Any) -> Any:
    """Decode text, returning the fallback value when every pass fails.

    Args:
        text: Raw text
        options: Parser options
        **overrides: Individual option overrides (accept_js_object, repair_json,
            fallback_value)

    Returns:
        Decoded value or ``fallback_value``
    """
    options = options or ParseOptions()
    if overrides:
        options = replace(options, **overrides)
    return parse_json_text(text, options).value
