"""Auto-fixer: runs the registered fix rules over every node."""

import logging
from dataclasses import dataclass, field
from typing import Any

from .rules import FixRule, IfSwitchEmptyOptionsRule

logger = logging.getLogger(__name__)


@dataclass
class FixResult:
    """Number of fixes applied and one warning per fix."""

    fixed: int = 0
    warnings: list[str] = field(default_factory=list)


class FixRegistry:
    """Ordered set of fix rules."""

    def __init__(self, rules: list[FixRule] | None = None):
        """Initialize registry.

        Args:
            rules: Rules to use (defaults to the built-in rules)
        """
        self._rules: list[FixRule] = []
        if rules is None:
            self._load_builtin_rules()
        else:
            for rule in rules:
                self.register(rule)

    def register(self, rule: FixRule) -> None:
        """Add a rule, replacing any rule with the same name."""
        self._rules = [r for r in self._rules if r.name != rule.name]
        self._rules.append(rule)

    def list_rules(self) -> list[str]:
        return [rule.name for rule in self._rules]

    def __iter__(self):
        return iter(list(self._rules))

    def _load_builtin_rules(self) -> None:
        self.register(IfSwitchEmptyOptionsRule())


def fix_invalid_options_fields(document: Any, registry: FixRegistry | None = None) -> FixResult:
    """Apply fix rules to a decoded document, in place.

    Documents without a ``nodes`` array are returned untouched.

    Args:
        document: Decoded workflow document
        registry: Fix rules (defaults to the built-in rules)

    Returns:
        FixResult with the count and a warning per change
    """
    result = FixResult()
    if not isinstance(document, dict) or not isinstance(document.get("nodes"), list):
        return result

    registry = registry or FixRegistry()
    for index, node in enumerate(document["nodes"]):
        for rule in registry:
            if rule.matches(node):
                warning = rule.apply(node, index)
                logger.debug("Rule %s fixed node %d", rule.name, index)
                result.fixed += 1
                result.warnings.append(warning)
    return result
