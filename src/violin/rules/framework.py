"""Core rule abstractions for violin.

Built-in rules are plain objects registered by name in an explicit
RuleRegistry. Every rule is called with the same shape as custom rules:
``run(value, data, args) -> bool``.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from typing import Any

logger = logging.getLogger(__name__)

Predicate = Callable[[Any, Mapping[str, Any], list[str]], bool]


class ValidationRule(ABC):
    """Base class for built-in validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name as used in rule chains."""
        pass

    @abstractmethod
    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        """Check a single value.

        Args:
            value: The field value under validation
            data: All input values of the current run
            args: Parsed rule arguments, as strings

        Returns:
            True if the value satisfies the rule
        """
        pass

    def __call__(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        return self.run(value, data, args)


class RuleRegistry:
    """Explicit name-to-rule mapping, populated once at startup."""

    def __init__(self) -> None:
        self._rules: dict[str, ValidationRule] = {}

    def register(self, rule: ValidationRule) -> None:
        """Register a rule under its own name, replacing any previous entry."""
        if rule.name in self._rules:
            logger.debug(f"Replacing registered rule: {rule.name}")
        self._rules[rule.name] = rule

    def get(self, name: str) -> ValidationRule | None:
        """Return the rule registered under name, if any."""
        return self._rules.get(name)

    def names(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[ValidationRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


def create_default_registry() -> RuleRegistry:
    """Create a registry holding every built-in rule."""
    from .builtin import BUILTIN_RULES

    registry = RuleRegistry()
    for rule_class in BUILTIN_RULES:
        registry.register(rule_class())

    logger.debug(f"Created default registry with {len(registry)} rules")
    return registry
