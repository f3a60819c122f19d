"""Validation orchestration.

``Violin`` walks every input field, splits its rule chain, resolves each rule
and records the ones that fail. Failures are queried afterwards through
``passes()``, ``fails()`` and ``errors()``; each run also returns an immutable
``ValidationResult`` for callers that prefer a value over instance state.

Rule resolution order, first match wins:

1. a custom rule registered with ``add_rule``
2. a ``validate_<name>`` method on the orchestrator (for subclasses)
3. a built-in rule from the registry
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .config import UnknownFieldPolicy, ValidationSettings, ViolinConfig
from .errors import MissingRuleChainError, RuleNotFoundError
from .messages import MessageBag, MessageCatalog, MessageFormatter
from .parser import RuleSpec, parse_rule, split_chain
from .rules import Predicate, RuleRegistry, create_default_registry
from .store import ErrorRecord, ErrorStore

logger = logging.getLogger(__name__)

METHOD_RULE_PREFIX = "validate_"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single validation run.

    Attributes:
        failures: Failed records grouped by rule name, in grouping order
        catalog: Message templates as they were when the run finished
    """
    failures: Mapping[str, tuple[ErrorRecord, ...]]
    catalog: MessageCatalog

    def passes(self) -> bool:
        return not self.failures

    def fails(self) -> bool:
        return bool(self.failures)

    def errors(self) -> MessageBag | None:
        """Formatted messages per field, or None when the run passed."""
        if self.passes():
            return None
        return MessageFormatter(self.catalog).format(self.failures)

    @property
    def failed_fields(self) -> list[str]:
        fields: list[str] = []
        for records in self.failures.values():
            for record in records:
                if record.field not in fields:
                    fields.append(record.field)
        return fields


class Violin:
    """Validates input values against pipe-delimited rule chains.

    An instance is mutable and not safe to share between threads while
    ``validate()`` runs. Register custom rules and messages once, then
    validate as often as needed.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        settings: ValidationSettings | None = None,
        messages: MessageCatalog | None = None,
    ):
        self.registry = registry if registry is not None else create_default_registry()
        self.settings = settings or ValidationSettings()
        self.messages = messages or MessageCatalog()
        self.custom_rules: dict[str, Predicate] = {}
        self.input: dict[str, Any] = {}
        self._store = ErrorStore()

    @classmethod
    def from_config(cls, config: ViolinConfig, registry: RuleRegistry | None = None) -> Violin:
        """Create an orchestrator with messages and settings from config."""
        messages = MessageCatalog(
            rule_messages=config.messages.rules,
            field_messages=config.messages.fields,
        )
        return cls(registry=registry, settings=config.validation, messages=messages)

    def validate(self, data: Mapping[str, Any], rules: Mapping[str, str]) -> ValidationResult:
        """Run every rule chain against its input field.

        Args:
            data: Field name to submitted value
            rules: Field name to rule chain, e.g. ``"required|int"``

        Returns:
            ValidationResult for this run

        Raises:
            MissingRuleChainError: If a field has no rule chain and unknown
                fields are configured as errors
            RuleNotFoundError: If a rule name cannot be resolved
        """
        self._store.clear()
        self.input = dict(data)

        logger.info(f"Validating {len(self.input)} fields")

        for field, value in self.input.items():
            chain = self._rule_chain(field, rules)
            if chain is None:
                continue

            for token in split_chain(chain):
                self._validate_against_rule(field, value, parse_rule(token))

        logger.info(f"Validation completed with {self._store.count()} failed rules")

        return ValidationResult(failures=self._store.snapshot(), catalog=self.messages.copy())

    def passes(self) -> bool:
        return self._store.is_empty()

    def fails(self) -> bool:
        return not self._store.is_empty()

    def errors(self) -> MessageBag | None:
        """Gather errors of the last run, format them and return them."""
        if self.passes():
            return None
        return MessageFormatter(self.messages).format(self._store.entries_by_rule())

    def add_rule_message(self, rule: str, message: str) -> None:
        self.messages.add_rule_message(rule, message)

    def add_rule_messages(self, messages: Mapping[str, str]) -> None:
        self.messages.add_rule_messages(messages)

    def add_field_message(self, field: str, rule: str, message: str) -> None:
        self.messages.add_field_message(field, rule, message)

    def add_field_messages(self, messages: Mapping[str, Mapping[str, str]]) -> None:
        self.messages.add_field_messages(messages)

    def add_rule(self, name: str, callback: Predicate) -> None:
        """Register a custom rule, overriding any built-in of the same name.

        The callback is called as ``callback(value, data, args)``.
        """
        logger.debug(f"Registering custom rule: {name}")
        self.custom_rules[name] = callback

    def resolve_rule(self, name: str) -> Predicate:
        """Find the predicate to call for a rule name.

        Raises:
            RuleNotFoundError: If no custom rule, method or built-in matches
        """
        if name in self.custom_rules:
            return self.custom_rules[name]

        method = getattr(self, METHOD_RULE_PREFIX + name, None)
        if name and callable(method):
            return method

        rule = self.registry.get(name)
        if rule is not None:
            return rule

        raise RuleNotFoundError(name)

    def _rule_chain(self, field: str, rules: Mapping[str, str]) -> str | None:
        if field in rules:
            return rules[field]

        if self.settings.unknown_fields == UnknownFieldPolicy.SKIP:
            logger.debug(f"Skipping field without rule chain: {field}")
            return None

        raise MissingRuleChainError(field)

    def _validate_against_rule(self, field: str, value: Any, spec: RuleSpec) -> None:
        predicate = self.resolve_rule(spec.name)

        if not predicate(value, self.input, spec.args):
            self._store.record(field, value, spec.name, spec.args)


def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, str],
    *,
    custom_rules: Mapping[str, Predicate] | None = None,
    rule_messages: Mapping[str, str] | None = None,
    field_messages: Mapping[str, Mapping[str, str]] | None = None,
    settings: ValidationSettings | None = None,
) -> ValidationResult:
    """Validate data in one call, without keeping an orchestrator around."""
    violin = Violin(
        settings=settings,
        messages=MessageCatalog(rule_messages=rule_messages, field_messages=field_messages),
    )
    for name, callback in (custom_rules or {}).items():
        violin.add_rule(name, callback)

    return violin.validate(data, rules)
