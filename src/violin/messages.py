"""Message templates and error message formatting.

Templates use named placeholders:

- ``{field}``: the field name
- ``{value}``: the submitted value
- ``{arg}``: the first rule argument
- ``{arg:1}``, ``{arg:2}``, ...: the following rule arguments

A template is looked up per failed (field, rule) pair. A field-specific
template wins over the rule-wide default.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from typing import Any

from .errors import MissingMessageError
from .store import ErrorRecord

logger = logging.getLogger(__name__)

DEFAULT_RULE_MESSAGES: dict[str, str] = {
    "required": "{field} is required",
    "int": "{field} must be a number",
    "between": "{field} must be between {arg} and {arg:1}.",
    "matches": "{field} must match {arg}.",
    "alnumDash": "{field} must be alphanumeric with dashes and underscores permitted.",
    "alnum": "{field} must be alphanumeric.",
    "alpha": "{field} must be alphabetic.",
    "array": "{field} must be an array.",
    "bool": "{field} must be a boolean.",
    "email": "{field} must be a valid email address.",
    "ip": "{field} must be a valid IP address.",
    "max": "{field} must be a maximum of {arg}",
    "min": "{field} must be a minimum of {arg}",
    "url": "{field} must be a valid URL.",
    "number": "{field} must be a number.",
    "date": "{field} must be a valid date.",
    "checked": "You need to check the {field} field.",
    "regex": "{field} was not in the correct format.",
}

_PLACEHOLDER = re.compile(r"\{(field|value|arg(?::\d+)?)\}")


class MessageBag(Mapping[str, list[str]]):
    """Read-only, ordered mapping of field name to its error messages."""

    def __init__(self, messages: Mapping[str, list[str]] | None = None):
        self._messages: dict[str, list[str]] = {
            field: list(items) for field, items in (messages or {}).items()
        }

    def __getitem__(self, field: str) -> list[str]:
        return list(self._messages[field])

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"MessageBag({self._messages!r})"

    def has(self, field: str) -> bool:
        """Check whether field has at least one message."""
        return bool(self._messages.get(field))

    def first(self, field: str) -> str | None:
        """Return the first message for field, or None."""
        items = self._messages.get(field)
        return items[0] if items else None

    def get(self, field: str, default: Any = None) -> Any:
        if field not in self._messages:
            return default
        return list(self._messages[field])

    def all(self) -> list[str]:
        """Return every message, flattened in field order."""
        return [message for items in self._messages.values() for message in items]

    def to_dict(self) -> dict[str, list[str]]:
        return {field: list(items) for field, items in self._messages.items()}


class MessageCatalog:
    """Rule-wide default templates plus per-field overrides."""

    def __init__(
        self,
        rule_messages: Mapping[str, str] | None = None,
        field_messages: Mapping[str, Mapping[str, str]] | None = None,
    ):
        self.rule_messages: dict[str, str] = dict(DEFAULT_RULE_MESSAGES)
        if rule_messages:
            self.rule_messages.update(rule_messages)
        self.field_messages: dict[str, dict[str, str]] = {
            field: dict(rules) for field, rules in (field_messages or {}).items()
        }

    def add_rule_message(self, rule: str, message: str) -> None:
        self.rule_messages[rule] = message

    def add_rule_messages(self, messages: Mapping[str, str]) -> None:
        """Merge messages into the rule-wide defaults."""
        self.rule_messages.update(messages)

    def add_field_message(self, field: str, rule: str, message: str) -> None:
        self.field_messages.setdefault(field, {})[rule] = message

    def add_field_messages(self, messages: Mapping[str, Mapping[str, str]]) -> None:
        """Replace all field-specific messages."""
        self.field_messages = {field: dict(rules) for field, rules in messages.items()}

    def fetch(self, field: str, rule: str) -> str:
        """Resolve the template for a failed (field, rule) pair.

        Raises:
            MissingMessageError: If neither a field nor a rule template exists
        """
        field_rules = self.field_messages.get(field, {})
        if rule in field_rules:
            return field_rules[rule]
        if rule in self.rule_messages:
            return self.rule_messages[rule]
        raise MissingMessageError(field, rule)

    def copy(self) -> MessageCatalog:
        catalog = MessageCatalog()
        catalog.rule_messages = dict(self.rule_messages)
        catalog.field_messages = {field: dict(rules) for field, rules in self.field_messages.items()}
        return catalog


def render_value(value: Any) -> str:
    """Render a submitted value for use inside a message."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(render_value(item) for item in value)
    return str(value)


def placeholder_values(record: ErrorRecord) -> dict[str, str]:
    """Build the placeholder map for a single error record."""
    values = {
        "field": record.field,
        "value": render_value(record.value),
    }
    for index, arg in enumerate(record.args):
        key = "arg" if index == 0 else f"arg:{index}"
        values[key] = arg
    return values


def replace_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Substitute named placeholders in a single pass.

    Placeholders without a value are left untouched.
    """
    def substitute(match: re.Match) -> str:
        return values.get(match.group(1), match.group(0))

    return _PLACEHOLDER.sub(substitute, template)


class MessageFormatter:
    """Turns grouped error records into a MessageBag."""

    def __init__(self, catalog: MessageCatalog):
        self.catalog = catalog

    def format_record(self, rule: str, record: ErrorRecord) -> str:
        template = self.catalog.fetch(record.field, rule)
        return replace_placeholders(template, placeholder_values(record))

    def format(self, entries: Mapping[str, Any]) -> MessageBag:
        """Format every record, grouped by field.

        Messages for a field follow rule-group order, which is the order in
        which each rule first failed during the run.
        """
        messages: dict[str, list[str]] = {}

        for rule, records in entries.items():
            for record in records:
                messages.setdefault(record.field, []).append(self.format_record(rule, record))

        logger.debug(f"Formatted messages for {len(messages)} fields")
        return MessageBag(messages)
