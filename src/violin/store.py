"""Per-run storage of failed rules, grouped by rule name."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorRecord:
    """A single failed rule for a single field."""
    field: str
    value: Any
    args: tuple[str, ...] = field(default_factory=tuple)


class ErrorStore:
    """Accumulates ErrorRecords keyed by rule name.

    Grouping is by rule, not by field: every field failing ``required``
    lands in the same group, in the order the failures were recorded.
    """

    def __init__(self) -> None:
        self._errors: dict[str, list[ErrorRecord]] = {}

    def record(self, field: str, value: Any, rule: str, args: list[str]) -> None:
        """Store a failure of rule for field."""
        logger.debug(f"Rule '{rule}' failed for field '{field}'")
        self._errors.setdefault(rule, []).append(ErrorRecord(field, value, tuple(args)))

    def clear(self) -> None:
        self._errors = {}

    def is_empty(self) -> bool:
        return not self._errors

    def entries_by_rule(self) -> dict[str, list[ErrorRecord]]:
        """Return the grouped records in grouping order.

        The mapping and its lists are copies; mutating them leaves the
        store untouched.
        """
        return {rule: list(records) for rule, records in self._errors.items()}

    def count(self) -> int:
        return sum(len(records) for records in self._errors.values())

    def snapshot(self) -> Mapping[str, tuple[ErrorRecord, ...]]:
        """Return a read-only copy of the grouped records."""
        return MappingProxyType({rule: tuple(records) for rule, records in self._errors.items()})
