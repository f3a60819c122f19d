"""Built-in validation rules.

Each rule is a pure predicate over the field value. Only ``matches`` looks at
the other input values; rules taking arguments receive them as strings.
"""

import ipaddress
import re
import unicodedata
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from .framework import ValidationRule

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_EMAIL = re.compile(r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$")

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%d %B %Y",
    "%B %d, %Y",
]

CHECKED_VALUES = {"yes", "on", "1", "true"}


def to_number(value: Any) -> int | float | None:
    """Return value as a number if it is a number or numeric string.

    Integers stay integers so arbitrarily large values compare exactly.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and _NUMERIC.match(value):
        try:
            return int(value)
        except ValueError:
            return float(value)
    return None


def _size(value: Any, args: list[str]) -> int | float | None:
    """Size used by min/max: the number itself, or the length."""
    if len(args) > 1 and args[1] == "number":
        return to_number(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if isinstance(value, (str, list, tuple, dict)):
        return len(value)
    return None


class RequiredRule(ValidationRule):
    """Value must be present and not blank."""

    @property
    def name(self) -> str:
        return "required"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip() != ""
        if isinstance(value, (list, tuple, dict, set)):
            return len(value) > 0
        return True


class IntRule(ValidationRule):
    """Value must be an integral number."""

    @property
    def name(self) -> str:
        return "int"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        number = to_number(value)
        if isinstance(number, int):
            return True
        return number is not None and number.is_integer()


class NumberRule(ValidationRule):

    @property
    def name(self) -> str:
        return "number"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        return to_number(value) is not None


class BetweenRule(ValidationRule):
    """Value must be numeric and within [args[0], args[1]]."""

    @property
    def name(self) -> str:
        return "between"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        number = to_number(value)
        if number is None or len(args) < 2:
            return False
        low, high = to_number(args[0]), to_number(args[1])
        if low is None or high is None:
            return False
        return low <= number <= high


class MatchesRule(ValidationRule):
    """Value must equal the value of the field named by args[0]."""

    @property
    def name(self) -> str:
        return "matches"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if not args or args[0] not in data:
            return False
        return value == data[args[0]]


class AlnumDashRule(ValidationRule):

    @property
    def name(self) -> str:
        return "alnumDash"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if not isinstance(value, str) or not value:
            return False
        return all(char.isalnum() or char in "-_" for char in value)


class AlnumRule(ValidationRule):

    @property
    def name(self) -> str:
        return "alnum"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        return isinstance(value, str) and value.isalnum()


class AlphaRule(ValidationRule):

    @property
    def name(self) -> str:
        return "alpha"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if not isinstance(value, str) or not value:
            return False
        return all(unicodedata.category(char)[0] in "LM" for char in value)


class ArrayRule(ValidationRule):

    @property
    def name(self) -> str:
        return "array"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        return isinstance(value, (list, tuple, dict))


class BoolRule(ValidationRule):

    @property
    def name(self) -> str:
        return "bool"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        return isinstance(value, bool)


class EmailRule(ValidationRule):

    @property
    def name(self) -> str:
        return "email"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        return isinstance(value, str) and bool(_EMAIL.match(value))


class IpRule(ValidationRule):
    """Value must be an IPv4 or IPv6 address."""

    @property
    def name(self) -> str:
        return "ip"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if not isinstance(value, str):
            return False
        try:
            ipaddress.ip_address(value)
        except ValueError:
            return False
        return True


class MaxRule(ValidationRule):
    """Number or length must not exceed args[0].

    Strings and collections are measured by length unless the second
    argument is ``number``.
    """

    @property
    def name(self) -> str:
        return "max"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        size = _size(value, args)
        limit = to_number(args[0]) if args else None
        if size is None or limit is None:
            return False
        return size <= limit


class MinRule(ValidationRule):
    """Number or length must be at least args[0]."""

    @property
    def name(self) -> str:
        return "min"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        size = _size(value, args)
        limit = to_number(args[0]) if args else None
        if size is None or limit is None:
            return False
        return size >= limit


class UrlRule(ValidationRule):

    @property
    def name(self) -> str:
        return "url"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if not isinstance(value, str) or " " in value:
            return False
        parsed = urlparse(value)
        return bool(parsed.scheme and parsed.netloc)


class DateRule(ValidationRule):
    """Value must be a date, a datetime or a parseable date string."""

    @property
    def name(self) -> str:
        return "date"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if isinstance(value, datetime):
            return True
        if not isinstance(value, str) or not value.strip():
            return False

        text = value.strip()
        try:
            datetime.fromisoformat(text)
            return True
        except ValueError:
            pass

        for date_format in DATE_FORMATS:
            try:
                datetime.strptime(text, date_format)
                return True
            except ValueError:
                continue
        return False


class CheckedRule(ValidationRule):
    """Value must look like a ticked checkbox."""

    @property
    def name(self) -> str:
        return "checked"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if value is True or (isinstance(value, int) and not isinstance(value, bool) and value == 1):
            return True
        return isinstance(value, str) and value.strip().lower() in CHECKED_VALUES


class RegexRule(ValidationRule):
    """Value must fully match the pattern in args[0]."""

    @property
    def name(self) -> str:
        return "regex"

    def run(self, value: Any, data: Mapping[str, Any], args: list[str]) -> bool:
        if not args or not isinstance(value, str):
            return False
        pattern = args[0].strip("'\"")
        return re.fullmatch(pattern, value) is not None


BUILTIN_RULES: list[type[ValidationRule]] = [
    RequiredRule,
    IntRule,
    BetweenRule,
    MatchesRule,
    AlnumDashRule,
    AlnumRule,
    AlphaRule,
    ArrayRule,
    BoolRule,
    EmailRule,
    IpRule,
    MaxRule,
    MinRule,
    UrlRule,
    NumberRule,
    DateRule,
    CheckedRule,
    RegexRule,
]
