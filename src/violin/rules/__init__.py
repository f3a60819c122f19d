"""Built-in validation rules and the rule registry."""

from .builtin import (
    BUILTIN_RULES,
    AlnumDashRule,
    AlnumRule,
    AlphaRule,
    ArrayRule,
    BetweenRule,
    BoolRule,
    CheckedRule,
    DateRule,
    EmailRule,
    IntRule,
    IpRule,
    MatchesRule,
    MaxRule,
    MinRule,
    NumberRule,
    RegexRule,
    RequiredRule,
    UrlRule,
)
from .framework import Predicate, RuleRegistry, ValidationRule, create_default_registry

__all__ = [
    "Predicate",
    "RuleRegistry",
    "ValidationRule",
    "create_default_registry",
    "BUILTIN_RULES",
    "AlnumDashRule",
    "AlnumRule",
    "AlphaRule",
    "ArrayRule",
    "BetweenRule",
    "BoolRule",
    "CheckedRule",
    "DateRule",
    "EmailRule",
    "IntRule",
    "IpRule",
    "MatchesRule",
    "MaxRule",
    "MinRule",
    "NumberRule",
    "RegexRule",
    "RequiredRule",
    "UrlRule",
]
