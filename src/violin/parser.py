"""Rule chain parsing.

A rule chain is a pipe-delimited string such as ``"required|between(1, 5)"``.
Each token carries a rule name and an optional parenthesized, comma-separated
argument list. Arguments always stay strings; rules coerce them as needed.
"""

import re
from dataclasses import dataclass, field

CHAIN_SEPARATOR = "|"

_ARGS_PATTERN = re.compile(r".+\([a-zA-Z0-9,'\" _]+\)")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class RuleSpec:
    """A single parsed rule token."""
    name: str
    args: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({','.join(self.args)})"


def split_chain(chain: str) -> list[str]:
    """Split a rule chain into its tokens, left to right."""
    return chain.split(CHAIN_SEPARATOR)


def rule_has_args(token: str) -> bool:
    """Check whether a token uses the ``name(args)`` syntax."""
    return bool(_ARGS_PATTERN.search(token))


def get_rule_name(token: str) -> str:
    """Return the part of a token before the first ``(``."""
    return token.split("(")[0]


def get_rule_args(token: str) -> list[str]:
    """Return the ordered argument list of a token.

    Tokens without argument syntax yield an empty list. Whitespace inside
    the parentheses is removed before splitting on commas.
    """
    if not rule_has_args(token):
        return []

    args = token.split("(")[1].rstrip(")")
    args = _WHITESPACE.sub("", args)
    return args.split(",")


def parse_rule(token: str) -> RuleSpec:
    """Parse a single rule token into a RuleSpec."""
    return RuleSpec(name=get_rule_name(token), args=get_rule_args(token))


def parse_chain(chain: str) -> list[RuleSpec]:
    """Parse every token of a rule chain."""
    return [parse_rule(token) for token in split_chain(chain)]
