"""Exception taxonomy for violin.

Validation failures are data, not exceptions: they are recorded and surfaced
through ``errors()``. The exceptions here signal setup mistakes that must abort
a run instead of silently passing or failing a field.
"""


class ViolinError(Exception):
    """Base class for all violin errors."""


class ConfigurationError(ViolinError):
    """Raised when rules, messages or settings are misconfigured."""


class RuleNotFoundError(ConfigurationError):
    """Raised when a rule name cannot be resolved to a predicate."""

    def __init__(self, rule: str):
        self.rule = rule
        super().__init__(f"No rule registered under the name '{rule}'")


class MissingRuleChainError(ConfigurationError):
    """Raised when an input field has no rule chain."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"No rule chain defined for input field '{field}'")


class MissingMessageError(ConfigurationError):
    """Raised when no message template resolves for a failed rule."""

    def __init__(self, field: str, rule: str):
        self.field = field
        self.rule = rule
        super().__init__(f"No message template for rule '{rule}' (field '{field}')")
