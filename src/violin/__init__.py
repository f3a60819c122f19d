"""violin - rule-chain validation for form and request input.

violin validates named input values against declarative, pipe-delimited rule
chains such as ``"required|between(1, 5)"`` and produces readable, per-field
error messages.
"""

__version__ = "2.0.0"
__author__ = "violin contributors"
__description__ = "Rule-chain validation with readable per-field error messages"

from violin.config import ViolinConfig, load_config
from violin.errors import (
    ConfigurationError,
    MissingMessageError,
    MissingRuleChainError,
    RuleNotFoundError,
    ViolinError,
)
from violin.messages import MessageBag, MessageCatalog
from violin.validator import ValidationResult, Violin, validate

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "Violin",
    "ValidationResult",
    "validate",
    "MessageBag",
    "MessageCatalog",
    "ViolinConfig",
    "load_config",
    "ViolinError",
    "ConfigurationError",
    "RuleNotFoundError",
    "MissingRuleChainError",
    "MissingMessageError",
]
