"""Localized messages for formrules.

- MessageCatalog: built-in and registered messages, locale -> rule -> message
- MessageResolver: fallback chain from per-field overrides down to a
  terminal literal
"""

from formrules.messages.catalog import (
    BUILTIN_MESSAGES,
    DEFAULT_KEY,
    MessageCatalog,
)
from formrules.messages.resolver import (
    DEFAULT_FALLBACK_MESSAGE,
    CallerDefaults,
    MessageResolver,
    Overrides,
)

__all__ = [
    "BUILTIN_MESSAGES",
    "DEFAULT_KEY",
    "DEFAULT_FALLBACK_MESSAGE",
    "CallerDefaults",
    "MessageCatalog",
    "MessageResolver",
    "Overrides",
]
