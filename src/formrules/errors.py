"""Exceptions raised by formrules.

Per-field data problems never raise out of ``ValidationEngine.validate``.
These exceptions cover configuration mistakes made by the host application:
malformed regex sources, rule predicates with the wrong shape, and form or
message files that fail to load.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formrules.schema import SchemaIssue


class FormRulesError(Exception):
    """Base class for all formrules errors."""
    pass


class ConfigurationError(FormRulesError):
    """A field carries a regex source that does not compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class RuleSignatureError(FormRulesError, TypeError):
    """A rule predicate cannot be called as ``predicate(value, ctx)``."""
    pass


class FormDefinitionError(FormRulesError):
    """A YAML form or message file could not be loaded."""

    def __init__(self, message: str, issues: list[SchemaIssue] | None = None):
        self.issues = list(issues or [])
        if self.issues:
            details = "; ".join(str(issue) for issue in self.issues)
            message = f"{message}: {details}"
        super().__init__(message)
