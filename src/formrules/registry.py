"""Rule registry for formrules.

Maps rule names to predicates. Rule names are referenced from field
directives (``validate="onlyLetters, phoneBR"``), so lookup stays
string-keyed; predicates are checked for the right shape when they are
registered rather than when a form is validated.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from formrules.errors import RuleSignatureError
from formrules.types import Rule, RuleContext

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry of named rule predicates.

    Each ValidationEngine owns its own registry, so tests and applications
    never share registrations by accident. Re-registering a name replaces
    the previous predicate (last writer wins).

    Example:
        registry = RuleRegistry()
        registry.register("phoneBR", lambda value: PHONE_BR.fullmatch(value) is not None)

        rule = registry.lookup("phoneBR")
        rule("11999999999", ctx)  # True
    """

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, name: str, predicate: Callable[..., Any]) -> Rule:
        """Register a predicate under ``name``, replacing any existing rule.

        Args:
            name: Rule name as used in field directives
            predicate: ``(value, ctx) -> bool``, or ``(value) -> bool`` for
                rules that need no context

        Returns:
            The stored rule, always callable as ``rule(value, ctx)``

        Raises:
            ValueError: If the name is empty
            RuleSignatureError: If the predicate takes neither one nor two
                positional arguments
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Rule name must be a non-empty string")
        name = name.strip()

        rule = _as_rule(name, predicate)
        if name in self._rules:
            logger.debug("Replacing rule %r", name)
        self._rules[name] = rule
        return rule

    def lookup(self, name: str) -> Rule | None:
        """Get a rule by name, or None if it is not registered."""
        return self._rules.get(name)

    def get(self, name: str) -> Rule:
        """Get a registered rule by name.

        Raises:
            KeyError: If the rule is not registered
        """
        if name not in self._rules:
            raise KeyError(
                f"Rule '{name}' is not registered. "
                "Available rules: " + ", ".join(self.list_registered())
            )
        return self._rules[name]

    def is_registered(self, name: str) -> bool:
        """Check if a rule is registered."""
        return name in self._rules

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules)

    def clear(self) -> None:
        """Remove all registrations, built-ins included."""
        self._rules.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)


def _as_rule(name: str, predicate: Callable[..., Any]) -> Rule:
    """Check the predicate's shape and adapt one-argument predicates."""
    if not callable(predicate):
        raise RuleSignatureError(f"Rule '{name}' must be callable, got {type(predicate).__name__}")

    try:
        signature = inspect.signature(predicate)
    except (TypeError, ValueError):
        # Some builtins expose no signature; trust them with two arguments
        return predicate

    if _accepts(signature, 2):
        return predicate
    if _accepts(signature, 1):
        def rule(value: str, ctx: RuleContext) -> bool:
            return predicate(value)

        rule.__name__ = getattr(predicate, "__name__", name)
        rule.__wrapped__ = predicate  # type: ignore[attr-defined]
        return rule

    raise RuleSignatureError(
        f"Rule '{name}' must accept (value, ctx) or (value), got {signature}"
    )


def _accepts(signature: inspect.Signature, count: int) -> bool:
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True
