"""Validation engine for formrules.

The engine owns a RuleRegistry and a MessageCatalog and runs the field
pipeline over every field of a form.

Usage:
    engine = ValidationEngine()
    engine.register_rule(
        "phoneBR",
        lambda value: re.fullmatch(r"\\d{10,11}", value) is not None,
        {"pt": "Telefone inválido.", "en": "Invalid phone number."},
    )

    result = engine.validate(fields, locale="en")
    if not result.passed:
        show(result.errors)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from formrules.config import EngineConfig
from formrules.loader import load_messages
from formrules.messages.catalog import MessageCatalog
from formrules.messages.resolver import CallerDefaults, MessageResolver, Overrides
from formrules.pipeline import FieldPipeline
from formrules.registry import RuleRegistry
from formrules.rules import register_builtin_rules
from formrules.types import (
    FieldContext,
    FieldDescriptor,
    FieldOutcome,
    FormSnapshot,
    Rule,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Validates form snapshots against built-in and registered rules.

    Each engine starts with the built-in rules and a private copy of the
    built-in catalog. Registration is meant to happen at setup time; an
    engine may be shared across validate() calls but registering while
    another thread validates is not synchronized.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self.registry = RuleRegistry()
        self.catalog = MessageCatalog.builtin(self.config.locales)
        self.resolver = MessageResolver(self.catalog, self.config.fallback_message)
        self.pipeline = FieldPipeline(self.registry, self.resolver)

        register_builtin_rules(self.registry)
        for path in self.config.message_files:
            for locale, messages in load_messages(path).items():
                self.catalog.update_locale(locale, messages)

    # =========================================================================
    # Registration
    # =========================================================================

    def register_rule(
        self,
        name: str,
        predicate: Callable[..., Any],
        messages: Mapping[str, str] | str | None = None,
    ) -> Rule:
        """Register a rule and, optionally, its messages.

        Args:
            name: Rule name as used in ``validate`` directives
            predicate: ``(value, ctx) -> bool`` or ``(value) -> bool``
            messages: ``{locale: message}``; a plain string is the message for
                the default locale

        Returns:
            The stored rule

        Raises:
            RuleSignatureError: If the predicate has the wrong shape
        """
        rule = self.registry.register(name, predicate)
        if messages:
            if isinstance(messages, str):
                messages = {self.config.default_locale: messages}
            self.catalog.merge(name.strip(), messages)
        logger.debug("Registered rule %r", name)
        return rule

    def rule(
        self,
        name: str,
        messages: Mapping[str, str] | str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator to register a rule function.

        Usage:
            @engine.rule("cpf", {"pt": "CPF inválido."})
            def cpf(value, ctx):
                ...
        """

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.register_rule(name, fn, messages)
            return fn

        return decorator

    # =========================================================================
    # Messages
    # =========================================================================

    def resolve(
        self,
        locale: str,
        field_name: str,
        rule_name: str,
        overrides: Overrides | None = None,
        caller_defaults: CallerDefaults | None = None,
        limit: int | None = None,
    ) -> str:
        """Resolve the message shown when ``rule_name`` fails on a field.

        ``limit`` fills the ``{limit}`` placeholder of minlength/maxlength
        messages; without it the placeholder is left out.
        """
        return self.resolver.resolve(
            locale,
            field_name,
            rule_name,
            overrides=overrides,
            caller_defaults=caller_defaults,
            limit=limit,
        )

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(
        self,
        fields: FormSnapshot | Iterable[FieldDescriptor],
        locale: str | None = None,
        overrides: Overrides | None = None,
        caller_defaults: CallerDefaults | None = None,
        context: FieldContext | None = None,
    ) -> ValidationResult:
        """Validate every field of a form.

        Args:
            fields: Form snapshot or field descriptors, in form order
            locale: Message locale; defaults to ``config.default_locale``
            overrides: Per-field messages, ``{locale: {field: {rule: msg}}}``
            caller_defaults: Per-locale messages, ``{locale: {rule: msg}}``
            context: Cross-field lookup; defaults to the snapshot itself

        Returns:
            ValidationResult with one error per failing field

        Raises:
            TypeError: If ``fields`` is None or holds something other than
                FieldDescriptor instances
        """
        snapshot = _as_snapshot(fields)
        form = context if context is not None else snapshot
        locale = locale or self.config.default_locale

        outcomes: list[FieldOutcome] = []
        for descriptor in snapshot:
            outcome = self.pipeline.evaluate(
                descriptor,
                form,
                locale,
                overrides=overrides,
                caller_defaults=caller_defaults,
            )
            if outcome is not None:
                outcomes.append(outcome)

        return ValidationResult.from_outcomes(outcomes)

    def validate_field(
        self,
        field: FieldDescriptor,
        locale: str | None = None,
        overrides: Overrides | None = None,
        caller_defaults: CallerDefaults | None = None,
        context: FieldContext | None = None,
    ) -> FieldOutcome | None:
        """Run the pipeline over a single field, e.g. on blur.

        Returns None for fields that are not validated (unnamed, disabled,
        submit controls).
        """
        if not isinstance(field, FieldDescriptor):
            raise TypeError(f"Expected FieldDescriptor, got {type(field).__name__}")
        return self.pipeline.evaluate(
            field,
            context,
            locale or self.config.default_locale,
            overrides=overrides,
            caller_defaults=caller_defaults,
        )


def _as_snapshot(fields: FormSnapshot | Iterable[FieldDescriptor] | None) -> FormSnapshot:
    if fields is None:
        raise TypeError("validate() requires a form snapshot or a sequence of fields")
    if isinstance(fields, FormSnapshot):
        snapshot = fields
    else:
        snapshot = FormSnapshot.of(fields)

    for index, descriptor in enumerate(snapshot.fields):
        if not isinstance(descriptor, FieldDescriptor):
            raise TypeError(
                f"Field at position {index} is {type(descriptor).__name__}, "
                "expected FieldDescriptor"
            )
    return snapshot
