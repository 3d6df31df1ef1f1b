"""Per-field validation pipeline.

Runs the checks for one field in a fixed order and stops at the first
failure; that check decides both the failure and the message key:
1. Skip unnamed, disabled and submit fields
2. required
3. email (type="email")
4. fileType (type="file")
5. equalsTo (field declares a target)
6. Named rules, in directive order
7. minlength
8. maxlength
9. pattern
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from formrules.errors import ConfigurationError
from formrules.messages.catalog import DEFAULT_KEY
from formrules.messages.resolver import CallerDefaults, MessageResolver, Overrides
from formrules.registry import RuleRegistry
from formrules.types import (
    Diagnostic,
    DiagnosticKind,
    FieldContext,
    FieldDescriptor,
    FieldOutcome,
    RuleContext,
    Severity,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def compile_pattern(source: str) -> re.Pattern[str]:
    """Compile a field's regex source, caching by source text.

    Raises:
        ConfigurationError: If the source is not a valid regex
    """
    try:
        return re.compile(source)
    except re.error as exc:
        raise ConfigurationError(source, str(exc)) from exc


@dataclass
class _Failure:
    rule: str
    limit: int | None = None


class FieldPipeline:
    """Validates a single field against its declared constraints.

    The pipeline holds no per-call state; one instance serves every field
    of every form validated by its engine.
    """

    def __init__(self, registry: RuleRegistry, resolver: MessageResolver):
        self.registry = registry
        self.resolver = resolver

    def evaluate(
        self,
        field: FieldDescriptor,
        form: FieldContext | None,
        locale: str,
        overrides: Overrides | None = None,
        caller_defaults: CallerDefaults | None = None,
    ) -> FieldOutcome | None:
        """Run the checks for one field.

        Returns:
            The outcome, or None if the field is not validated at all
            (unnamed, disabled or a submit control)
        """
        if not field.is_data_field:
            return None

        diagnostics: list[Diagnostic] = []
        failure = self._first_failure(field, RuleContext(field=field, form=form), diagnostics)

        if failure is None:
            return FieldOutcome(
                field_name=field.name,
                passed=True,
                diagnostics=tuple(diagnostics),
            )

        message = self.resolver.resolve(
            locale,
            field.name,
            failure.rule,
            overrides=overrides,
            caller_defaults=caller_defaults,
            limit=failure.limit,
        )
        return FieldOutcome(
            field_name=field.name,
            passed=False,
            rule=failure.rule,
            message=message,
            diagnostics=tuple(diagnostics),
        )

    def _first_failure(
        self,
        field: FieldDescriptor,
        ctx: RuleContext,
        diagnostics: list[Diagnostic],
    ) -> _Failure | None:
        value = field.value

        if field.required and not value.strip():
            return _Failure("required")

        if field.type == "email" and not self._run_builtin("email", value, ctx):
            return _Failure("email")

        if field.type == "file" and not self._run_builtin("fileType", "", ctx):
            return _Failure("fileType")

        if field.equals_to and not self._run_builtin("equalsTo", value, ctx):
            return _Failure("equalsTo")

        for rule_name in field.named_rules:
            rule_name = rule_name.strip()
            if not rule_name:
                continue
            rule = self.registry.lookup(rule_name)
            if rule is None:
                logger.debug("Rule %r on field %r is not registered; skipping", rule_name, field.name)
                diagnostics.append(Diagnostic(
                    kind=DiagnosticKind.MISSING_RULE,
                    field=field.name,
                    message=f"Rule '{rule_name}' is not registered",
                    severity=Severity.INFO,
                ))
                continue
            if not rule(value, ctx):
                return _Failure(rule_name)

        if _is_set(field.min_length) and len(value) < field.min_length:
            return _Failure("minlength", limit=field.min_length)

        if _is_set(field.max_length) and len(value) > field.max_length:
            return _Failure("maxlength", limit=field.max_length)

        if field.pattern:
            try:
                pattern = compile_pattern(field.pattern)
            except ConfigurationError as exc:
                logger.warning(
                    "Field %r has an invalid pattern %r: %s",
                    field.name, exc.pattern, exc.reason,
                )
                diagnostics.append(Diagnostic(
                    kind=DiagnosticKind.CONFIGURATION_ERROR,
                    field=field.name,
                    message=str(exc),
                    severity=Severity.WARNING,
                ))
                return _Failure(DEFAULT_KEY)
            if pattern.search(value) is None:
                return _Failure("pattern")

        return None

    def _run_builtin(self, name: str, value: str, ctx: RuleContext) -> bool:
        """Run a built-in rule; an unregistered one counts as passing."""
        rule = self.registry.lookup(name)
        if rule is None:
            return True
        return bool(rule(value, ctx))


def _is_set(limit: int | None) -> bool:
    return limit is not None and limit >= 0
