"""Core types for the formrules validation engine.

This module defines the snapshot types the engine consumes and the result
types it produces:
- FieldDescriptor / FileInfo: immutable view of one form input
- FormSnapshot: ordered fields of one form, doubling as the cross-field context
- RuleContext: second argument handed to every rule predicate
- FieldOutcome / ValidationResult / Diagnostic: what validation returns
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


# Input types that never carry form data
NON_DATA_TYPES = frozenset({"submit"})


class Severity(Enum):
    """Severity of a diagnostic surfaced alongside a validation result.

    WARNING: Host configuration problem (e.g. a pattern that does not compile)
    INFO: Benign condition worth knowing about (e.g. an unknown rule name)
    """

    WARNING = "warning"
    INFO = "info"


class DiagnosticKind(Enum):
    """Kinds of non-fatal conditions found while validating."""

    CONFIGURATION_ERROR = "configuration_error"
    MISSING_RULE = "missing_rule"


@dataclass(frozen=True)
class FileInfo:
    """Accept list and uploaded files of a ``type="file"`` input.

    Attributes:
        accept: Comma-separated accepted types (e.g. "image/png, application/pdf")
        mime_types: Reported MIME types of the uploaded files, in upload order
    """

    accept: str | None = None
    mime_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldDescriptor:
    """Snapshot of one form field at validation time.

    Attributes:
        name: Field name, unique within a form; unnamed fields are not validated
        value: Current value as entered
        type: Input type tag ("text", "email", "file", "submit", ...)
        required: Field must have a non-blank value
        disabled: Disabled fields are not validated
        min_length: Minimum length, None or negative when unset
        max_length: Maximum length, None or negative when unset
        pattern: Regex source the value must match
        named_rules: Registered rule names to run, in order
        equals_to: Name of a field whose value this one must equal
        file_info: Accept list and uploads for file inputs
    """

    name: str
    value: str = ""
    type: str = "text"
    required: bool = False
    disabled: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    named_rules: tuple[str, ...] = ()
    equals_to: str | None = None
    file_info: FileInfo | None = None

    def __post_init__(self) -> None:
        # Accepts the raw "a, b" directive as well as a sequence of names
        object.__setattr__(self, "named_rules", parse_rule_directive(self.named_rules))

    @property
    def is_data_field(self) -> bool:
        """True if the pipeline should look at this field at all."""
        return bool(self.name) and not self.disabled and self.type not in NON_DATA_TYPES

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FieldDescriptor:
        """Create a FieldDescriptor from a dataset-style mapping.

        Accepts both camelCase attribute names (``minLength``) and the
        lowercase ``data-*`` spelling (``minlength``). The ``validate`` key is a
        comma-separated rule directive. File inputs read ``accept`` and
        ``files`` (a list of MIME types).
        """
        accept = data.get("accept")
        files = data.get("files")
        file_info = None
        if accept is not None or files:
            file_info = FileInfo(
                accept=accept,
                mime_types=tuple(files or ()),
            )

        return cls(
            name=data.get("name") or "",
            value=_as_text(data.get("value")),
            type=data.get("type") or "text",
            required=bool(data.get("required", False)),
            disabled=bool(data.get("disabled", False)),
            min_length=_parse_length(_first_present(data, "minLength", "minlength")),
            max_length=_parse_length(_first_present(data, "maxLength", "maxlength")),
            pattern=data.get("pattern") or None,
            named_rules=parse_rule_directive(data.get("validate")),
            equals_to=data.get("equalsTo") or None,
            file_info=file_info,
        )


class FieldContext(Protocol):
    """Read-only access to the other fields of the form being validated."""

    def value_of(self, name: str) -> str | None:
        """Return the current value of field ``name``, or None if absent."""
        ...


@dataclass(frozen=True)
class FormSnapshot:
    """Ordered field snapshots of one form.

    Also serves as the FieldContext for cross-field rules: ``value_of``
    returns the value of the first field carrying the requested name.
    """

    fields: tuple[FieldDescriptor, ...] = ()

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def value_of(self, name: str) -> str | None:
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor.value
        return None

    @classmethod
    def of(cls, fields: Iterable[FieldDescriptor]) -> FormSnapshot:
        return cls(fields=tuple(fields))

    @classmethod
    def from_values(
        cls,
        fields: Iterable[FieldDescriptor],
        values: Mapping[str, Any],
        files: Mapping[str, Iterable[str]] | None = None,
    ) -> FormSnapshot:
        """Fill field definitions with submitted values.

        Args:
            fields: Field definitions (their ``value`` is ignored)
            values: Submitted values keyed by field name; missing names are ""
            files: Uploaded MIME types keyed by field name, for file inputs
        """
        files = files or {}
        filled = []
        for descriptor in fields:
            file_info = descriptor.file_info
            if descriptor.name in files:
                file_info = FileInfo(
                    accept=file_info.accept if file_info else None,
                    mime_types=tuple(files[descriptor.name]),
                )
            filled.append(
                FieldDescriptor(
                    name=descriptor.name,
                    value=_as_text(values.get(descriptor.name)),
                    type=descriptor.type,
                    required=descriptor.required,
                    disabled=descriptor.disabled,
                    min_length=descriptor.min_length,
                    max_length=descriptor.max_length,
                    pattern=descriptor.pattern,
                    named_rules=descriptor.named_rules,
                    equals_to=descriptor.equals_to,
                    file_info=file_info,
                )
            )
        return cls(fields=tuple(filled))


@dataclass(frozen=True)
class RuleContext:
    """Context passed to rule predicates.

    Attributes:
        field: The descriptor being validated
        form: Other fields of the same form; None when the host supplied none
    """

    field: FieldDescriptor
    form: FieldContext | None = None


# Rule predicate signature: (value, ctx) -> bool
Rule = Callable[[str, RuleContext], bool]


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal condition met while validating one field.

    Attributes:
        kind: What happened
        field: Field the condition belongs to
        message: Human-readable description for the host (not the end user)
        severity: WARNING for configuration problems, INFO otherwise
    """

    kind: DiagnosticKind
    field: str
    message: str
    severity: Severity = Severity.WARNING

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "field": self.field,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class FieldOutcome:
    """Result of running the pipeline over one field.

    Attributes:
        field_name: Name of the field
        passed: True if every check passed
        rule: Message key of the failing check, None when passed
        message: Resolved message, None when passed
        diagnostics: Non-fatal conditions met on the way
    """

    field_name: str
    passed: bool
    rule: str | None = None
    message: str | None = None
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a whole form.

    Attributes:
        passed: True iff ``errors`` is empty
        errors: Field name -> message, in field order; absent fields are valid
        diagnostics: Non-fatal conditions for the host; never affect ``passed``
    """

    passed: bool
    errors: dict[str, str] = field(default_factory=dict)
    diagnostics: tuple[Diagnostic, ...] = ()

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[FieldOutcome]) -> ValidationResult:
        """Collect failing outcomes into an error mapping.

        When several fields share a name, the last failure's message wins
        while the key keeps the position of the first failure.
        """
        errors: dict[str, str] = {}
        diagnostics: list[Diagnostic] = []
        for outcome in outcomes:
            diagnostics.extend(outcome.diagnostics)
            if not outcome.passed:
                errors[outcome.field_name] = outcome.message or ""
        return cls(passed=not errors, errors=errors, diagnostics=tuple(diagnostics))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "passed": self.passed,
            "errors": dict(self.errors),
        }
        if self.diagnostics:
            result["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        return result


def parse_rule_directive(directive: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split a ``"rule1, rule2"`` directive into trimmed, non-empty names.

    Order is kept and repeated names are dropped. A list of names is accepted
    as well, as YAML form files may spell the directive either way.
    """
    if not directive:
        return ()
    parts = directive.split(",") if isinstance(directive, str) else directive
    names: list[str] = []
    for part in parts:
        name = str(part).strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _parse_length(raw: Any) -> int | None:
    """Parse a length attribute the way ``parseInt`` reads a data attribute."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    digits = ""
    for i, ch in enumerate(text):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
