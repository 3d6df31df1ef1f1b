"""formrules: form field validation with localized messages.

This package provides:
- A registry of named rules (built-ins: email, onlyLetters, equalsTo, fileType)
- A per-field pipeline: required, type checks, cross-field, named rules,
  length bounds, pattern; the first failing check wins
- A message fallback chain: per-field overrides, caller defaults,
  catalog, catalog default, terminal literal

Usage:
    from formrules import FieldDescriptor, ValidationEngine

    engine = ValidationEngine()
    result = engine.validate(
        [
            FieldDescriptor(name="email", type="email", required=True, value=""),
            FieldDescriptor(name="bio", min_length=10, value="short"),
        ],
        locale="en",
    )
    result.errors  # {"email": "This field is required.", "bio": "Minimum 10 characters."}
"""

from formrules.config import EngineConfig
from formrules.engine import ValidationEngine
from formrules.errors import (
    ConfigurationError,
    FormDefinitionError,
    FormRulesError,
    RuleSignatureError,
)
from formrules.loader import (
    FormDefinition,
    FormLoader,
    load_form,
    load_messages,
    load_overrides,
)
from formrules.messages import MessageCatalog, MessageResolver
from formrules.pipeline import FieldPipeline
from formrules.registry import RuleRegistry
from formrules.types import (
    Diagnostic,
    DiagnosticKind,
    FieldContext,
    FieldDescriptor,
    FieldOutcome,
    FileInfo,
    FormSnapshot,
    Rule,
    RuleContext,
    Severity,
    ValidationResult,
)

__all__ = [
    # Types
    "Diagnostic",
    "DiagnosticKind",
    "FieldContext",
    "FieldDescriptor",
    "FieldOutcome",
    "FileInfo",
    "FormSnapshot",
    "Rule",
    "RuleContext",
    "Severity",
    "ValidationResult",
    # Engine
    "EngineConfig",
    "FieldPipeline",
    "MessageCatalog",
    "MessageResolver",
    "RuleRegistry",
    "ValidationEngine",
    # Files
    "FormDefinition",
    "FormLoader",
    "load_form",
    "load_messages",
    "load_overrides",
    # Errors
    "ConfigurationError",
    "FormDefinitionError",
    "FormRulesError",
    "RuleSignatureError",
]
