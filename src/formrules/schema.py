"""
schema.py: JSON Schema checks for formrules YAML documents.

Form definitions, message files and override files are validated against the
schemas bundled in ``formrules/schemas`` before they are turned into objects.

Usage:
    from formrules.schema import validate_document

    issues = validate_document(doc, "form.schema.json", source=Path("signup.yaml"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------

_SCHEMAS_DIR = Path(__file__).parent / "schemas"

FORM_SCHEMA = "form.schema.json"
MESSAGES_SCHEMA = "messages.schema.json"
OVERRIDES_SCHEMA = "overrides.schema.json"


@dataclass
class SchemaIssue:
    """A single schema violation in a YAML document."""

    file: Path | None
    message: str
    path: str = ""          # location within the document, e.g. "fields[0]/minLength"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        source = self.file if self.file is not None else "<document>"
        return f"{source}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def _load_validator(name: str) -> Draft202012Validator:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open(encoding="utf-8") as fh:
        schema = json.load(fh)
    return Draft202012Validator(schema)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_document(
    doc: Any,
    schema_name: str,
    source: Path | None = None,
) -> list[SchemaIssue]:
    """
    Validate a parsed YAML document against the named schema.

    Args:
        doc:         The parsed document.
        schema_name: Filename of the schema (e.g. ``"form.schema.json"``).
        source:      File the document came from, for issue reporting.

    Returns:
        A list of :class:`SchemaIssue` objects (empty on success).
    """
    validator = _load_validator(schema_name)
    return [
        SchemaIssue(file=source, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.absolute_path])
    ]
