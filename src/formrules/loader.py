"""Load form definitions and message files from YAML."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formrules.errors import FormDefinitionError
from formrules.schema import (
    FORM_SCHEMA,
    MESSAGES_SCHEMA,
    OVERRIDES_SCHEMA,
    validate_document,
)
from formrules.types import FieldDescriptor, FormSnapshot

logger = logging.getLogger(__name__)


class KeyPreservingLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain mapping keys as the text written.

    YAML 1.1 reads bare keys such as ``no:``, ``on:`` or ``1:`` as booleans
    and numbers; locale codes, rule names and field names must stay strings.
    Values are resolved as usual.
    """


def _construct_mapping(loader: KeyPreservingLoader, node: yaml.MappingNode) -> dict[Any, Any]:
    loader.flatten_mapping(node)
    mapping: dict[Any, Any] = {}
    for key_node, value_node in node.value:
        if isinstance(key_node, yaml.ScalarNode):
            key = key_node.value
        else:
            key = loader.construct_object(key_node, deep=True)
        mapping[key] = loader.construct_object(value_node, deep=True)
    return mapping


KeyPreservingLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping
)


def read_yaml(path: Path) -> Any:
    """Parse a UTF-8 YAML file with string mapping keys.

    Raises:
        FormDefinitionError: If the file is not valid YAML
    """
    try:
        with Path(path).open(encoding="utf-8") as fh:
            return yaml.load(fh, Loader=KeyPreservingLoader)
    except yaml.YAMLError as exc:
        raise FormDefinitionError(f"YAML parse error in {path}: {exc}") from exc


@dataclass
class FormDefinition:
    """A form's fields as declared in YAML, without submitted values."""

    name: str
    fields: list[FieldDescriptor] = field(default_factory=list)
    description: str = ""

    def snapshot(
        self,
        values: Mapping[str, Any],
        files: Mapping[str, Iterable[str]] | None = None,
    ) -> FormSnapshot:
        """Build a snapshot of this form holding the submitted values."""
        return FormSnapshot.from_values(self.fields, values, files)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormDefinition:
        return cls(
            name=data["form"],
            fields=[FieldDescriptor.from_dict(f) for f in data.get("fields", [])],
            description=data.get("description", ""),
        )


class FormLoader:
    """Loads every form definition in a directory of YAML files."""

    def __init__(self, forms_path: Path):
        self.forms_path = Path(forms_path)
        self.forms: dict[str, FormDefinition] = {}

    def load_all(self) -> dict[str, FormDefinition]:
        """Load all ``*.yaml`` form files.

        Raises:
            FormDefinitionError: If a file is invalid or two files declare
                the same form name
        """
        if not self.forms_path.exists():
            return self.forms

        seen: dict[str, Path] = {}
        for yaml_file in sorted(self.forms_path.glob("*.yaml")):
            form = load_form(yaml_file)
            if form.name in seen:
                raise FormDefinitionError(
                    f"Duplicate form '{form.name}' declared in both "
                    f"{seen[form.name]} and {yaml_file}"
                )
            seen[form.name] = yaml_file
            self.forms[form.name] = form
        return self.forms

    def get(self, name: str) -> FormDefinition:
        if name not in self.forms:
            raise KeyError(f"Form '{name}' is not loaded")
        return self.forms[name]


def load_form(path: Path) -> FormDefinition:
    """Load a single form definition.

    Raises:
        FormDefinitionError: If the file does not parse or fails the form schema
    """
    data = _load_checked(Path(path), FORM_SCHEMA)
    return FormDefinition.from_dict(data)


def load_messages(path: Path) -> dict[str, dict[str, str]]:
    """Load a ``{messages: {locale: {rule: message}}}`` file.

    The result can be merged into a catalog or passed to validate() as
    caller defaults.
    """
    data = _load_checked(Path(path), MESSAGES_SCHEMA)
    return {
        str(locale): {str(rule): message for rule, message in entries.items()}
        for locale, entries in data["messages"].items()
    }


def load_overrides(path: Path) -> dict[str, dict[str, dict[str, str]]]:
    """Load a ``{overrides: {locale: {field: {rule: message}}}}`` file."""
    data = _load_checked(Path(path), OVERRIDES_SCHEMA)
    return {
        str(locale): {
            str(field_name): {str(rule): message for rule, message in rules.items()}
            for field_name, rules in fields.items()
        }
        for locale, fields in data["overrides"].items()
    }


def _load_checked(path: Path, schema_name: str) -> dict[str, Any]:
    data = read_yaml(path)

    if data is None:
        raise FormDefinitionError(f"{path} is empty or contains only whitespace")

    issues = validate_document(data, schema_name, source=path)
    if issues:
        raise FormDefinitionError(f"{path} is not a valid document", issues)

    logger.debug("Loaded %s", path)
    return data
