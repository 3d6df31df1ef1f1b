"""
Tests for formrules.schema

Covers:
  - validate_document() against the form schema
  - validate_document() against the messages and overrides schemas
  - SchemaIssue formatting
"""
from __future__ import annotations

from pathlib import Path

from formrules.schema import (
    FORM_SCHEMA,
    MESSAGES_SCHEMA,
    OVERRIDES_SCHEMA,
    SchemaIssue,
    validate_document,
)


# ---------------------------------------------------------------------------
# Form schema
# ---------------------------------------------------------------------------


class TestFormSchema:
    def test_valid_form(self):
        doc = {
            "form": "signup",
            "fields": [
                {"name": "email", "type": "email", "required": True},
                {"name": "bio", "minLength": 10, "maxlength": "200"},
                {"name": "nick", "validate": "onlyLetters, phoneBR"},
                {"name": "tags", "validate": ["onlyLetters"]},
                {"name": "avatar", "type": "file", "accept": "image/png"},
            ],
        }
        assert validate_document(doc, FORM_SCHEMA) == []

    def test_missing_form_name(self):
        issues = validate_document({"fields": []}, FORM_SCHEMA)
        assert len(issues) == 1
        assert "'form' is a required property" in issues[0].message

    def test_unknown_field_key_reports_path(self):
        doc = {"form": "f", "fields": [{"name": "a"}, {"name": "b", "colour": "red"}]}
        issues = validate_document(doc, FORM_SCHEMA)
        assert len(issues) == 1
        assert issues[0].path == "fields[1]"

    def test_wrong_type_reports_nested_path(self):
        doc = {"form": "f", "fields": [{"name": "a", "required": "yes please"}]}
        issues = validate_document(doc, FORM_SCHEMA)
        assert issues[0].path == "fields[0]/required"

    def test_non_numeric_length_rejected(self):
        doc = {"form": "f", "fields": [{"name": "a", "minLength": "ten"}]}
        assert validate_document(doc, FORM_SCHEMA)


# ---------------------------------------------------------------------------
# Message schemas
# ---------------------------------------------------------------------------


class TestMessageSchemas:
    def test_valid_messages(self):
        doc = {"messages": {"en": {"phoneBR": "Invalid phone."}}}
        assert validate_document(doc, MESSAGES_SCHEMA) == []

    def test_empty_message_rejected(self):
        doc = {"messages": {"en": {"phoneBR": ""}}}
        issues = validate_document(doc, MESSAGES_SCHEMA)
        assert issues[0].path == "messages/en/phoneBR"

    def test_valid_overrides(self):
        doc = {"overrides": {"en": {"email": {"email": "Custom"}}}}
        assert validate_document(doc, OVERRIDES_SCHEMA) == []

    def test_overrides_need_field_level(self):
        doc = {"overrides": {"en": {"email": "Custom"}}}
        assert validate_document(doc, OVERRIDES_SCHEMA)


# ---------------------------------------------------------------------------
# SchemaIssue
# ---------------------------------------------------------------------------


class TestSchemaIssue:
    def test_str_with_path(self):
        issue = SchemaIssue(file=Path("signup.yaml"), message="bad", path="fields[0]")
        assert str(issue) == "signup.yaml at fields[0]: bad"

    def test_str_without_file(self):
        assert str(SchemaIssue(file=None, message="bad")) == "<document>: bad"

    def test_source_is_attached(self):
        issues = validate_document({}, FORM_SCHEMA, source=Path("x.yaml"))
        assert all(issue.file == Path("x.yaml") for issue in issues)
