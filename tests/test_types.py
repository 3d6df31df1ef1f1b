"""Tests for snapshot and result types."""

import dataclasses

import pytest

from formrules.types import (
    Diagnostic,
    DiagnosticKind,
    FieldDescriptor,
    FieldOutcome,
    FileInfo,
    FormSnapshot,
    Severity,
    ValidationResult,
    parse_rule_directive,
)


class TestParseRuleDirective:
    def test_splits_and_trims(self):
        assert parse_rule_directive(" onlyLetters , phoneBR") == ("onlyLetters", "phoneBR")

    def test_drops_blanks_and_repeats(self):
        assert parse_rule_directive("a,,b, a ,") == ("a", "b")

    def test_accepts_list(self):
        assert parse_rule_directive(["a ", "b"]) == ("a", "b")

    def test_empty(self):
        assert parse_rule_directive(None) == ()
        assert parse_rule_directive("") == ()


class TestFieldDescriptorFromDict:
    def test_dataset_style_attributes(self):
        field = FieldDescriptor.from_dict({
            "name": "nick",
            "value": "Ana",
            "required": True,
            "minlength": "3",
            "maxLength": 20,
            "pattern": "^[A-Z]",
            "validate": "onlyLetters, phoneBR",
            "equalsTo": "other",
        })
        assert field.name == "nick"
        assert field.type == "text"
        assert field.required
        assert field.min_length == 3
        assert field.max_length == 20
        assert field.pattern == "^[A-Z]"
        assert field.named_rules == ("onlyLetters", "phoneBR")
        assert field.equals_to == "other"
        assert field.file_info is None

    @pytest.mark.parametrize("raw,expected", [
        ("10", 10),
        (" 10px", 10),
        ("-1", -1),
        ("abc", None),
        ("", None),
        (None, None),
        (True, None),
    ])
    def test_length_parsing(self, raw, expected):
        assert FieldDescriptor.from_dict({"name": "f", "minLength": raw}).min_length == expected

    def test_file_input(self):
        field = FieldDescriptor.from_dict({
            "name": "avatar",
            "type": "file",
            "accept": "image/png",
            "files": ["image/png"],
        })
        assert field.file_info == FileInfo(accept="image/png", mime_types=("image/png",))

    def test_missing_value_is_empty_string(self):
        field = FieldDescriptor.from_dict({"name": "f"})
        assert field.value == ""

    def test_numeric_value_becomes_text(self):
        assert FieldDescriptor.from_dict({"name": "f", "value": 42}).value == "42"

    def test_descriptor_is_immutable(self):
        field = FieldDescriptor(name="f")
        with pytest.raises(dataclasses.FrozenInstanceError):
            field.value = "changed"

    def test_directive_string_is_split(self):
        field = FieldDescriptor(name="p", named_rules="phoneBR, other")
        assert field.named_rules == ("phoneBR", "other")

    def test_rule_names_are_trimmed(self):
        assert FieldDescriptor(name="p", named_rules=[" a ", "", "a"]).named_rules == ("a",)


class TestIsDataField:
    def test_named_enabled_text(self):
        assert FieldDescriptor(name="a").is_data_field

    def test_unnamed(self):
        assert not FieldDescriptor(name="").is_data_field

    def test_disabled(self):
        assert not FieldDescriptor(name="a", disabled=True).is_data_field

    def test_submit(self):
        assert not FieldDescriptor(name="a", type="submit").is_data_field


class TestFormSnapshot:
    def test_value_of(self):
        snapshot = FormSnapshot.of([FieldDescriptor(name="a", value="1")])
        assert snapshot.value_of("a") == "1"
        assert snapshot.value_of("b") is None

    def test_first_field_wins(self):
        snapshot = FormSnapshot.of([
            FieldDescriptor(name="a", value="first"),
            FieldDescriptor(name="a", value="second"),
        ])
        assert snapshot.value_of("a") == "first"

    def test_from_values(self):
        definitions = [
            FieldDescriptor(name="name", required=True),
            FieldDescriptor(name="age"),
            FieldDescriptor(name="avatar", type="file", file_info=FileInfo(accept="image/png")),
        ]
        snapshot = FormSnapshot.from_values(
            definitions,
            {"name": "Ana", "age": 30},
            files={"avatar": ["image/png"]},
        )
        assert [f.value for f in snapshot] == ["Ana", "30", ""]
        assert snapshot.fields[0].required
        assert snapshot.fields[2].file_info == FileInfo(
            accept="image/png", mime_types=("image/png",)
        )
        assert len(snapshot) == 3

    def test_from_values_leaves_definitions_untouched(self):
        definition = FieldDescriptor(name="name")
        FormSnapshot.from_values([definition], {"name": "Ana"})
        assert definition.value == ""


class TestValidationResult:
    def test_from_outcomes(self):
        diagnostic = Diagnostic(
            kind=DiagnosticKind.MISSING_RULE,
            field="b",
            message="Rule 'x' is not registered",
            severity=Severity.INFO,
        )
        result = ValidationResult.from_outcomes([
            FieldOutcome(field_name="a", passed=True),
            FieldOutcome(field_name="b", passed=False, rule="x", message="Bad.",
                         diagnostics=(diagnostic,)),
        ])
        assert not result.passed
        assert result.errors == {"b": "Bad."}
        assert result.diagnostics == (diagnostic,)

    def test_empty_outcomes_pass(self):
        result = ValidationResult.from_outcomes([])
        assert result.passed
        assert result.to_dict() == {"passed": True, "errors": {}}

    def test_duplicate_name_last_failure_wins(self):
        result = ValidationResult.from_outcomes([
            FieldOutcome(field_name="x", passed=False, rule="required", message="First."),
            FieldOutcome(field_name="y", passed=False, rule="required", message="Other."),
            FieldOutcome(field_name="x", passed=False, rule="minlength", message="Second."),
        ])
        assert result.errors == {"x": "Second.", "y": "Other."}
        assert list(result.errors) == ["x", "y"]
