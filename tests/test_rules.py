"""Tests for the built-in rules."""

import pytest

from formrules.registry import RuleRegistry
from formrules.rules import (
    BUILTIN_RULES,
    EMAIL_PATTERN,
    email,
    equals_to,
    file_type,
    only_letters,
    register_builtin_rules,
)
from formrules.types import FieldDescriptor, FileInfo, FormSnapshot, RuleContext


def file_ctx(accept=None, mime_types=()):
    field = FieldDescriptor(
        name="upload",
        type="file",
        file_info=FileInfo(accept=accept, mime_types=tuple(mime_types)),
    )
    return RuleContext(field=field)


# =============================================================================
# email
# =============================================================================


class TestEmail:
    @pytest.mark.parametrize("value", [
        "test@example.com",
        "user.name@domain.co.uk",
        "USER+tag@EXAMPLE.ORG",
        "a@b.c",
    ])
    def test_valid(self, value):
        assert email(value)

    @pytest.mark.parametrize("value", [
        "",
        "not-an-email",
        "@example.com",
        "user@",
        "user@example",
        "user name@example.com",
        "user@@example.com",
        "user@example.com\n",
    ])
    def test_invalid(self, value):
        assert not email(value)

    def test_unicode_whitespace_rejected(self):
        assert not email("a\u00a0b@example.com")
        assert not EMAIL_PATTERN.fullmatch("user@exa\u2003mple.com")

    def test_case_insensitive(self):
        assert email("USER@EXAMPLE.COM")


# =============================================================================
# onlyLetters
# =============================================================================


class TestOnlyLetters:
    @pytest.mark.parametrize("value", [
        "",
        "Maria",
        "José da Silva",
        "Ærøskøbing",
        "Łódź",
        "François\tMüller",
    ])
    def test_valid(self, value):
        assert only_letters(value)

    @pytest.mark.parametrize("value", [
        "R2D2",
        "john_doe",
        "a×b",
        "a÷b",
        "hello!",
        "Ωmega",
    ])
    def test_invalid(self, value):
        assert not only_letters(value)


# =============================================================================
# equalsTo
# =============================================================================


class TestEqualsTo:
    def make(self, value, target="password", form_fields=None):
        field = FieldDescriptor(name="confirm", value=value, equals_to=target)
        form = FormSnapshot.of(form_fields) if form_fields is not None else None
        return RuleContext(field=field, form=form)

    def test_no_target_passes(self):
        ctx = self.make("abc", target=None, form_fields=[])
        assert equals_to("abc", ctx)

    def test_no_context_passes(self):
        assert equals_to("abc", None)

    def test_no_form_passes(self):
        assert equals_to("abc", self.make("abc"))

    def test_equal_values_pass(self):
        ctx = self.make("abc", form_fields=[FieldDescriptor(name="password", value="abc")])
        assert equals_to("abc", ctx)

    def test_different_values_fail(self):
        ctx = self.make("abc", form_fields=[FieldDescriptor(name="password", value="abC")])
        assert not equals_to("abc", ctx)

    def test_absent_target_fails(self):
        ctx = self.make("abc", form_fields=[FieldDescriptor(name="other", value="abc")])
        assert not equals_to("abc", ctx)

    def test_empty_values_match(self):
        ctx = self.make("", form_fields=[FieldDescriptor(name="password", value="")])
        assert equals_to("", ctx)


# =============================================================================
# fileType
# =============================================================================


class TestFileType:
    def test_no_accept_passes(self):
        assert file_type("", file_ctx(mime_types=["application/x-msdownload"]))

    def test_no_upload_passes(self):
        assert file_type("", file_ctx(accept="image/png"))

    def test_no_file_info_passes(self):
        assert file_type("", RuleContext(field=FieldDescriptor(name="upload", type="file")))

    def test_matching_token_passes(self):
        assert file_type("", file_ctx(accept="application/pdf, image/png", mime_types=["image/png"]))

    def test_token_is_substring_of_mime_type(self):
        assert file_type("", file_ctx(accept="image", mime_types=["image/webp"]))

    def test_no_matching_token_fails(self):
        assert not file_type("", file_ctx(accept="image/png,image/jpeg", mime_types=["text/plain"]))

    def test_only_first_upload_is_checked(self):
        ctx = file_ctx(accept="image/png", mime_types=["text/plain", "image/png"])
        assert not file_type("", ctx)

    def test_empty_tokens_do_not_match(self):
        assert not file_type("", file_ctx(accept="image/png, ,", mime_types=["text/plain"]))


# =============================================================================
# Registration
# =============================================================================


class TestRegisterBuiltins:
    def test_all_builtins_registered(self):
        registry = RuleRegistry()
        register_builtin_rules(registry)
        assert registry.list_registered() == sorted(BUILTIN_RULES)

    def test_registered_rules_take_context(self):
        registry = RuleRegistry()
        register_builtin_rules(registry)
        ctx = RuleContext(field=FieldDescriptor(name="e", type="email"))
        assert registry.get("email")("a@b.co", ctx)
