"""Shared fixtures for formrules tests."""

import pytest

from formrules import ValidationEngine


@pytest.fixture
def engine():
    """A fresh engine with only the built-in rules and messages."""
    return ValidationEngine()
