"""Built-in rules for formrules.

These predicates are registered into every new ValidationEngine and can be
referenced from field directives like any custom rule:
- email: something@something.something
- onlyLetters: Latin letters (accented included) and whitespace
- equalsTo: value equals the value of another field in the form
- fileType: uploaded file's MIME type matches the accept list
"""

import re

from formrules.registry import RuleRegistry
from formrules.types import RuleContext


# =============================================================================
# Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+", re.IGNORECASE)

# ASCII letters, Latin-1 letters (no × or ÷), Latin Extended-A, whitespace
ONLY_LETTERS_PATTERN = re.compile(
    r"[A-Za-zÀ-ÖØ-öø-ÿĀ-ſ\s]*"
)


# =============================================================================
# Rules
# =============================================================================


def email(value: str, ctx: RuleContext | None = None) -> bool:
    """Value looks like an email address."""
    return EMAIL_PATTERN.fullmatch(value) is not None


def only_letters(value: str, ctx: RuleContext | None = None) -> bool:
    """Value holds letters and whitespace only. Empty values pass."""
    return ONLY_LETTERS_PATTERN.fullmatch(value) is not None


def equals_to(value: str, ctx: RuleContext | None = None) -> bool:
    """Value equals the value of the field named by ``equals_to``.

    Passes when the field declares no target or no form context is
    available. Fails when the target field is not in the form.
    """
    if ctx is None or not ctx.field.equals_to:
        return True
    if ctx.form is None:
        return True

    target_value = ctx.form.value_of(ctx.field.equals_to)
    if target_value is None:
        return False
    return value == target_value


def file_type(value: str, ctx: RuleContext | None = None) -> bool:
    """First uploaded file's MIME type contains one of the accepted types.

    The value argument is ignored. Passes when the field has no accept list
    or no uploaded file.
    """
    if ctx is None or ctx.field.file_info is None:
        return True

    info = ctx.field.file_info
    if not info.accept or not info.mime_types:
        return True

    mime_type = info.mime_types[0]
    accepted = [token.strip() for token in info.accept.split(",")]
    return any(token in mime_type for token in accepted if token)


BUILTIN_RULES = {
    "email": email,
    "onlyLetters": only_letters,
    "equalsTo": equals_to,
    "fileType": file_type,
}


def register_builtin_rules(registry: RuleRegistry) -> None:
    """Register all built-in rules with ``registry``."""
    for name, predicate in BUILTIN_RULES.items():
        registry.register(name, predicate)
