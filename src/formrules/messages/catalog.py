"""Message catalog for formrules.

A catalog maps locale -> rule name -> message. Every built-in locale carries
a ``default`` entry used when a rule has no message of its own.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping

DEFAULT_KEY = "default"

# Placeholder replaced with the limit in minlength/maxlength messages
LIMIT_PLACEHOLDER = "{limit}"


BUILTIN_MESSAGES: dict[str, dict[str, str]] = {
    "pt": {
        "required": "Este campo é obrigatório.",
        "email": "Digite um email válido.",
        "onlyLetters": "Use apenas letras.",
        "equalsTo": "Os campos não coincidem.",
        "fileType": "Tipo de arquivo inválido.",
        "minlength": "Mínimo {limit} caracteres.",
        "maxlength": "Máximo {limit} caracteres.",
        DEFAULT_KEY: "Campo inválido.",
    },
    "en": {
        "required": "This field is required.",
        "email": "Please enter a valid email.",
        "onlyLetters": "Use letters only.",
        "equalsTo": "The fields do not match.",
        "fileType": "Invalid file type.",
        "minlength": "Minimum {limit} characters.",
        "maxlength": "Maximum {limit} characters.",
        DEFAULT_KEY: "Invalid field.",
    },
    "es": {
        "required": "Este campo es obligatorio.",
        "email": "Introduce un email válido.",
        "onlyLetters": "Usa solo letras.",
        "equalsTo": "Los campos no coinciden.",
        "fileType": "Tipo de archivo no válido.",
        "minlength": "Mínimo {limit} caracteres.",
        "maxlength": "Máximo {limit} caracteres.",
        DEFAULT_KEY: "Campo no válido.",
    },
}


class MessageCatalog:
    """Locale -> rule -> message mapping owned by one ValidationEngine.

    Example:
        catalog = MessageCatalog.builtin()
        catalog.merge("phoneBR", {"pt": "Telefone inválido.", "en": "Invalid phone."})
        catalog.get("en", "phoneBR")  # "Invalid phone."
    """

    def __init__(self, messages: Mapping[str, Mapping[str, str]] | None = None):
        self._messages: dict[str, dict[str, str]] = {}
        for locale, entries in (messages or {}).items():
            self.update_locale(locale, entries)

    @classmethod
    def builtin(cls, locales: Iterable[str] | None = None) -> MessageCatalog:
        """Create a catalog holding a copy of the built-in messages.

        Args:
            locales: Restrict to these built-in locales; None loads all of them
        """
        wanted = set(locales) if locales is not None else None
        return cls({
            locale: entries
            for locale, entries in BUILTIN_MESSAGES.items()
            if wanted is None or locale in wanted
        })

    def get(self, locale: str, rule: str) -> str | None:
        """Get the message for ``rule`` in ``locale``, or None."""
        return self._messages.get(locale, {}).get(rule)

    def locale_default(self, locale: str) -> str | None:
        """Get the ``default`` message of ``locale``, or None."""
        return self.get(locale, DEFAULT_KEY)

    def set_message(self, locale: str, rule: str, message: str) -> None:
        """Set one message, leaving every other entry untouched."""
        self._messages.setdefault(locale, {})[rule] = message

    def merge(self, rule: str, messages: Mapping[str, str]) -> None:
        """Merge ``{locale: message}`` pairs for one rule."""
        for locale, message in messages.items():
            self.set_message(locale, rule, message)

    def update_locale(self, locale: str, messages: Mapping[str, str]) -> None:
        """Merge ``{rule: message}`` pairs into one locale."""
        for rule, message in messages.items():
            self.set_message(locale, rule, message)

    def has_locale(self, locale: str) -> bool:
        return locale in self._messages

    def locales(self) -> list[str]:
        return sorted(self._messages)

    def copy(self) -> MessageCatalog:
        return MessageCatalog(self._messages)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return copy.deepcopy(self._messages)
