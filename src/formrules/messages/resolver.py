"""Message resolution for formrules.

Turns (locale, field name, rule name) into a displayable string by walking a
fallback chain; the first layer holding a message wins:
1. Per-field overrides: overrides[locale][field][rule]
2. Caller defaults: caller_defaults[locale][rule]
3. Catalog: catalog[locale][rule]
4. Catalog locale default: catalog[locale]["default"]
5. Terminal literal (synthesized for minlength/maxlength)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from formrules.messages.catalog import LIMIT_PLACEHOLDER, MessageCatalog

logger = logging.getLogger(__name__)

# field -> rule -> message, per locale
Overrides = Mapping[str, Mapping[str, Mapping[str, str]]]
# rule -> message, per locale
CallerDefaults = Mapping[str, Mapping[str, str]]

DEFAULT_FALLBACK_MESSAGE = "Invalid field."

_PLACEHOLDER_GAP = re.compile(r"\s*" + re.escape(LIMIT_PLACEHOLDER))

# Terminal messages for rules whose message carries the limit
SYNTHESIZED_MESSAGES = {
    "minlength": "Minimum {limit} characters.",
    "maxlength": "Maximum {limit} characters.",
}


class MessageResolver:
    """Resolves messages against a catalog plus caller-supplied layers.

    Never raises and never returns an empty string, whatever the locale,
    field or rule.
    """

    def __init__(
        self,
        catalog: MessageCatalog,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ):
        """Initialize the resolver.

        Args:
            catalog: Catalog consulted after the caller-supplied layers
            fallback_message: Terminal message for locales no layer knows
        """
        self.catalog = catalog
        self.fallback_message = fallback_message or DEFAULT_FALLBACK_MESSAGE

    def resolve(
        self,
        locale: str,
        field_name: str,
        rule_name: str,
        overrides: Overrides | None = None,
        caller_defaults: CallerDefaults | None = None,
        limit: int | None = None,
    ) -> str:
        """Resolve the message for a failing rule.

        Args:
            locale: Target locale (e.g. "pt", "en")
            field_name: Name of the failing field
            rule_name: Message key of the failing check
            overrides: Per-field, per-locale messages
            caller_defaults: Per-locale messages that apply to every field
            limit: Length limit substituted into minlength/maxlength messages

        Returns:
            The resolved message
        """
        message = self._lookup(locale, field_name, rule_name, overrides, caller_defaults)
        if message is None:
            logger.debug(
                "No message for rule %r in locale %r; using terminal fallback",
                rule_name, locale,
            )
            if limit is not None and rule_name in SYNTHESIZED_MESSAGES:
                message = SYNTHESIZED_MESSAGES[rule_name]
            else:
                message = self.fallback_message

        if limit is not None:
            return message.replace(LIMIT_PLACEHOLDER, str(limit))
        # Without a limit the placeholder is dropped
        return _PLACEHOLDER_GAP.sub("", message) or self.fallback_message

    def _lookup(
        self,
        locale: str,
        field_name: str,
        rule_name: str,
        overrides: Overrides | None,
        caller_defaults: CallerDefaults | None,
    ) -> str | None:
        if overrides:
            message = overrides.get(locale, {}).get(field_name, {}).get(rule_name)
            if message:
                return message

        if caller_defaults:
            message = caller_defaults.get(locale, {}).get(rule_name)
            if message:
                return message

        message = self.catalog.get(locale, rule_name)
        if message:
            return message

        return self.catalog.locale_default(locale) or None
