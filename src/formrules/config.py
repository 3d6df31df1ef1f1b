"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from formrules.errors import FormDefinitionError
from formrules.loader import read_yaml
from formrules.messages.resolver import DEFAULT_FALLBACK_MESSAGE


@dataclass
class EngineConfig:
    """Settings for a ValidationEngine.

    Attributes:
        default_locale: Locale used when validate() is called without one
        fallback_message: Terminal message for locales no catalog layer knows
        locales: Built-in catalogs to load; None loads all of them
        message_files: YAML message files merged into the catalog at startup
    """

    default_locale: str = "pt"
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE
    locales: list[str] | None = None
    message_files: list[Path] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_path: Path | None = None) -> EngineConfig:
        """Create config from a YAML/JSON dict.

        Relative ``messageFiles`` entries are resolved against ``base_path``.
        """
        locales = data.get("locales")
        if isinstance(locales, str):
            locales = [locales]

        message_files = []
        for entry in data.get("messageFiles", []):
            path = Path(entry)
            if base_path is not None and not path.is_absolute():
                path = base_path / path
            message_files.append(path)

        return cls(
            default_locale=data.get("defaultLocale", "pt"),
            fallback_message=data.get("fallbackMessage", DEFAULT_FALLBACK_MESSAGE),
            locales=list(locales) if locales is not None else None,
            message_files=message_files,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> EngineConfig:
        """Load config from a YAML file.

        Raises:
            FormDefinitionError: If the file is not a YAML mapping
        """
        path = Path(path)
        data = read_yaml(path)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise FormDefinitionError(f"{path} must contain a mapping")
        return cls.from_dict(data.get("engine", data), base_path=path.parent)
