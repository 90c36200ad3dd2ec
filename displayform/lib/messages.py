"""YAML-backed message catalog for field labels.

Catalog files map qualified field names to display strings. Nested mappings
are flattened into dotted keys, so both of these define ``user.email``:

    user.email: E-mail address

    user:
      email: E-mail address

Usage:
    catalog = MessageCatalog.load("messages/fr.yaml")
    catalog.get("user.email")              # "E-mail address"
    catalog.get("user.nickname")           # "user.nickname"
    catalog.get("user.nickname", "Nick")   # "Nick"
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from displayform.lib.exceptions import MessageCatalogError

if TYPE_CHECKING:
    from displayform.config import Settings

logger = logging.getLogger(__name__)


def flatten_messages(data: Mapping, prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys. {"a": {"b": "x"}} -> {"a.b": "x"}"""
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_messages(value, full_key))
        else:
            flat[full_key] = "" if value is None else str(value)
    return flat


class MessageCatalog:
    """Lookup table of localized strings keyed by qualified field name."""

    def __init__(self, messages: Mapping[str, str] | None = None, locale: str = "en"):
        self.locale = locale
        self._messages = flatten_messages(messages or {})

    @classmethod
    def load(cls, path: str | Path, locale: str | None = None) -> MessageCatalog:
        """Load a catalog from a YAML file. Locale defaults to the file stem."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise MessageCatalogError(f"Cannot load message catalog {path}: {e}") from e

        if not isinstance(data, Mapping):
            raise MessageCatalogError(
                f"Message catalog {path} must contain a mapping, got {type(data).__name__}"
            )

        return cls(data, locale=locale or path.stem)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> MessageCatalog:
        """Load the catalog for the configured locale, or an empty one if the file is missing."""
        if settings is None:
            from displayform.config import get_settings

            settings = get_settings()

        path = settings.messages_path
        if not path.exists():
            logger.warning("Message catalog %s not found, labels fall back to defaults", path)
            return cls(locale=settings.locale)

        return cls.load(path, locale=settings.locale)

    def get(self, key: str, default: str | None = None) -> str:
        """Return the message for key; the default, or the key itself, when missing."""
        message = self._messages.get(key)
        if message is not None:
            return message
        return default if default is not None else key

    def keys(self) -> list[str]:
        return sorted(self._messages)

    def __contains__(self, key: str) -> bool:
        return key in self._messages

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"MessageCatalog(locale={self.locale!r}, messages={len(self)})"
