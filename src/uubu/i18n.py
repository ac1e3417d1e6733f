#!/usr/bin/env python3
"""
uubu Message Catalogs

Loads the bundled per-language JSON catalogs and resolves message
identifiers to display text. A catalog is loaded once at startup and
passed to whoever renders text; there is no module-level message state.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional

from .exceptions import CatalogError

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"
DEFAULT_LANGUAGE = "en"
LANGUAGE_OVERRIDE_VAR = "UUBU_LANG"
LOCALE_VARS = ("LANG", "LANGUAGE", "LC_ALL", "LC_MESSAGES")


@dataclass(frozen=True)
class MessageCatalog:
    """Immutable lookup table of display messages for one language."""

    language: str
    messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mapping so a catalog can be shared freely.
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    def get(self, key: str, *args) -> str:
        """
        Resolve a message identifier.

        Literal \\n and \\t sequences are expanded, then %-style
        placeholders are filled from args. Unknown keys render as a
        visible placeholder instead of failing.
        """
        template = self.messages.get(key)
        if template is None:
            return f"[MISSING: {key}]"

        template = template.replace("\\n", "\n").replace("\\t", "\t")
        if not args:
            return template

        try:
            return template % args
        except (TypeError, ValueError) as e:
            logger.warning(f"Cannot format message '{key}' ({self.language}): {e}")
            return template

    def has(self, key: str) -> bool:
        return key in self.messages

    def yes_answers(self) -> List[str]:
        """Affirmative replies accepted at interactive prompts."""
        raw = self.messages.get("yes_answers", "")
        return [token.strip().lower() for token in raw.split(",") if token.strip()]


def available_languages(locales_dir: Path = LOCALES_DIR) -> List[str]:
    """List language codes with a bundled catalog."""
    if not locales_dir.is_dir():
        return []
    return sorted(path.stem for path in locales_dir.glob("*.json"))


def _read_catalog(language: str, locales_dir: Path) -> MessageCatalog:
    path = locales_dir / f"{language}.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(language, "file not found", cause=e) from e
    except ValueError as e:
        raise CatalogError(language, "invalid JSON", cause=e) from e

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise CatalogError(language, "expected an object of strings")

    return MessageCatalog(language=language, messages=data)


def load_catalog(language: str, locales_dir: Path = LOCALES_DIR) -> MessageCatalog:
    """
    Load the catalog for a language.

    Falls back to the default language when the requested catalog is
    missing or unparsable.

    Raises:
        CatalogError: If even the default catalog cannot be loaded.
    """
    try:
        return _read_catalog(language, locales_dir)
    except CatalogError as e:
        if language == DEFAULT_LANGUAGE:
            raise
        logger.warning(f"{e.message}; falling back to '{DEFAULT_LANGUAGE}'")

    return _read_catalog(DEFAULT_LANGUAGE, locales_dir)


def detect_language(
    environ: Optional[Mapping[str, str]] = None,
    locales_dir: Path = LOCALES_DIR,
) -> str:
    """
    Pick the display language from the environment.

    UUBU_LANG wins outright. Otherwise the first locale variable whose
    two-letter prefix has a bundled catalog is used. Defaults to English.
    """
    if environ is None:
        environ = os.environ

    override = environ.get(LANGUAGE_OVERRIDE_VAR, "").strip()
    if override:
        return override.lower()

    available = set(available_languages(locales_dir))
    for var in LOCALE_VARS:
        value = environ.get(var, "")
        if len(value) >= 2:
            code = value[:2].lower()
            if code in available:
                return code

    return DEFAULT_LANGUAGE
