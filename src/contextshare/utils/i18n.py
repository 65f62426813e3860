from __future__ import annotations

"""
Internationalization (i18n) Utility.

Singleton lookup of UI strings from nested JSON locale files using
dot-notation keys, with optional ``str.format`` interpolation.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")


class I18n:
    """
    Resource manager for locale-specific strings.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load the translation dictionary for ``locale``.

        A missing or corrupt file leaves the manager empty, in which case
        :meth:`t` returns defaults or the keys themselves.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Fallback active.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False
            return

        self._locale = locale
        self.is_loaded = True
        logger.debug(f"I18n: Loaded locale dictionary: {locale}")

    def t(self, key: str, default: Optional[str] = None, **kwargs: Any) -> str:
        """
        Resolve ``key`` (e.g. "gui.buttons.compile") and format it.

        Args:
            key: Dot-separated path in the locale dictionary.
            default: Text used when the key is missing.
            **kwargs: Interpolation variables.

        Returns:
            str: The translated string, ``default``, or the key itself.
        """
        current: Any = self._translations
        for part in key.split("."):
            if not isinstance(current, dict):
                current = None
                break
            current = current.get(part)

        text = current if isinstance(current, str) else default
        if text is None:
            return key

        if not kwargs:
            return text
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Formatting error for '{key}': {e}")
            return text


i18n = I18n(DEFAULT_LOCALE)
