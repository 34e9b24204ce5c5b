from __future__ import annotations

import json
import logging
from typing import Any, Dict
from importlib import resources


log = logging.getLogger(__name__)

SUPPORTED = ("en", "ar")


class I18N:
    _messages: Dict[str, Dict[str, str]] = {}

    @classmethod
    def load_locales(cls) -> None:
        # Load packaged locale files
        for lang in SUPPORTED:
            try:
                text = resources.files("localities.locales").joinpath(f"{lang}.json").read_text(encoding="utf-8")
                cls._messages[lang] = json.loads(text)
            except (OSError, ValueError) as e:  # pragma: no cover
                log.warning("Failed to load locale %s: %s", lang, e)

    @classmethod
    def pick_lang(cls, requested: str | None, fallback: str = "en") -> str:
        if not cls._messages:
            cls.load_locales()
        if requested:
            code = requested.split("-")[0].split("_")[0].lower()
            if code in cls._messages:
                return code
        return fallback if fallback in cls._messages else "en"


def t(lang: str, key: str, **kwargs: Any) -> str:
    if not I18N._messages:
        I18N.load_locales()
    msg = I18N._messages.get(lang, {}).get(key)
    if msg is None:
        # fallback to English
        msg = I18N._messages.get("en", {}).get(key, key)
    try:
        return msg.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return msg
