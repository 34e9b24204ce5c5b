"""Persisted label-language settings."""

from __future__ import annotations

import logging

from ..core.cache import LocalityCache
from ..core.config import Settings
from ..core.labels import LabelConfig
from ..infra.db import Database
from ..infra.settings_repo import SettingsRepo

log = logging.getLogger(__name__)

SETTINGS_KEY = "labels"


class LanguageSettings:
    def __init__(self, db: Database, cache: LocalityCache, settings: Settings) -> None:
        self.db = db
        self.cache = cache
        self.defaults = LabelConfig(settings.DEFAULT_LANGUAGE, settings.ENABLE_ARABIC)  # type: ignore[arg-type]

    async def get_config(self) -> LabelConfig:
        async with self.db.session() as s:
            stored = await SettingsRepo(s).get(SETTINGS_KEY)
        return LabelConfig.from_dict(stored, fallback=self.defaults)

    async def save(self, default_language: str, bilingual: bool) -> LabelConfig:
        config = LabelConfig.from_dict(
            {"default_language": default_language, "bilingual": bilingual},
            fallback=self.defaults,
        )
        async with self.db.session() as s:
            await SettingsRepo(s).set(SETTINGS_KEY, config.to_dict())
            await s.commit()
        log.info("Label settings saved: %s", config)
        # Cached entries hold raw name pairs and labels are resolved per query,
        # so this invalidation does not change what readers see. Kept so a
        # future label cache is dropped on language changes.
        await self.cache.invalidate()
        return config
