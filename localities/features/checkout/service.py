from __future__ import annotations

import logging
from typing import Any

from ...core.errors import NotFoundError
from ...core.i18n import t
from ...core.interfaces import LocalityReader
from ...core.labels import LabelConfig
from ...core.types import Subregion
from ..language import LanguageSettings
from .identifiers import build_region_code, parse_region_identifier

log = logging.getLogger(__name__)


class CheckoutLocalities:
    """Read side consumed by the checkout/shipping integration."""

    def __init__(self, reader: LocalityReader, language: LanguageSettings, country_code: str = "DZ") -> None:
        self.reader = reader
        self.language = language
        self.country_code = country_code

    async def region_options(self) -> dict[str, str]:
        """Ordered ``{"DZ-01": label, ...}``; empty when nothing is imported."""
        config = await self.language.get_config()
        regions = await self.reader.get_regions()
        return {
            build_region_code(rid, self.country_code): config.label(r.name_latin, r.name_arabic)
            for rid, r in regions.items()
        }

    async def _subregions_for(self, identifier: str) -> dict[int, Subregion]:
        region_id = parse_region_identifier(identifier)
        if region_id is None:
            raise NotFoundError("Invalid wilaya.", key="checkout.invalid_region", identifier=identifier)
        subregions = await self.reader.get_subregions_of(region_id)
        if not subregions:
            raise NotFoundError("No communes found for selected wilaya.", region_id=region_id)
        return subregions

    @staticmethod
    def _options(subregions: dict[int, Subregion], config: LabelConfig) -> list[dict[str, Any]]:
        return [
            {"id": int(sid), "label": config.label(s.name_latin, s.name_arabic)}
            for sid, s in subregions.items()
        ]

    async def load_subregions(self, identifier: str, lang: str = "en") -> dict[str, Any]:
        """Answer a commune lookup for a wilaya code or bare number."""
        try:
            subregions = await self._subregions_for(identifier)
        except NotFoundError as e:
            log.debug("No communes for %r: %s", identifier, e)
            return {"success": False, "message": t(lang, e.key)}
        config = await self.language.get_config()
        return {"success": True, "options": self._options(subregions, config)}
