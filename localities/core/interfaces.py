"""Seams used by integrations (checkout, shipping, admin) to reach the core."""

from __future__ import annotations

from typing import Optional, Protocol, TYPE_CHECKING

from .types import ImportCounts, Region, Subregion

if TYPE_CHECKING:
    from ..features.importer.orchestrator import ImportResult, UploadedFile


class LocalityReader(Protocol):
    async def get_regions(self) -> dict[int, Region]: ...

    async def get_subregions(self) -> dict[int, dict[int, Subregion]]: ...

    async def get_subregions_of(self, region_id: int) -> dict[int, Subregion]: ...


class LocalityWriter(Protocol):
    async def import_localities(self, upload: Optional[UploadedFile] = None) -> ImportResult: ...

    async def delete(self) -> None: ...

    async def import_status(self) -> ImportCounts: ...
