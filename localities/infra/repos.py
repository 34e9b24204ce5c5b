from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.types import Hierarchy, ImportCounts, Region, Subregion
from .models import CURRENT_SNAPSHOT_ID, LocalitySnapshot


def _dump_hierarchy(hierarchy: Hierarchy) -> tuple[list, list]:
    regions = [
        {"id": r.id, "latin": r.name_latin, "arabic": r.name_arabic}
        for r in hierarchy.regions.values()
    ]
    subregions = [
        {"id": s.id, "region_id": s.region_id, "latin": s.name_latin, "arabic": s.name_arabic}
        for group in hierarchy.subregions.values()
        for s in group.values()
    ]
    return regions, subregions


def _load_hierarchy(row: LocalitySnapshot) -> Hierarchy:
    hierarchy = Hierarchy()
    for item in row.regions or []:
        rid = int(item["id"])
        hierarchy.regions[rid] = Region(rid, item.get("latin", ""), item.get("arabic", ""))
    for item in row.subregions or []:
        sid, parent = int(item["id"]), int(item["region_id"])
        group = hierarchy.subregions.setdefault(parent, {})
        group[sid] = Subregion(sid, parent, item.get("latin", ""), item.get("arabic", ""))
    return hierarchy


class SnapshotRepo:
    def __init__(self, session: AsyncSession) -> None:
        self.s = session

    async def get(self) -> Optional[LocalitySnapshot]:
        return await self.s.get(LocalitySnapshot, CURRENT_SNAPSHOT_ID)

    async def load(self) -> tuple[Hierarchy, ImportCounts]:
        row = await self.get()
        if row is None:
            return Hierarchy(), ImportCounts()
        return _load_hierarchy(row), ImportCounts.from_dict(row.counts)

    async def replace(self, hierarchy: Hierarchy, counts: ImportCounts) -> int:
        """Overwrite all blobs of the current row and bump its version."""
        regions, subregions = _dump_hierarchy(hierarchy)
        row = await self.get()
        if row is None:
            row = LocalitySnapshot(id=CURRENT_SNAPSHOT_ID, version=0)
            self.s.add(row)
        row.regions = regions
        row.subregions = subregions
        row.counts = counts.to_dict()
        row.version = (row.version or 0) + 1
        row.updated_at = datetime.utcnow()
        await self.s.flush()
        return row.version

    async def clear(self) -> int:
        return await self.replace(Hierarchy(), ImportCounts())
