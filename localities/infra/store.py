"""Authoritative locality snapshot backed by the database."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.types import Hierarchy, ImportCounts, Region, Subregion
from .db import Database
from .repos import SnapshotRepo

log = logging.getLogger(__name__)

ChangeListener = Callable[[], Awaitable[None]]


class LocalityStore:
    """Holds the current hierarchy and import counts.

    Mutations commit a single-row write and then notify listeners
    (the cache registers its ``invalidate`` here).
    """

    def __init__(self, db: Database) -> None:
        self.db = db
        self._listeners: list[ChangeListener] = []

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    async def _notify(self) -> None:
        for listener in self._listeners:
            await listener()

    async def replace_all(self, hierarchy: Hierarchy, counts: ImportCounts) -> None:
        async with self.db.session() as s:
            version = await SnapshotRepo(s).replace(hierarchy, counts)
            await s.commit()
        log.info(
            "Stored snapshot v%s: %s regions, %s subregions",
            version, counts.regions, counts.subregions,
        )
        await self._notify()

    async def clear(self) -> None:
        async with self.db.session() as s:
            version = await SnapshotRepo(s).clear()
            await s.commit()
        log.info("Cleared locality snapshot (v%s)", version)
        await self._notify()

    async def load(self) -> tuple[Hierarchy, ImportCounts]:
        async with self.db.session() as s:
            return await SnapshotRepo(s).load()

    async def get_regions(self) -> dict[int, Region]:
        hierarchy, _ = await self.load()
        return hierarchy.regions

    async def get_subregions(self) -> dict[int, dict[int, Subregion]]:
        hierarchy, _ = await self.load()
        return hierarchy.subregions

    async def get_subregions_of(self, region_id: int) -> dict[int, Subregion]:
        return (await self.get_subregions()).get(int(region_id), {})

    async def get_counts(self) -> ImportCounts:
        _, counts = await self.load()
        return counts
