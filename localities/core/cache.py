from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, Optional, TYPE_CHECKING

from .types import Region, Subregion

if TYPE_CHECKING:
    from ..infra.store import LocalityStore

REGIONS_KEY = "regions"
SUBREGIONS_KEY = "subregions"
DAY_IN_SECONDS = 86400


class TTLCache:
    """Keyed TTL cache; ``clear()`` bumps a generation so in-flight loads are not stored."""

    def __init__(self, ttl: float = DAY_IN_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self.clock = clock
        self._data: dict[str, tuple[float, Any]] = {}
        self._generation = 0
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            if key in self._data:
                ts, val = self._data[key]
                if self.clock() - ts < self.ttl:
                    return val
                self._data.pop(key, None)
        return None

    async def set(self, key: str, val: Any) -> None:
        async with self._lock:
            self._data[key] = (self.clock(), val)

    async def clear(self) -> None:
        async with self._lock:
            self._data.clear()
            self._generation += 1

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        cached = await self.get(key)
        if cached is not None:
            return cached
        generation = self._generation
        val = await loader()
        async with self._lock:
            # A clear() during the load means val may predate the change.
            if generation == self._generation:
                self._data[key] = (self.clock(), val)
        return val


class LocalityCache:
    """Read-through view over the store with separate regions/subregions entries."""

    def __init__(
        self,
        store: LocalityStore,
        ttl: float = DAY_IN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self._cache = TTLCache(ttl=ttl, clock=clock)
        store.add_listener(self.invalidate)

    async def get_regions(self) -> dict[int, Region]:
        return await self._cache.get_or_load(REGIONS_KEY, self.store.get_regions)

    async def get_subregions(self) -> dict[int, dict[int, Subregion]]:
        return await self._cache.get_or_load(SUBREGIONS_KEY, self.store.get_subregions)

    async def get_subregions_of(self, region_id: int) -> dict[int, Subregion]:
        return (await self.get_subregions()).get(int(region_id), {})

    async def invalidate(self) -> None:
        await self._cache.clear()
