from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Region:
    id: int
    name_latin: str
    name_arabic: str

    def to_dict(self) -> dict[str, Any]:
        return {"latin": self.name_latin, "arabic": self.name_arabic}


@dataclass(frozen=True)
class Subregion:
    id: int
    region_id: int
    name_latin: str
    name_arabic: str

    def to_dict(self) -> dict[str, Any]:
        return {"latin": self.name_latin, "arabic": self.name_arabic}


@dataclass(frozen=True)
class ImportCounts:
    regions: int = 0
    subregions: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"regions": self.regions, "subregions": self.subregions}

    @staticmethod
    def from_dict(data: dict | None) -> ImportCounts:
        data = data or {}
        return ImportCounts(int(data.get("regions", 0)), int(data.get("subregions", 0)))


@dataclass
class Hierarchy:
    """Regions plus their subregions grouped by parent region id.

    Subregion groups may reference a region id that is absent from
    ``regions``; such dangling groups are kept as-is.
    """

    regions: dict[int, Region] = field(default_factory=dict)
    subregions: dict[int, dict[int, Subregion]] = field(default_factory=dict)

    def counts(self) -> ImportCounts:
        return ImportCounts(
            regions=len(self.regions),
            subregions=sum(len(group) for group in self.subregions.values()),
        )

    def is_empty(self) -> bool:
        return not self.regions and not self.subregions
