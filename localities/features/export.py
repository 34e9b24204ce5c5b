"""JSON export of the stored localities and a short debug listing."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..core.i18n import t
from ..core.interfaces import LocalityReader, LocalityWriter
from ..core.types import Region, Subregion

log = logging.getLogger(__name__)

EXPORT_FILENAME = "algeria-localities.json"


async def build_export(reader: LocalityReader, writer: LocalityWriter) -> dict:
    regions = await reader.get_regions()
    subregions = await reader.get_subregions()
    counts = await writer.import_status()
    return {
        "regions": {str(rid): r.to_dict() for rid, r in regions.items()},
        "subregions": {
            str(parent): {str(sid): s.to_dict() for sid, s in group.items()}
            for parent, group in subregions.items()
        },
        "counts": counts.to_dict(),
    }


async def export_json(reader: LocalityReader, writer: LocalityWriter) -> str:
    """Pretty-printed JSON with Arabic names left unescaped."""
    return json.dumps(await build_export(reader, writer), indent=4, ensure_ascii=False)


async def write_export(reader: LocalityReader, writer: LocalityWriter, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / EXPORT_FILENAME
    path.write_text(await export_json(reader, writer), encoding="utf-8")
    log.info("Export written to %s", path)
    return path


def debug_sample(
    regions: dict[int, Region],
    subregions: dict[int, dict[int, Subregion]],
    limit: int = 5,
    lang: str = "en",
) -> str:
    """First ``limit`` regions, then the first ``limit`` communes of the first ``limit`` groups."""
    lines = [t(lang, "sample.regions", limit=limit)]
    for rid, r in list(regions.items())[:limit]:
        lines.append(f"  #{rid}: {r.name_latin} / {r.name_arabic}")

    lines.append("")
    lines.append(t(lang, "sample.subregions", limit=limit))
    for parent, group in list(subregions.items())[:limit]:
        lines.append(t(lang, "sample.group", id=parent))
        for sid, s in list(group.items())[:limit]:
            lines.append(f"    - #{sid}: {s.name_latin} / {s.name_arabic}")

    return "\n".join(lines)
