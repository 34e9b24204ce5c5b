"""Import orchestration: pick the XML source, normalize it, store it atomically."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional

from ...core.config import Settings
from ...core.errors import FileError, LocalityError
from ...core.types import ImportCounts
from ...infra.store import LocalityStore
from . import normalizer

log = logging.getLogger(__name__)

BUNDLED_PACKAGE = "localities.data"
BUNDLED_XML_NAME = "algeria-cities.xml"
UTF8_BOM = b"\xef\xbb\xbf"


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content: bytes


@dataclass(frozen=True)
class ImportResult:
    counts: Optional[ImportCounts] = None
    error: Optional[LocalityError] = None
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _looks_like_xml(content: bytes) -> bool:
    head = content[len(UTF8_BOM):] if content.startswith(UTF8_BOM) else content
    head = head.lstrip()
    return head.startswith(b"<")


def _check_upload(upload: UploadedFile) -> bytes:
    if Path(upload.filename).suffix.lower() != ".xml" or not _looks_like_xml(upload.content):
        raise FileError("Uploaded file must be a valid XML file.", key="import.bad_upload")
    return upload.content


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileError(f"XML file not found or not readable: {path}", path=str(path)) from e


class LocalityImporter:
    """Drives the normalizer and the store; never leaves a partial import behind."""

    def __init__(self, store: LocalityStore, settings: Settings, bundled_path: Optional[Path] = None) -> None:
        self.store = store
        self.settings = settings
        self._bundled_path = bundled_path

    def bundled_xml_path(self) -> Optional[Path]:
        if self._bundled_path is not None:
            path = self._bundled_path
        else:
            path = Path(str(resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_XML_NAME)))
        return path if path.is_file() else None

    def resolve_source(self, upload: Optional[UploadedFile] = None) -> tuple[str, bytes]:
        """Return ``(source_label, xml_bytes)`` for the first available source.

        Precedence: explicit upload, then the uploads-dir fallback file,
        then the bundled dataset.
        """
        if upload is not None:
            return f"upload:{upload.filename}", _check_upload(upload)

        fallback = self.settings.fallback_xml_path
        if fallback.is_file():
            try:
                return str(fallback), fallback.read_bytes()
            except OSError as e:
                log.warning("Fallback XML %s is not readable: %s", fallback, e)

        bundled = self.bundled_xml_path()
        if bundled is not None:
            return str(bundled), _read_file(bundled)

        raise FileError(
            "No XML file provided, and neither the uploads fallback nor the bundled XML could be found.",
            key="import.no_source",
            fallback=str(fallback),
        )

    async def _run(self, source: str, xml: bytes) -> ImportResult:
        hierarchy, counts = normalizer.parse(xml)
        await self.store.replace_all(hierarchy, counts)
        log.info("Imported %s wilayas, %s communes from %s", counts.regions, counts.subregions, source)
        return ImportResult(counts=counts, source=source)

    async def import_localities(self, upload: Optional[UploadedFile] = None) -> ImportResult:
        source = None
        try:
            source, xml = self.resolve_source(upload)
            return await self._run(source, xml)
        except LocalityError as e:
            log.warning("Import failed (%s): %s", source or "no source", e)
            return ImportResult(error=e, source=source)

    async def import_file(self, path: str | Path) -> ImportResult:
        path = Path(path)
        try:
            return await self._run(str(path), _read_file(path))
        except LocalityError as e:
            log.warning("Import failed (%s): %s", path, e)
            return ImportResult(error=e, source=str(path))

    async def delete(self) -> None:
        await self.store.clear()

    async def import_status(self) -> ImportCounts:
        return await self.store.get_counts()
