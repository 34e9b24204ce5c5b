from __future__ import annotations

from .normalizer import parse
from .orchestrator import ImportResult, LocalityImporter, UploadedFile

__all__ = ["parse", "ImportResult", "LocalityImporter", "UploadedFile"]
