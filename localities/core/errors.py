from __future__ import annotations

from typing import Any


class LocalityError(Exception):
    """Base class for recoverable locality failures.

    Each error carries an i18n key plus format params so callers can
    render it in the operator's language; ``str(err)`` is the English text.
    """

    key = "errors.generic"

    def __init__(self, message: str, key: str | None = None, **params: Any) -> None:
        super().__init__(message)
        if key is not None:
            self.key = key
        self.params = params


class FileError(LocalityError):
    """Source could not be resolved, read, or has the wrong type."""

    key = "import.missing_file"


class ParseError(LocalityError):
    """Input is not well-formed XML."""

    key = "import.invalid_xml"

    def __init__(self, diagnostics: list[str]) -> None:
        self.diagnostics = list(diagnostics)
        details = "; ".join(self.diagnostics)
        super().__init__(f"Invalid XML structure: {details}", details=details)


class StructureError(LocalityError):
    """Required top-level sections are missing."""

    key = "import.missing_sections"


class NotFoundError(LocalityError):
    key = "checkout.no_subregions"
