"""Display labels for bilingual (Latin/Arabic) locality names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Language = Literal["latin", "arabic"]


def resolve_label(latin: str, arabic: str, default_language: Language = "latin", bilingual: bool = False) -> str:
    """Build the user-facing label for a name pair.

    The default language picks the base name; an empty base falls back to
    the other script. With ``bilingual`` set and two distinct names, both
    are shown as ``"primary (secondary)"``, primary being the default
    language.

    >>> resolve_label("Alger", "الجزائر", "arabic", True)
    'الجزائر (Alger)'
    """
    latin = (latin or "").strip()
    arabic = (arabic or "").strip()

    base = arabic if default_language == "arabic" and arabic else latin
    if not base:
        base = latin if default_language == "arabic" else arabic

    if bilingual and latin and arabic and latin != arabic:
        if default_language == "arabic":
            return f"{arabic} ({latin})"
        return f"{latin} ({arabic})"

    return base


@dataclass(frozen=True)
class LabelConfig:
    default_language: Language = "latin"
    bilingual: bool = False

    def label(self, latin: str, arabic: str) -> str:
        return resolve_label(latin, arabic, self.default_language, self.bilingual)

    def to_dict(self) -> dict:
        return {"default_language": self.default_language, "bilingual": self.bilingual}

    @staticmethod
    def from_dict(data: dict | None, fallback: LabelConfig | None = None) -> LabelConfig:
        fallback = fallback or LabelConfig()
        if not data:
            return fallback
        lang = data.get("default_language", fallback.default_language)
        if lang not in ("latin", "arabic"):
            lang = fallback.default_language
        return LabelConfig(lang, bool(data.get("bilingual", fallback.bilingual)))
