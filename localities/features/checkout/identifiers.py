from __future__ import annotations

import re

# "DZ-07" style codes: two-letter country prefix, dash, number
_PREFIX_RE = re.compile(r"^[A-Za-z]{2}-")


def parse_region_identifier(value: str | int | None) -> int | None:
    """Normalize ``"DZ-07"`` or ``"07"`` to ``7``; ``None`` when invalid."""
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    s = _PREFIX_RE.sub("", s, count=1)
    s = s.lstrip("0")
    if not (s.isascii() and s.isdigit()):
        return None
    number = int(s)
    return number if number > 0 else None


def build_region_code(region_id: int, country: str = "DZ") -> str:
    return f"{country.upper()}-{int(region_id):02d}"
