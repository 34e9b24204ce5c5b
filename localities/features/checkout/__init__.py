from __future__ import annotations

from .identifiers import build_region_code, parse_region_identifier
from .service import CheckoutLocalities

__all__ = ["CheckoutLocalities", "build_region_code", "parse_region_identifier"]
