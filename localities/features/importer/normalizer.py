"""Turn the wilayas/communes XML feed into a validated hierarchy."""

from __future__ import annotations

import logging

from lxml import etree

from ...core.errors import ParseError, StructureError
from ...core.types import Hierarchy, ImportCounts, Region, Subregion

log = logging.getLogger(__name__)

REGIONS_TAG = "wilayas"
REGION_TAG = "wilaya"
REGION_ID = "wilaya_id"
REGION_LATIN = "wilaya_name_latin"
REGION_ARABIC = "wilaya_name_arabic"

SUBREGIONS_TAG = "communes"
SUBREGION_TAG = "commune"
SUBREGION_ID = "commune_id"
SUBREGION_PARENT = "wilaya_id"
SUBREGION_LATIN = "commune_name_latin"
SUBREGION_ARABIC = "commune_name_arabic"


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True, huge_tree=False)


def _text(node: etree._Element, tag: str) -> str:
    child = node.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _int(node: etree._Element, tag: str) -> int:
    raw = _text(node, tag)
    try:
        return int(raw)
    except ValueError:
        return 0


def _section(root: etree._Element, tag: str) -> etree._Element | None:
    section = root.find(tag)
    # an empty section counts as missing
    if section is None or len(section) == 0:
        return None
    return section


def parse(xml: bytes) -> tuple[Hierarchy, ImportCounts]:
    """Parse raw XML bytes into a hierarchy and its counts.

    Raises ``ParseError`` for malformed markup and ``StructureError`` when
    the ``wilayas`` or ``communes`` section is absent. Rows with a
    non-positive id, a non-positive parent id, or no name at all are
    skipped.
    """
    if not xml or not xml.strip():
        raise ParseError(["Document is empty"])
    try:
        root = etree.fromstring(xml, _parser())
    except etree.XMLSyntaxError as e:
        messages = [entry.message.strip() for entry in e.error_log] or [str(e).strip()]
        raise ParseError(messages) from e

    regions_node = _section(root, REGIONS_TAG)
    subregions_node = _section(root, SUBREGIONS_TAG)
    if regions_node is None or subregions_node is None:
        raise StructureError(f"XML must contain <{REGIONS_TAG}> and <{SUBREGIONS_TAG}> sections.")

    hierarchy = Hierarchy()
    skipped = 0

    for node in regions_node.iterfind(REGION_TAG):
        rid = _int(node, REGION_ID)
        latin = _text(node, REGION_LATIN)
        arabic = _text(node, REGION_ARABIC)
        if rid <= 0 or (not latin and not arabic):
            skipped += 1
            continue
        hierarchy.regions[rid] = Region(rid, latin, arabic)

    for node in subregions_node.iterfind(SUBREGION_TAG):
        sid = _int(node, SUBREGION_ID)
        parent = _int(node, SUBREGION_PARENT)
        latin = _text(node, SUBREGION_LATIN)
        arabic = _text(node, SUBREGION_ARABIC)
        if sid <= 0 or parent <= 0 or (not latin and not arabic):
            skipped += 1
            continue
        hierarchy.subregions.setdefault(parent, {})[sid] = Subregion(sid, parent, latin, arabic)

    if skipped:
        log.debug("Skipped %s invalid rows while parsing", skipped)

    return hierarchy, hierarchy.counts()
