import pytest

from localities.core.errors import ParseError, StructureError
from localities.core.types import ImportCounts, Region, Subregion
from localities.features.importer import parse

from conftest import SAMPLE_XML


def _xml(wilayas: str, communes: str) -> bytes:
    return (
        "<algeria>"
        f"<wilayas>{wilayas}</wilayas>"
        f"<communes>{communes}</communes>"
        "</algeria>"
    ).encode("utf-8")


def _wilaya(wid, latin="", arabic="") -> str:
    return (
        f"<wilaya><wilaya_id>{wid}</wilaya_id>"
        f"<wilaya_name_latin>{latin}</wilaya_name_latin>"
        f"<wilaya_name_arabic>{arabic}</wilaya_name_arabic></wilaya>"
    )


def _commune(cid, wid, latin="", arabic="") -> str:
    return (
        f"<commune><commune_id>{cid}</commune_id><wilaya_id>{wid}</wilaya_id>"
        f"<commune_name_latin>{latin}</commune_name_latin>"
        f"<commune_name_arabic>{arabic}</commune_name_arabic></commune>"
    )


def test_parse_sample():
    hierarchy, counts = parse(SAMPLE_XML)

    assert counts == ImportCounts(regions=3, subregions=4)
    assert hierarchy.regions[16] == Region(16, "Alger", "الجزائر")
    assert list(hierarchy.subregions[7]) == [701, 702]
    assert hierarchy.subregions[7][702] == Subregion(702, 7, "Tolga", "طولقة")


def test_parse_is_deterministic():
    assert parse(SAMPLE_XML) == parse(SAMPLE_XML)


@pytest.mark.parametrize("wid", ["0", "-3", "abc", ""])
def test_region_rows_with_non_positive_id_are_skipped(wid):
    hierarchy, counts = parse(_xml(_wilaya(wid, "Ghost", "شبح") + _wilaya(5, "Batna", "باتنة"), _commune(501, 5, "Batna")))

    assert list(hierarchy.regions) == [5]
    assert counts.regions == 1


def test_rows_without_any_name_are_skipped():
    xml = _xml(
        _wilaya(1, "  ", "") + _wilaya(2, "Chlef", ""),
        _commune(101, 1, "", " ") + _commune(201, 2, "", "الشلف"),
    )
    hierarchy, counts = parse(xml)

    assert list(hierarchy.regions) == [2]
    assert hierarchy.subregions == {2: {201: Subregion(201, 2, "", "الشلف")}}
    assert counts == ImportCounts(1, 1)


@pytest.mark.parametrize("cid,wid", [(0, 1), (-1, 1), (101, 0), (101, -4), ("x", 1)])
def test_subregion_rows_with_bad_ids_are_skipped(cid, wid):
    hierarchy, counts = parse(_xml(_wilaya(1, "Adrar"), _commune(cid, wid, "Somewhere")))

    assert hierarchy.subregions == {}
    assert counts.subregions == 0


def test_dangling_parent_is_kept():
    hierarchy, counts = parse(_xml(_wilaya(1, "Adrar"), _commune(9901, 99, "Nowhere")))

    assert 99 not in hierarchy.regions
    assert hierarchy.subregions[99][9901].name_latin == "Nowhere"
    assert counts == ImportCounts(1, 1)


def test_subregion_ids_only_unique_within_parent():
    hierarchy, counts = parse(_xml(_wilaya(1, "A") + _wilaya(2, "B"), _commune(1, 1, "X") + _commune(1, 2, "Y")))

    assert hierarchy.subregions[1][1].name_latin == "X"
    assert hierarchy.subregions[2][1].name_latin == "Y"
    assert counts.subregions == 2


def test_duplicate_region_id_keeps_last_row():
    hierarchy, _ = parse(_xml(_wilaya(3, "Old") + _wilaya(3, "Laghouat"), _commune(301, 3, "Laghouat")))

    assert hierarchy.regions[3].name_latin == "Laghouat"


def test_names_are_trimmed():
    hierarchy, _ = parse(_xml(_wilaya(" 9 ", "  Blida ", " البليدة "), _commune(901, 9, "Blida")))

    assert hierarchy.regions[9] == Region(9, "Blida", "البليدة")


def test_malformed_markup_raises_parse_error():
    with pytest.raises(ParseError) as exc:
        parse(b"<algeria><wilayas><wilaya></wilayas>")

    assert exc.value.diagnostics
    assert all(isinstance(m, str) and m for m in exc.value.diagnostics)
    assert exc.value.key == "import.invalid_xml"


def test_empty_input_raises_parse_error():
    with pytest.raises(ParseError):
        parse(b"   ")


@pytest.mark.parametrize(
    "xml",
    [
        b"<algeria><communes><commune/></communes></algeria>",
        b"<algeria><wilayas><wilaya/></wilayas></algeria>",
        b"<algeria><wilayas/><communes><commune/></communes></algeria>",
        b"<other/>",
    ],
)
def test_missing_sections_raise_structure_error(xml):
    with pytest.raises(StructureError):
        parse(xml)


def test_external_entities_are_not_resolved(tmp_path):
    secret = tmp_path / "secret.txt"
    secret.write_text("leaked")
    xml = (
        f'<?xml version="1.0"?><!DOCTYPE a [<!ENTITY x SYSTEM "file://{secret}">]>'
        "<algeria><wilayas><wilaya><wilaya_id>1</wilaya_id>"
        "<wilaya_name_latin>&x;</wilaya_name_latin><wilaya_name_arabic>أدرار</wilaya_name_arabic></wilaya></wilayas>"
        "<communes><commune><commune_id>1</commune_id><wilaya_id>1</wilaya_id>"
        "<commune_name_latin>A</commune_name_latin></commune></communes></algeria>"
    ).encode("utf-8")

    hierarchy, _ = parse(xml)

    assert "leaked" not in hierarchy.regions[1].name_latin
