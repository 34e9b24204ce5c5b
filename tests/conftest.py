from pathlib import Path

import pytest
import pytest_asyncio

from localities.core.config import Settings
from localities.core.types import Region, Subregion
from localities.main import make_app

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<algeria>
  <wilayas>
    <wilaya><wilaya_id>1</wilaya_id><wilaya_name_latin>Adrar</wilaya_name_latin><wilaya_name_arabic>أدرار</wilaya_name_arabic></wilaya>
    <wilaya><wilaya_id>7</wilaya_id><wilaya_name_latin>Biskra</wilaya_name_latin><wilaya_name_arabic>بسكرة</wilaya_name_arabic></wilaya>
    <wilaya><wilaya_id>16</wilaya_id><wilaya_name_latin>Alger</wilaya_name_latin><wilaya_name_arabic>الجزائر</wilaya_name_arabic></wilaya>
  </wilayas>
  <communes>
    <commune><commune_id>101</commune_id><wilaya_id>1</wilaya_id><commune_name_latin>Adrar</commune_name_latin><commune_name_arabic>أدرار</commune_name_arabic></commune>
    <commune><commune_id>701</commune_id><wilaya_id>7</wilaya_id><commune_name_latin>Biskra</commune_name_latin><commune_name_arabic>بسكرة</commune_name_arabic></commune>
    <commune><commune_id>702</commune_id><wilaya_id>7</wilaya_id><commune_name_latin>Tolga</commune_name_latin><commune_name_arabic>طولقة</commune_name_arabic></commune>
    <commune><commune_id>1601</commune_id><wilaya_id>16</wilaya_id><commune_name_latin>Alger Centre</commune_name_latin><commune_name_arabic>الجزائر الوسطى</commune_name_arabic></commune>
  </communes>
</algeria>
""".encode("utf-8")

OTHER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<algeria>
  <wilayas>
    <wilaya><wilaya_id>31</wilaya_id><wilaya_name_latin>Oran</wilaya_name_latin><wilaya_name_arabic>وهران</wilaya_name_arabic></wilaya>
  </wilayas>
  <communes>
    <commune><commune_id>3101</commune_id><wilaya_id>31</wilaya_id><commune_name_latin>Oran</commune_name_latin><commune_name_arabic>وهران</commune_name_arabic></commune>
  </communes>
</algeria>
""".encode("utf-8")


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeStore:
    """In-memory stand-in counting how often the cache reaches the store."""

    def __init__(self) -> None:
        self.regions = {16: Region(16, "Alger", "الجزائر")}
        self.subregions = {16: {1601: Subregion(1601, 16, "Alger Centre", "الجزائر الوسطى")}}
        self.loads = 0
        self.listeners = []

    def add_listener(self, listener) -> None:
        self.listeners.append(listener)

    async def get_regions(self):
        self.loads += 1
        return dict(self.regions)

    async def get_subregions(self):
        self.loads += 1
        return {k: dict(v) for k, v in self.subregions.items()}

    async def clear(self) -> None:
        self.regions, self.subregions = {}, {}
        for listener in self.listeners:
            await listener()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'localities.db'}",
        UPLOADS_DIR=tmp_path / "uploads",
        DEFAULT_LANGUAGE="latin",
        ENABLE_ARABIC=False,
    )


@pytest.fixture
def missing_bundle(tmp_path: Path) -> Path:
    return tmp_path / "no-bundle" / "algeria-cities.xml"


@pytest_asyncio.fixture
async def app(settings, missing_bundle):
    application = await make_app(settings, bundled_path=missing_bundle)
    try:
        yield application
    finally:
        await application.close()


@pytest_asyncio.fixture
async def loaded_app(app):
    app.settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    app.settings.fallback_xml_path.write_bytes(SAMPLE_XML)
    result = await app.importer.import_localities()
    assert result.ok
    return app
