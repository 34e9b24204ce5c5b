from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file explicitly
ENV_FILE_NAME = ".env"
env_path = Path(__file__).parent.parent.parent / ENV_FILE_NAME
load_dotenv(env_path, override=False)

LANGUAGES = ("latin", "arabic")


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/localities.db"
    CACHE_TTL_SECONDS: int = 86400
    UPLOADS_DIR: Path = Path("uploads")
    FALLBACK_XML_NAME: str = "algeria-cities.xml"
    COUNTRY_CODE: str = "DZ"
    DEFAULT_LANGUAGE: str = "latin"  # label language: latin | arabic
    ENABLE_ARABIC: bool = False  # bilingual labels
    DEFAULT_LANG: str = "en"  # UI message language

    @field_validator("DEFAULT_LANGUAGE", mode="before")
    @classmethod
    def parse_default_language(cls, v):  # type: ignore
        v = str(v or "").strip().lower()
        return v if v in LANGUAGES else "latin"

    @field_validator("CACHE_TTL_SECONDS")
    @classmethod
    def check_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("CACHE_TTL_SECONDS must not be negative")
        return v

    @property
    def fallback_xml_path(self) -> Path:
        return self.UPLOADS_DIR / self.FALLBACK_XML_NAME

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, with explicit overrides winning."""
    # The data directory must exist for the default SQLite path
    settings = Settings(**overrides)
    if settings.DATABASE_URL.startswith("sqlite") and "./data/" in settings.DATABASE_URL:
        Path("data").mkdir(exist_ok=True)
    return settings
