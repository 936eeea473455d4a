from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parent

DEFAULT_CSP = (
    "default-src 'self'; "
    "script-src 'self' https://cdn.jsdelivr.net https://unpkg.com; "
    "style-src 'self' 'unsafe-inline' https:; "
    "img-src * data: blob:; "
    "font-src * data:; "
    "frame-src *; "
    "media-src * data: blob:; "
    "base-uri 'self'; frame-ancestors 'none'; object-src 'none';"
)


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "tkAuto Notion Live Preview"
    TEMPLATES_DIR: Path | None = None
    STATIC_DIR: Path | None = None

    NOTION_TOKEN: str = Field(default="", validation_alias=AliasChoices("NOTION_TOKEN", "NOTION_API_KEY"))
    DATABASE_ID: str = Field(default="", validation_alias=AliasChoices("DATABASE_ID", "NOTION_DATABASE_ID"))
    NOTION_VERSION: str = "2022-06-28"
    NOTION_BASE_URL: str = "https://api.notion.com"

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    CONTENT_SECURITY_POLICY: str = DEFAULT_CSP

    def _resolve_path(self, base: Path | None, fallback: Path) -> Path:
        return base if base is not None else fallback

    @property
    def templates_dir(self) -> Path:
        return self._resolve_path(self.TEMPLATES_DIR, _PACKAGE_DIR / "templates")

    @property
    def static_dir(self) -> Path:
        return self._resolve_path(self.STATIC_DIR, _PACKAGE_DIR / "static")

    def missing_notion_settings(self) -> list[str]:
        """Names of the required Notion settings that are unset or blank."""
        missing = []
        if not self.NOTION_TOKEN.strip():
            missing.append("NOTION_TOKEN")
        if not self.DATABASE_ID.strip():
            missing.append("DATABASE_ID")
        return missing


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()


settings = get_settings()
