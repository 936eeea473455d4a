from __future__ import annotations

from typing import AsyncIterator

from fastapi import Depends

from ..core.errors import ConfigurationMissing
from ..services.notion import NotionGateway
from ..settings import AppSettings, get_settings


async def get_gateway(settings: AppSettings = Depends(get_settings)) -> AsyncIterator[NotionGateway]:
    """Per-request Notion gateway; fails fast when credentials are absent."""
    missing = settings.missing_notion_settings()
    if missing:
        raise ConfigurationMissing(missing)
    gateway = NotionGateway.from_settings(settings)
    try:
        yield gateway
    finally:
        await gateway.aclose()
