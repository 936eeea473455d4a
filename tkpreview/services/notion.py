from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from ..core.errors import UpstreamFailure
from ..settings import AppSettings

logger = logging.getLogger(__name__)


class NotionGateway:
    """Read-only access to one Notion database.

    Built per request from settings (or handed a pre-built SDK client in
    tests) so nothing global is shared between requests.
    """

    def __init__(self, client: AsyncClient, database_id: str) -> None:
        self.client = client
        self.database_id = database_id

    @classmethod
    def from_settings(
        cls, settings: AppSettings, http_client: Optional[httpx.AsyncClient] = None
    ) -> "NotionGateway":
        client = AsyncClient(
            auth=settings.NOTION_TOKEN,
            notion_version=settings.NOTION_VERSION,
            base_url=settings.NOTION_BASE_URL,
            client=http_client,
            # One outbound call per page view; a 429 surfaces as a banner.
            retry=False,
        )
        return cls(client, settings.DATABASE_ID)

    async def query(
        self,
        *,
        filter: Optional[Dict[str, Any]] = None,
        sorts: Optional[List[Dict[str, Any]]] = None,
        page_size: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Run a database query and return the raw ``results`` list."""

        body: Dict[str, Any] = {}
        if filter is not None:
            body["filter"] = filter
        if sorts is not None:
            body["sorts"] = sorts
        if page_size is not None:
            body["page_size"] = page_size
        try:
            response = await self.client.request(
                path=f"databases/{self.database_id}/query",
                method="POST",
                body=body,
            )
        except (HTTPResponseError, RequestTimeoutError, httpx.HTTPError, ValueError) as exc:
            logger.warning("Notion query failed for database %s", self.database_id, exc_info=True)
            raise UpstreamFailure(str(exc) or exc.__class__.__name__) from exc
        return list(response.get("results") or [])

    async def aclose(self) -> None:
        await self.client.aclose()
