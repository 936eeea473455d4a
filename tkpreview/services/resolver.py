from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..core.errors import CollectionEmpty, RecordNotFound
from ..schemas.notion import SHORT_ID_PROPERTY, NotionRecord

logger = logging.getLogger(__name__)

LAST_EDITED_SORT = [{"timestamp": "last_edited_time", "direction": "descending"}]


class RecordSource(Protocol):
    async def query(self, *, filter=None, sorts=None, page_size=None) -> list[dict]: ...


def short_id_filter(record_id: str) -> dict:
    """Exact, case-sensitive match on the short-id formula (e.g. ``Bloom.1012``)."""
    return {"property": SHORT_ID_PROPERTY, "formula": {"string": {"equals": record_id}}}


async def resolve_record(source: RecordSource, record_id: Optional[str] = None) -> NotionRecord:
    """Fetch the record to preview.

    With ``record_id`` the first page whose short id equals it is used, in
    the order Notion returns matches. Without one, the most recently edited
    page in the database is used.
    """

    if record_id:
        logger.info("Looking up record", extra={"extra_data": {"record_id": record_id}})
        results = await source.query(filter=short_id_filter(record_id))
        if not results:
            raise RecordNotFound(record_id)
        if len(results) > 1:
            logger.warning(
                "Short id matched several records; using the first",
                extra={"extra_data": {"record_id": record_id, "matches": len(results)}},
            )
    else:
        results = await source.query(sorts=LAST_EDITED_SORT, page_size=1)
        if not results:
            raise CollectionEmpty()
    return NotionRecord.from_page(results[0])
