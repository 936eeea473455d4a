from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from ..core.errors import RecordLookupError, UpstreamFailure
from ..deps.notion import get_gateway
from ..services.display import build_display_model, build_error_model
from ..services.notion import NotionGateway
from ..services.render import render_preview
from ..services.resolver import resolve_record

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def preview_page(
    record_id: str | None = Query(default=None, alias="id"),
    gateway: NotionGateway = Depends(get_gateway),
):
    try:
        record = await resolve_record(gateway, record_id)
    except RecordLookupError as exc:
        # Lookup problems are part of the page, not an HTTP error.
        level = logging.ERROR if isinstance(exc, UpstreamFailure) else logging.INFO
        logger.log(level, "preview.unresolved", extra={"extra_data": {"record_id": record_id, "reason": str(exc)}})
        model = build_error_model(exc)
    else:
        model = build_display_model(record)
    return HTMLResponse(render_preview(model))
