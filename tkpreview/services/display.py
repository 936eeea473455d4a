from __future__ import annotations

from ..core.errors import RecordLookupError
from ..schemas.display import DisplayModel
from ..schemas.notion import (
    LIVE_MODAL_PROPERTY,
    LIVE_TILE_PROPERTY,
    PENDING_MODAL_PROPERTY,
    PENDING_TILE_PROPERTY,
    RECORD_LABEL_PROPERTY,
    SHORT_ID_PROPERTY,
    NotionRecord,
)
from .extract import extract_html, extract_text
from .sanitize import sanitize_html
from .timefmt import format_timestamp

DEFAULT_CLIENT_NAME = "Client"
DEFAULT_RECORD_LABEL = "tkid"

_TILE_PLACEHOLDER = '<div style="padding:0.5em;color:#fff;background:#156eff;">No HTML found in <b>{field}</b>.</div>'
_MODAL_PLACEHOLDER = '<div style="padding:0.5em;color:#222;">No HTML found in <b>{field}</b>.</div>'

FALLBACK_LIVE_TILE = _TILE_PLACEHOLDER.format(field=LIVE_TILE_PROPERTY)
FALLBACK_LIVE_MODAL = _MODAL_PLACEHOLDER.format(field=LIVE_MODAL_PROPERTY)
FALLBACK_PENDING_TILE = _TILE_PLACEHOLDER.format(field=PENDING_TILE_PROPERTY)
FALLBACK_PENDING_MODAL = _MODAL_PLACEHOLDER.format(field=PENDING_MODAL_PROPERTY)


def derive_client_name(short_id: str | None) -> str:
    """``"Bloom.1012"`` -> ``"Bloom"``; anything without a dot -> ``"Client"``."""
    if short_id and "." in short_id:
        return short_id.split(".", 1)[0]
    return DEFAULT_CLIENT_NAME


def _html_field(record: NotionRecord, name: str) -> str:
    return sanitize_html(extract_html(record.get_property(name)))


def build_display_model(record: NotionRecord) -> DisplayModel:
    short_id = extract_text(record.get_property(SHORT_ID_PROPERTY))
    return DisplayModel(
        live_tile_html=_html_field(record, LIVE_TILE_PROPERTY) or FALLBACK_LIVE_TILE,
        live_modal_html=_html_field(record, LIVE_MODAL_PROPERTY) or FALLBACK_LIVE_MODAL,
        pending_tile_html=_html_field(record, PENDING_TILE_PROPERTY) or FALLBACK_PENDING_TILE,
        pending_modal_html=_html_field(record, PENDING_MODAL_PROPERTY) or FALLBACK_PENDING_MODAL,
        client_name=derive_client_name(short_id),
        record_label=extract_text(record.get_property(RECORD_LABEL_PROPERTY)) or DEFAULT_RECORD_LABEL,
        last_edited_formatted=format_timestamp(record.last_edited_time),
    )


def build_error_model(error: RecordLookupError) -> DisplayModel:
    """Model for a page with no record: placeholders everywhere plus a banner."""
    return DisplayModel(
        live_tile_html=FALLBACK_LIVE_TILE,
        live_modal_html=FALLBACK_LIVE_MODAL,
        pending_tile_html=FALLBACK_PENDING_TILE,
        pending_modal_html=FALLBACK_PENDING_MODAL,
        error_message=error.banner,
    )
