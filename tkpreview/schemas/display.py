from __future__ import annotations

from pydantic import BaseModel


class DisplayModel(BaseModel):
    """Everything the preview template needs for one render."""

    live_tile_html: str
    live_modal_html: str
    pending_tile_html: str
    pending_modal_html: str
    client_name: str = ""
    record_label: str = ""
    last_edited_formatted: str = ""
    error_message: str = ""
