from __future__ import annotations

from datetime import datetime
from typing import Any


def parse_iso(ts: str) -> datetime | None:
    """Parse an ISO-8601 timestamp as Notion emits it (``...T09:07:00.000Z``).

    Returns None for falsy or unparseable input. No timezone is attached or
    converted; the wall-clock fields of the string are kept as written.
    """
    if not ts:
        return None
    try:
        return datetime.fromisoformat(ts.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def format_timestamp(value: Any) -> str:
    """Format as ``MM.DD.YY_HH:MM`` (24h) for footers and export filenames."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = parse_iso(value)
    else:
        dt = None
    if dt is None:
        return ""
    return dt.strftime("%m.%d.%y_%H:%M")
