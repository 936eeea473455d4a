"""Jinja2 environment for the preview page.

Autoescaping is on for ``.html`` templates, so labels and banner text are
escaped by default. Authored HTML only reaches the page through the
``tojson`` filter inside a JSON data block.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi.templating import Jinja2Templates

from ..settings import settings


def _footer_label(model: Any, kind: str) -> str:
    """``{client}_{kind}_{label}_{stamp}``; doubles as the export filename."""

    return f"{model.client_name}_{kind}_{model.record_label}_{model.last_edited_formatted}"


@lru_cache(maxsize=1)
def get_templates() -> Jinja2Templates:
    """Create a ``Jinja2Templates`` instance with our filters registered."""

    templates = Jinja2Templates(directory=str(settings.templates_dir))
    templates.env.filters["footer_label"] = _footer_label
    return templates
