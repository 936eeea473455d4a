from __future__ import annotations

from fastapi.templating import Jinja2Templates

from ..core.jinja import get_templates
from ..schemas.display import DisplayModel
from ..settings import settings

PREVIEW_TEMPLATE = "preview.html"


def render_preview(model: DisplayModel, templates: Jinja2Templates | None = None) -> str:
    """Render the full preview document for ``model``. No I/O beyond template loading."""

    templates = templates or get_templates()
    template = templates.get_template(PREVIEW_TEMPLATE)
    return template.render(
        model=model,
        page_title=settings.APP_NAME,
        fragments={
            "liveTile": model.live_tile_html,
            "liveModal": model.live_modal_html,
            "pendingTile": model.pending_tile_html,
            "pendingModal": model.pending_modal_html,
        },
    )
