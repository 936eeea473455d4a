"""Application wiring for the Notion live preview service.

Builds the FastAPI instance, mounts the static assets used by the preview
page, installs middleware and exception handlers, and plugs in the router.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.errors import (
    ConfigurationMissing,
    configuration_missing_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from .middlewares import RequestIdMiddleware, SecurityHeadersMiddleware
from .settings import settings

app = FastAPI(title=settings.APP_NAME)

app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

# Added last runs first: request ids wrap the security headers.
app.add_middleware(SecurityHeadersMiddleware, content_security_policy=settings.CONTENT_SECURITY_POLICY)
app.add_middleware(RequestIdMiddleware)

from .routers import preview as preview_router  # noqa: E402

app.include_router(preview_router.router)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ConfigurationMissing, configuration_missing_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

__all__ = ["app"]
