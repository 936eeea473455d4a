from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..settings import DEFAULT_CSP


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach a baseline set of security headers for browser clients.

    The preview page pulls Bootstrap, html2canvas and Lucide from public CDNs
    and renders authored HTML that references arbitrary images, so the policy
    is wider than ``default-src 'self'`` for scripts, styles and images.
    """

    def __init__(self, app, content_security_policy: str = DEFAULT_CSP) -> None:  # type: ignore[override]
        super().__init__(app)
        self.content_security_policy = content_security_policy

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        if self.content_security_policy:
            response.headers.setdefault("Content-Security-Policy", self.content_security_policy)
        return response
