from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong!"


class PreviewError(Exception):
    """Base class for every failure the preview pipeline knows about."""


class ConfigurationMissing(PreviewError):
    """Raised when the Notion credential or database id is not configured."""

    def __init__(self, missing: Iterable[str] = ("NOTION_TOKEN", "DATABASE_ID")) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {' or '.join(self.missing)}")


class RecordLookupError(PreviewError):
    """A lookup outcome that is shown to the user as an in-page banner."""

    @property
    def banner(self) -> str:
        return str(self)


class RecordNotFound(RecordLookupError):
    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"No record found for ID: {record_id}")


class CollectionEmpty(RecordLookupError):
    def __init__(self) -> None:
        super().__init__("No pages found in database.")


class UpstreamFailure(RecordLookupError):
    """The Notion API or its transport failed while fetching the record."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def banner(self) -> str:
        return f"Error: {self.message}"


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Error"
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(
        status_code=exc.status_code,
        code="http_error",
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def configuration_missing_handler(request: Request, exc: ConfigurationMissing):
    logger.error("configuration.missing", extra={"extra_data": {"missing": exc.missing}})
    return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("request.failed", exc_info=exc)
    return PlainTextResponse(GENERIC_FAILURE_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
