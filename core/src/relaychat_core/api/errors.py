from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relaychat_core.api.models import chat_error_status, fail
from relaychat_core.chat.errors import ChatError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES: dict[int, str] = {
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "validation_error",
}


def _envelope(
    status_code: int, *, code: str, message: str, details: Any | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=fail(code=code, message=message, details=details).model_dump(mode="json"),
    )


def http_error_code(status_code: int) -> str:
    if status_code in _HTTP_ERROR_CODES:
        return _HTTP_ERROR_CODES[status_code]
    return "client_error" if 400 <= status_code < 500 else "server_error"


def install_error_handlers(app: FastAPI) -> None:
    """Render every error as the {"ok": false, "error": ...} envelope."""

    @app.exception_handler(ChatError)
    async def _chat_error(request: Request, exc: ChatError) -> JSONResponse:
        return _envelope(chat_error_status(exc), code=exc.code, message=exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _envelope(
            422, code="validation_error", message="Request validation failed", details=exc.errors()
        )

    # Also covers fastapi.HTTPException, which subclasses Starlette's.
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return _envelope(exc.status_code, code=http_error_code(exc.status_code), message=message)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _envelope(500, code="internal_error", message="Internal server error")
