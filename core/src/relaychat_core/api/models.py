from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from relaychat_core.chat.errors import ChatConflictError, ChatError, ChatValidationError


class ApiError(BaseModel):
    code: str
    message: str
    details: Any | None = None


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    ok: bool
    data: T | None = None
    error: ApiError | None = None


def ok(data: T) -> ApiResponse[T]:
    return ApiResponse(ok=True, data=data)


def fail(*, code: str, message: str, details: Any | None = None) -> ApiResponse[None]:
    return ApiResponse(ok=False, error=ApiError(code=code, message=message, details=details))


def chat_error_status(exc: ChatError) -> int:
    if isinstance(exc, ChatValidationError):
        return 400
    if isinstance(exc, ChatConflictError):
        return 409
    return 500
