from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

from relaychat_core import __version__
from relaychat_core.api.models import ApiResponse, ok
from relaychat_core.api.v1.auth import router as auth_router
from relaychat_core.api.v1.chat import router as chat_router

router = APIRouter(prefix="/v1", tags=["v1"])

router.include_router(auth_router)
router.include_router(chat_router)


class SystemInfo(BaseModel):
    version: str
    relaychat_home: str
    logs_dir: str


@router.get("/ping", response_model=ApiResponse[dict[str, bool]])
async def ping() -> ApiResponse[dict[str, bool]]:
    return ok({"pong": True})


@router.get("/system/info", response_model=ApiResponse[SystemInfo])
async def system_info(request: Request) -> ApiResponse[SystemInfo]:
    # Runtime identity only; no config introspection.
    home = getattr(request.app.state, "relaychat_home", None)
    paths = getattr(request.app.state, "relaychat_paths", None)

    info = SystemInfo(
        version=__version__,
        relaychat_home=str(home) if home is not None else "",
        logs_dir=str(paths.logs_dir) if paths is not None else "",
    )
    return ok(info)
