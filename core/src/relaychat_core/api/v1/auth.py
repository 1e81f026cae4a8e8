from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from relaychat_core.api.models import ApiResponse, ok
from relaychat_core.chat.service import ChatService

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    # Missing, null and blank names all surface as the 400 "name required" error.
    name: str | None = None


class LoginAccepted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    accepted_name: str = Field(alias="acceptedName")


def get_chat_service(request: Request) -> ChatService:
    service: ChatService | None = getattr(request.app.state, "chat_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Chat service not initialized")
    return service


@router.post("/auth/login", response_model=ApiResponse[LoginAccepted])
async def auth_login(request: Request, payload: LoginRequest) -> ApiResponse[LoginAccepted]:
    service = get_chat_service(request)
    accepted = service.login(payload.name)
    return ok(LoginAccepted(accepted_name=accepted))
