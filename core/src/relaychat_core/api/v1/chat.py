from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Request, WebSocket, status
from pydantic import BaseModel, ValidationError

from relaychat_core.api.models import ApiResponse, ok
from relaychat_core.api.v1.auth import get_chat_service
from relaychat_core.chat.connections import ChannelState
from relaychat_core.chat.errors import ChannelDeliveryError, ChatError
from relaychat_core.chat.events import MessagePayload, SendEvent, ServerEvent, to_payload
from relaychat_core.chat.service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


class WebSocketChannel:
    """Adapts a Starlette WebSocket to the chat Channel protocol."""

    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket
        self._channel_id = uuid.uuid4().hex

    @property
    def channel_id(self) -> str:
        return self._channel_id

    async def send(self, event: ServerEvent) -> None:
        try:
            await self._websocket.send_json(event.model_dump(mode="json"))
        except Exception as e:
            raise ChannelDeliveryError(str(e) or type(e).__name__) from e

    async def close(self, code: int = 1000, reason: str = "") -> None:
        try:
            await self._websocket.close(code=code, reason=reason)
        except Exception as e:
            raise ChannelDeliveryError(str(e) or type(e).__name__) from e


class ChatSessions(BaseModel):
    names: list[str]
    connected: list[str]


@router.get("/chat/messages", response_model=ApiResponse[list[MessagePayload]])
async def chat_messages(request: Request) -> ApiResponse[list[MessagePayload]]:
    service = get_chat_service(request)
    return ok([to_payload(m) for m in service.history()])


@router.get("/chat/sessions", response_model=ApiResponse[ChatSessions])
async def chat_sessions(request: Request) -> ApiResponse[ChatSessions]:
    service = get_chat_service(request)
    return ok(
        ChatSessions(
            names=service.claimed_names(),
            connected=service.connections.connected_names(),
        )
    )


def _frame_text(message: dict) -> str:
    text = message.get("text")
    if text is not None:
        return text
    return (message.get("bytes") or b"").decode("utf-8", errors="replace")


@router.websocket("/chat/ws")
async def chat_socket(websocket: WebSocket, name: str = "") -> None:
    await websocket.accept()

    service: ChatService | None = getattr(websocket.app.state, "chat_service", None)
    if service is None:
        await websocket.close(
            code=status.WS_1011_INTERNAL_ERROR, reason="Chat service not initialized"
        )
        return

    channel = WebSocketChannel(websocket)
    try:
        try:
            await service.open_channel(channel, name)
        except ChatError as e:
            logger.warning("Refused chat channel for %r: %s", name, e.message)
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=e.message)
            return

        # Stops once the channel is unregistered, e.g. by a server shutdown.
        while service.connections.state_of(channel) is ChannelState.REGISTERED:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            try:
                frame = SendEvent.model_validate_json(_frame_text(message))
            except ValidationError:
                await service.reject(channel, "invalid frame")
                continue

            await service.receive(channel, frame.data.content)
    finally:
        await service.close_channel(channel)
