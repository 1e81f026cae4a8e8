from __future__ import annotations

from typing import Any

import pytest

from relaychat_core.chat.errors import ChannelDeliveryError
from relaychat_core.chat.events import ServerEvent
from relaychat_core.chat.service import ChatService, build_chat_service


class FakeChannel:
    """In-memory channel that records every event pushed to it."""

    def __init__(self, channel_id: str, *, broken: bool = False) -> None:
        self.channel_id = channel_id
        self.broken = broken
        self.events: list[dict[str, Any]] = []
        self.closed: tuple[int, str] | None = None

    async def send(self, event: ServerEvent) -> None:
        if self.broken:
            raise ChannelDeliveryError("connection reset")
        self.events.append(event.model_dump(mode="json"))

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.closed = (code, reason)

    def of_kind(self, kind: str) -> list[dict[str, Any]]:
        return [e for e in self.events if e["event"] == kind]


@pytest.fixture
def channel_factory():
    return FakeChannel


@pytest.fixture
def service() -> ChatService:
    return build_chat_service()
