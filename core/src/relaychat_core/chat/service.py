from __future__ import annotations

import logging

from relaychat_core.chat import events
from relaychat_core.chat.connections import Channel, ConnectionManager
from relaychat_core.chat.messages import Message, MessageLog
from relaychat_core.chat.registry import SessionRegistry, normalize_name

logger = logging.getLogger(__name__)


class ChatService:
    """Login and real-time messaging on top of the registry, log and connections."""

    def __init__(
        self,
        *,
        registry: SessionRegistry,
        log: MessageLog,
        connections: ConnectionManager,
    ) -> None:
        self._registry = registry
        self._log = log
        self._connections = connections

    @property
    def connections(self) -> ConnectionManager:
        return self._connections

    def login(self, name: str | None) -> str:
        """Claim a display name; raises ChatValidationError or ChatConflictError."""

        accepted = self._registry.claim(name or "")
        logger.info("Login accepted for %s", accepted)
        return accepted

    async def open_channel(self, channel: Channel, name: str | None) -> str:
        accepted = normalize_name(name)
        await self._connections.register(channel, accepted)
        return accepted

    async def receive(self, channel: Channel, content: str | None) -> Message | None:
        return await self._connections.send(channel, content)

    async def reject(self, channel: Channel, message: str) -> None:
        await self._connections.notify(
            channel, events.error(code="validation_error", message=message)
        )

    async def close_channel(self, channel: Channel) -> None:
        await self._connections.unregister(channel)

    def history(self) -> tuple[Message, ...]:
        return self._log.snapshot()

    def claimed_names(self) -> list[str]:
        return self._registry.claimed_names()

    async def shutdown(self) -> None:
        closed = await self._connections.close_all()
        if closed:
            logger.info("Closed %d chat channels on shutdown", closed)


def build_chat_service() -> ChatService:
    registry = SessionRegistry()
    log = MessageLog()
    connections = ConnectionManager(registry=registry, log=log)
    return ChatService(registry=registry, log=log, connections=connections)
