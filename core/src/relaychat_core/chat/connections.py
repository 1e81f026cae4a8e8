from __future__ import annotations

import asyncio
import logging
import weakref
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from relaychat_core.chat import events
from relaychat_core.chat.errors import ChatConflictError, ChatValidationError
from relaychat_core.chat.messages import Message, MessageLog
from relaychat_core.chat.registry import SessionRegistry

logger = logging.getLogger(__name__)


class Channel(Protocol):
    """Transport-agnostic duplex connection to one client."""

    @property
    def channel_id(self) -> str: ...

    async def send(self, event: events.ServerEvent) -> None: ...

    async def close(self, code: int = 1000, reason: str = "") -> None: ...


class ChannelState(StrEnum):
    CONNECTING = "connecting"
    REGISTERED = "registered"
    CLOSED = "closed"


@dataclass
class _Registration:
    channel: Channel
    name: str
    outbox: asyncio.Queue[events.ServerEvent] = field(default_factory=asyncio.Queue)
    writer: asyncio.Task[None] | None = None


class ConnectionManager:
    """Owns the open channels and fans messages out to them.

    State changes run under one asyncio lock and never await a client. Each
    registered channel gets its own outbox drained by a writer task, so events
    are queued in log order while a stalled client only delays itself.
    """

    def __init__(self, *, registry: SessionRegistry, log: MessageLog) -> None:
        self._registry = registry
        self._log = log
        self._lock = asyncio.Lock()
        # Insertion ordered: iteration order is registration order.
        self._active: dict[str, _Registration] = {}
        self._closed: weakref.WeakSet[Channel] = weakref.WeakSet()

    def state_of(self, channel: Channel) -> ChannelState:
        if channel in self._closed:
            return ChannelState.CLOSED
        if self._lookup(channel) is not None:
            return ChannelState.REGISTERED
        return ChannelState.CONNECTING

    def connected_names(self) -> list[str]:
        return [reg.name for reg in self._active.values()]

    async def register(self, channel: Channel, name: str) -> None:
        async with self._lock:
            if channel in self._closed:
                raise ChatConflictError("channel already closed")
            if channel.channel_id in self._active:
                raise ChatConflictError("channel already registered")
            # Checked under the lock: a concurrent unregister may have released the name.
            if not self._registry.is_claimed(name):
                raise ChatValidationError("login required")
            if any(reg.name == name for reg in self._active.values()):
                raise ChatConflictError("name already connected")

            reg = _Registration(channel=channel, name=name)
            reg.outbox.put_nowait(events.load_history(self._log.snapshot()))
            reg.writer = asyncio.create_task(
                self._drain(reg), name=f"relay-writer-{channel.channel_id[:8]}"
            )
            self._active[channel.channel_id] = reg

        logger.info("Channel %s connected as %s", channel.channel_id, name)

    async def send(self, channel: Channel, content: str | None) -> Message | None:
        async with self._lock:
            reg = self._lookup(channel)
            if reg is None:
                logger.warning("Ignoring message from unregistered channel %s", channel.channel_id)
                return None

            if not (content or "").strip():
                logger.warning("Rejected empty message from %s", reg.name)
                reg.outbox.put_nowait(
                    events.error(code="validation_error", message="invalid message")
                )
                return None

            message = Message(name=reg.name, content=content or "")
            self._log.append(message)
            event = events.new_message(message)
            for target in self._active.values():
                target.outbox.put_nowait(event)

        logger.info("Message from %s: %s", message.name, message.content)
        return message

    async def notify(self, channel: Channel, event: events.ServerEvent) -> None:
        """Queue a single event for one registered channel."""

        async with self._lock:
            reg = self._lookup(channel)
            if reg is not None:
                reg.outbox.put_nowait(event)

    async def unregister(self, channel: Channel) -> bool:
        async with self._lock:
            self._closed.add(channel)
            reg = self._lookup(channel)
            if reg is None:
                return False
            del self._active[channel.channel_id]
            self._registry.release(reg.name)
            if reg.writer is not None:
                reg.writer.cancel()
            # Undelivered events are dropped; keep join() waiters from hanging.
            while not reg.outbox.empty():
                reg.outbox.get_nowait()
                reg.outbox.task_done()

        logger.info("Channel %s disconnected (%s)", channel.channel_id, reg.name)
        return True

    async def flush(self, *channels: Channel) -> None:
        """Wait until the outboxes of `channels` (default: all) are delivered."""

        async with self._lock:
            if channels:
                regs = [reg for reg in map(self._lookup, channels) if reg is not None]
            else:
                regs = list(self._active.values())
        await asyncio.gather(*(reg.outbox.join() for reg in regs))

    async def close_all(
        self, *, code: int = 1001, reason: str = "server shutting down", grace: float = 1.0
    ) -> int:
        try:
            await asyncio.wait_for(self.flush(), timeout=grace)
        except TimeoutError:
            logger.warning("Shutting down with undelivered chat events")

        async with self._lock:
            channels = [reg.channel for reg in self._active.values()]

        for channel in channels:
            try:
                await channel.close(code, reason)
            except Exception as e:
                logger.warning("Failed to close channel %s: %s", channel.channel_id, e)
            await self.unregister(channel)
        return len(channels)

    def _lookup(self, channel: Channel) -> _Registration | None:
        reg = self._active.get(channel.channel_id)
        if reg is None or reg.channel is not channel:
            return None
        return reg

    async def _drain(self, reg: _Registration) -> None:
        while True:
            event = await reg.outbox.get()
            try:
                await reg.channel.send(event)
            except Exception as e:
                logger.warning(
                    "Dropped %s event for channel %s: %s", event.event, reg.channel.channel_id, e
                )
            finally:
                reg.outbox.task_done()
