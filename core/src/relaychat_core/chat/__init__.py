from __future__ import annotations

from relaychat_core.chat.connections import Channel, ChannelState, ConnectionManager
from relaychat_core.chat.errors import (
    ChannelDeliveryError,
    ChatConflictError,
    ChatError,
    ChatValidationError,
)
from relaychat_core.chat.messages import Message, MessageLog
from relaychat_core.chat.registry import SessionRegistry
from relaychat_core.chat.service import ChatService, build_chat_service

__all__ = [
    "Channel",
    "ChannelDeliveryError",
    "ChannelState",
    "ChatConflictError",
    "ChatError",
    "ChatService",
    "ChatValidationError",
    "ConnectionManager",
    "Message",
    "MessageLog",
    "SessionRegistry",
    "build_chat_service",
]
