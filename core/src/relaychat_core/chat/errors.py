from __future__ import annotations


class ChatError(Exception):
    """Base class for chat failures that are reported back to a single caller."""

    code = "chat_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ChatValidationError(ChatError):
    code = "validation_error"


class ChatConflictError(ChatError):
    code = "conflict"


class ChannelDeliveryError(ChatError):
    """Pushing an event to one channel failed; never surfaced to other channels."""

    code = "delivery_failed"
