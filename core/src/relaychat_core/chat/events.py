from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel, Field

from relaychat_core.chat.messages import Message


class MessagePayload(BaseModel):
    name: str
    content: str


class ErrorPayload(BaseModel):
    code: str
    message: str


class LoadHistoryEvent(BaseModel):
    event: Literal["loadHistory"] = "loadHistory"
    data: list[MessagePayload] = Field(default_factory=list)


class NewMessageEvent(BaseModel):
    event: Literal["newMessage"] = "newMessage"
    data: MessagePayload


class ErrorEvent(BaseModel):
    event: Literal["error"] = "error"
    data: ErrorPayload


ServerEvent = LoadHistoryEvent | NewMessageEvent | ErrorEvent


class SendPayload(BaseModel):
    # The author is always the channel's session name; a client-supplied name is ignored.
    name: str | None = None
    content: str = ""


class SendEvent(BaseModel):
    event: Literal["send"]
    data: SendPayload


def to_payload(message: Message) -> MessagePayload:
    return MessagePayload(name=message.name, content=message.content)


def load_history(messages: Iterable[Message]) -> LoadHistoryEvent:
    return LoadHistoryEvent(data=[to_payload(m) for m in messages])


def new_message(message: Message) -> NewMessageEvent:
    return NewMessageEvent(data=to_payload(message))


def error(*, code: str, message: str) -> ErrorEvent:
    return ErrorEvent(data=ErrorPayload(code=code, message=message))
