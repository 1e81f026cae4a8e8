from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    name: str
    content: str


class MessageLog:
    """Append-only history of every message accepted since process start."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        with self._lock:
            self._messages.append(message)

    def snapshot(self) -> tuple[Message, ...]:
        with self._lock:
            return tuple(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
