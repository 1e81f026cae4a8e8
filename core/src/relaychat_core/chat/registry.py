from __future__ import annotations

import threading

from relaychat_core.chat.errors import ChatConflictError, ChatValidationError


def normalize_name(raw: str | None) -> str:
    name = (raw or "").strip()
    if not name:
        raise ChatValidationError("name required")
    return name


class SessionRegistry:
    """Display names currently claimed by a live (or pending) session."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._claimed: set[str] = set()

    def claim(self, name: str) -> str:
        accepted = normalize_name(name)
        with self._lock:
            if accepted in self._claimed:
                raise ChatConflictError("name already taken")
            self._claimed.add(accepted)
        return accepted

    def release(self, name: str) -> bool:
        with self._lock:
            if name not in self._claimed:
                return False
            self._claimed.discard(name)
            return True

    def is_claimed(self, name: str) -> bool:
        with self._lock:
            return name in self._claimed

    def claimed_names(self) -> list[str]:
        with self._lock:
            return sorted(self._claimed)
