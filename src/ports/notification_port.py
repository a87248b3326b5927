"""Notification port: abstract interface for pushing messages to a chat.

Core modules depend on this protocol, never on a specific messaging provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


class NotificationError(Exception):
    """Raised when a messaging provider call fails.

    `detail` carries the provider's error payload when one was returned.
    """

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message)
        self.detail = detail


@dataclass
class Profile:
    """Identity of a chat destination as reported by the provider."""

    user_id: str
    display_name: str


class NotificationPort(Protocol):
    """Abstract notification interface used by core modules."""

    async def send_message(self, destination_id: str, text: str) -> None: ...

    async def get_profile(self, destination_id: str) -> Profile: ...
