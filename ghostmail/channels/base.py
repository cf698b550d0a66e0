"""Base channel interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Action:
    """An inline button: what the user sees and what comes back on tap."""

    label: str
    action_id: str


Keyboard = list[list[Action]]


class Channel(ABC):
    """
    One chat on a messaging platform.

    ``send`` is a single attempt and raises on any failure; retry and
    fallback policy belongs to the caller (see ``ghostmail.delivery``).
    ``notify`` is for short status lines and never raises.
    """

    name: str = "base"

    def __init__(self, chat_id: str):
        self.chat_id = chat_id

    @abstractmethod
    async def send(
        self,
        text: str,
        *,
        formatted: bool = True,
        actions: Keyboard | None = None,
    ) -> None:
        """Send *text*; with ``formatted`` the platform parses it as MarkdownV2."""

    @abstractmethod
    async def notify(self, text: str, actions: Keyboard | None = None) -> None:
        """Best-effort plain-text status message."""
