from __future__ import annotations

from typing import Callable

import pytest

from ghostmail.channels.base import Channel, Keyboard


class RecordingChannel(Channel):
    """Channel double that records every call.

    ``reject(call_index, formatted)`` decides whether a ``send`` call fails.
    """

    name = "test"

    def __init__(self, chat_id: str = "42"):
        super().__init__(chat_id)
        self.sends: list[dict] = []
        self.notices: list[dict] = []
        self.reject: Callable[[int, bool], bool] = lambda index, formatted: False

    async def send(self, text: str, *, formatted: bool = True, actions: Keyboard | None = None) -> None:
        index = len(self.sends)
        self.sends.append({"text": text, "formatted": formatted, "actions": actions})
        if self.reject(index, formatted):
            raise RuntimeError("Bad Request: can't parse entities")

    async def notify(self, text: str, actions: Keyboard | None = None) -> None:
        self.notices.append({"text": text, "actions": actions})


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
