"""Tests for ghostmail.delivery.pipeline."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from ghostmail.channels.base import Action
from ghostmail.delivery.pipeline import DeliveryOutcome, deliver
from ghostmail.render.notices import DELIVERY_FAILED

ACTIONS = [[Action("🔄 Refresh", "check_messages")]]


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("ghostmail.delivery.pipeline.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


class TestHappyPath:
    async def test_all_chunks_formatted(self, channel):
        outcomes = await deliver(channel, ["one", "two", "three"], ACTIONS)

        assert outcomes == [DeliveryOutcome.DELIVERED_FORMATTED] * 3
        assert [s["text"] for s in channel.sends] == ["one", "two", "three"]
        assert all(s["formatted"] for s in channel.sends)

    async def test_only_last_chunk_carries_actions(self, channel):
        await deliver(channel, ["one", "two", "three"], ACTIONS)
        assert [s["actions"] for s in channel.sends] == [None, None, ACTIONS]

    async def test_pacing_between_chunks(self, channel, no_sleep):
        await deliver(channel, ["one", "two", "three"], delay=0.1)
        assert no_sleep.await_count == 2
        assert no_sleep.call_args_list[0][0][0] == 0.1

    async def test_no_pacing_when_delay_zero(self, channel, no_sleep):
        await deliver(channel, ["one", "two"], delay=0)
        no_sleep.assert_not_awaited()

    async def test_no_chunks(self, channel):
        assert await deliver(channel, [], ACTIONS) == []
        assert channel.sends == []


class TestFallback:
    async def test_plain_resend_after_formatted_rejection(self, channel):
        channel.reject = lambda index, formatted: index == 0

        outcomes = await deliver(channel, ["📬 *Inbox* a\\.b"], ACTIONS)

        assert outcomes == [DeliveryOutcome.DELIVERED_PLAIN]
        assert len(channel.sends) == 2
        plain = channel.sends[1]
        assert plain["formatted"] is False
        assert plain["text"] == "Inbox a.b"
        assert plain["actions"] == ACTIONS

    async def test_every_call_rejected_single_notice(self, channel):
        channel.reject = lambda index, formatted: True

        outcomes = await deliver(channel, ["one", "two", "three"], ACTIONS)

        assert outcomes == [DeliveryOutcome.FAILED] * 3
        notices = [s for s in channel.sends if s["text"] == DELIVERY_FAILED]
        assert len(notices) == 1
        assert channel.sends[-1]["text"] == DELIVERY_FAILED
        assert channel.sends[-1]["actions"] == ACTIONS
        # two attempts per chunk plus the notice
        assert len(channel.sends) == 7

    async def test_failed_middle_chunk_does_not_stop_delivery(self, channel):
        channel.reject = lambda index, formatted: index in (0, 1)

        outcomes = await deliver(channel, ["one", "two"], ACTIONS)

        assert outcomes == [DeliveryOutcome.FAILED, DeliveryOutcome.DELIVERED_FORMATTED]
        assert all(s["text"] != DELIVERY_FAILED for s in channel.sends)

    async def test_custom_failure_notice(self, channel):
        channel.reject = lambda index, formatted: index < 2

        await deliver(channel, ["one"], failure_notice="nope")

        assert channel.sends[-1]["text"] == "nope"
