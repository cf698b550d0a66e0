"""Ordered chunk delivery with formatted → plain → notice fallback."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from enum import Enum

from loguru import logger

from ghostmail.channels.base import Channel, Keyboard
from ghostmail.markdown.format import to_plain_text
from ghostmail.render.notices import DELIVERY_FAILED

CHUNK_DELAY = 0.1  # seconds between consecutive chunks


class DeliveryOutcome(str, Enum):
    """How a single chunk reached the chat."""

    DELIVERED_FORMATTED = "delivered_formatted"
    DELIVERED_PLAIN = "delivered_plain"
    FAILED = "failed"


async def deliver(
    channel: Channel,
    chunks: Sequence[str],
    actions: Keyboard | None = None,
    *,
    delay: float = CHUNK_DELAY,
    failure_notice: str = DELIVERY_FAILED,
) -> list[DeliveryOutcome]:
    """Send *chunks* to *channel* one after another.

    Each chunk is tried as MarkdownV2 first, then once as plain text. If both
    fail on the last chunk a single terminal notice is sent in its place.
    Only the last chunk (or that notice) carries *actions*. Chunks are
    separated by *delay* seconds whatever the previous outcome was.
    """
    outcomes: list[DeliveryOutcome] = []
    last = len(chunks) - 1

    for i, chunk in enumerate(chunks):
        if i > 0 and delay > 0:
            await asyncio.sleep(delay)

        chunk_actions = actions if i == last else None
        try:
            await channel.send(chunk, formatted=True, actions=chunk_actions)
            outcomes.append(DeliveryOutcome.DELIVERED_FORMATTED)
            continue
        except Exception as e:
            logger.warning(f"Formatted send of chunk {i + 1}/{len(chunks)} to {channel.chat_id} failed, "
                           f"falling back to plain text: {e}")

        try:
            await channel.send(to_plain_text(chunk), formatted=False, actions=chunk_actions)
            outcomes.append(DeliveryOutcome.DELIVERED_PLAIN)
            continue
        except Exception as e:
            logger.error(f"Plain send of chunk {i + 1}/{len(chunks)} to {channel.chat_id} failed: {e}")

        outcomes.append(DeliveryOutcome.FAILED)
        if i == last:
            try:
                await channel.send(failure_notice, formatted=False, actions=chunk_actions)
            except Exception as e:
                logger.error(f"Could not deliver failure notice to {channel.chat_id}: {e}")

    return outcomes
