"""Command and callback handlers, independent of the transport.

Both the polling and the webhook gateway call into one ``GhostmailBot``;
each handler receives the ``Channel`` for the chat that triggered it.
"""

from __future__ import annotations

import re

from loguru import logger

from ghostmail.channels.base import Channel, Keyboard
from ghostmail.config.schema import DeliveryConfig, RenderConfig
from ghostmail.delivery.pipeline import DeliveryOutcome, deliver
from ghostmail.markdown.chunk import split_into_chunks
from ghostmail.provider.client import GhostmailClient
from ghostmail.render import keyboards, notices
from ghostmail.render.inbox import render_inbox, render_message
from ghostmail.render.screens import (
    render_domain_list,
    render_help,
    render_mailbox_created,
    render_mailbox_deleted,
    render_welcome,
)
from ghostmail.session.store import Session, SessionStore

_USERNAME_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")
_DOMAIN_RE = re.compile(r"^[A-Za-z0-9.-]{1,253}$")


class GhostmailBot:
    """All user-facing behaviour of the bot."""

    def __init__(
        self,
        provider: GhostmailClient,
        sessions: SessionStore | None = None,
        render_config: RenderConfig | None = None,
        delivery_config: DeliveryConfig | None = None,
    ):
        self.provider = provider
        self.sessions = sessions if sessions is not None else SessionStore()
        self.render_config = render_config or RenderConfig()
        self.delivery_config = delivery_config or DeliveryConfig()

    async def _reply(self, channel: Channel, text: str, actions: Keyboard | None = None) -> list[DeliveryOutcome]:
        """Chunk and deliver a MarkdownV2 reply."""
        chunks = split_into_chunks(text, self.render_config.chunk_max_length)
        return await deliver(channel, chunks, actions, delay=self.delivery_config.chunk_delay)

    # -- commands ------------------------------------------------------------

    async def start(self, channel: Channel) -> None:
        await self._reply(channel, render_welcome(), keyboards.main_menu())

    async def help(self, channel: Channel) -> None:
        await self._reply(channel, render_help())

    async def create_email(self, channel: Channel) -> None:
        await channel.notify(notices.CREATING)
        mailbox = await self.provider.create_email()
        if mailbox is None:
            await channel.notify(notices.CREATE_FAILED)
            return

        session = Session.from_mailbox(mailbox)
        self.sessions.set(channel.chat_id, session)
        logger.info(f"Created mailbox for chat {channel.chat_id}")
        await self._reply(channel, render_mailbox_created(session), keyboards.mailbox_actions())

    async def custom_email(self, channel: Channel, args: list[str]) -> None:
        """``/custom <username> <domain>``: rename the current mailbox."""
        if len(args) != 2 or not _USERNAME_RE.match(args[0]) or not _DOMAIN_RE.match(args[1]):
            await channel.notify(notices.CUSTOM_USAGE)
            return

        session = self.sessions.get(channel.chat_id)
        if session is None:
            await channel.notify(notices.NO_SESSION, keyboards.create_only())
            return

        username, domain = args
        await channel.notify(notices.CREATING)
        mailbox = await self.provider.change_email(session.email_token, username, domain)
        if mailbox is None:
            await channel.notify(notices.CUSTOM_FAILED)
            return

        session = Session.from_mailbox(mailbox)
        self.sessions.set(channel.chat_id, session)
        logger.info(f"Changed mailbox for chat {channel.chat_id}")
        await self._reply(channel, render_mailbox_created(session), keyboards.mailbox_actions())

    async def check_messages(self, channel: Channel) -> None:
        session = self.sessions.get(channel.chat_id)
        if session is None:
            await channel.notify(notices.NO_SESSION, keyboards.create_only())
            return

        await channel.notify(notices.CHECKING)
        messages = await self.provider.get_messages(session.email_token)
        if messages is None:
            await channel.notify(notices.FETCH_MESSAGES_FAILED)
            return
        if not messages:
            await channel.notify(notices.empty_inbox(session.email_address))
            return

        cfg = self.render_config
        text = render_inbox(session, messages, cfg.page_size, cfg.sanitize_max_length)
        actions = keyboards.inbox_actions(messages[:cfg.page_size], cfg.max_action_messages)
        outcomes = await self._reply(channel, text, actions)
        logger.debug(f"Inbox for chat {channel.chat_id}: {len(messages)} messages, outcomes {outcomes}")

    async def show_domains(self, channel: Channel) -> None:
        await channel.notify(notices.FETCHING_DOMAINS)
        domains = await self.provider.get_domains()
        if domains is None:
            await channel.notify(notices.FETCH_DOMAINS_FAILED)
            return
        await self._reply(channel, render_domain_list(domains))

    async def delete_email(self, channel: Channel) -> None:
        session = self.sessions.get(channel.chat_id)
        if session is None:
            await channel.notify(notices.NO_SESSION_TO_DELETE)
            return

        await channel.notify(notices.DELETING_EMAIL)
        if not await self.provider.delete_email(session.email_token):
            await channel.notify(notices.DELETE_EMAIL_FAILED)
            return

        self.sessions.delete(channel.chat_id)
        logger.info(f"Deleted mailbox for chat {channel.chat_id}")
        await self._reply(channel, render_mailbox_deleted(), keyboards.create_only("📧 Create New Email"))

    async def view_message(self, channel: Channel, message_id: str) -> None:
        if self.sessions.get(channel.chat_id) is None:
            await channel.notify(notices.NO_SESSION, keyboards.create_only())
            return

        await channel.notify(notices.LOADING_MESSAGE)
        message = await self.provider.get_message(message_id)
        if message is None:
            await channel.notify(notices.LOAD_MESSAGE_FAILED, keyboards.back_to_inbox())
            return

        text = render_message(message, self.render_config.sanitize_max_length)
        await self._reply(channel, text, keyboards.message_actions(message_id))

    async def delete_message(self, channel: Channel, message_id: str) -> None:
        if self.sessions.get(channel.chat_id) is None:
            await channel.notify(notices.NO_SESSION, keyboards.create_only())
            return

        await channel.notify(notices.DELETING_MESSAGE)
        if await self.provider.delete_message(message_id):
            await channel.notify(notices.MESSAGE_DELETED, keyboards.back_to_inbox())
        else:
            await channel.notify(notices.DELETE_MESSAGE_FAILED)

    # -- callbacks -----------------------------------------------------------

    async def handle_callback(self, channel: Channel, data: str) -> None:
        """Dispatch an inline-button callback id."""
        if data == keyboards.CREATE_EMAIL:
            await self.create_email(channel)
        elif data == keyboards.CHECK_MESSAGES:
            await self.check_messages(channel)
        elif data == keyboards.VIEW_DOMAINS:
            await self.show_domains(channel)
        elif data == keyboards.DELETE_EMAIL:
            await self.delete_email(channel)
        elif data.startswith(keyboards.VIEW_MESSAGE_PREFIX):
            await self.view_message(channel, data[len(keyboards.VIEW_MESSAGE_PREFIX):])
        elif data.startswith(keyboards.DELETE_MESSAGE_PREFIX):
            await self.delete_message(channel, data[len(keyboards.DELETE_MESSAGE_PREFIX):])
        else:
            logger.warning(f"Unknown callback data from chat {channel.chat_id}: {data!r}")
