"""Inline keyboards attached to bot replies.

Callback ids are matched by ``ghostmail.bot.handlers``.
"""

from __future__ import annotations

from collections.abc import Sequence

from ghostmail.channels.base import Action, Keyboard
from ghostmail.provider.models import RawMessage

CREATE_EMAIL = "create_email"
CHECK_MESSAGES = "check_messages"
VIEW_DOMAINS = "view_domains"
DELETE_EMAIL = "delete_email"
VIEW_MESSAGE_PREFIX = "view_message_"
DELETE_MESSAGE_PREFIX = "delete_msg_"

MAX_ACTION_MESSAGES = 3


def _rows_of_two(actions: list[Action]) -> Keyboard:
    return [actions[i:i + 2] for i in range(0, len(actions), 2)]


def main_menu() -> Keyboard:
    return [
        [Action("📧 Create Email", CREATE_EMAIL)],
        [Action("📥 Check Messages", CHECK_MESSAGES)],
        [Action("🌐 View Domains", VIEW_DOMAINS)],
    ]


def mailbox_actions() -> Keyboard:
    return [
        [Action("📥 Check Messages", CHECK_MESSAGES)],
        [Action("🔄 Create New", CREATE_EMAIL), Action("🗑️ Delete", DELETE_EMAIL)],
    ]


def create_only(label: str = "📧 Create Email") -> Keyboard:
    return [[Action(label, CREATE_EMAIL)]]


def back_to_inbox() -> Keyboard:
    return [[Action("⬅️ Back to Inbox", CHECK_MESSAGES)]]


def inbox_actions(shown: Sequence[RawMessage], max_action_messages: int = MAX_ACTION_MESSAGES) -> Keyboard:
    """Refresh / New Email, plus per-message view and delete buttons.

    Per-message buttons only appear for short pages (1..max_action_messages),
    laid out two per row between Refresh and New Email.
    """
    keyboard: Keyboard = [[Action("🔄 Refresh", CHECK_MESSAGES)]]
    if 0 < len(shown) <= max_action_messages:
        view = [Action(f"📖 View Msg {i}", f"{VIEW_MESSAGE_PREFIX}{m.id}") for i, m in enumerate(shown, 1)]
        delete = [Action(f"🗑️ Delete Msg {i}", f"{DELETE_MESSAGE_PREFIX}{m.id}") for i, m in enumerate(shown, 1)]
        keyboard.extend(_rows_of_two(view))
        keyboard.extend(_rows_of_two(delete))
    keyboard.append([Action("📧 New Email", CREATE_EMAIL)])
    return keyboard


def message_actions(message_id: str) -> Keyboard:
    return [
        [Action("⬅️ Back to Inbox", CHECK_MESSAGES)],
        [Action("🗑️ Delete Message", f"{DELETE_MESSAGE_PREFIX}{message_id}")],
    ]
