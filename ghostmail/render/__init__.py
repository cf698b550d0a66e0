"""Views: inbox/message rendering, fixed screens, keyboards and notices."""

from ghostmail.render.inbox import DIVIDER, PAGE_SIZE, render_inbox, render_message
from ghostmail.render.screens import (
    COMMANDS,
    render_domain_list,
    render_help,
    render_mailbox_created,
    render_mailbox_deleted,
    render_welcome,
)

__all__ = [
    "COMMANDS",
    "DIVIDER",
    "PAGE_SIZE",
    "render_domain_list",
    "render_help",
    "render_inbox",
    "render_mailbox_created",
    "render_mailbox_deleted",
    "render_message",
    "render_welcome",
]
