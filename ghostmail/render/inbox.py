"""Inbox and single-message views (MarkdownV2).

Every provider-supplied value is either sanitized (HTML bodies) or escaped
(headers, names, filenames) before it is placed next to our own markup.
"""

from __future__ import annotations

from collections.abc import Sequence

from ghostmail.markdown.format import bold
from ghostmail.markdown.sanitize import SANITIZE_MAX_LENGTH, escape_markdown, sanitize_html
from ghostmail.provider.models import RawMessage
from ghostmail.session.store import Session

PAGE_SIZE = 5
DIVIDER = "━━━━━━━━━━━━━━━"


def _field(icon: str, label: str, value: str) -> str:
    return f"{icon} {bold(label + ':')} {escape_markdown(value)}"


def _message_fields(message: RawMessage, body_max_length: int) -> list[str]:
    lines = [
        _field("👤", "From", message.sender),
        _field("📧", "Email", message.sender_email),
        _field("📄", "Subject", message.subject or "No Subject"),
        _field("📅", "Received", message.received_at),
    ]
    if message.attachments:
        lines.append(_field("📎", "Attachments", f"{len(message.attachments)} file(s)"))
        for i, attachment in enumerate(message.attachments, 1):
            lines.append(escape_markdown(f"   {i}. {attachment.file}"))
    lines.append("")
    lines.append(f"💌 {bold('Full Content:')}")
    lines.append(sanitize_html(message.content, body_max_length))
    return lines


def render_inbox(
    session: Session,
    messages: Sequence[RawMessage],
    page_size: int = PAGE_SIZE,
    body_max_length: int = SANITIZE_MAX_LENGTH,
) -> str:
    """Render the first *page_size* messages, in provider order."""
    total = len(messages)
    shown = messages[:page_size]

    lines = [f"📬 {bold(f'Inbox for {session.email_address}')}", ""]
    if total > page_size:
        lines.append(escape_markdown(f"📊 Showing {len(shown)} of {total} messages"))
        lines.append("")

    for i, message in enumerate(shown, 1):
        marker = "✅" if message.is_seen else "🔵"
        lines.append(f"{marker} {bold(f'Message {i}')}")
        lines.extend(_message_fields(message, body_max_length))
        lines.append(DIVIDER)
        lines.append("")

    if total > page_size:
        lines.append(escape_markdown(
            f"📬 You have {total - page_size} more messages. Use the refresh button to see updates."
        ))
    return "\n".join(lines).strip()


def render_message(message: RawMessage, body_max_length: int = SANITIZE_MAX_LENGTH) -> str:
    """Render one message for the "view full message" flow."""
    lines = [f"📧 {bold('Full Message')}", ""]
    lines.extend(_message_fields(message, body_max_length))
    return "\n".join(lines).strip()
