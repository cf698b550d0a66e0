"""Fixed MarkdownV2 screens: welcome, help, mailbox cards, domain list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ghostmail.markdown.format import bold, code
from ghostmail.markdown.sanitize import escape_markdown
from ghostmail.session.store import Session

# (command, description); also registered as the bot command menu.
COMMANDS = [
    ("start", "Welcome message and main menu"),
    ("create", "Create a new temporary email"),
    ("messages", "Check your inbox"),
    ("domains", "View available domains"),
    ("custom", "Pick your own address: /custom <username> <domain>"),
    ("delete", "Delete current email"),
    ("help", "Show this help"),
]


def _command_lines() -> list[str]:
    return [escape_markdown(f"/{name} - {desc}") for name, desc in COMMANDS]


def render_welcome() -> str:
    lines = [
        f"🔒 {bold('Welcome to GhostMail Bot!')}",
        "",
        escape_markdown("I can help you create temporary email addresses for privacy and security."),
        "",
        bold("Available Commands:"),
        *_command_lines(),
        "",
        escape_markdown(
            "Your temporary emails are automatically deleted after a certain time "
            "period to protect your privacy."
        ),
        "",
        escape_markdown("Ready to get started? Use /create to generate your first temporary email! 📧"),
    ]
    return "\n".join(lines)


def render_help() -> str:
    steps = [
        "Use /create to generate a temporary email",
        "Use the email for registrations or services",
        "Use /messages to check received emails",
        "Emails auto-delete after expiration time",
    ]
    lines = [
        f"🔒 {bold('GhostMail Bot Help')}",
        "",
        bold("Commands:"),
        *_command_lines(),
        "",
        bold("How it works:"),
        *(escape_markdown(f"{i}. {step}") for i, step in enumerate(steps, 1)),
        "",
        f"{bold('Privacy:')} "
        + escape_markdown("All temporary emails are automatically deleted to protect your privacy."),
    ]
    return "\n".join(lines)


def render_mailbox_created(session: Session) -> str:
    lines = [
        f"✅ {bold('Email Created Successfully!')}",
        "",
        f"📧 {bold('Your Email:')} {code(session.email_address)}",
        f"⏰ {bold('Expires:')} {escape_markdown(session.expires_at or 'unknown')}",
        "",
        escape_markdown("You can now use this email for registrations. Use /messages to check your inbox."),
    ]
    return "\n".join(lines)


def render_mailbox_deleted() -> str:
    return (
        f"✅ {bold('Email Deleted Successfully!')}\n\n"
        + escape_markdown("Your previous email has been deleted. Use /create to generate a new temporary email.")
    )


def render_domain_list(domains: Mapping[object, str] | Iterable[str]) -> str:
    """Numbered list of provider domains (mapping values or a plain sequence)."""
    names = list(domains.values()) if isinstance(domains, Mapping) else list(domains)
    lines = [f"🌐 {bold('Available Domains:')}", ""]
    lines.extend(escape_markdown(f"{i}. {name}") for i, name in enumerate(names, 1))
    lines.append("")
    lines.append(escape_markdown("Use /custom <username> <domain> to create an address on one of them."))
    return "\n".join(lines)
