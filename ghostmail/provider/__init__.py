"""Temporary-email provider client."""

from ghostmail.provider.client import DEFAULT_BASE_URL, GhostmailClient
from ghostmail.provider.models import Attachment, Mailbox, RawMessage

__all__ = [
    "DEFAULT_BASE_URL",
    "Attachment",
    "GhostmailClient",
    "Mailbox",
    "RawMessage",
]
