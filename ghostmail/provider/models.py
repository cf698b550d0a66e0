"""Typed views over the temporary-email provider payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Attachment:
    file: str


@dataclass(frozen=True)
class RawMessage:
    """A received email as the provider returns it. Content is raw HTML."""

    id: str
    sender: str = ""
    sender_email: str = ""
    subject: str | None = None
    content: str = ""
    received_at: str = ""
    is_seen: bool = False
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RawMessage:
        attachments = tuple(
            Attachment(file=str(a.get("file", ""))) if isinstance(a, dict) else Attachment(file=str(a))
            for a in data.get("attachments") or []
        )
        return cls(
            id=str(data.get("id", "")),
            sender=str(data.get("from") or ""),
            sender_email=str(data.get("from_email") or ""),
            subject=data.get("subject") or None,
            content=data.get("content") or "",
            received_at=str(data.get("receivedAt") or ""),
            is_seen=bool(data.get("is_seen")),
            attachments=attachments,
        )


@dataclass(frozen=True)
class Mailbox:
    """A disposable address issued by the provider."""

    email: str
    token: str
    expires_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Mailbox:
        return cls(
            email=str(data["email"]),
            token=str(data["email_token"]),
            expires_at=str(data.get("deleted_in") or ""),
        )
