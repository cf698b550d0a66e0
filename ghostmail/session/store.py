"""Per-chat mailbox sessions.

A session is created on ``/create``, replaced by ``/custom`` and removed on
``/delete`` or once its expiry time has passed. Nothing is persisted: a
restart forgets every session (the provider still deletes the mailbox on
its own schedule).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from loguru import logger

from ghostmail.provider.models import Mailbox


@dataclass(frozen=True)
class Session:
    """The disposable address currently bound to a chat."""

    email_address: str
    email_token: str
    expires_at: str = ""  # as reported by the provider, shown verbatim
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_mailbox(cls, mailbox: Mailbox) -> Session:
        return cls(
            email_address=mailbox.email,
            email_token=mailbox.token,
            expires_at=mailbox.expires_at,
        )

    def expiry(self) -> datetime | None:
        """Parse ``expires_at`` when it is an ISO-8601 timestamp, else ``None``."""
        if not self.expires_at:
            return None
        try:
            parsed = datetime.fromisoformat(self.expires_at.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def is_expired(self, now: datetime | None = None) -> bool:
        expiry = self.expiry()
        if expiry is None:
            return False
        return (now or datetime.now(timezone.utc)) >= expiry


class SessionStore:
    """In-memory chat id → Session map."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def get(self, chat_id: str) -> Session | None:
        """Return the live session for *chat_id*, dropping it if it has expired."""
        session = self._sessions.get(chat_id)
        if session is not None and session.is_expired():
            logger.info(f"Session for chat {chat_id} expired")
            del self._sessions[chat_id]
            return None
        return session

    def set(self, chat_id: str, session: Session) -> None:
        self._sessions[chat_id] = session

    def delete(self, chat_id: str) -> bool:
        return self._sessions.pop(chat_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id: str) -> bool:
        return self.get(chat_id) is not None
