"""Chat sessions."""

from ghostmail.session.store import Session, SessionStore

__all__ = ["Session", "SessionStore"]
