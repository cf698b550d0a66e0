"""Bot behaviour."""

from ghostmail.bot.handlers import GhostmailBot

__all__ = ["GhostmailBot"]
