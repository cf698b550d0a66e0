"""Chat channels."""

from ghostmail.channels.base import Action, Channel, Keyboard

__all__ = ["Action", "Channel", "Keyboard"]
