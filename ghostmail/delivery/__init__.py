"""Chunked message delivery."""

from ghostmail.delivery.pipeline import CHUNK_DELAY, DeliveryOutcome, deliver

__all__ = ["CHUNK_DELAY", "DeliveryOutcome", "deliver"]
