"""Process-level plumbing."""

from ghostmail.gateway.health import HealthServer

__all__ = ["HealthServer"]
