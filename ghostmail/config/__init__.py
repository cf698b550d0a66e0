"""Configuration."""

from ghostmail.config.schema import Config, load_config

__all__ = ["Config", "load_config"]
