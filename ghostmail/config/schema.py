"""Configuration schema using Pydantic."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghostmail.delivery.pipeline import CHUNK_DELAY
from ghostmail.markdown.chunk import CHUNK_MAX_LENGTH
from ghostmail.markdown.sanitize import SANITIZE_MAX_LENGTH
from ghostmail.provider.client import DEFAULT_BASE_URL
from ghostmail.render.inbox import PAGE_SIZE
from ghostmail.render.keyboards import MAX_ACTION_MESSAGES


class TelegramConfig(BaseModel):
    """Telegram bot settings."""

    token: str = ""
    proxy: str | None = None
    webhook_url: str | None = None  # public base URL; required for webhook mode


class ProviderConfig(BaseModel):
    """Temporary-email provider settings."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    timeout: float = 15.0


class RenderConfig(BaseModel):
    """Inbox rendering limits."""

    sanitize_max_length: int = Field(default=SANITIZE_MAX_LENGTH, ge=100)
    chunk_max_length: int = Field(default=CHUNK_MAX_LENGTH, ge=100, le=4096)
    page_size: int = Field(default=PAGE_SIZE, ge=1)
    max_action_messages: int = Field(default=MAX_ACTION_MESSAGES, ge=0)


class DeliveryConfig(BaseModel):
    """Chunk delivery pacing and timeouts."""

    chunk_delay_ms: int = Field(default=int(CHUNK_DELAY * 1000), ge=0)
    send_timeout: float = 30.0

    @property
    def chunk_delay(self) -> float:
        return self.chunk_delay_ms / 1000


class GatewayConfig(BaseModel):
    """Process-level settings: webhook listener and health endpoint."""

    host: str = "0.0.0.0"
    port: int = 3000
    health_host: str = "0.0.0.0"
    health_port: int | None = 18791


class Config(BaseSettings):
    """Root configuration, read from ``GHOSTMAIL_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GHOSTMAIL_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    delivery: DeliveryConfig = Field(default_factory=DeliveryConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)


# Flat variable names used by existing deployments.
DEPLOYMENT_ENV = {
    "BOT_TOKEN": ("telegram", "token", str),
    "GHOSTMAIL_API_KEY": ("provider", "api_key", str),
    "GHOSTMAIL_BASE_URL": ("provider", "base_url", str),
    "RENDER_EXTERNAL_URL": ("telegram", "webhook_url", str),
    "PORT": ("gateway", "port", int),
}


def load_config(env_file: Path | None = None, environ: Mapping[str, str] | None = None) -> Config:
    """Build the config from ``GHOSTMAIL_*`` settings, then apply deployment variables."""
    config = Config(_env_file=env_file) if env_file else Config()
    environ = os.environ if environ is None else environ

    for var, (section, key, convert) in DEPLOYMENT_ENV.items():
        value = environ.get(var)
        if not value:
            continue
        setattr(getattr(config, section), key, convert(value))
    return config
