"""Command-line entry point: ``python -m ghostmail [polling|webhook]``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from ghostmail.bot.handlers import GhostmailBot
from ghostmail.channels.telegram import TelegramGateway
from ghostmail.config.schema import Config, load_config
from ghostmail.gateway.health import HealthServer
from ghostmail.provider.client import GhostmailClient
from ghostmail.session.store import SessionStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ghostmail", description="GhostMail temporary-email Telegram bot")
    parser.add_argument(
        "mode",
        nargs="?",
        default="polling",
        choices=["polling", "webhook"],
        help="How to receive Telegram updates (default: polling).",
    )
    parser.add_argument("--env-file", type=Path, default=None, help="Path to a .env file.")
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    return parser


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with a stderr sink at *level*."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
               "<cyan>{name}</cyan> - <level>{message}</level>",
    )


async def run(config: Config, mode: str) -> None:
    """Wire the bot together and run until cancelled."""
    if not config.provider.api_key:
        logger.warning("Provider API key is not configured; provider calls will fail")

    provider = GhostmailClient(
        api_key=config.provider.api_key,
        base_url=config.provider.base_url,
        timeout=config.provider.timeout,
    )
    bot = GhostmailBot(provider, SessionStore(), config.render, config.delivery)

    health = None
    if config.gateway.health_port:
        health = HealthServer(config.gateway.health_host, config.gateway.health_port, mode=mode)
        await health.start()

    gateway = TelegramGateway(
        config.telegram,
        bot,
        gateway_config=config.gateway,
        send_timeout=config.delivery.send_timeout,
        health=health,
    )
    try:
        await gateway.start(mode)
    finally:
        await gateway.stop()
        if health:
            await health.stop()
        await provider.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.env_file)
    configure_logging(args.log_level or config.log_level)

    try:
        asyncio.run(run(config, args.mode))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0
