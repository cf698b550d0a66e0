"""Telegram channel implementation using python-telegram-bot."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Awaitable, Callable

from loguru import logger
from telegram import BotCommand, InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from ghostmail.channels.base import Channel, Keyboard
from ghostmail.config.schema import GatewayConfig, TelegramConfig
from ghostmail.render.screens import COMMANDS

if TYPE_CHECKING:
    from ghostmail.bot.handlers import GhostmailBot
    from ghostmail.gateway.health import HealthServer


# Recoverable network error patterns
RECOVERABLE_ERRORS = {
    "Timed out",
    "Connection reset",
    "Connection refused",
    "Connection aborted",
    "Network is unreachable",
    "Host is unreachable",
    "Name or service not known",
    "Temporary failure in name resolution",
    "Connect timeout",
    "Read timeout",
    "Write timeout",
    "Socket timeout",
}


def _is_recoverable_error(err: Exception) -> bool:
    """Check if error is recoverable (network-related) and worth retrying."""
    err_str = str(err).lower()
    if isinstance(err, TelegramError):
        if any(code in err_str for code in ["429", "500", "502", "503", "504"]):
            return True
    for pattern in RECOVERABLE_ERRORS:
        if pattern.lower() in err_str:
            return True
    return False


async def _send_with_retry(bot, chat_id: int, text: str, **kwargs) -> None:
    """Send message with retry logic and exponential backoff."""
    max_retries = 3
    base_delay = 1.0  # seconds

    last_error = None
    for attempt in range(max_retries):
        try:
            await bot.send_message(chat_id=chat_id, text=text, **kwargs)
            return
        except Exception as e:
            last_error = e
            if not _is_recoverable_error(e) or attempt == max_retries - 1:
                raise
            delay = base_delay * (2 ** attempt)
            logger.warning(f"Telegram send failed (attempt {attempt + 1}/{max_retries}), retrying in {delay}s: {e}")
            await asyncio.sleep(delay)

    raise last_error


def _reply_markup(actions: Keyboard | None) -> InlineKeyboardMarkup | None:
    if not actions:
        return None
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(a.label, callback_data=a.action_id) for a in row]
        for row in actions
    ])


class TelegramChat(Channel):
    """A single Telegram chat."""

    name = "telegram"

    def __init__(self, bot, chat_id: str, send_timeout: float = 30.0):
        super().__init__(chat_id)
        self._bot = bot
        self.send_timeout = send_timeout

    async def send(self, text: str, *, formatted: bool = True, actions: Keyboard | None = None) -> None:
        # Single attempt: the delivery pipeline owns fallback.
        await self._bot.send_message(
            chat_id=int(self.chat_id),
            text=text,
            parse_mode=ParseMode.MARKDOWN_V2 if formatted else None,
            reply_markup=_reply_markup(actions),
            read_timeout=self.send_timeout,
            write_timeout=self.send_timeout,
        )

    async def notify(self, text: str, actions: Keyboard | None = None) -> None:
        try:
            await _send_with_retry(
                self._bot,
                chat_id=int(self.chat_id),
                text=text,
                reply_markup=_reply_markup(actions),
                read_timeout=self.send_timeout,
                write_timeout=self.send_timeout,
            )
        except Exception as e:
            logger.error(f"Error sending Telegram notice to {self.chat_id}: {e}")


class TelegramGateway:
    """
    Runs the bot against Telegram, by long polling or by webhook.

    Both modes feed the same ``GhostmailBot`` handlers.
    """

    name = "telegram"

    BOT_COMMANDS = [BotCommand(command, description) for command, description in COMMANDS]

    def __init__(
        self,
        config: TelegramConfig,
        bot: GhostmailBot,
        gateway_config: GatewayConfig | None = None,
        send_timeout: float = 30.0,
        health: HealthServer | None = None,
    ):
        self.config = config
        self.bot = bot
        self.gateway_config = gateway_config or GatewayConfig()
        self.send_timeout = send_timeout
        self.health = health
        self._app: Application | None = None
        self._running = False

    def chat(self, chat_id: str) -> TelegramChat:
        if not self._app:
            raise RuntimeError("Telegram gateway is not running")
        return TelegramChat(self._app.bot, chat_id, self.send_timeout)

    def build_application(self) -> Application:
        builder = Application.builder().token(self.config.token)
        if self.config.proxy:
            builder = builder.proxy(self.config.proxy).get_updates_proxy(self.config.proxy)
        app = builder.build()

        app.add_handler(CommandHandler("start", self._command(self.bot.start)))
        app.add_handler(CommandHandler("help", self._command(self.bot.help)))
        app.add_handler(CommandHandler("create", self._command(self.bot.create_email)))
        app.add_handler(CommandHandler("messages", self._command(self.bot.check_messages)))
        app.add_handler(CommandHandler("domains", self._command(self.bot.show_domains)))
        app.add_handler(CommandHandler("delete", self._command(self.bot.delete_email)))
        app.add_handler(CommandHandler("custom", self._on_custom))
        app.add_handler(CallbackQueryHandler(self._on_callback))
        app.add_error_handler(self._on_error)
        return app

    async def start(self, mode: str = "polling") -> None:
        """Start the bot and block until :meth:`stop` is called."""
        if not self.config.token:
            logger.error("Telegram bot token not configured")
            return
        if mode == "webhook" and not self.config.webhook_url:
            logger.error("Webhook mode needs telegram.webhook_url (RENDER_EXTERNAL_URL)")
            return

        self._running = True
        self._app = self.build_application()

        logger.info(f"Starting Telegram bot ({mode} mode)...")
        await self._app.initialize()
        await self._app.start()

        bot_info = await self._app.bot.get_me()
        logger.info(f"Telegram bot @{bot_info.username} connected")

        try:
            await self._app.bot.set_my_commands(self.BOT_COMMANDS)
            logger.debug("Telegram bot commands registered")
        except Exception as e:
            logger.warning(f"Failed to register bot commands: {e}")

        if mode == "webhook":
            url_path = f"webhook/{self.config.token}"
            await self._app.updater.start_webhook(
                listen=self.gateway_config.host,
                port=self.gateway_config.port,
                url_path=url_path,
                webhook_url=f"{self.config.webhook_url.rstrip('/')}/{url_path}",
                allowed_updates=["message", "callback_query"],
                drop_pending_updates=True,
            )
            logger.info(f"Webhook set to {self.config.webhook_url.rstrip('/')}/webhook/<token>, "
                        f"listening on {self.gateway_config.host}:{self.gateway_config.port}")
        else:
            await self._app.updater.start_polling(
                allowed_updates=["message", "callback_query"],
                drop_pending_updates=True,
            )

        while self._running:
            if self.health:
                self.health.heartbeat()
            await asyncio.sleep(1)

    async def stop(self) -> None:
        """Stop the Telegram bot."""
        self._running = False
        if self._app:
            logger.info("Stopping Telegram bot...")
            if self._app.updater and self._app.updater.running:
                await self._app.updater.stop()
            await self._app.stop()
            await self._app.shutdown()
            self._app = None

    # -- update callbacks ----------------------------------------------------

    def _command(
        self, action: Callable[[Channel], Awaitable[None]]
    ) -> Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]:
        async def callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            if not update.effective_chat:
                return
            await action(self.chat(str(update.effective_chat.id)))
        return callback

    async def _on_custom(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /custom <username> <domain>."""
        if not update.effective_chat:
            return
        await self.bot.custom_email(self.chat(str(update.effective_chat.id)), list(context.args or []))

    async def _on_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle inline keyboard taps."""
        query = update.callback_query
        if not query or not update.effective_chat:
            return
        try:
            await query.answer()
        except TelegramError as e:
            logger.debug(f"Could not answer callback query: {e}")
        await self.bot.handle_callback(self.chat(str(update.effective_chat.id)), query.data or "")

    async def _on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error(f"Unhandled error while processing update: {context.error}")
