"""Telegram Bot API gateway.

Wraps a python-telegram-bot ``Bot`` for sending replies and resolving file
URLs, and downloads file bytes over aiohttp. Library errors are translated
into ``ExternalServiceError`` so handlers deal with a single failure type.
"""

import logging

import aiohttp
from telegram import Bot
from telegram.error import TelegramError

from ..errors import ExternalServiceError
from .http import create_session

logger = logging.getLogger(__name__)


class TelegramGateway:
    """Outbound Telegram operations used by the bridge."""

    def __init__(self, bot: Bot, session: aiohttp.ClientSession | None = None):
        """Initialize gateway.

        Args:
            bot: python-telegram-bot client, initialized by ``initialize``.
            session: HTTP session for downloads, created lazily when omitted.
        """
        self.bot = bot
        self._session = session
        self._owns_session = session is None

    async def initialize(self) -> None:
        """Initialize the underlying bot client.

        Raises:
            ExternalServiceError: If the token is rejected or Telegram is unreachable.
        """
        try:
            await self.bot.initialize()
        except TelegramError as e:
            raise ExternalServiceError(
                f"Failed to initialize bot: {e}", service="telegram"
            ) from e

    async def set_webhook(self, url: str, secret_token: str) -> None:
        """Register the public webhook URL with Telegram.

        Raises:
            ExternalServiceError: If Telegram rejects the registration.
        """
        try:
            await self.bot.set_webhook(url=url, secret_token=secret_token)
        except TelegramError as e:
            raise ExternalServiceError(f"Failed to set webhook: {e}", service="telegram") from e
        logger.info("Webhook set: %s", url)

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a plain text message.

        Raises:
            ExternalServiceError: If Telegram refuses or is unreachable.
        """
        try:
            await self.bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            raise ExternalServiceError(
                f"Failed to send message to chat {chat_id}: {e}", service="telegram"
            ) from e

    async def get_file_url(self, file_id: str) -> str:
        """Resolve a download URL for a Telegram file.

        Raises:
            ExternalServiceError: If the file cannot be resolved.
        """
        try:
            telegram_file = await self.bot.get_file(file_id)
        except TelegramError as e:
            raise ExternalServiceError(
                f"Failed to resolve file {file_id}: {e}", service="telegram"
            ) from e

        if not telegram_file.file_path:
            raise ExternalServiceError(
                f"Telegram returned no download path for file {file_id}", service="telegram"
            )
        return telegram_file.file_path

    async def download(self, url: str) -> bytes:
        """Download file content.

        Raises:
            ExternalServiceError: On any non-200 response or transport error.
        """
        session = self._get_session()
        try:
            async with session.get(url) as response:
                if response.status != 200:
                    raise ExternalServiceError(
                        f"Failed to download file: HTTP {response.status}", service="telegram"
                    )
                content = await response.read()
        except aiohttp.ClientError as e:
            raise ExternalServiceError(f"Failed to download file: {e}", service="telegram") from e

        logger.debug("Downloaded %d bytes", len(content))
        return content

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = create_session()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the download session and shut the bot client down."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        await self.bot.shutdown()
