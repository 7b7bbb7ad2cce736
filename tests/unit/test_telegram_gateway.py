"""Tests for the Telegram gateway error translation and file downloads."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from telegram.error import BadRequest, InvalidToken, NetworkError

from app.errors import ExternalServiceError
from app.services.telegram_gateway import TelegramGateway

from conftest import TEST_CHAT_ID, TEST_IMAGE_BYTES


@pytest.fixture
def bot():
    bot = MagicMock()
    bot.initialize = AsyncMock()
    bot.shutdown = AsyncMock()
    bot.set_webhook = AsyncMock()
    bot.send_message = AsyncMock()
    bot.get_file = AsyncMock()
    return bot


def _file_server() -> TestServer:
    async def photo(request: web.Request) -> web.Response:
        return web.Response(body=TEST_IMAGE_BYTES, content_type="image/jpeg")

    app = web.Application()
    app.router.add_get("/file/photo.jpg", photo)
    return TestServer(app)


class TestBotCalls:
    @pytest.mark.asyncio
    async def test_send_message(self, bot) -> None:
        await TelegramGateway(bot).send_message(TEST_CHAT_ID, "hello")

        bot.send_message.assert_awaited_once_with(chat_id=TEST_CHAT_ID, text="hello")

    @pytest.mark.asyncio
    async def test_send_failure_is_translated(self, bot) -> None:
        bot.send_message.side_effect = BadRequest("Chat not found")

        with pytest.raises(ExternalServiceError, match="Chat not found") as exc_info:
            await TelegramGateway(bot).send_message(TEST_CHAT_ID, "hello")

        assert exc_info.value.service == "telegram"

    @pytest.mark.asyncio
    async def test_get_file_url(self, bot) -> None:
        bot.get_file.return_value = MagicMock(file_path="https://api.telegram.org/file/botX/a.jpg")

        url = await TelegramGateway(bot).get_file_url("file-1")

        assert url == "https://api.telegram.org/file/botX/a.jpg"
        bot.get_file.assert_awaited_once_with("file-1")

    @pytest.mark.asyncio
    async def test_get_file_without_path(self, bot) -> None:
        bot.get_file.return_value = MagicMock(file_path=None)

        with pytest.raises(ExternalServiceError, match="no download path"):
            await TelegramGateway(bot).get_file_url("file-1")

    @pytest.mark.asyncio
    async def test_get_file_failure(self, bot) -> None:
        bot.get_file.side_effect = NetworkError("timed out")

        with pytest.raises(ExternalServiceError):
            await TelegramGateway(bot).get_file_url("file-1")

    @pytest.mark.asyncio
    async def test_set_webhook_passes_secret(self, bot) -> None:
        await TelegramGateway(bot).set_webhook("https://bridge.example/api/webhook", "s3cret")

        bot.set_webhook.assert_awaited_once_with(
            url="https://bridge.example/api/webhook", secret_token="s3cret"
        )

    @pytest.mark.asyncio
    async def test_set_webhook_failure(self, bot) -> None:
        bot.set_webhook.side_effect = BadRequest("bad webhook: HTTPS url must be provided")

        with pytest.raises(ExternalServiceError, match="Failed to set webhook"):
            await TelegramGateway(bot).set_webhook("http://insecure", "s3cret")


class TestDownload:
    @pytest.mark.asyncio
    async def test_download_bytes(self, bot) -> None:
        gateway = TelegramGateway(bot)
        async with _file_server() as server:
            content = await gateway.download(str(server.make_url("/file/photo.jpg")))
            await gateway.close()

        assert content == TEST_IMAGE_BYTES
        bot.shutdown.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_download_not_found(self, bot) -> None:
        gateway = TelegramGateway(bot)
        async with _file_server() as server:
            with pytest.raises(ExternalServiceError, match="HTTP 404"):
                await gateway.download(str(server.make_url("/file/missing.jpg")))
            await gateway.close()


@pytest.mark.asyncio
async def test_rejected_token_is_translated(bot) -> None:
    bot.initialize.side_effect = InvalidToken("Unauthorized")

    with pytest.raises(ExternalServiceError, match="Failed to initialize bot") as exc_info:
        await TelegramGateway(bot).initialize()

    assert exc_info.value.service == "telegram"
