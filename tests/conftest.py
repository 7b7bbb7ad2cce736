"""Global test configuration and fixtures.

Provides shared fixtures for all test levels: environment variables for
configuration, factories for classified updates and raw Telegram payloads,
and AsyncMock doubles for the Telegram gateway and the backend store.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models import Order, PhotoUpdate, PhotoVariant, Product, Sender, TextUpdate

# Test constants
TEST_CHAT_ID = 4242
TEST_WEBHOOK_SECRET = "test-webhook-secret"
TEST_IMAGE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"
TEST_FILE_URL = "https://api.telegram.org/file/bot123:TEST/photos/file_7.jpg"
TEST_IMAGE_URL = (
    "https://example.supabase.co/storage/v1/object/public/product_images/products/abc.jpg"
)
FIXED_TIME = datetime(2025, 6, 9, 12, 30, tzinfo=UTC)

TEST_ENV = {
    "TELEGRAM_BOT_TOKEN": "123456:TEST-TOKEN",
    "TELEGRAM_WEBHOOK_SECRET": TEST_WEBHOOK_SECRET,
    "TELEGRAM_WEBHOOK_URL": "https://bridge.example.com/api/webhook",
    "SUPABASE_URL": "https://example.supabase.co",
    "SUPABASE_SERVICE_ROLE_KEY": "service-role-key",
    "ENVIRONMENT": "test",
}


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Setup test environment variables for all tests."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    for key in (
        "LOG_LEVEL",
        "PORT",
        "WEBHOOK_PATH",
        "SUPABASE_BUCKET",
        "SUPABASE_IMAGE_FOLDER",
        "BOT_LISTEN_HOST",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sender():
    return Sender(id=7, username="shopkeeper", first_name="Ann")


@pytest.fixture
def make_text_update(sender):
    """Factory for classified text updates."""

    def _make(text: str, chat_id: int = TEST_CHAT_ID) -> TextUpdate:
        return TextUpdate(
            update_id=1,
            chat_id=chat_id,
            sender=sender,
            text=text,
            timestamp=FIXED_TIME,
        )

    return _make


@pytest.fixture
def make_photo_update(sender):
    """Factory for classified photo updates.

    By default carries three variants whose largest is ``large``.
    """

    def _make(
        caption: str | None,
        photos: tuple[PhotoVariant, ...] | None = None,
        chat_id: int = TEST_CHAT_ID,
    ) -> PhotoUpdate:
        if photos is None:
            photos = (
                PhotoVariant(file_id="small", width=90, height=90, file_size=1_200),
                PhotoVariant(file_id="large", width=1280, height=1280, file_size=98_000),
                PhotoVariant(file_id="medium", width=320, height=320, file_size=14_000),
            )
        return PhotoUpdate(
            update_id=2,
            chat_id=chat_id,
            sender=sender,
            caption=caption,
            photos=photos,
            timestamp=FIXED_TIME,
        )

    return _make


@pytest.fixture
def telegram_payload():
    """Factory for raw webhook JSON as Telegram sends it."""

    def _make(update_id: int = 100, **message_fields) -> dict:
        message = {
            "message_id": 1,
            "date": int(FIXED_TIME.timestamp()),
            "chat": {"id": TEST_CHAT_ID, "type": "private"},
            "from": {"id": 7, "is_bot": False, "first_name": "Ann", "username": "shopkeeper"},
        }
        message.update(message_fields)
        return {"update_id": update_id, "message": message}

    return _make


@pytest.fixture
def sample_order():
    return Order(
        id=1,
        order_number="123",
        customer_email="jane@example.com",
        status="pending",
        tracking_number=None,
    )


@pytest.fixture
def mock_gateway():
    """Mock Telegram gateway with successful file resolution and download."""
    gateway = MagicMock()
    gateway.send_message = AsyncMock()
    gateway.get_file_url = AsyncMock(return_value=TEST_FILE_URL)
    gateway.download = AsyncMock(return_value=TEST_IMAGE_BYTES)
    return gateway


@pytest.fixture
def mock_store(sample_order):
    """Mock backend store where every call succeeds."""
    store = MagicMock()
    store.upload_product_image = AsyncMock(return_value=TEST_IMAGE_URL)
    store.create_product = AsyncMock(
        side_effect=lambda record: Product(id=42, created_at=FIXED_TIME, **record)
    )
    store.find_order_by_number = AsyncMock(return_value=sample_order)
    store.update_order = AsyncMock(
        side_effect=lambda number, fields: sample_order.model_copy(update=dict(fields))
    )
    return store


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.order_updated = MagicMock()
    return notifier


def sent_texts(gateway) -> list[str]:
    """Texts passed to ``gateway.send_message`` in call order."""
    texts = []
    for call in gateway.send_message.await_args_list:
        texts.append(call.kwargs.get("text") if "text" in call.kwargs else call.args[1])
    return texts
