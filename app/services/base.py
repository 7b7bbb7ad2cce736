"""Interfaces of the external collaborators used by the handlers.

Handlers depend on these protocols rather than on concrete clients, which
keeps Telegram, Supabase and notification transports swappable and lets
tests pass simple doubles.
"""

from typing import Protocol

from ..bot.types import NewProductRecord, OrderUpdateFields
from ..models import Order, OrderStatusEvent, Product


class BotGateway(Protocol):
    """Outbound capabilities of the bot platform.

    Methods:
        send_message: Send a text reply to a chat.
        get_file_url: Resolve a download URL for a file ID.
        download: Fetch raw bytes from a download URL.
    """

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a text message.

        Args:
            chat_id: Target chat.
            text: Message body.
        """
        ...

    async def get_file_url(self, file_id: str) -> str:
        """Resolve the download URL of an uploaded file.

        Args:
            file_id: Telegram file identifier.

        Returns:
            Absolute URL the file can be fetched from.
        """
        ...

    async def download(self, url: str) -> bytes:
        """Fetch a file.

        Args:
            url: URL returned by ``get_file_url``.

        Returns:
            Raw file content.
        """
        ...


class DataStore(Protocol):
    """Backend database and object storage.

    Every method raises ``ExternalServiceError`` when the backend fails.
    """

    async def upload_product_image(self, data: bytes, extension: str) -> str:
        """Store an image under a fresh random name and return its public URL."""
        ...

    async def create_product(self, record: NewProductRecord) -> Product:
        """Insert a product row and return it with its assigned ID."""
        ...

    async def find_order_by_number(self, order_number: str) -> Order | None:
        """Return the order with this number, or None if there is none."""
        ...

    async def update_order(self, order_number: str, fields: OrderUpdateFields) -> Order | None:
        """Apply a partial update and return the updated row, or None if it vanished."""
        ...


class OrderNotifier(Protocol):
    """Consumer of order status changes (customer e-mails and the like).

    Implementations must return quickly; slow transports should hand the
    event off to their own background machinery.
    """

    def order_updated(self, event: OrderStatusEvent) -> None:
        """Handle a successful order update."""
        ...
