"""Supabase backend store client.

Talks to the Supabase REST (PostgREST) and Storage HTTP APIs directly over
aiohttp: uploads product images, inserts product rows, and looks up and
updates orders by their order number.
"""

import logging
import uuid
from typing import Any

import aiohttp

from ..bot.types import NewProductRecord, OrderUpdateFields
from ..errors import ExternalServiceError
from ..models import Order, Product
from .http import create_session

logger = logging.getLogger(__name__)


class SupabaseStore:
    """Database and object storage operations backed by Supabase."""

    PRODUCTS_TABLE = "products"
    ORDERS_TABLE = "orders"

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        bucket: str = "product_images",
        image_folder: str = "products",
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize Supabase client.

        Args:
            base_url: Supabase project URL.
            service_role_key: Service role key sent with every request.
            bucket: Storage bucket for product images.
            image_folder: Folder inside the bucket.
            session: HTTP session, created lazily when omitted.
        """
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.image_folder = image_folder.strip("/")
        self._auth_headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
        }
        self._session = session
        self._owns_session = session is None

    # === STORAGE ===

    def public_url(self, object_path: str) -> str:
        """Public URL of an object in the image bucket."""
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{object_path}"

    async def upload_product_image(self, data: bytes, extension: str) -> str:
        """Upload an image under a fresh UUID file name.

        Args:
            data: Image bytes.
            extension: File extension without the dot, also used as content type hint.

        Returns:
            Public URL of the uploaded image.

        Raises:
            ExternalServiceError: If the upload is rejected.
        """
        object_path = f"{self.image_folder}/{uuid.uuid4()}.{extension}"
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{object_path}"
        headers = {
            **self._auth_headers,
            "Content-Type": f"image/{extension}",
            "x-upsert": "false",
        }

        await self._request("POST", url, "storage", "upload image", headers=headers, data=data)
        logger.info("Uploaded product image %s (%d bytes)", object_path, len(data))
        return self.public_url(object_path)

    # === DATABASE ===

    async def create_product(self, record: NewProductRecord) -> Product:
        """Insert a product row.

        Raises:
            ExternalServiceError: If the insert fails or returns no row.
        """
        rows = await self._request(
            "POST",
            self._table_url(self.PRODUCTS_TABLE),
            "database",
            "create product",
            headers={**self._auth_headers, "Prefer": "return=representation"},
            json=[dict(record)],
        )
        if not rows:
            raise ExternalServiceError("Failed to create product: no row returned", service="database")
        return Product.model_validate(rows[0])

    async def find_order_by_number(self, order_number: str) -> Order | None:
        """Look up an order by its order number.

        Returns:
            The order, or None if no order has this number.

        Raises:
            ExternalServiceError: If the lookup itself fails.
        """
        rows = await self._request(
            "GET",
            self._table_url(self.ORDERS_TABLE),
            "database",
            "find order",
            headers=self._auth_headers,
            params={"order_number": f"eq.{order_number}", "select": "*", "limit": "1"},
        )
        if not rows:
            return None
        return Order.model_validate(rows[0])

    async def update_order(self, order_number: str, fields: OrderUpdateFields) -> Order | None:
        """Apply a partial update to an order.

        Returns:
            The updated order, or None if no row matched.

        Raises:
            ExternalServiceError: If the update fails.
        """
        rows = await self._request(
            "PATCH",
            self._table_url(self.ORDERS_TABLE),
            "database",
            "update order",
            headers={**self._auth_headers, "Prefer": "return=representation"},
            params={"order_number": f"eq.{order_number}"},
            json=dict(fields),
        )
        if not rows:
            return None
        return Order.model_validate(rows[0])

    # === HELPERS ===

    def _table_url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = create_session()
            self._owns_session = True
        return self._session

    async def _request(
        self, method: str, url: str, service: str, action: str, **kwargs: Any
    ) -> Any:
        session = self._get_session()
        try:
            async with session.request(method, url, **kwargs) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    raise ExternalServiceError(
                        f"Failed to {action}: HTTP {response.status} - {error_text}",
                        service=service,
                    )
                if response.content_type == "application/json":
                    return await response.json()
                return None
        except aiohttp.ClientError as e:
            raise ExternalServiceError(f"Failed to {action}: {e}", service=service) from e

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
