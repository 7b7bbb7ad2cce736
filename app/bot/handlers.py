"""Command handlers for /add_product, /update_order, /start and /help.

Each handler runs one command end to end: parse, call the external
collaborators, and answer the originating chat. Every invocation sends
exactly one reply, either a confirmation or a specific error message; no
exception escapes to the dispatcher and nothing is retried.
"""

import logging
from datetime import UTC, datetime

from ..errors import ExternalServiceError, NotFoundError, ValidationError
from ..models import (
    InboundUpdate,
    Order,
    OrderStatusEvent,
    ParsedOrderUpdateCommand,
    ParsedProductCommand,
    PhotoUpdate,
    Product,
    TextUpdate,
)
from ..services.base import BotGateway, DataStore, OrderNotifier
from .messages import (
    ERROR_CAPTION_PREFIX,
    ERROR_CAPTION_REQUIRED,
    ERROR_IMAGE_DOWNLOAD,
    ERROR_IMAGE_UPLOAD,
    ERROR_ORDER_LOOKUP,
    ERROR_ORDER_NOT_FOUND,
    ERROR_ORDER_SAVE,
    ERROR_ORDER_TEXT_REQUIRED,
    ERROR_ORDER_UNEXPECTED,
    ERROR_PHOTO_REQUIRED,
    ERROR_PREFIX,
    ERROR_PRODUCT_SAVE,
    ERROR_PRODUCT_UNEXPECTED,
    ORDER_CUSTOMER_LINE,
    ORDER_FORMAT_HINT,
    ORDER_NOTIFICATION_LINE,
    ORDER_TRACKING_LINE,
    ORDER_UPDATED_HEADER,
    PRODUCT_ADDED_HEADER,
    PRODUCT_FORMAT_HINT,
    PRODUCT_ID_LINE,
    PRODUCT_IMAGE_LINE,
    PRODUCT_PRICE_LINE,
    UNKNOWN_CUSTOMER,
)
from .parser import ADD_PRODUCT_PREFIX, extension_for_mime, parse_order_update, parse_product_caption
from .types import NewProductRecord, OrderUpdateFields
from .utils import format_price, select_largest_variant

logger = logging.getLogger(__name__)


async def send_reply(gateway: BotGateway, chat_id: int, text: str) -> None:
    """Send a reply, logging delivery failures instead of raising."""
    try:
        await gateway.send_message(chat_id, text)
    except ExternalServiceError:
        logger.exception("Failed to deliver reply to chat %s", chat_id)


def format_product_added(command: ParsedProductCommand, product: Product, image_url: str) -> str:
    """Build the /add_product success message."""
    lines = [
        PRODUCT_ADDED_HEADER.format(name=command.name),
        "",
        PRODUCT_PRICE_LINE.format(price=format_price(command.price)),
        PRODUCT_ID_LINE.format(product_id=product.id),
        PRODUCT_IMAGE_LINE.format(image_url=image_url),
    ]
    return "\n".join(lines)


def format_order_updated(command: ParsedOrderUpdateCommand, order: Order, notified: bool) -> str:
    """Build the /update_order success message."""
    lines = [
        ORDER_UPDATED_HEADER.format(order_number=command.order_number, status=command.status),
        "",
        ORDER_CUSTOMER_LINE.format(customer=order.customer_email or UNKNOWN_CUSTOMER),
    ]
    if command.tracking_number:
        lines.append(ORDER_TRACKING_LINE.format(tracking_number=command.tracking_number))
    if notified:
        lines.extend(["", ORDER_NOTIFICATION_LINE])
    return "\n".join(lines)


class ProductHandler:
    """Creates a product from a photo captioned with /add_product."""

    def __init__(self, gateway: BotGateway, store: DataStore):
        self.gateway = gateway
        self.store = store

    async def handle(self, update: InboundUpdate) -> None:
        """Handle an /add_product update and reply to its chat.

        Args:
            update: Classified inbound update.
        """
        try:
            reply = await self._add_product(update)
        except Exception:
            logger.exception("Unexpected error in /add_product for chat %s", update.chat_id)
            reply = ERROR_PRODUCT_UNEXPECTED

        await send_reply(self.gateway, update.chat_id, reply)

    async def _add_product(self, update: InboundUpdate) -> str:
        if not isinstance(update, PhotoUpdate) or not update.photos:
            return ERROR_PHOTO_REQUIRED

        caption = update.caption
        if not caption or not caption.strip():
            return ERROR_CAPTION_REQUIRED
        if not ADD_PRODUCT_PREFIX.match(caption):
            return ERROR_CAPTION_PREFIX

        logger.info("Processing /add_product request from chat %s", update.chat_id)

        try:
            command = parse_product_caption(caption)
        except ValidationError as e:
            logger.info("Rejected /add_product caption from chat %s: %s", update.chat_id, e)
            return ERROR_PREFIX.format(message=e) + PRODUCT_FORMAT_HINT

        photo = select_largest_variant(update.photos)
        logger.debug("Downloading photo %s (%s bytes)", photo.file_id, photo.file_size)

        try:
            file_url = await self.gateway.get_file_url(photo.file_id)
            image = await self.gateway.download(file_url)
        except ExternalServiceError:
            logger.exception("Photo download failed for chat %s", update.chat_id)
            return ERROR_IMAGE_DOWNLOAD

        extension = extension_for_mime(photo.mime_type)

        try:
            image_url = await self.store.upload_product_image(image, extension)
        except ExternalServiceError:
            logger.exception("Image upload failed for product %r", command.name)
            return ERROR_IMAGE_UPLOAD

        record: NewProductRecord = {
            "name": command.name,
            "price": command.price,
            "description": command.description,
            "image_url": image_url,
        }

        try:
            product = await self.store.create_product(record)
        except ExternalServiceError:
            # Uploaded image stays in storage; operators reconcile from this log line.
            logger.exception(
                "Product %r was not saved, uploaded image is orphaned: %s",
                command.name,
                image_url,
            )
            return ERROR_PRODUCT_SAVE

        logger.info("Product created with ID %s", product.id)
        return format_product_added(command, product, image_url)


class OrderHandler:
    """Updates an order's status and tracking number from /update_order."""

    def __init__(self, gateway: BotGateway, store: DataStore, notifier: OrderNotifier):
        self.gateway = gateway
        self.store = store
        self.notifier = notifier

    async def handle(self, update: InboundUpdate) -> None:
        """Handle an /update_order update and reply to its chat.

        Args:
            update: Classified inbound update.
        """
        try:
            reply = await self._update_order(update)
        except Exception:
            logger.exception("Unexpected error in /update_order for chat %s", update.chat_id)
            reply = ERROR_ORDER_UNEXPECTED

        await send_reply(self.gateway, update.chat_id, reply)

    async def _update_order(self, update: InboundUpdate) -> str:
        text = update.text if isinstance(update, TextUpdate) else None
        if not text or not text.strip():
            return ERROR_ORDER_TEXT_REQUIRED

        logger.info("Processing /update_order request from chat %s", update.chat_id)

        try:
            command = parse_order_update(text)
        except ValidationError as e:
            logger.info("Rejected /update_order from chat %s: %s", update.chat_id, e)
            return ERROR_PREFIX.format(message=e) + ORDER_FORMAT_HINT

        not_found = ERROR_ORDER_NOT_FOUND.format(order_number=command.order_number)

        try:
            await self._load_order(command.order_number)
        except NotFoundError as e:
            logger.info("%s", e)
            return not_found
        except ExternalServiceError:
            logger.exception("Order lookup failed for %s", command.order_number)
            return ERROR_ORDER_LOOKUP

        fields: OrderUpdateFields = {"status": command.status}
        if command.tracking_number is not None:
            fields["tracking_number"] = command.tracking_number

        try:
            updated = await self._apply_update(command.order_number, fields)
        except NotFoundError as e:
            logger.info("%s", e)
            return not_found
        except ExternalServiceError:
            logger.exception("Order update failed for %s", command.order_number)
            return ERROR_ORDER_SAVE

        logger.info("Order %s updated to %s", command.order_number, command.status)
        notified = self._notify(updated, command)
        return format_order_updated(command, updated, notified)

    async def _load_order(self, order_number: str) -> Order:
        order = await self.store.find_order_by_number(order_number)
        if order is None:
            raise NotFoundError(f"Order {order_number} not found")
        logger.debug("Found order %s for customer %s", order_number, order.customer_email)
        return order

    async def _apply_update(self, order_number: str, fields: OrderUpdateFields) -> Order:
        updated = await self.store.update_order(order_number, fields)
        if updated is None:
            raise NotFoundError(f"Order {order_number} disappeared before it could be updated")
        return updated

    def _notify(self, order: Order, command: ParsedOrderUpdateCommand) -> bool:
        event = OrderStatusEvent(
            order=order,
            status=command.status,
            tracking_number=command.tracking_number,
            occurred_at=datetime.now(UTC),
        )
        try:
            self.notifier.order_updated(event)
        except Exception:
            logger.exception("Notification failed for order %s", order.order_number)
            return False
        return True


class StaticReplyHandler:
    """Answers a command with a fixed text (/start, /help)."""

    def __init__(self, gateway: BotGateway, text: str):
        self.gateway = gateway
        self.text = text

    async def handle(self, update: InboundUpdate) -> None:
        await send_reply(self.gateway, update.chat_id, self.text)
