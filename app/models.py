"""Data models for the store bridge.

Defines Pydantic models for inbound Telegram updates after they have been
classified at the webhook boundary, the records produced by the command
parser, and the product/order rows exchanged with the backend store.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Sender(BaseModel):
    """Telegram user who sent an update.

    Attributes:
        id: Telegram user ID.
        username: Public username without the leading @, if any.
        first_name: First name shown by Telegram.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    username: str | None = None
    first_name: str | None = None

    @property
    def display_name(self) -> str:
        """Username if set, otherwise first name."""
        return self.username or self.first_name or str(self.id)


class PhotoVariant(BaseModel):
    """One resolution of an attached image.

    Attributes:
        file_id: Telegram file identifier used to resolve a download URL.
        file_unique_id: Stable identifier across bots.
        width: Width in pixels.
        height: Height in pixels.
        file_size: Reported size in bytes, None when Telegram omits it.
        mime_type: Declared MIME type. Telegram photos never declare one,
            images sent as documents do.
    """

    model_config = ConfigDict(frozen=True)

    file_id: str
    file_unique_id: str | None = None
    width: int = 0
    height: int = 0
    file_size: int | None = None
    mime_type: str | None = None


class TextUpdate(BaseModel):
    """Inbound message carrying text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    update_id: int
    chat_id: int
    sender: Sender | None = None
    text: str
    timestamp: datetime


class PhotoUpdate(BaseModel):
    """Inbound message carrying an image and an optional caption.

    Attributes:
        photos: Image variants in the order the platform sent them.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["photo"] = "photo"
    update_id: int
    chat_id: int
    sender: Sender | None = None
    caption: str | None = None
    photos: tuple[PhotoVariant, ...] = ()
    timestamp: datetime


InboundUpdate = TextUpdate | PhotoUpdate


class ParsedProductCommand(BaseModel):
    """Product details extracted from an /add_product caption.

    Attributes:
        name: Product name, never empty.
        price: Non-negative price.
        description: Description text, None when the key was absent.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: str | None = None


class ParsedOrderUpdateCommand(BaseModel):
    """Order changes extracted from an /update_order message.

    Attributes:
        order_number: Order key, first positional token.
        status: New status, second positional token.
        tracking_number: Value of the first tracking= token, None if absent.
    """

    model_config = ConfigDict(frozen=True)

    order_number: str = Field(min_length=1)
    status: str = Field(min_length=1)
    tracking_number: str | None = None


class Product(BaseModel):
    """Product row as returned by the store after creation."""

    model_config = ConfigDict(extra="ignore")

    id: int | str
    created_at: datetime | None = None
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None


class Order(BaseModel):
    """Order row as stored in the backend.

    Attributes:
        order_number: Business key used by /update_order.
        customer_email: Contact notified when the status changes.
        status: Current fulfilment status.
        tracking_number: Carrier tracking number, if any.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    created_at: datetime | None = None
    order_number: str
    customer_email: str | None = None
    status: str
    tracking_number: str | None = None


class OrderStatusEvent(BaseModel):
    """Emitted after an order update succeeded, consumed by notifiers."""

    model_config = ConfigDict(frozen=True)

    order: Order
    status: str
    tracking_number: str | None = None
    occurred_at: datetime
