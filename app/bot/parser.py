"""Command parsing for /add_product captions and /update_order messages.

Pure text-to-record functions with no I/O. Every function either returns a
fully valid record or raises ``ValidationError`` with a message that can be
shown to the user as-is, so malformed input is rejected before any external
call is made.

Caption format::

    /add_product
    Name: Vintage Jacket
    Price: 79.99
    Description: Warm.

Order update format::

    /update_order <order_number> <status> [tracking=<tracking_number>]
"""

from __future__ import annotations

import math
import re
from typing import Final

from ..errors import ValidationError
from ..models import ParsedOrderUpdateCommand, ParsedProductCommand
from .messages import ADD_PRODUCT_COMMAND, UPDATE_ORDER_COMMAND

# Telegram appends @botname to commands sent in group chats.
ADD_PRODUCT_PREFIX: Final[re.Pattern[str]] = re.compile(
    rf"^\s*{re.escape(ADD_PRODUCT_COMMAND)}(?:@\w+)?", re.IGNORECASE
)
UPDATE_ORDER_PREFIX: Final[re.Pattern[str]] = re.compile(
    rf"^\s*{re.escape(UPDATE_ORDER_COMMAND)}(?:@\w+)?", re.IGNORECASE
)

PRICE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)
TRACKING_PREFIX: Final = "tracking="

MIME_EXTENSIONS: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
DEFAULT_EXTENSION: Final = "jpg"


def strip_command(text: str, prefix: re.Pattern[str]) -> str:
    """Remove a leading command token and surrounding whitespace."""
    return prefix.sub("", text, count=1).strip()


def parse_key_values(text: str) -> dict[str, str]:
    """Collect ``key: value`` pairs from non-empty lines.

    The line is split at its first colon; keys are lower-cased, both parts
    trimmed. Lines without a colon are ignored and later keys overwrite
    earlier ones.
    """
    fields: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fields[key.strip().lower()] = value.strip()
    return fields


def parse_price(raw: str) -> float:
    """Parse a non-negative decimal price.

    Raises:
        ValidationError: If the value is not a finite base-10 number or is negative.
    """
    candidate = raw.strip()
    if not PRICE_PATTERN.fullmatch(candidate):
        raise ValidationError(f'invalid price: "{raw}". Please use a number like 29.99')

    price = float(candidate)
    if not math.isfinite(price) or price < 0:
        raise ValidationError(f'invalid price: "{raw}". Please use a number like 29.99')
    return price


def parse_product_caption(caption: str) -> ParsedProductCommand:
    """Parse an /add_product caption into a product record.

    Args:
        caption: Photo caption starting with the /add_product command.

    Returns:
        Parsed product. ``description`` is None only when the key is absent;
        an empty ``Description:`` line yields an empty string.

    Raises:
        ValidationError: If name or price is missing, or price is invalid.
    """
    fields = parse_key_values(strip_command(caption, ADD_PRODUCT_PREFIX))

    name = fields.get("name")
    if not name:
        raise ValidationError("name required")

    raw_price = fields.get("price")
    if not raw_price:
        raise ValidationError("price required")

    return ParsedProductCommand(
        name=name,
        price=parse_price(raw_price),
        description=fields.get("description"),
    )


def parse_order_update(text: str) -> ParsedOrderUpdateCommand:
    """Parse an /update_order message.

    The first two whitespace-separated tokens are the order number and the
    status. The first later token starting with ``tracking=`` (prefix matched
    case-insensitively) supplies the tracking number verbatim. Any other
    trailing tokens are ignored.

    Args:
        text: Message text starting with the /update_order command.

    Returns:
        Parsed order update.

    Raises:
        ValidationError: If fewer than two tokens follow the command.
    """
    arguments = strip_command(text, UPDATE_ORDER_PREFIX)
    if not arguments:
        raise ValidationError("order number and status required")

    tokens = arguments.split()
    if len(tokens) < 2:
        raise ValidationError("order number and status required")

    order_number, status = tokens[0], tokens[1]

    tracking_number = None
    for token in tokens[2:]:
        if token[: len(TRACKING_PREFIX)].lower() == TRACKING_PREFIX:
            tracking_number = token[len(TRACKING_PREFIX):]
            break

    if not order_number:
        raise ValidationError("order number required")
    if not status:
        raise ValidationError("status required")

    return ParsedOrderUpdateCommand(
        order_number=order_number,
        status=status,
        tracking_number=tracking_number,
    )


def extension_for_mime(mime_type: str | None) -> str:
    """Map an image MIME type to a file extension, defaulting to jpg."""
    if not mime_type:
        return DEFAULT_EXTENSION
    base_type = mime_type.split(";", 1)[0].strip().lower()
    return MIME_EXTENSIONS.get(base_type, DEFAULT_EXTENSION)
