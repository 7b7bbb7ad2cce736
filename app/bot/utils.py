"""Bot utility functions.

Small helpers shared by the handlers: picking the image variant to store,
formatting prices for replies and describing updates for logs.
"""

from collections.abc import Sequence

from ..models import InboundUpdate, PhotoUpdate, PhotoVariant


def select_largest_variant(photos: Sequence[PhotoVariant]) -> PhotoVariant:
    """Pick the highest-resolution image variant.

    Variants are compared by reported byte size; a missing size counts as 0
    and ties keep the first variant seen.

    Args:
        photos: Non-empty sequence of variants.

    Returns:
        The largest variant.

    Raises:
        ValueError: If ``photos`` is empty.
    """
    if not photos:
        raise ValueError("no photo variants to choose from")
    return max(photos, key=lambda variant: variant.file_size or 0)


def format_price(price: float) -> str:
    """Format a price with two decimals."""
    return f"{price:.2f}"


def describe_update(update: InboundUpdate) -> str:
    """One-line summary of an update for debug logs."""
    sender = update.sender.display_name if update.sender else "unknown"
    timestamp = update.timestamp.isoformat()
    if isinstance(update, PhotoUpdate):
        caption = update.caption or "(no caption)"
        return (
            f"photo chat={update.chat_id} user={sender} caption={caption!r} "
            f"photos={len(update.photos)} at={timestamp}"
        )
    return f"text chat={update.chat_id} user={sender} text={update.text!r} at={timestamp}"
