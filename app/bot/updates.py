"""Classification of raw Telegram updates.

Converts a python-telegram-bot ``Update`` into exactly one of the bridge's
update variants at the boundary, so routing and handlers never probe the
Telegram object for optional attributes again.
"""

import logging

from telegram import Message, Update

from ..models import InboundUpdate, PhotoUpdate, PhotoVariant, Sender, TextUpdate

logger = logging.getLogger(__name__)


def _sender(message: Message) -> Sender | None:
    user = message.from_user
    if user is None:
        return None
    return Sender(id=user.id, username=user.username, first_name=user.first_name)


def _image_document_variant(message: Message) -> PhotoVariant | None:
    document = message.document
    if document is None or not document.mime_type:
        return None
    if not document.mime_type.lower().startswith("image/"):
        return None
    return PhotoVariant(
        file_id=document.file_id,
        file_unique_id=document.file_unique_id,
        file_size=document.file_size,
        mime_type=document.mime_type,
    )


def inbound_from_telegram(update: Update) -> InboundUpdate | None:
    """Classify a Telegram update.

    Args:
        update: Update as delivered by Telegram.

    Returns:
        PhotoUpdate for photos and images sent as documents, TextUpdate for
        text messages, None for anything else (edits, callbacks, stickers).
    """
    message = update.message
    if message is None:
        return None

    sender = _sender(message)

    if message.photo:
        variants = tuple(
            PhotoVariant(
                file_id=size.file_id,
                file_unique_id=size.file_unique_id,
                width=size.width,
                height=size.height,
                file_size=size.file_size,
            )
            for size in message.photo
        )
        return PhotoUpdate(
            update_id=update.update_id,
            chat_id=message.chat_id,
            sender=sender,
            caption=message.caption,
            photos=variants,
            timestamp=message.date,
        )

    document_variant = _image_document_variant(message)
    if document_variant is not None:
        return PhotoUpdate(
            update_id=update.update_id,
            chat_id=message.chat_id,
            sender=sender,
            caption=message.caption,
            photos=(document_variant,),
            timestamp=message.date,
        )

    if message.text is not None:
        return TextUpdate(
            update_id=update.update_id,
            chat_id=message.chat_id,
            sender=sender,
            text=message.text,
            timestamp=message.date,
        )

    logger.debug("Update %s carries no text or image", update.update_id)
    return None
