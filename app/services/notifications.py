"""Customer notifications for order status changes.

The bridge does not send e-mail itself. The default notifier records the
trigger in the logs; a real mail transport can replace it through the
container without touching parsing or handler code.
"""

import logging

from ..models import OrderStatusEvent

logger = logging.getLogger(__name__)


class LoggingOrderNotifier:
    """Notifier that logs the e-mail it would send."""

    def order_updated(self, event: OrderStatusEvent) -> None:
        """Log the customer e-mail trigger for an updated order."""
        recipient = event.order.customer_email or "unknown recipient"
        logger.info(
            "Triggering email to %s for order %s. Status: %s.",
            recipient,
            event.order.order_number,
            event.status,
        )
