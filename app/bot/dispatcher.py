"""Routing of inbound updates to command handlers.

The dispatcher owns an explicit, ordered table of (predicate, handler)
routes. Routes are evaluated top to bottom and the first match wins; an
update matching no route is dropped silently. Webhook payloads are
processed in background tasks, one per update, so the HTTP endpoint can
acknowledge immediately.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final

from telegram import Bot, Update

from ..models import InboundUpdate, PhotoUpdate, TextUpdate
from .messages import (
    ADD_PRODUCT_COMMAND,
    HELP_COMMAND,
    START_COMMAND,
    UPDATE_ORDER_COMMAND,
)
from .updates import inbound_from_telegram
from .utils import describe_update

logger = logging.getLogger(__name__)

UpdateHandler = Callable[[InboundUpdate], Awaitable[None]]
UpdatePredicate = Callable[[InboundUpdate], bool]

UPDATE_ORDER_PATTERN: Final[re.Pattern[str]] = re.compile(
    "^" + re.escape(UPDATE_ORDER_COMMAND), re.IGNORECASE
)
START_PATTERN: Final[re.Pattern[str]] = re.compile("^" + re.escape(START_COMMAND))
HELP_PATTERN: Final[re.Pattern[str]] = re.compile("^" + re.escape(HELP_COMMAND))


@dataclass(frozen=True)
class Route:
    """One entry of the routing table."""

    name: str
    matches: UpdatePredicate
    handler: UpdateHandler


def is_add_product(update: InboundUpdate) -> bool:
    """Photo whose trimmed caption starts with /add_product, any case."""
    if not isinstance(update, PhotoUpdate) or not update.photos or update.caption is None:
        return False
    return update.caption.strip().lower().startswith(ADD_PRODUCT_COMMAND)


def text_matches(pattern: re.Pattern[str]) -> UpdatePredicate:
    """Predicate for text updates whose text matches ``pattern`` at the start."""

    def predicate(update: InboundUpdate) -> bool:
        return isinstance(update, TextUpdate) and pattern.match(update.text) is not None

    return predicate


def build_routes(
    product_handler: Any,
    order_handler: Any,
    start_handler: Any,
    help_handler: Any,
) -> tuple[Route, ...]:
    """Build the routing table in precedence order.

    Args:
        product_handler: Handler for photos captioned with /add_product.
        order_handler: Handler for /update_order text.
        start_handler: Handler for /start.
        help_handler: Handler for /help.

    Returns:
        Routes in the order they are evaluated.
    """
    return (
        Route("add_product", is_add_product, product_handler.handle),
        Route("update_order", text_matches(UPDATE_ORDER_PATTERN), order_handler.handle),
        Route("start", text_matches(START_PATTERN), start_handler.handle),
        Route("help", text_matches(HELP_PATTERN), help_handler.handle),
    )


class UpdateDispatcher:
    """Routes updates to handlers and runs them as background tasks."""

    def __init__(self, routes: Sequence[Route], bot: Bot | None = None):
        """Initialize dispatcher.

        Args:
            routes: Ordered routing table, see ``build_routes``.
            bot: Bot attached to deserialized Telegram objects.
        """
        self.routes = tuple(routes)
        self.bot = bot
        self._tasks: set[asyncio.Task[str | None]] = set()

    @property
    def pending(self) -> int:
        """Number of updates still being processed."""
        return len(self._tasks)

    def route_for(self, update: InboundUpdate) -> Route | None:
        """Return the first route matching the update, if any."""
        for route in self.routes:
            if route.matches(update):
                return route
        return None

    async def dispatch(self, update: InboundUpdate) -> str | None:
        """Run the handler of the first matching route.

        Handler failures are logged, never raised.

        Returns:
            Name of the route that fired, None if the update was ignored.
        """
        route = self.route_for(update)
        if route is None:
            logger.debug("No route for update %s, ignoring", update.update_id)
            return None

        logger.debug("Routing update %s to %s", update.update_id, route.name)
        try:
            await route.handler(update)
        except Exception:
            logger.exception("Handler %s failed for update %s", route.name, update.update_id)
        return route.name

    def parse(self, payload: dict[str, Any]) -> InboundUpdate | None:
        """Deserialize a webhook payload and classify it."""
        telegram_update = Update.de_json(payload, self.bot)
        if telegram_update is None:
            return None
        return inbound_from_telegram(telegram_update)

    async def process(self, payload: dict[str, Any]) -> str | None:
        """Parse and dispatch one webhook payload.

        Returns:
            Name of the route that fired, None if nothing handled it.
        """
        try:
            update = self.parse(payload)
        except Exception:
            logger.exception("Could not parse update payload: %s", payload)
            return None

        if update is None:
            return None

        logger.debug("Received %s", describe_update(update))
        return await self.dispatch(update)

    def submit(self, payload: dict[str, Any]) -> asyncio.Task[str | None]:
        """Process a payload in a background task and return immediately."""
        task = asyncio.create_task(self.process(payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for all in-flight updates to finish."""
        if self._tasks:
            logger.info("Waiting for %d in-flight updates", len(self._tasks))
            await asyncio.gather(*self._tasks, return_exceptions=True)
