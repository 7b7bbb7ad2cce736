"""aiohttp web application receiving Telegram webhook updates.

Exposes the webhook endpoint, authenticated by the shared secret Telegram
sends in the ``X-Telegram-Bot-Api-Secret-Token`` header, and a health check.
Accepted updates are handed to the dispatcher as background tasks and
acknowledged right away, so handler work never delays Telegram's delivery.
"""

import hmac
import json
import logging
from datetime import UTC, datetime

from aiohttp import web

from .bot.dispatcher import UpdateDispatcher

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"

DISPATCHER_KEY = web.AppKey("dispatcher", UpdateDispatcher)
WEBHOOK_SECRET_KEY = web.AppKey("webhook_secret", str)


def _secret_matches(received: str | None, expected: str) -> bool:
    if received is None:
        return False
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8"))


async def handle_webhook(request: web.Request) -> web.Response:
    """Authenticate a webhook call and queue its update."""
    if not _secret_matches(request.headers.get(SECRET_HEADER), request.app[WEBHOOK_SECRET_KEY]):
        logger.warning("Webhook request with invalid secret token from %s", request.remote)
        return web.json_response({"error": "Forbidden: Invalid secret token"}, status=403)

    if not request.can_read_body:
        return web.json_response({"error": "Bad Request: No update provided"}, status=400)

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return web.json_response({"error": "Bad Request: Invalid JSON body"}, status=400)

    if not isinstance(payload, dict) or not payload:
        return web.json_response({"error": "Bad Request: No update provided"}, status=400)

    logger.debug("Received webhook update %s", payload.get("update_id"))
    request.app[DISPATCHER_KEY].submit(payload)
    return web.json_response({"ok": True})


async def handle_health(request: web.Request) -> web.Response:
    """Liveness probe."""
    return web.json_response({"status": "ok", "timestamp": datetime.now(UTC).isoformat()})


async def _drain_updates(app: web.Application) -> None:
    await app[DISPATCHER_KEY].drain()


def create_app(
    dispatcher: UpdateDispatcher,
    webhook_secret: str,
    webhook_path: str = "/api/webhook",
) -> web.Application:
    """Build the web application.

    Args:
        dispatcher: Dispatcher receiving accepted updates.
        webhook_secret: Expected value of the secret token header.
        webhook_path: Path of the webhook endpoint.

    Returns:
        Configured application. In-flight updates are drained on shutdown.
    """
    app = web.Application()
    app[DISPATCHER_KEY] = dispatcher
    app[WEBHOOK_SECRET_KEY] = webhook_secret

    app.router.add_post("/" + webhook_path.lstrip("/"), handle_webhook)
    app.router.add_get("/health", handle_health)
    app.on_shutdown.append(_drain_updates)
    return app
