"""Application entry point.

Loads configuration, configures logging, wires the components through the
DI container and serves the webhook with aiohttp. On startup the bot client
is initialized and the webhook URL is registered with Telegram together
with the shared secret; on shutdown in-flight updates are drained and all
HTTP sessions are closed.
"""

import logging
import sys

from aiohttp import web

from .config import Config, load_config
from .core.container import Container, build_container
from .errors import ConfigurationError, ExternalServiceError
from .webhook import create_app

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(format=LOG_FORMAT, level=level, force=True)
    # httpx logs every Bot API request at INFO, including the token in the URL
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_application(config: Config, container: Container) -> web.Application:
    """Create the web application and attach lifecycle hooks.

    Args:
        config: Loaded configuration.
        container: Wired DI container.

    Returns:
        Application ready for ``web.run_app``.
    """
    gateway = container.telegram_gateway()
    store = container.store()
    app = create_app(
        dispatcher=container.dispatcher(),
        webhook_secret=config.bot.webhook_secret,
        webhook_path=config.bot.webhook_path,
    )

    async def on_startup(application: web.Application) -> None:
        await gateway.initialize()
        await gateway.set_webhook(config.bot.webhook_url, config.bot.webhook_secret)
        logger.info("Ready to receive webhooks at %s", config.bot.webhook_url)

    async def on_cleanup(application: web.Application) -> None:
        await store.close()
        await gateway.close()
        logger.info("HTTP sessions closed")

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)
    return app


def main() -> None:
    """Main application entry point.

    Exits with status 1 if configuration is incomplete or the webhook
    cannot be registered.
    """
    try:
        config = load_config()
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.critical("Refusing to start: %s", e)
        sys.exit(1)

    configure_logging(config.server.log_level)
    logger.info("Starting Telegram-Supabase bridge")
    logger.info("Environment: %s, port: %s", config.server.environment, config.server.port)

    container = build_container(config)
    app = build_application(config, container)

    try:
        web.run_app(
            app,
            host=config.server.listen_host,
            port=config.server.port,
            print=None,
        )
    except ExternalServiceError as e:
        logger.critical("Failed to start server: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
