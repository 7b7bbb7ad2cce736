"""Dependency-injection container.

Wires the Telegram gateway, Supabase store, notifier, command handlers and
dispatcher together from configuration. Every collaborator is constructed
explicitly here and passed in, so no module holds a process-wide client and
tests can build handlers with doubles instead.
"""

from dependency_injector import containers, providers
from telegram import Bot

from app.bot.dispatcher import UpdateDispatcher, build_routes
from app.bot.handlers import OrderHandler, ProductHandler, StaticReplyHandler
from app.bot.messages import HELP_MESSAGE, START_MESSAGE
from app.config import Config
from app.services.notifications import LoggingOrderNotifier
from app.services.store import SupabaseStore
from app.services.telegram_gateway import TelegramGateway


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    config = providers.Configuration()

    # External clients
    bot = providers.Singleton(Bot, token=config.bot.bot_token)
    telegram_gateway = providers.Singleton(TelegramGateway, bot=bot)
    store = providers.Singleton(
        SupabaseStore,
        base_url=config.store.url,
        service_role_key=config.store.service_role_key,
        bucket=config.store.bucket,
        image_folder=config.store.image_folder,
    )
    notifier = providers.Singleton(LoggingOrderNotifier)

    # Bot components
    product_handler = providers.Singleton(ProductHandler, gateway=telegram_gateway, store=store)
    order_handler = providers.Singleton(
        OrderHandler, gateway=telegram_gateway, store=store, notifier=notifier
    )
    start_handler = providers.Singleton(StaticReplyHandler, gateway=telegram_gateway, text=START_MESSAGE)
    help_handler = providers.Singleton(StaticReplyHandler, gateway=telegram_gateway, text=HELP_MESSAGE)
    routes = providers.Singleton(
        build_routes,
        product_handler=product_handler,
        order_handler=order_handler,
        start_handler=start_handler,
        help_handler=help_handler,
    )
    dispatcher = providers.Singleton(UpdateDispatcher, routes=routes, bot=bot)


def build_container(config: Config) -> Container:
    """Create a container populated from loaded configuration."""
    container = Container()
    container.config.from_dict(config.as_container_dict())
    return container
