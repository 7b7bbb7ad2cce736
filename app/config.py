"""Configuration management for the store bridge.

Reads every setting from environment variables (or a local ``.env`` file)
into typed pydantic-settings sections: Telegram bot credentials and webhook,
the Supabase backend store, and the HTTP server. Required values that are
missing make ``load_config`` raise ``ConfigurationError`` so the process
refuses to start before accepting traffic.
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic import ValidationError as SettingsValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

_SETTINGS_SOURCE = SettingsConfigDict(env_file=".env", extra="ignore")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BotConfig(BaseSettings):
    """Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token.
        webhook_secret: Shared secret Telegram echoes in every webhook request.
        webhook_url: Public URL registered with Telegram as the webhook.
        webhook_path: Local path the webhook endpoint is mounted on.
    """

    model_config = _SETTINGS_SOURCE

    bot_token: str = Field(..., min_length=1, validation_alias="TELEGRAM_BOT_TOKEN")
    webhook_secret: str = Field(..., min_length=1, validation_alias="TELEGRAM_WEBHOOK_SECRET")
    webhook_url: str = Field(..., min_length=1, validation_alias="TELEGRAM_WEBHOOK_URL")
    webhook_path: str = Field(default="/api/webhook", validation_alias="WEBHOOK_PATH")


class StoreConfig(BaseSettings):
    """Supabase backend store configuration.

    Attributes:
        url: Supabase project URL.
        service_role_key: Service role key used for database and storage calls.
        bucket: Storage bucket that receives product images.
        image_folder: Folder inside the bucket for product images.
    """

    model_config = _SETTINGS_SOURCE

    url: str = Field(..., min_length=1, validation_alias="SUPABASE_URL")
    service_role_key: str = Field(..., min_length=1, validation_alias="SUPABASE_SERVICE_ROLE_KEY")
    bucket: str = Field(default="product_images", validation_alias="SUPABASE_BUCKET")
    image_folder: str = Field(default="products", validation_alias="SUPABASE_IMAGE_FOLDER")


class ServerConfig(BaseSettings):
    """HTTP server and runtime configuration.

    Attributes:
        port: Port the webhook server listens on.
        listen_host: Interface the webhook server binds to.
        environment: Deployment mode (development, production, test).
        log_level_override: Explicit log level, derived from environment if unset.
    """

    model_config = _SETTINGS_SOURCE

    port: int = Field(default=3000, validation_alias="PORT")
    listen_host: str = Field(default="0.0.0.0", validation_alias="BOT_LISTEN_HOST")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    log_level_override: LogLevel | None = Field(default=None, validation_alias="LOG_LEVEL")

    @field_validator("log_level_override", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept level names in any case; an empty value means unset."""
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

    @property
    def is_development(self) -> bool:
        """Whether the process runs in development mode."""
        return self.environment.lower() == "development"

    @property
    def log_level(self) -> str:
        """Effective log level name.

        Returns:
            LOG_LEVEL when set, otherwise DEBUG for development and INFO elsewhere.
        """
        if self.log_level_override:
            return self.log_level_override
        return "DEBUG" if self.is_development else "INFO"


class Config:
    """Application configuration aggregate.

    Groups the bot, store and server sections so components receive exactly
    the part they need.
    """

    def __init__(self, bot: BotConfig, store: StoreConfig, server: ServerConfig):
        self.bot = bot
        self.store = store
        self.server = server

    def as_container_dict(self) -> dict[str, Any]:
        """Plain nested dict for ``providers.Configuration.from_dict``."""
        return {
            "bot": self.bot.model_dump(),
            "store": self.store.model_dump(),
            "server": {
                **self.server.model_dump(),
                "log_level": self.server.log_level,
            },
        }


def _describe_errors(exc: SettingsValidationError) -> list[str]:
    names = []
    for error in exc.errors():
        name = ".".join(str(part) for part in error["loc"])
        if name not in names:
            names.append(name)
    return names


def load_config() -> Config:
    """Load and validate all configuration sections.

    Returns:
        Fully populated configuration.

    Raises:
        ConfigurationError: If any required variable is missing or invalid.
            The message lists every offending variable, not just the first.
    """
    sections: dict[str, BaseSettings] = {}
    problems: list[str] = []

    for name, section_cls in (("bot", BotConfig), ("store", StoreConfig), ("server", ServerConfig)):
        try:
            sections[name] = section_cls()
        except SettingsValidationError as exc:
            problems.extend(_describe_errors(exc))

    if problems:
        raise ConfigurationError(
            "Missing or invalid environment variables: " + ", ".join(problems)
        )

    return Config(**sections)  # type: ignore[arg-type]
