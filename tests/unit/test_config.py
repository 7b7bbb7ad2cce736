"""Tests for environment-driven configuration loading."""

import pytest

from app.config import ServerConfig, load_config
from app.errors import ConfigurationError


class TestLoadConfig:
    def test_loads_all_sections(self) -> None:
        config = load_config()

        assert config.bot.bot_token == "123456:TEST-TOKEN"
        assert config.bot.webhook_secret == "test-webhook-secret"
        assert config.bot.webhook_path == "/api/webhook"
        assert config.store.url == "https://example.supabase.co"
        assert config.store.bucket == "product_images"
        assert config.store.image_folder == "products"
        assert config.server.port == 3000
        assert config.server.listen_host == "0.0.0.0"

    def test_overrides_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("SUPABASE_BUCKET", "catalog")
        monkeypatch.setenv("WEBHOOK_PATH", "/hooks/telegram")

        config = load_config()

        assert config.server.port == 8080
        assert config.store.bucket == "catalog"
        assert config.bot.webhook_path == "/hooks/telegram"

    def test_every_missing_variable_is_reported(self, monkeypatch) -> None:
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN")
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config()

        message = str(exc_info.value)
        assert "TELEGRAM_BOT_TOKEN" in message
        assert "SUPABASE_SERVICE_ROLE_KEY" in message
        assert "SUPABASE_URL" not in message

    def test_empty_value_counts_as_missing(self, monkeypatch) -> None:
        monkeypatch.setenv("SUPABASE_URL", "")

        with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
            load_config()

    def test_invalid_port(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "not-a-port")

        with pytest.raises(ConfigurationError, match="PORT"):
            load_config()

    def test_container_dict_carries_effective_log_level(self) -> None:
        data = load_config().as_container_dict()

        assert data["server"]["log_level"] == "INFO"
        assert data["bot"]["bot_token"] == "123456:TEST-TOKEN"
        assert data["store"]["service_role_key"] == "service-role-key"


class TestLogLevel:
    @pytest.mark.parametrize(
        "environment, expected",
        [("development", "DEBUG"), ("Development", "DEBUG"), ("production", "INFO"), ("test", "INFO")],
    )
    def test_derived_from_environment(self, monkeypatch, environment: str, expected: str) -> None:
        monkeypatch.setenv("ENVIRONMENT", environment)

        assert ServerConfig().log_level == expected

    def test_explicit_level_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert ServerConfig().log_level == "WARNING"

    @pytest.mark.parametrize("value", ["verbose", "TRACE", "10"])
    def test_unknown_level_is_a_configuration_error(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv("LOG_LEVEL", value)

        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            load_config()

    def test_empty_level_falls_back_to_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "")

        assert load_config().server.log_level == "INFO"
