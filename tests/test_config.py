"""Tests for configuration module."""

from letter_issuance.config import (
    AppConfig,
    CosmosConfig,
    ServiceBusConfig,
    Settings,
    _env,
    _env_bool,
    _env_int,
)


def test_env_returns_value(monkeypatch):
    monkeypatch.setenv("TEST_KEY", "hello")
    assert _env("TEST_KEY") == "hello"


def test_env_returns_default_when_missing(monkeypatch):
    monkeypatch.delenv("TEST_KEY", raising=False)
    assert _env("TEST_KEY", "fallback") == "fallback"


def test_env_returns_empty_string_default(monkeypatch):
    monkeypatch.delenv("TEST_KEY", raising=False)
    assert _env("TEST_KEY") == ""


def test_env_int_parses_and_falls_back(monkeypatch):
    monkeypatch.setenv("TEST_INT", "3")
    assert _env_int("TEST_INT", 1) == 3
    monkeypatch.setenv("TEST_INT", "three")
    assert _env_int("TEST_INT", 1) == 1
    monkeypatch.delenv("TEST_INT")
    assert _env_int("TEST_INT", 1) == 1


def test_env_bool(monkeypatch):
    for value in ("true", "TRUE", "1", "yes", "on"):
        monkeypatch.setenv("TEST_FLAG", value)
        assert _env_bool("TEST_FLAG") is True
    monkeypatch.setenv("TEST_FLAG", "false")
    assert _env_bool("TEST_FLAG") is False
    monkeypatch.delenv("TEST_FLAG")
    assert _env_bool("TEST_FLAG") is False


def test_app_config_is_development_true():
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "env", "development")
    assert config.is_development is True


def test_app_config_is_development_false():
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "env", "production")
    assert config.is_development is False


def test_cosmos_config_defaults(monkeypatch):
    monkeypatch.setenv("COSMOS_ENDPOINT", "https://cosmos.example.com")
    monkeypatch.setenv("COSMOS_KEY", "secret")
    monkeypatch.delenv("COSMOS_DATABASE", raising=False)
    config = CosmosConfig()
    assert config.endpoint == "https://cosmos.example.com"
    assert config.key == "secret"
    assert config.database == "letter-issuance"


def test_servicebus_config_default_topic(monkeypatch):
    monkeypatch.delenv("AZURE_SERVICEBUS_TOPIC", raising=False)
    assert ServiceBusConfig().topic_name == "letter-events"


def test_app_config_defaults(monkeypatch):
    for key in ("APP_ENV", "VERIFY_ACCESS_KEY", "VERIFY_BASE_URL", "DEFAULT_MAX_PRINTS", "DEMO_MODE"):
        monkeypatch.delenv(key, raising=False)
    config = AppConfig()
    assert config.env == "development"
    assert config.verify_access_key == ""
    assert config.verify_base_url == "http://localhost:5173/verify"
    assert config.default_max_prints == 1
    assert config.demo_mode is False


def test_app_config_reads_environment(monkeypatch):
    monkeypatch.setenv("VERIFY_ACCESS_KEY", "shared-secret")
    monkeypatch.setenv("DEFAULT_MAX_PRINTS", "2")
    monkeypatch.setenv("DEMO_MODE", "true")
    config = AppConfig()
    assert config.verify_access_key == "shared-secret"
    assert config.default_max_prints == 2
    assert config.demo_mode is True


def test_settings_composes_sections():
    settings = Settings()
    assert isinstance(settings.cosmos, CosmosConfig)
    assert isinstance(settings.app, AppConfig)
