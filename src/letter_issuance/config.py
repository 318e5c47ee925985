"""Environment-driven configuration for the letter issuance service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    raw = _env(key)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_bool(key: str) -> bool:
    return _env(key).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("COSMOS_KEY"))
    database: str = field(default_factory=lambda: _env("COSMOS_DATABASE", "letter-issuance"))


@dataclass(frozen=True)
class ServiceBusConfig:
    connection_string: str = field(
        default_factory=lambda: _env("AZURE_SERVICEBUS_CONNECTION_STRING")
    )
    topic_name: str = field(
        default_factory=lambda: _env("AZURE_SERVICEBUS_TOPIC", "letter-events")
    )


@dataclass(frozen=True)
class MonitorConfig:
    connection_string: str = field(
        default_factory=lambda: _env("APPLICATIONINSIGHTS_CONNECTION_STRING")
    )


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    secret_key: str = field(default_factory=lambda: _env("APP_SECRET_KEY"))
    verify_access_key: str = field(default_factory=lambda: _env("VERIFY_ACCESS_KEY"))
    verify_base_url: str = field(
        default_factory=lambda: _env("VERIFY_BASE_URL", "http://localhost:5173/verify")
    )
    default_max_prints: int = field(
        default_factory=lambda: _env_int("DEFAULT_MAX_PRINTS", 1)
    )
    demo_mode: bool = field(default_factory=lambda: _env_bool("DEMO_MODE"))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    servicebus: ServiceBusConfig = field(default_factory=ServiceBusConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    app: AppConfig = field(default_factory=AppConfig)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load `.env` (if present) and build the settings once per process."""
    load_dotenv()
    return Settings()
