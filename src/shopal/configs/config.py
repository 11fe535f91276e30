"""Configuration management using pydantic-settings.

**Not a singleton** -- each call to ``get_app_config()`` builds a fresh
``AppConfig`` so one request never sees another request's overrides and
tests can swap configuration through ``app.dependency_overrides``.

Priority order (highest first):

1. Init kwargs (explicit ``AppConfig(...)`` arguments)
2. Environment variables (``SHOPAL_`` prefix, ``__`` nesting)
3. Platform environment variables (``SHOPIFY_STORE_DOMAIN``,
   ``SHOPIFY_STOREFRONT_TOKEN``, ``AI_MODEL``, ``OPENAI_API_KEY``)
4. ``.env`` dotenv file
5. Static YAML (``configs/config.yaml``)
6. File secrets
7. Field defaults
"""

import os
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import (
    ChatConfig,
    CompletionConfig,
    LoggingConfig,
    ShopConfig,
    TracingConfig,
)

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"  # Nested environment variable delimiter
ENV_PREFIX = "SHOPAL_"

DEFAULT_ENCODING = "utf-8"

# Unprefixed variables provisioned by the hosting platform.
# env var name -> (section, field)
PLATFORM_ENV_VARS: dict[str, tuple[str, str]] = {
    "SHOPIFY_STORE_DOMAIN": ("shop", "domain"),
    "SHOPIFY_STOREFRONT_TOKEN": ("shop", "storefront_token"),
    "AI_MODEL": ("completion", "model"),
    "OPENAI_API_KEY": ("completion", "api_key"),
}


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    shop: ShopConfig = Field(
        default_factory=ShopConfig,
        description="Storefront product search backend",
    )

    completion: CompletionConfig = Field(
        default_factory=CompletionConfig,
        description="Chat completion backend",
    )

    chat: ChatConfig = Field(
        default_factory=ChatConfig,
        description="Body parsing and prompt rendering options",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="OpenTelemetry tracing configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            _PlatformEnvSettingsSource(settings_cls),
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


class _PlatformEnvSettingsSource(PydanticBaseSettingsSource):
    """Maps the platform's unprefixed env vars onto nested config fields."""

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        # Values are assembled per section in __call__.
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data: dict[str, dict[str, str]] = {}
        for env_name, (section, key) in PLATFORM_ENV_VARS.items():
            value = os.environ.get(env_name)
            if value:
                data.setdefault(section, {})[key] = value
        return data


def get_app_config() -> AppConfig:
    """Get the application configuration (fresh instance per call)."""
    return AppConfig()
