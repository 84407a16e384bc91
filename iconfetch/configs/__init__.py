"""Configuration for iconfetch

Settings are layered: `default.toml`, then the TOML file of the current environment
(`development.toml`, `production.toml` or `testing.toml`), then environment variables
such as `ICONFETCH_ICONS__CACHING=true`. Switch environments with
`export ICONFETCH_ENV=production`. Default: `development`.
"""

import os
import pathlib
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

CONFIG_DIR: pathlib.Path = pathlib.Path(__file__).parent
ENV_SWITCHER: str = "ICONFETCH_ENV"
DEFAULT_ENV: str = "development"


class DeploymentSettings(BaseModel):
    """Deployment details attached to metrics and error reports."""

    canary: bool = False


class LoggingSettings(BaseModel):
    """Log format and level."""

    format: Literal["mozlog", "pretty"] = "mozlog"
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    can_propagate: bool = False


class MetricsSettings(BaseModel):
    """Prometheus metrics exposition."""

    enabled: bool = True
    path: str = "/__metrics__"


class SentrySettings(BaseModel):
    """Sentry error reporting."""

    mode: Literal["disabled", "release", "debug"] = "disabled"
    env: Literal["prod", "stage", "dev"] = "dev"
    dsn: str = ""
    traces_sample_rate: float = Field(default=0.1, ge=0, le=1)


class IconSettings(BaseModel):
    """Icon resolution and cache settings."""

    source_cache: str
    cache_duration: int = Field(default=60, ge=0)
    caching: bool = False
    max_connections: int = Field(default=100, ge=1)
    connect_timeout_sec: float = Field(default=5.0, gt=0)
    request_timeout_sec: float = Field(default=5.0, gt=0)
    # A single slow candidate holds up the whole request, so keep the bound tight.
    probe_timeout_sec: float = Field(default=8.0, gt=0, le=30.0)


class Settings(BaseSettings):
    """All iconfetch settings."""

    model_config = SettingsConfigDict(
        env_prefix="ICONFETCH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    current_env: str = DEFAULT_ENV
    deployment: DeploymentSettings = DeploymentSettings()
    logging: LoggingSettings = LoggingSettings()
    metrics: MetricsSettings = MetricsSettings()
    sentry: SentrySettings = SentrySettings()
    icons: IconSettings

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Give init kwargs, then environment variables, precedence over the TOML file of
        the current environment, and that over `default.toml`.
        """
        init_kwargs: dict[str, Any] = getattr(init_settings, "init_kwargs", {})
        current_env = init_kwargs.get("current_env") or os.environ.get(ENV_SWITCHER, DEFAULT_ENV)
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, CONFIG_DIR / f"{current_env.lower()}.toml"),
            TomlConfigSettingsSource(settings_cls, CONFIG_DIR / "default.toml"),
        )


def load_settings(current_env: str | None = None) -> Settings:
    """Load settings for an environment, `ICONFETCH_ENV` when not given."""
    current_env = current_env or os.environ.get(ENV_SWITCHER, DEFAULT_ENV)
    return Settings(current_env=current_env.lower())


settings: Settings = load_settings()
