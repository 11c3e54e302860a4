"""Configuration loading utilities."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from moltbook_bridge.errors import MissingCredentialError, UnsafeEndpointError

SAFE_BASE = "https://www.moltbook.com/api/v1"
DEFAULT_CHANNEL = "general"
DEFAULT_TIMEOUT_MS = 15000


class PluginConfig(BaseModel):
    """Plugin configuration as supplied by the host runtime."""

    api_base: str | None = Field(default=None, alias="apiBase")
    api_key: str | None = Field(default=None, alias="apiKey")
    default_submolt: str | None = Field(default=None, alias="defaultSubmolt")
    request_timeout_ms: float | None = Field(default=None, alias="requestTimeoutMs")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("api_base", "api_key", "default_submolt", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("request_timeout_ms", mode="before")
    @classmethod
    def _number_or_none(cls, value: Any) -> float | None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    @classmethod
    def from_host(cls, config: PluginConfig | Mapping[str, Any] | None) -> PluginConfig:
        """Accept whatever the host put in ``plugin_config``."""
        if isinstance(config, PluginConfig):
            return config
        return cls.model_validate(dict(config or {}))


class Settings(BaseSettings):
    """Environment-based settings."""

    moltbook_api_key: str = ""
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@dataclass(frozen=True)
class EffectiveConfig:
    """Configuration for a single bridged call."""

    api_base: str
    api_key: str = field(repr=False)
    default_channel: str = DEFAULT_CHANNEL
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


def is_trusted_base(api_base: str) -> bool:
    """True for the trusted prefix itself or a sub-path below it."""
    return api_base == SAFE_BASE or api_base.startswith(SAFE_BASE + "/")


def resolve_config(
    plugin_config: PluginConfig | Mapping[str, Any] | None,
    settings: Settings | None = None,
) -> EffectiveConfig:
    """Derive the effective configuration for one call.

    Nothing is cached: the host config and the environment are read every time
    so runtime changes apply to the next request.

    Raises:
        UnsafeEndpointError: if the API base is not under ``SAFE_BASE``.
        MissingCredentialError: if neither config nor environment has a key.
    """
    cfg = PluginConfig.from_host(plugin_config)

    api_base = (cfg.api_base or "").strip() or SAFE_BASE
    if not is_trusted_base(api_base):
        raise UnsafeEndpointError(f"Unsafe apiBase. Must use {SAFE_BASE}")

    settings = settings or Settings()
    api_key = (cfg.api_key or "").strip() or settings.moltbook_api_key.strip()
    if not api_key:
        raise MissingCredentialError(
            "Missing MoltBook API key (plugin config apiKey or MOLTBOOK_API_KEY)"
        )

    timeout_ms = DEFAULT_TIMEOUT_MS
    timeout = cfg.request_timeout_ms
    if timeout is not None and math.isfinite(timeout) and timeout > 0:
        timeout_ms = max(1, int(timeout))

    return EffectiveConfig(
        api_base=api_base.rstrip("/"),
        api_key=api_key,
        default_channel=(cfg.default_submolt or "").strip() or DEFAULT_CHANNEL,
        timeout_ms=timeout_ms,
    )


def load_plugin_config(config_path: str | Path) -> PluginConfig:
    """Load plugin configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return PluginConfig.from_host(data)


def get_settings() -> Settings:
    """Get environment-based settings."""
    return Settings()
