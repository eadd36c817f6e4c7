"""
Configuration settings - Infrastructure component for managing client configuration.
Uses pydantic-settings for validation and environment variable loading.
"""

from __future__ import annotations
import re
from typing import Any, Optional, Union

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "http://localhost:11434"
DEFAULT_PORT = 11434

_DURATION_RE = re.compile(r"^(-?\d+(?:\.\d+)?)\s*([smh]?)$")
_UNIT_SECONDS = {"": 1.0, "s": 1.0, "m": 60.0, "h": 3600.0}


def resolve_host(raw: Optional[str]) -> str:
    """Resolve the Ollama base URL from a flag or env value.

    Accepts:
      - 'local' / 'default' / empty -> http://localhost:11434
      - Full URL (http/https) -> used as-is
      - Bare host or host:port -> prefixed with http://, default port added
    """
    if raw is None or str(raw).strip() == "":
        return DEFAULT_HOST
    host = str(raw).strip()
    if host.lower() in {"local", "default"}:
        return DEFAULT_HOST
    if host.startswith("http://") or host.startswith("https://"):
        return host.rstrip("/")
    host = host.rstrip("/")
    if ":" not in host:
        host = f"{host}:{DEFAULT_PORT}"
    return f"http://{host}"


def parse_keep_alive(raw: Union[str, float, int]) -> float:
    """Convert a keep-alive value to seconds.

    Numbers are seconds; strings may carry an s/m/h unit ('30s', '5m', '1h').
    Negative values are passed through (the server treats them as 'forever').
    """
    if isinstance(raw, (int, float)):
        return float(raw)
    match = _DURATION_RE.match(str(raw).strip().lower())
    if not match:
        raise ValueError(f"invalid keep-alive duration: {raw!r}")
    return float(match.group(1)) * _UNIT_SECONDS[match.group(2)]


class OllamaSettings(BaseSettings):
    """Client configuration; immutable once constructed."""

    host: str = Field(DEFAULT_HOST, description="Base URL of the Ollama server")
    api_prefix: str = Field("/api", description="Path prefix joined before every endpoint")
    timeout: float = Field(30.0, gt=0, description="Seconds a single network attempt may take")
    max_retries: int = Field(3, ge=0, description="Additional attempts after a transport failure")
    retry_delay: float = Field(1.0, ge=0, description="Fixed delay between attempts, in seconds")
    default_keep_alive: float = Field(
        300.0,
        validation_alias="OLLAMA_KEEP_ALIVE",
        description="Seconds the server keeps a model loaded when a call sets no keep_alive",
    )
    allow_insecure: bool = Field(False, description="Allow insecure registries and skip TLS verification")

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_",
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @field_validator("host", mode="before")
    @classmethod
    def _normalize_host(cls, v: Any) -> str:
        host = resolve_host(v)
        try:
            httpx.URL(host)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid host {v!r}: {e}") from e
        return host

    @field_validator("default_keep_alive", mode="before")
    @classmethod
    def _parse_keep_alive(cls, v: Any) -> float:
        return parse_keep_alive(v)

    @property
    def verify_tls(self) -> bool:
        return not self.allow_insecure


# Global settings instance
_settings: Optional[OllamaSettings] = None


def get_settings() -> OllamaSettings:
    """Get global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = OllamaSettings()
    return _settings


def reload_settings(**overrides: Any) -> OllamaSettings:
    """Rebuild settings from the environment, applying explicit overrides."""
    global _settings
    _settings = OllamaSettings(**{k: v for k, v in overrides.items() if v is not None})
    return _settings
