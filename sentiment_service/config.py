from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from pathlib import Path

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Format tokens in a hook URL: ``%%`` is a literal percent sign, ``%s`` is the
# record-id slot. ``%v`` is accepted as a slot for older configuration files.
URL_TOKEN_RE = re.compile(r"%([%sv])")


def count_url_slots(template: str) -> int:
    return sum(1 for match in URL_TOKEN_RE.finditer(template) if match.group(1) != "%")


class ConfigError(Exception):
    """Raised when the hook configuration cannot be loaded or is invalid."""


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Hook configuration: a file path or an http(s) URL
    config_path: str = "./config.json"
    hook_timeout_seconds: float = 30.0

    # Scoring
    scoring_backend: str = "lexicon"  # "lexicon" or "claude"
    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()


class HookConfig(BaseModel):
    """One entry of the ``hooks`` map in the service configuration."""

    url: str
    headers: dict[str, list[str]] = Field(default_factory=dict)
    key: str = ""
    timed: bool = False

    @field_validator("url")
    @classmethod
    def _single_slot(cls, value: str) -> str:
        slots = count_url_slots(value)
        if slots != 1:
            raise ValueError(
                f"hook url must contain exactly one %s slot for the record id, found {slots}"
            )
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _listify_headers(cls, value: object) -> object:
        # Accept {"Authorization": "Bearer x"} as shorthand for a one-item list.
        if isinstance(value, dict):
            return {name: [v] if isinstance(v, str) else v for name, v in value.items()}
        return value


class ServiceConfig(BaseModel):
    """Hook configuration document (``config.json``)."""

    port: int | None = None
    hooks: dict[str, HookConfig] = Field(default_factory=dict)
    default_hook: str = Field(default="", alias="defaultHook")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _default_hook_exists(self) -> ServiceConfig:
        if self.default_hook and self.default_hook not in self.hooks:
            raise ValueError(f"defaultHook {self.default_hook!r} is not a configured hook")
        return self


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_service_config(location: str, timeout: float = 10.0) -> ServiceConfig:
    """Load the hook configuration from a file path or an http(s) URL.

    A missing file is not an error: the service still serves ``/analyze``, it
    just has no hooks. Anything else that goes wrong raises ConfigError.

    Args:
        location: Filesystem path or ``http(s)://`` URL of the JSON document.
        timeout: Timeout in seconds for the URL variant.

    Returns:
        The validated ServiceConfig.
    """
    if _is_url(location):
        try:
            response = httpx.get(location, timeout=timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ConfigError(f"Could not fetch config from {location}: {exc}") from exc
        raw = response.text
    else:
        path = Path(location).expanduser().resolve()
        if not path.exists():
            logger.warning("Config file %s not found; starting with no hooks", path)
            return ServiceConfig()
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        return ServiceConfig.model_validate(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config at {location} is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ConfigError(f"Config at {location} is invalid: {exc}") from exc


@lru_cache(maxsize=1)
def get_service_config() -> ServiceConfig:
    """Load and cache the hook configuration named by ``settings.config_path``."""
    return load_service_config(settings.config_path, timeout=settings.hook_timeout_seconds)
