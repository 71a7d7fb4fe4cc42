"""Centralized application configuration with schema validation.

This module is intentionally compatibility-first:
- Supports flat environment names (for example ``STREAMNOTES_LOG_LEVEL``).
- Supports nested names (for example ``LOGGING__LEVEL``) for future consistency.
- Optionally reads a local ``.env`` file before process env values.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from pathlib import Path
from threading import Lock

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_ON_EMPTY_VALUES = {"empty", "default", "throw"}


def _parse_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    return default


class LoggingSettings(BaseModel):
    """Repository-wide logging settings."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)
    override_root_handlers: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        text = str(value or "").strip().upper()
        if text in _LOG_LEVELS:
            return text
        return "INFO"


class QuerySettings(BaseModel):
    """Defaults applied to query pipelines when the caller does not choose."""

    model_config = ConfigDict(frozen=True)

    live_view: bool = Field(default=False)
    on_empty: str = Field(default="empty")
    default_value: float = Field(default=0.0)

    @field_validator("live_view", mode="before")
    @classmethod
    def _normalize_live_view(cls, value: object) -> bool:
        return _parse_bool(value, False)

    @field_validator("on_empty", mode="before")
    @classmethod
    def _normalize_on_empty(cls, value: object) -> str:
        text = str(value or "").strip().lower()
        if text in _ON_EMPTY_VALUES:
            return text
        return "empty"

    @field_validator("default_value", mode="before")
    @classmethod
    def _normalize_default_value(cls, value: object) -> float:
        if value is None or isinstance(value, bool):
            return 0.0
        text = str(value).strip()
        if not text:
            return 0.0
        try:
            parsed = float(text)
        except (TypeError, ValueError):
            return 0.0
        return parsed if math.isfinite(parsed) else 0.0


class Settings(BaseModel):
    """Top-level settings model."""

    model_config = ConfigDict(frozen=True)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    query: QuerySettings = Field(default_factory=QuerySettings)

    @classmethod
    def from_env(
        cls,
        *,
        env: Mapping[str, str] | None = None,
        env_file: str = ".env",
    ) -> Settings:
        """Build settings from `.env` then environment variables."""
        runtime_env = os.environ if env is None else env
        merged_env = _merge_env(_load_dotenv(Path(env_file)), runtime_env)
        payload = _build_payload(merged_env)
        return cls.model_validate(payload)


def _load_dotenv(path: Path) -> dict[str, str]:
    """Parse a minimal `.env` file format."""
    if not path.exists() or not path.is_file():
        return {}

    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, raw_value = line.split("=", 1)
        key_clean = key.strip()
        value = raw_value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        if key_clean:
            values[key_clean] = value
    return values


def _merge_env(dotenv_values: Mapping[str, str], runtime_env: Mapping[str, str]) -> dict[str, str]:
    """Return env map where process env overrides `.env` values."""
    merged = {str(k): str(v) for k, v in dotenv_values.items()}
    for key, value in runtime_env.items():
        merged[str(key)] = str(value)
    return merged


def _first_non_empty(env: Mapping[str, str], *keys: str) -> str | None:
    """Return the first non-empty value for the provided keys."""
    for key in keys:
        value = str(env.get(key, "")).strip()
        if value:
            return value
    return None


def _build_payload(env: Mapping[str, str]) -> dict[str, object]:
    """Build nested settings payload from env values."""
    logging_settings = {
        "level": _first_non_empty(env, "LOGGING__LEVEL", "STREAMNOTES_LOG_LEVEL"),
        "json_logs": _first_non_empty(env, "LOGGING__JSON_LOGS", "STREAMNOTES_LOG_JSON"),
        "override_root_handlers": _first_non_empty(
            env, "LOGGING__OVERRIDE_ROOT_HANDLERS", "STREAMNOTES_LOG_OVERRIDE"
        ),
    }
    query = {
        "live_view": _first_non_empty(env, "QUERY__LIVE_VIEW", "STREAMNOTES_LIVE_VIEW"),
        "on_empty": _first_non_empty(env, "QUERY__ON_EMPTY", "STREAMNOTES_ON_EMPTY"),
        "default_value": _first_non_empty(env, "QUERY__DEFAULT_VALUE", "STREAMNOTES_DEFAULT_VALUE"),
    }
    return {
        "logging": {k: v for k, v in logging_settings.items() if v is not None},
        "query": {k: v for k, v in query.items() if v is not None},
    }


_SETTINGS_LOCK = Lock()
_SETTINGS_CACHE: Settings | None = None


def get_settings(*, reload: bool = False) -> Settings:
    """Return cached settings, optionally forcing reload from env."""
    global _SETTINGS_CACHE
    with _SETTINGS_LOCK:
        if reload or _SETTINGS_CACHE is None:
            _SETTINGS_CACHE = Settings.from_env()
        return _SETTINGS_CACHE


def clear_settings_cache() -> None:
    """Clear in-process settings cache."""
    global _SETTINGS_CACHE
    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = None


__all__ = [
    "LoggingSettings",
    "QuerySettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "ValidationError",
]
