"""
Runtime configuration for the URL shortener
===========================================

Settings are read once at startup from a Java-style properties file
(``key=value`` lines, ``#`` comments) and exposed as an `AppConfig` object.
Avoid reading the file or env vars anywhere else; pass the config object instead.

File location
-------------
- explicit ``path`` argument (``--config`` on the command line)
- else the ``URLSHORTENER_CONFIG`` environment variable
- else ``application.properties`` in the working directory

Keys (defaults in parentheses)
------------------------------
- link.ttl.hours             (24)
- link.default.click.limit   (10)
- link.short.code.length     (6)
- link.short.domain          ("clck.ru")
- cleanup.interval.minutes   (5)
- notifications.enabled      (true)

A missing file means all defaults. A malformed integer logs a warning and falls
back to that key's default. Non-positive values are rejected with
`InvalidConfiguration`.
"""

import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfiguration

log = logging.getLogger("urlshortener.config")

CONFIG_ENV_VAR = "URLSHORTENER_CONFIG"
DEFAULT_CONFIG_FILE = "application.properties"


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    link_ttl_hours: int = Field(default=24, gt=0)
    default_click_limit: int = Field(default=10, gt=0)
    short_code_length: int = Field(default=6, gt=0)
    short_domain: str = "clck.ru"
    cleanup_interval_minutes: int = Field(default=5, gt=0)
    notifications_enabled: bool = True

    @field_validator("short_domain")
    @classmethod
    def _normalize_domain(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def link_ttl(self) -> timedelta:
        return timedelta(hours=self.link_ttl_hours)

    @property
    def cleanup_interval(self) -> timedelta:
        return timedelta(minutes=self.cleanup_interval_minutes)


def _get_int(values: Mapping[str, Optional[str]], key: str, default: int) -> int:
    raw = values.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        log.warning("Invalid value for %s: %r, using default: %s", key, raw, default)
        return default


def _get_bool(values: Mapping[str, Optional[str]], key: str, default: bool) -> bool:
    raw = values.get(key)
    if raw is None:
        return default
    # Same rule as java.lang.Boolean.parseBoolean
    return raw.strip().lower() == "true"


def from_properties(values: Mapping[str, Optional[str]]) -> AppConfig:
    """
    Build an AppConfig from already-parsed properties.

    Raises:
        InvalidConfiguration: If a value violates an AppConfig constraint.
    """
    try:
        return AppConfig(
            link_ttl_hours=_get_int(values, "link.ttl.hours", 24),
            default_click_limit=_get_int(values, "link.default.click.limit", 10),
            short_code_length=_get_int(values, "link.short.code.length", 6),
            short_domain=values.get("link.short.domain") or "clck.ru",
            cleanup_interval_minutes=_get_int(values, "cleanup.interval.minutes", 5),
            notifications_enabled=_get_bool(values, "notifications.enabled", True),
        )
    except ValidationError as exc:
        raise InvalidConfiguration(f"Invalid configuration: {exc}") from exc


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load configuration from a properties file.

    Args:
        path: File to read. Falls back to $URLSHORTENER_CONFIG, then
            ./application.properties.

    Returns:
        AppConfig: Validated settings (all defaults when the file is missing).

    Raises:
        InvalidConfiguration: If a value violates an AppConfig constraint.
    """
    resolved = Path(path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)
    if not resolved.is_file():
        log.info("%s not found, using default settings", resolved)
        return AppConfig()

    values = dotenv_values(resolved, interpolate=False)
    config = from_properties(values)
    log.debug("Loaded configuration from %s: %s", resolved, config)
    return config
