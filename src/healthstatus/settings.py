# Application-wide configuration helpers.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_SETTINGS_CACHE: Settings | None = None

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false).")


@dataclass(slots=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    host: str = "0.0.0.0"
    port: int = 8000
    health_path: str = "/health"
    use_json: bool = False
    enable_toggle: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables with sensible defaults."""
        host = os.getenv("HEALTHSTATUS_HOST", "0.0.0.0")
        port_raw = os.getenv("HEALTHSTATUS_PORT", "8000")
        health_path = os.getenv("HEALTHSTATUS_PATH", "/health")
        use_json_raw = os.getenv("HEALTHSTATUS_USE_JSON", "false")
        enable_toggle_raw = os.getenv("HEALTHSTATUS_ENABLE_TOGGLE", "false")
        log_level = os.getenv("HEALTHSTATUS_LOG_LEVEL", "INFO").strip().upper()

        try:
            port = int(port_raw)
        except ValueError as exc:
            raise ValueError("HEALTHSTATUS_PORT must be an integer.") from exc
        if not 0 < port < 65536:
            raise ValueError("HEALTHSTATUS_PORT must be between 1 and 65535.")

        if not health_path.startswith("/") or health_path.endswith("/"):
            raise ValueError(
                "HEALTHSTATUS_PATH must start with '/' and must not end with '/'."
            )

        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"HEALTHSTATUS_LOG_LEVEL has unknown level {log_level!r}.")

        return cls(
            host=host,
            port=port,
            health_path=health_path,
            use_json=_parse_bool("HEALTHSTATUS_USE_JSON", use_json_raw),
            enable_toggle=_parse_bool("HEALTHSTATUS_ENABLE_TOGGLE", enable_toggle_raw),
            log_level=log_level,
        )


def get_settings() -> Settings:
    """Return cached settings instance, constructing it on first access."""
    global _SETTINGS_CACHE

    if _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = Settings.from_env()

    return _SETTINGS_CACHE


def set_settings(settings: Settings | None) -> None:
    """Override the cached settings value (mainly intended for tests)."""
    global _SETTINGS_CACHE
    _SETTINGS_CACHE = settings


__all__ = ["Settings", "get_settings", "set_settings"]
