"""
settings.py

Environment-driven settings for running the stake overrides updater.
A ``.env`` file, if present, is loaded first without overriding variables
already set in the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .readers import DEFAULT_HTTP_TIMEOUT
from .updater import DEFAULT_POLL_INTERVAL, DEFAULT_RELOAD_PERIOD

ENV_PREFIX = "STAKE_OVERRIDES_"


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _positive_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got: {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got: {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    source: Optional[str] = None
    reload_period: float = DEFAULT_RELOAD_PERIOD
    poll_interval: float = DEFAULT_POLL_INTERVAL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = ".env") -> "Settings":
        if dotenv_path is not None and os.path.exists(dotenv_path):
            load_dotenv(dotenv_path=dotenv_path, override=False)

        return cls(
            source=_env("SOURCE"),
            reload_period=_positive_float("RELOAD_PERIOD", DEFAULT_RELOAD_PERIOD),
            poll_interval=_positive_float("POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            http_timeout=_positive_float("HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            log_level=(_env("LOG_LEVEL") or "INFO").upper(),
            log_file=_env("LOG_FILE"),
        )
