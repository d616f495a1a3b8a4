"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "data/habits.json"
DEFAULT_STATS_PORT = 5555
DEFAULT_TIMEOUT_MS = 1500


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s instead.", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    data_path: str = DEFAULT_DATA_PATH
    stats_host: str = "localhost"
    stats_port: int = DEFAULT_STATS_PORT
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_path=os.getenv("HABIT_DATA_PATH", DEFAULT_DATA_PATH),
            stats_host=os.getenv("STATS_SERVICE_HOST", "localhost"),
            stats_port=_int_env("STATS_SERVICE_PORT", DEFAULT_STATS_PORT),
            timeout_ms=_int_env("SERVICE_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


settings = Settings.from_env()
