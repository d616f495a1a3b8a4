from __future__ import annotations

import logging
from logging import Logger

from config import settings


def setup_logging(level: str | None = None) -> Logger:
    """Configure the root logger for the app and the stats service."""
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("habit_calendar")
