from __future__ import annotations

import sys

from loguru import logger

from cdlkit.core.settings import settings


def configure_logging(level: str | None = None) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=str(level or settings.LOG_LEVEL).upper(),
        backtrace=False,
        diagnose=False,
        enqueue=True,
        serialize=bool(getattr(settings, "LOG_JSON", False)),
    )
