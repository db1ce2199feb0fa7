"""Centralized logging configuration."""

import sys
from typing import Optional

from loguru import logger

log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}::{function}:{line}</>",
        "{message}",
    )
)


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """Route loguru output to stdout and, when ``log_dir`` is set, to daily files."""
    logger.remove()  # drop the default stderr handler so records are not duplicated
    logger.add(sys.stdout, format=log_format, level=level)

    if log_dir:
        logger.add(
            f"{log_dir}/{{time:YYYY-MM-DD}}.log",
            format=log_format,
            level=level,
            rotation="1 day",
            retention="30 days",
            compression="zip",
            enqueue=True,
        )
