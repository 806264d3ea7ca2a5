"""Logging configuration module."""

from __future__ import annotations

import logging

from rechtebank.config.settings import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logger according to project conventions."""

    settings = get_settings()
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
