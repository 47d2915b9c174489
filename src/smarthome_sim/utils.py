"""General utilities for the smarthome_sim package."""

from __future__ import annotations

import os
import sys

from loguru import logger

_LOGGER_CONFIGURED = False


def configure_logging(*, force: bool = False) -> None:
    """Set up the global Loguru logger with application defaults."""
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED and not force:
        return

    log_level = os.getenv("SMARTHOME_LOG_LEVEL", "WARNING")
    diagnose = os.getenv("SMARTHOME_LOG_DIAGNOSE", "false").lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        backtrace=False,
        diagnose=diagnose,
        enqueue=False,
        colorize=True,
    )

    _LOGGER_CONFIGURED = True


def format_state(on: bool) -> str:
    return "ON" if on else "OFF"


def parse_on_off(value: str) -> bool:
    """Interpret a console answer such as ``on``/``off`` or ``yes``/``no``."""
    normalized = value.strip().lower()
    if normalized in {"1", "on", "true", "yes", "y"}:
        return True
    if normalized in {"0", "off", "false", "no", "n"}:
        return False
    raise ValueError(f"Expected on/off, got '{value}'")


configure_logging()

__all__ = [
    "configure_logging",
    "format_state",
    "parse_on_off",
    "logger",
]
