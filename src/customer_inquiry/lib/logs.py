"""
Logging utilities for the Customer Inquiry UI.

Provides a simple logger factory that creates configured Python loggers
with consistent formatting across the application.
"""

import logging
import os
from pathlib import Path

# Default log level from environment or INFO
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), extracts the module name
    for cleaner log output.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    # Convert file paths to module-style names
    if "/" in name or "\\" in name:
        name = f"customer_inquiry.{Path(name).stem}"

    log = logging.getLogger(name)

    # Only configure if not already configured
    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        log.addHandler(handler)

    return log


def set_level(level: str) -> None:
    """Apply a log level to every logger created through this module."""
    resolved = getattr(logging, level.upper(), logging.INFO)
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith("customer_inquiry.") and isinstance(
            existing, logging.Logger
        ):
            existing.setLevel(resolved)
