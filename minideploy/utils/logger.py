"""Logging configuration."""

import logging
from typing import Optional

PACKAGE_LOGGER = "minideploy"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger that reports through the package handler."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    # Only configure if no handlers exist
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.INFO)

    return logging.getLogger(name or PACKAGE_LOGGER)


def set_debug(enabled: bool) -> None:
    """Switch the package logger between INFO and DEBUG."""
    get_logger().setLevel(logging.DEBUG if enabled else logging.INFO)
