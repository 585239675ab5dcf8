"""Configuration package for Photo Finder."""

from __future__ import annotations

# Re-export all public symbols for convenience
from .constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    FILE_FORMATTER,
    FRESHNESS_WINDOW,
    GALLERY_URL,
    LOGGING_LEVELS,
    LOOKUP_URL,
    USER_AGENT,
    JsonType,
)
from .paths import (
    DATA_DIR,
    LOG_PATH,
    LOGS_DIR,
    SETTINGS_PATH,
    WEB_DIR,
    ensure_data_dirs,
)


__all__ = [
    # constants.py
    "FILE_FORMATTER",
    "LOGGING_LEVELS",
    "JsonType",
    "LOOKUP_URL",
    "GALLERY_URL",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "FRESHNESS_WINDOW",
    "USER_AGENT",
    # paths.py
    "DATA_DIR",
    "LOGS_DIR",
    "LOG_PATH",
    "SETTINGS_PATH",
    "WEB_DIR",
    "ensure_data_dirs",
]
