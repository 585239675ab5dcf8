"""Core constants and type definitions for Photo Finder."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from yarl import URL


# Logging configuration
LOGGING_LEVELS = {
    0: logging.INFO,
    1: logging.DEBUG,
}
FILE_FORMATTER = logging.Formatter(
    "{asctime}.{msecs:03.0f}:\t{levelname:>7}:\t{filename}:{lineno}:\t{message}",
    style="{",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Type aliases
JsonType = dict[str, Any]

# Remote endpoints (Google Apps Script web apps)
LOOKUP_URL = URL(
    "https://script.google.com/macros/s/"
    "AKfycbzZS8EpN2rGe4HgNfZK6p8OEr8g4qRNCb3b1yuLnF1SYGVGz13ir_gksE2D4HOfUbrO/exec"
)
GALLERY_URL = URL(
    "https://script.google.com/macros/s/"
    "AKfycbwt1KLPpJyRhvBVn-NxYHckvsloYA8kClWpIYzUe5awunF_ghAwpdZaVvqy7YY1D1mbyQ/exec"
)

# Web server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

# Cached lookup table lifetime
FRESHNESS_WINDOW = timedelta(minutes=5)

USER_AGENT = "PhotoFinder/1.0 (+aiohttp)"
