"""Utility modules for Photo Finder."""

from __future__ import annotations

# Async helpers
from .async_helpers import (
    format_traceback,
    task_wrapper,
)

# JSON utilities
from .json_utils import (
    json_load,
    json_save,
    merge_json,
)


__all__ = [
    # JSON utilities
    "json_load",
    "json_save",
    "merge_json",
    # Async helpers
    "format_traceback",
    "task_wrapper",
]
