"""
API client modules for the remote photo endpoints.
"""

from __future__ import annotations

from photofinder.api.http_client import HTTPClient


__all__ = [
    "HTTPClient",
]
