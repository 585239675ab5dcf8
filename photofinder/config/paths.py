"""Path-related configuration and environment detection."""

from __future__ import annotations

import os
from pathlib import Path


# Environment detection
IS_DOCKER = os.getenv("DOCKER_ENV") == "1" or os.path.exists("/.dockerenv")

# Base Paths - environment-specific resolution
if IS_DOCKER:
    # Docker environment: use fixed paths
    WORKING_DIR = Path("/app")
    DATA_DIR = Path("/app/data")
else:
    WORKING_DIR = Path.cwd()
    DATA_DIR = Path(os.getenv("PHOTOFINDER_DATA_DIR") or Path(WORKING_DIR, "data"))

# Static web files ship inside the package, so a regular install serves them too
WEB_DIR = Path(__file__).parent.parent / "web"

# Persistent storage paths - use DATA_DIR for Docker compatibility
LOGS_DIR = Path(DATA_DIR, "logs")
LOG_PATH = Path(LOGS_DIR, "photofinder.log")
SETTINGS_PATH = Path(DATA_DIR, "settings.json")


def ensure_data_dirs() -> None:
    """Create the data and log directories if they don't exist yet."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
