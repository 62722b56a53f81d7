"""Path discovery for curlftp.

Defines the per-user application data directory and the files kept in it.
"""

import os
import sys
from pathlib import Path


# Application name for config directories
APP_NAME = "curlftp"


def get_app_data_dir() -> Path:
    """
    Get the application data directory.

    Returns:
        Path to app data directory (created if not exists)

    Platform-specific locations:
        - Windows: %APPDATA%/curlftp
        - Linux: ~/.config/curlftp
        - macOS: ~/Library/Application Support/curlftp
    """
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    app_dir = base / APP_NAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_profiles_path() -> Path:
    """Path to the saved connection profiles JSON file."""
    return get_app_data_dir() / "profiles.json"

