"""Pfad-Auflösung für Disk Report.

Die Config liegt im Benutzer-Datenverzeichnis
(macOS: ~/Library/Application Support/Disk Report/, sonst ~/.config/disk-report/).
"""

import os
import sys
from pathlib import Path

APP_NAME = "Disk Report"
APP_SLUG = "disk-report"
HOME_ENV = "DISK_REPORT_HOME"


def get_data_dir() -> Path:
    """Beschreibbares Verzeichnis für die Config (wird nicht automatisch angelegt)."""
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_SLUG


DATA_DIR = get_data_dir()

CONFIG_PATH = DATA_DIR / "config.json"
