"""Konfiguration – Schwellenwerte und Scan-Optionen aus config.json."""

import json
import logging
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path

from .errors import ConfigError
from .paths import CONFIG_PATH
from .utils import GIB, MIB

logger = logging.getLogger(__name__)


class DirectoryErrorPolicy(str, Enum):
    """Verhalten bei Verzeichnissen, die nicht aufgelistet werden können."""

    ABORT = "abort"
    SKIP_AND_WARN = "skip"


@dataclass
class ReportSettings:
    # Report-Umfang
    top_directories: int = 15
    top_files: int = 5
    top_extensions: int = 8

    # Scan-Verhalten
    on_directory_error: DirectoryErrorPolicy = DirectoryErrorPolicy.ABORT
    follow_symlinks: bool = True
    register_root: bool = False

    # Schwellenwerte für Optimierungstipps
    large_directory_bytes: int = GIB
    large_file_bytes: int = GIB
    large_log_bytes: int = 100 * MIB
    large_media_bytes: int = 500 * MIB
    media_extensions: tuple[str, ...] = ("mp4", "mov", "avi")
    log_marker: str = "log"
    download_marker: str = "download"
    tip_directory_window: int = 5

    @classmethod
    def from_dict(cls, data: dict) -> "ReportSettings":
        """Baut Settings aus einem Config-Dict. Unbekannte Schlüssel werden ignoriert.

        Raises:
            ConfigError: Bei falschen Typen oder ungültigen Werten.
        """
        if not isinstance(data, dict):
            raise ConfigError("Config muss ein JSON-Objekt sein")

        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, raw in data.items():
            if key not in known:
                logger.info(f"Unbekannter Config-Schlüssel ignoriert: {key}")
                continue
            values[key] = _coerce(key, raw, known[key].default)
        return cls(**values)


def _coerce(key: str, raw, default):
    if isinstance(default, DirectoryErrorPolicy):
        try:
            return DirectoryErrorPolicy(str(raw).lower())
        except ValueError:
            allowed = ", ".join(p.value for p in DirectoryErrorPolicy)
            raise ConfigError(f"{key}: '{raw}' ist ungültig (erlaubt: {allowed})") from None
    if isinstance(default, bool):
        if not isinstance(raw, bool):
            raise ConfigError(f"{key}: Wahrheitswert erwartet, bekommen: {raw!r}")
        return raw
    if isinstance(default, int):
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            raise ConfigError(f"{key}: nicht-negative Ganzzahl erwartet, bekommen: {raw!r}")
        return raw
    if isinstance(default, tuple):
        if not isinstance(raw, list) or not all(isinstance(x, str) for x in raw):
            raise ConfigError(f"{key}: Liste von Strings erwartet, bekommen: {raw!r}")
        return tuple(x.lower().lstrip(".") for x in raw)
    if isinstance(default, str):
        if not isinstance(raw, str) or not raw:
            raise ConfigError(f"{key}: nicht-leerer String erwartet, bekommen: {raw!r}")
        return raw.lower()
    return raw


def load_config(path: Path = CONFIG_PATH) -> dict:
    """Liest die JSON-Config. Fehlende oder kaputte Datei → leeres Dict."""
    path = Path(path)
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Config nicht lesbar, verwende Standardwerte: {path} ({e})")
    return {}


def load_settings(path: Path = CONFIG_PATH) -> ReportSettings:
    return ReportSettings.from_dict(load_config(path))
