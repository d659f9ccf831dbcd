"""Fehlerklassen für Disk Report."""

from pathlib import Path


class DiskReportError(Exception):
    """Basisklasse aller Fehler dieses Pakets."""


class DirectoryUnlistable(DiskReportError, OSError):
    """Ein Verzeichnis konnte nicht aufgelistet werden – der Scan wird abgebrochen.

    Der ursprüngliche OSError hängt als ``__cause__`` am Fehler.
    """

    def __init__(self, path: Path, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Verzeichnis nicht lesbar: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class AggregateFinalizedError(DiskReportError, RuntimeError):
    """Ein bereits abgeschlossenes Aggregat sollte verändert werden."""


class ConfigError(DiskReportError, ValueError):
    """Ungültiger Wert in der Konfiguration."""
