"""Disk Report – Speicherplatzanalyse pro Verzeichnis, Datei und Dateityp."""

__version__ = "1.0.0"
