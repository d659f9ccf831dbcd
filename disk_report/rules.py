"""Optimierungstipps – feste Schwellenwerte und Pfad-/Endungsprüfungen."""

from .config import ReportSettings
from .model import DirectoryAggregate, LargestFile
from .utils import format_size

GENERIC_TIPS = [
    "Nutze Kompression für Dateien, die regelmäßig gebraucht, aber selten geändert werden.",
    "Für Systemdateien die Bereinigungswerkzeuge des Betriebssystems verwenden.",
]


def generate_tips(
    directories: list[tuple[str, DirectoryAggregate]],
    largest_files: list[LargestFile],
    settings: ReportSettings | None = None,
) -> list[str]:
    """Leitet Tipps aus bereits sortierten Rankings ab.

    Args:
        directories: Verzeichnisse absteigend nach Größe.
        largest_files: Dateien absteigend nach Größe.
        settings: Schwellenwerte und Suchbegriffe.

    Returns:
        Liste von Hinweistexten, die allgemeinen Tipps immer am Ende.
    """
    settings = settings or ReportSettings()
    tips = []

    if directories and directories[0][1].total_bytes > settings.large_directory_bytes:
        path, aggregate = directories[0]
        tips.append(
            f"Verzeichnis '{path}' belegt {format_size(aggregate.total_bytes)} "
            f"und damit einen großen Teil des Speicherplatzes."
        )

    has_large_logs = False
    has_large_media = False
    has_downloads = False

    for path, aggregate in directories[: settings.tip_directory_window]:
        lowered = path.lower()
        if settings.log_marker in lowered and aggregate.total_bytes > settings.large_log_bytes:
            has_large_logs = True
        if settings.download_marker in lowered:
            has_downloads = True
        for ext, size in aggregate.extension_bytes.items():
            if ext in settings.media_extensions and size > settings.large_media_bytes:
                has_large_media = True

    if has_large_logs:
        tips.append("Große Log-Dateien gefunden. Regelmäßiges Aufräumen der Logs kann viel Platz freigeben.")
    if has_large_media:
        tips.append(
            "Videodateien belegen viel Platz. Eine Auslagerung auf ein externes Laufwerk "
            "oder in die Cloud lohnt sich."
        )
    if has_downloads:
        tips.append("Der Download-Ordner enthält viele Dateien. Alte und temporäre Downloads löschen.")

    if largest_files and largest_files[0].size > settings.large_file_bytes:
        biggest = largest_files[0]
        tips.append(
            f"Datei '{biggest.path}' belegt {format_size(biggest.size)}. "
            f"Löschen oder Archivieren schafft deutlich Platz."
        )

    tips.extend(GENERIC_TIPS)
    return tips
