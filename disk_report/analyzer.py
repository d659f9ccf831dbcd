"""Ordneranalyse – Größe, Dateianzahl, größte Datei und Dateitypen pro Verzeichnis.

Der Baum wird mit einer expliziten Arbeitsliste (Stack) statt echter Rekursion
durchlaufen; Reihenfolge und Aggregation von unten nach oben entsprechen einem
rekursiven Tiefendurchlauf, die Verzeichnistiefe belastet aber nicht den Call-Stack.
"""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator

from .config import DirectoryErrorPolicy, ReportSettings
from .errors import DirectoryUnlistable
from .model import DirectoryAggregate, ScanRegistry, ScanResult
from .utils import is_representable

logger = logging.getLogger(__name__)

Scandir = Callable[[str], Iterable[os.DirEntry]]


def sorted_scandir(path: str) -> list[os.DirEntry]:
    """os.scandir(), nach Namen sortiert – macht "zuerst gefunden" reproduzierbar."""
    with os.scandir(path) as entries:
        return sorted(entries, key=lambda e: e.name)


@dataclass
class _Frame:
    path: Path
    aggregate: DirectoryAggregate
    entries: Iterator[os.DirEntry]


def scan_directory(
    path: Path,
    registry: ScanRegistry,
    *,
    on_directory_error: DirectoryErrorPolicy = DirectoryErrorPolicy.ABORT,
    follow_symlinks: bool = True,
    register_root: bool = False,
    on_directory: Callable[[Path], None] | None = None,
    skipped: list[Path] | None = None,
    scandir: Scandir = sorted_scandir,
) -> DirectoryAggregate:
    """Aggregiert den Teilbaum unter path und trägt jedes Unterverzeichnis in registry ein.

    Das Scan-Ziel selbst landet nur mit register_root=True in der Registry.
    Ist path kein Verzeichnis, kommt ein leeres Aggregat ohne Registry-Einträge zurück.
    Nicht lesbare Dateien werden still übersprungen.

    Args:
        path: Zu scannendes Verzeichnis
        registry: Ziel für die Aggregate der Unterverzeichnisse
        on_directory_error: ABORT bricht beim ersten nicht auflistbaren Verzeichnis ab,
            SKIP_AND_WARN behandelt es als leer und protokolliert eine Warnung
        follow_symlinks: Symbolischen Links folgen (default, ohne Zykluserkennung)
        register_root: Auch das Scan-Ziel selbst eintragen
        on_directory: Callback pro aufgelistetem Verzeichnis (Fortschrittsanzeige)
        skipped: Sammelt übersprungene Verzeichnisse (nur bei SKIP_AND_WARN)
        scandir: Liefert die Einträge eines Verzeichnisses in Besuchsreihenfolge

    Returns:
        Abgeschlossenes Aggregat des Scan-Ziels

    Raises:
        DirectoryUnlistable: Bei ABORT, sobald ein Verzeichnis nicht lesbar ist.
            registry bleibt in diesem Fall unverändert.
    """
    root = Path(path)
    # Einträge erst nach erfolgreichem Scan übernehmen – bei Abbruch bleibt nichts sichtbar
    found = ScanRegistry()
    skipped_here: list[Path] = []

    def list_entries(directory: Path) -> list[os.DirEntry] | None:
        try:
            entries = list(scandir(str(directory)))
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            if on_directory_error is DirectoryErrorPolicy.ABORT:
                raise DirectoryUnlistable(directory, e.strerror or str(e)) from e
            logger.warning(f"Verzeichnis übersprungen (nicht lesbar): {directory} ({e})")
            skipped_here.append(directory)
            entries = []
        if on_directory is not None:
            on_directory(directory)
        return entries

    root_entries = list_entries(root)
    if root_entries is None:
        logger.debug(f"Kein Verzeichnis, leeres Ergebnis: {root}")
        return DirectoryAggregate().finalize()

    stack = [_Frame(root, DirectoryAggregate(), iter(root_entries))]
    while True:
        frame = stack[-1]
        entry = next(frame.entries, None)

        if entry is None:
            # Verzeichnis fertig → in Eltern-Aggregat einrechnen und registrieren
            stack.pop()
            if not stack:
                break
            stack[-1].aggregate.merge(frame.aggregate)
            _register(found, frame.path, frame.aggregate)
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
            is_file = not is_dir and entry.is_file(follow_symlinks=follow_symlinks)
        except OSError as e:
            logger.debug(f"Eintrag übersprungen: {entry.path} ({e})")
            continue

        if is_dir:
            child = Path(entry.path)
            # Verschwunden oder doch kein Verzeichnis → leerer Teilbaum
            child_entries = list_entries(child) or []
            stack.append(_Frame(child, DirectoryAggregate(), iter(child_entries)))
        elif is_file:
            try:
                size = entry.stat(follow_symlinks=follow_symlinks).st_size
            except OSError as e:
                logger.debug(f"Datei übersprungen (nicht lesbar): {entry.path} ({e})")
                continue
            frame.aggregate.add_file(Path(entry.path), size)

    if register_root:
        _register(found, root, frame.aggregate)
    else:
        frame.aggregate.finalize()

    registry.update(found)
    if skipped is not None:
        skipped.extend(skipped_here)
    return frame.aggregate


def _register(registry: ScanRegistry, path: Path, aggregate: DirectoryAggregate) -> None:
    key = str(path)
    if is_representable(key):
        registry.register(key, aggregate)
    else:
        # Summen stecken bereits im Eltern-Aggregat, nur kein eigener Eintrag
        logger.debug(f"Pfad nicht als UTF-8 darstellbar, nicht registriert: {key!r}")
        aggregate.finalize()


def analyze_folder(
    path: Path,
    settings: ReportSettings | None = None,
    on_directory: Callable[[Path], None] | None = None,
    scandir: Scandir = sorted_scandir,
) -> ScanResult:
    """Scannt path komplett und liefert Wurzel-Aggregat plus Registry.

    Raises:
        DirectoryUnlistable: Wenn ein Verzeichnis nicht lesbar ist und
            settings.on_directory_error ABORT ist.
    """
    settings = settings or ReportSettings()
    root_path = Path(path).expanduser().resolve()
    registry = ScanRegistry()
    skipped: list[Path] = []

    logger.info(f"Starte Scan: {root_path}")
    started = time.perf_counter()
    root = scan_directory(
        root_path,
        registry,
        on_directory_error=settings.on_directory_error,
        follow_symlinks=settings.follow_symlinks,
        register_root=settings.register_root,
        on_directory=on_directory,
        skipped=skipped,
        scandir=scandir,
    )
    elapsed = time.perf_counter() - started
    logger.info(
        f"Scan abgeschlossen: {root_path} – {len(registry)} Verzeichnisse, "
        f"{root.file_count} Dateien in {elapsed:.2f} s"
    )

    return ScanResult(
        root_path=root_path,
        root=root,
        registry=registry,
        skipped_directories=skipped,
        elapsed_seconds=elapsed,
    )
