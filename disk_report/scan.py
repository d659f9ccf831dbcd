"""Disk Report – CLI-Einstiegspunkt.

Scannt ein Verzeichnis rekursiv, berechnet Größe/Dateianzahl pro Unterverzeichnis,
die größten Dateien und die Belegung pro Dateityp und gibt Optimierungstipps aus.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from . import __version__
from .analyzer import analyze_folder
from .config import DirectoryErrorPolicy, ReportSettings, load_settings
from .errors import ConfigError, DirectoryUnlistable
from .model import ScanResult
from .paths import CONFIG_PATH
from .report import generate_report, rank_directories, rank_extensions, rank_largest_files, save_report
from .rules import generate_tips
from .utils import format_size

logger = logging.getLogger(__name__)

RANK_ICONS = {0: "🔴", 1: "🟠", 2: "🟡"}
DEFAULT_ICON = "🔹"
NO_EXTENSION_LABEL = "[ohne Endung]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="disk-report",
        description="Analysiert die Speicherbelegung eines Verzeichnisses und gibt Optimierungstipps.",
    )
    parser.add_argument(
        "path", nargs="?", default=None,
        help="Zu scannendes Verzeichnis (default: aktuelles Arbeitsverzeichnis)",
    )
    parser.add_argument("-o", "--output", help="Report zusätzlich als JSON-Datei speichern")
    parser.add_argument(
        "--config", default=str(CONFIG_PATH),
        help=f"Pfad zur JSON-Config (default: {CONFIG_PATH})",
    )
    parser.add_argument(
        "--skip-unreadable", action="store_true",
        help="Nicht lesbare Verzeichnisse überspringen statt den Scan abzubrechen",
    )
    parser.add_argument("--no-follow-symlinks", action="store_true", help="Symbolischen Links nicht folgen")
    parser.add_argument(
        "--include-root", action="store_true",
        help="Das Scan-Ziel selbst in das Verzeichnis-Ranking aufnehmen",
    )
    parser.add_argument("--top-dirs", type=int, help="Anzahl Verzeichnisse im Ranking")
    parser.add_argument("--top-files", type=int, help="Anzahl Dateien im Ranking")
    parser.add_argument("--top-types", type=int, help="Anzahl Dateitypen im Ranking")
    parser.add_argument("--no-progress", action="store_true", help="Keine Fortschrittsanzeige")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Mehr Log-Ausgaben (-vv für Debug)")
    parser.add_argument("--log-file", help="Log in Datei statt auf stderr schreiben")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbosity: int = 0, log_file: str | None = None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="%(asctime)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def settings_from_args(args: argparse.Namespace) -> ReportSettings:
    """Config-Datei laden und mit den CLI-Optionen überschreiben.

    Raises:
        ConfigError: Bei ungültiger Config oder negativen Ranking-Größen.
    """
    settings = load_settings(Path(args.config))

    overrides = {}
    if args.skip_unreadable:
        overrides["on_directory_error"] = DirectoryErrorPolicy.SKIP_AND_WARN
    if args.no_follow_symlinks:
        overrides["follow_symlinks"] = False
    if args.include_root:
        overrides["register_root"] = True
    for option, field_name in (
        ("top_dirs", "top_directories"),
        ("top_files", "top_files"),
        ("top_types", "top_extensions"),
    ):
        value = getattr(args, option)
        if value is not None:
            if value < 0:
                raise ConfigError(f"--{option.replace('_', '-')} darf nicht negativ sein")
            overrides[field_name] = value

    return dataclasses.replace(settings, **overrides)


def print_report(result: ScanResult, settings: ReportSettings) -> None:
    """Gibt Rankings und Tipps im Terminal aus."""
    directories = rank_directories(result.registry)
    largest_files = rank_largest_files(result)

    print(f"\nScan abgeschlossen in {result.elapsed_seconds:.2f} Sekunden")
    print(f"Gesamtgröße: {format_size(result.root.total_bytes)} ({result.root.file_count} Dateien)\n")

    print("TOP-VERZEICHNISSE NACH GRÖSSE:")
    print(f"   {'GRÖSSE':<15} {'DATEIEN':<12} PFAD")
    print("-" * 60)
    for i, (path, aggregate) in enumerate(directories[: settings.top_directories]):
        icon = RANK_ICONS.get(i, DEFAULT_ICON)
        print(f"{icon} {format_size(aggregate.total_bytes):<15} {aggregate.file_count:<12} {path}")

    print("\nGRÖSSTE DATEIEN:")
    print(f"{'GRÖSSE':<15} PFAD")
    print("-" * 60)
    for largest in largest_files[: settings.top_files]:
        print(f"{format_size(largest.size):<15} {largest.path}")

    print("\nBELEGUNG NACH DATEITYP:")
    print(f"{'GRÖSSE':<15} TYP")
    print("-" * 60)
    for ext, size in rank_extensions(result, settings.top_extensions):
        print(f"{format_size(size):<15} {ext or NO_EXTENSION_LABEL}")

    if result.skipped_directories:
        print(f"\nÜBERSPRUNGEN ({len(result.skipped_directories)} nicht lesbare Verzeichnisse):")
        for path in result.skipped_directories:
            print(f"  {path}")

    print("\nOPTIMIERUNGSTIPPS:")
    print("-" * 60)
    for tip in generate_tips(directories, largest_files, settings):
        print(f"• {tip}")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    scan_path = Path(args.path).resolve() if args.path else Path.cwd()

    try:
        settings = settings_from_args(args)
    except ConfigError as e:
        print(f"Fehler: {e}", file=sys.stderr)
        sys.exit(1)

    if not scan_path.is_dir():
        logger.warning(f"Kein Verzeichnis, Ergebnis ist leer: {scan_path}")

    print(f"Analysiere Speicherbelegung für: {scan_path}")
    print("Bitte warten, Scan läuft...")

    try:
        with tqdm(desc="Scanne", unit=" Ordner", leave=False, disable=args.no_progress) as bar:
            result = analyze_folder(scan_path, settings, on_directory=lambda _: bar.update(1))
    except DirectoryUnlistable as e:
        logger.error(f"Scan abgebrochen: {e}")
        print(f"Fehler: {e}", file=sys.stderr)
        sys.exit(1)

    print_report(result, settings)

    if args.output:
        output_path = Path(args.output).resolve()
        save_report(generate_report(result, settings), output_path)
        print(f"\nReport gespeichert: {output_path}")


def run_scan(volume_path: str, output_path: str | None = None, settings: ReportSettings | None = None) -> ScanResult:
    """Programmatischer Einstiegspunkt für Scans (ohne argparse/sys.exit).

    Args:
        volume_path: Zu scannendes Verzeichnis.
        output_path: Optionaler Pfad für den JSON-Report.
        settings: Scan-Optionen und Schwellenwerte, default aus ReportSettings().

    Raises:
        DirectoryUnlistable: Wenn ein Verzeichnis nicht lesbar ist (Policy ABORT).
    """
    settings = settings or ReportSettings()
    result = analyze_folder(Path(volume_path), settings)
    if output_path:
        save_report(generate_report(result, settings), Path(output_path).resolve())
    return result


if __name__ == "__main__":
    main()
