"""Rankings und JSON-Report aus einem ScanResult erzeugen."""

import json
from datetime import datetime
from pathlib import Path

from . import __version__
from .config import ReportSettings
from .model import DirectoryAggregate, LargestFile, ScanRegistry, ScanResult
from .rules import generate_tips


def rank_directories(registry: ScanRegistry, limit: int | None = None) -> list[tuple[str, DirectoryAggregate]]:
    """Verzeichnisse absteigend nach Gesamtgröße."""
    ranked = sorted(registry.items(), key=lambda item: item[1].total_bytes, reverse=True)
    return ranked[:limit] if limit is not None else ranked


def rank_largest_files(result: ScanResult, limit: int | None = None) -> list[LargestFile]:
    """Größte Dateien – je größte Datei pro Verzeichnis, ohne Duplikate, absteigend.

    Die Wurzel wird mitgezählt, damit auch Dateien direkt im Scan-Ziel auftauchen.
    """
    seen: dict[Path, LargestFile] = {}
    candidates = [result.root.largest_file] + [agg.largest_file for _, agg in result.registry.items()]
    for candidate in candidates:
        if candidate is not None and candidate.path not in seen:
            seen[candidate.path] = candidate
    ranked = sorted(seen.values(), key=lambda f: f.size, reverse=True)
    return ranked[:limit] if limit is not None else ranked


def rank_extensions(result: ScanResult, limit: int | None = None) -> list[tuple[str, int]]:
    """Belegung pro Dateityp über den ganzen Baum, absteigend.

    Das Wurzel-Aggregat enthält bereits alle Unterverzeichnisse – die Registry
    wird deshalb nicht noch einmal aufsummiert.
    """
    ranked = sorted(result.root.extension_bytes.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit] if limit is not None else ranked


def generate_report(result: ScanResult, settings: ReportSettings | None = None) -> dict:
    """Erstellt einen strukturierten Report.

    Args:
        result: Ergebnis von analyze_folder().
        settings: Umfang der Rankings und Schwellenwerte für Tipps.

    Returns:
        JSON-serialisierbarer Report als Dict.
    """
    settings = settings or ReportSettings()
    directories = rank_directories(result.registry)
    largest_files = rank_largest_files(result)

    return {
        "scan_info": {
            "scanned_path": str(result.root_path),
            "scan_date": datetime.now().isoformat(),
            "duration_seconds": round(result.elapsed_seconds, 3),
            "total_bytes": result.root.total_bytes,
            "file_count": result.root.file_count,
            "directory_count": len(result.registry),
            "skipped_directories": [str(p) for p in result.skipped_directories],
            "version": __version__,
        },
        "directories": [
            {"path": path, **aggregate.to_dict()}
            for path, aggregate in directories[: settings.top_directories]
        ],
        "largest_files": [
            {"path": str(f.path), "size_bytes": f.size}
            for f in largest_files[: settings.top_files]
        ],
        "extensions": [
            {"extension": ext, "size_bytes": size}
            for ext, size in rank_extensions(result, settings.top_extensions)
        ],
        "tips": generate_tips(directories, largest_files, settings),
    }


def save_report(report: dict, output_path: Path) -> None:
    """Schreibt den Report als JSON-Datei."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
