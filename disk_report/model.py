"""Datenstrukturen für Verzeichnis-Aggregate und die Scan-Registry."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, NamedTuple

from .errors import AggregateFinalizedError
from .utils import file_extension


class LargestFile(NamedTuple):
    """Pfad und Größe einer Datei."""

    path: Path
    size: int


@dataclass
class DirectoryAggregate:
    """Aufsummierte Statistik eines Verzeichnis-Teilbaums.

    Attributes:
        total_bytes: Summe aller Dateigrößen im Teilbaum
        file_count: Anzahl aller regulären Dateien im Teilbaum
        largest_file: Größte Datei im Teilbaum, None wenn keine Dateien
        extension_bytes: Bytes pro kleingeschriebener Endung ("" = ohne Endung)
    """

    total_bytes: int = 0
    file_count: int = 0
    largest_file: LargestFile | None = None
    extension_bytes: dict[str, int] = field(default_factory=dict)
    finalized: bool = field(default=False, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return self.file_count == 0 and self.total_bytes == 0

    def _check_mutable(self) -> None:
        if self.finalized:
            raise AggregateFinalizedError("Aggregat ist abgeschlossen und darf nicht mehr verändert werden")

    def _offer_largest(self, candidate: LargestFile) -> None:
        # Nur bei echt größer ersetzen – bei Gleichstand gewinnt die zuerst gefundene Datei
        if self.largest_file is None or candidate.size > self.largest_file.size:
            self.largest_file = candidate

    def add_file(self, path: Path, size: int) -> None:
        """Nimmt eine einzelne Datei in die Statistik auf."""
        self._check_mutable()
        path = Path(path)
        self.total_bytes += size
        self.file_count += 1
        self._offer_largest(LargestFile(path, size))
        ext = file_extension(path.name)
        self.extension_bytes[ext] = self.extension_bytes.get(ext, 0) + size

    def merge(self, child: "DirectoryAggregate") -> None:
        """Addiert das (abgeschlossene) Aggregat eines Unterverzeichnisses."""
        self._check_mutable()
        self.total_bytes += child.total_bytes
        self.file_count += child.file_count
        if child.largest_file is not None:
            self._offer_largest(child.largest_file)
        for ext, size in child.extension_bytes.items():
            self.extension_bytes[ext] = self.extension_bytes.get(ext, 0) + size

    def finalize(self) -> "DirectoryAggregate":
        self.finalized = True
        return self

    def to_dict(self) -> dict:
        largest = None
        if self.largest_file is not None:
            largest = {"path": str(self.largest_file.path), "size_bytes": self.largest_file.size}
        return {
            "size_bytes": self.total_bytes,
            "file_count": self.file_count,
            "largest_file": largest,
            "extension_bytes": dict(self.extension_bytes),
        }


class ScanRegistry:
    """Zuordnung Pfad-String → DirectoryAggregate für alle gescannten Unterverzeichnisse."""

    def __init__(self):
        self._entries: dict[str, DirectoryAggregate] = {}

    def register(self, key: str, aggregate: DirectoryAggregate) -> None:
        """Trägt ein Aggregat ein; ab hier ist es unveränderlich."""
        self._entries[key] = aggregate.finalize()

    def update(self, other: "ScanRegistry") -> None:
        for key, aggregate in other.items():
            self.register(key, aggregate)

    def get(self, key: str, default: DirectoryAggregate | None = None) -> DirectoryAggregate | None:
        return self._entries.get(key, default)

    def items(self):
        return self._entries.items()

    def __getitem__(self, key: str) -> DirectoryAggregate:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ScanRegistry({len(self._entries)} Verzeichnisse)"


@dataclass
class ScanResult:
    """Ergebnis eines kompletten Scans – Eingabe für Report und Tipps.

    Attributes:
        root_path: Aufgelöster Pfad des Scan-Ziels
        root: Aggregat des Scan-Ziels selbst
        registry: Aggregate aller Unterverzeichnisse
        skipped_directories: Übersprungene, nicht lesbare Verzeichnisse
        elapsed_seconds: Dauer des Scans
    """

    root_path: Path
    root: DirectoryAggregate
    registry: ScanRegistry
    skipped_directories: list[Path] = field(default_factory=list)
    elapsed_seconds: float = 0.0
