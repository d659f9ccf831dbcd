"""Hilfsfunktionen – Formatierung etc."""

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB


def format_size(size_bytes: int) -> str:
    """Konvertiert Bytes in menschenlesbare Größe (Binär-Einheiten, 1 KB = 1024 B)."""
    if size_bytes < KIB:
        return f"{size_bytes} B"

    size = float(size_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= KIB
        if unit == "GB":
            return f"{size:.2f} {unit}"
        if size < KIB:
            return f"{size:.1f} {unit}"


def file_extension(name: str) -> str:
    """Liefert die kleingeschriebene Dateiendung ohne Punkt.

    Leerer String bei Dateien ohne Endung, bei Punkt-Dateien wie ``.bashrc``,
    bei einem abschließenden Punkt und bei Endungen, die kein gültiges UTF-8 sind.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    try:
        ext.encode("utf-8")
    except UnicodeEncodeError:
        return ""
    return ext.lower()


def is_representable(path: str) -> bool:
    """True wenn sich der Pfad verlustfrei als UTF-8 darstellen lässt."""
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
