"""Test fixtures – In-Memory-Dateisystem mit fester Eintragsreihenfolge und echte Bäume in tmp_path."""

import os
import posixpath
from types import SimpleNamespace

import pytest

UNREADABLE = object()  # Datei, deren stat() fehlschlägt
UNLISTABLE = object()  # Verzeichnis, dessen Auflistung fehlschlägt


class FakeEntry:
    """Minimaler Ersatz für os.DirEntry."""

    def __init__(self, parent: str, name: str, node):
        self.name = name
        self.path = posixpath.join(parent, name)
        self._node = node

    def is_dir(self, follow_symlinks: bool = True) -> bool:
        return isinstance(self._node, dict) or self._node is UNLISTABLE

    def is_file(self, follow_symlinks: bool = True) -> bool:
        return isinstance(self._node, int) or self._node is UNREADABLE

    def stat(self, follow_symlinks: bool = True):
        if self._node is UNREADABLE:
            raise PermissionError(13, "Permission denied", self.path)
        return SimpleNamespace(st_size=self._node)


class FakeFS:
    """Verschachteltes Dict als Dateisystem: int = Dateigröße, dict = Verzeichnis.

    Einträge werden in Einfügereihenfolge geliefert.
    """

    def __init__(self, tree: dict, root: str = "/scan"):
        self.root = root
        self.tree = tree
        self.listed: list[str] = []

    def _lookup(self, path: str):
        rel = posixpath.relpath(path, self.root)
        node = self.tree
        if rel == ".":
            return node
        for part in rel.split("/"):
            if not isinstance(node, dict) or part not in node:
                raise FileNotFoundError(2, "No such file or directory", path)
            node = node[part]
        return node

    def scandir(self, path: str) -> list[FakeEntry]:
        node = self._lookup(path)
        if node is UNLISTABLE:
            raise PermissionError(13, "Permission denied", path)
        if not isinstance(node, dict):
            raise NotADirectoryError(20, "Not a directory", path)
        self.listed.append(path)
        return [FakeEntry(path, name, child) for name, child in node.items()]

    def key(self, *parts: str) -> str:
        return posixpath.join(self.root, *parts)


@pytest.fixture
def make_tree(tmp_path):
    """Legt einen echten Verzeichnisbaum an: int = Dateigröße in Bytes, dict = Ordner."""

    def _make(tree: dict, base=None):
        base = base or tmp_path / "root"
        base.mkdir(parents=True, exist_ok=True)
        for name, node in tree.items():
            target = base / name
            if isinstance(node, dict):
                _make(node, target)
            else:
                target.write_bytes(b"x" * node)
        return base

    return _make


skip_if_root = pytest.mark.skipif(
    os.name != "posix" or os.geteuid() == 0,
    reason="Dateirechte nur als Nicht-root unter POSIX testbar",
)
