"""Tests für Formatierung und Endungs-Erkennung."""

import pytest

from disk_report.utils import GIB, KIB, MIB, file_extension, format_size, is_representable


class TestFormatSize:
    @pytest.mark.parametrize("size, expected", [
        (0, "0 B"),
        (1023, "1023 B"),
        (KIB, "1.0 KB"),
        (1536, "1.5 KB"),
        (MIB, "1.0 MB"),
        (250 * MIB, "250.0 MB"),
        (GIB, "1.00 GB"),
        (3 * 1024 * GIB, "3072.00 GB"),
    ])
    def test_units(self, size, expected):
        assert format_size(size) == expected


class TestFileExtension:
    @pytest.mark.parametrize("name, expected", [
        ("a.txt", "txt"),
        ("b.TXT", "txt"),
        ("archive.tar.gz", "gz"),
        ("README", ""),
        (".bashrc", ""),
        ("trailing.", ""),
        ("..x", "x"),
        ("..", ""),
        ("bad.\udcff", ""),
    ])
    def test_extension(self, name, expected):
        assert file_extension(name) == expected


def test_is_representable():
    assert is_representable("/home/üser")
    assert not is_representable("/home/\udcff")
