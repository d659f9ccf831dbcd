"""Tests für die Kommandozeile und run_scan()."""

import json

import pytest

from disk_report import scan
from disk_report.config import DirectoryErrorPolicy
from disk_report.errors import DirectoryUnlistable


@pytest.fixture
def no_config(tmp_path):
    return ["--config", str(tmp_path / "missing.json"), "--no-progress"]


class TestMain:
    def test_prints_report(self, make_tree, no_config, capsys):
        base = make_tree({"a.txt": 100, "sub": {"b.TXT": 50, "c": 10}})
        scan.main([str(base), *no_config])
        out = capsys.readouterr().out
        assert "TOP-VERZEICHNISSE NACH GRÖSSE" in out
        assert "Gesamtgröße: 160 B (3 Dateien)" in out
        assert str(base.resolve() / "sub") in out
        assert "[ohne Endung]" in out
        assert "OPTIMIERUNGSTIPPS" in out

    def test_defaults_to_cwd(self, make_tree, no_config, capsys, monkeypatch):
        base = make_tree({"x.bin": 7})
        monkeypatch.chdir(base)
        scan.main(no_config)
        assert "7 B (1 Dateien)" in capsys.readouterr().out

    def test_writes_json_report(self, make_tree, no_config, tmp_path):
        base = make_tree({"dir": {"a.mp4": 3}})
        output = tmp_path / "report.json"
        scan.main([str(base), "-o", str(output), *no_config])
        report = json.loads(output.read_text(encoding="utf-8"))
        assert report["scan_info"]["total_bytes"] == 3
        assert report["extensions"] == [{"extension": "mp4", "size_bytes": 3}]

    def test_non_directory_is_empty_report(self, tmp_path, no_config, capsys):
        target = tmp_path / "file.txt"
        target.write_bytes(b"abc")
        scan.main([str(target), *no_config])
        assert "Gesamtgröße: 0 B (0 Dateien)" in capsys.readouterr().out

    def test_unlistable_directory_exits_1(self, make_tree, no_config, monkeypatch, capsys):
        base = make_tree({})

        def boom(*args, **kwargs):
            raise DirectoryUnlistable(base / "locked", "Permission denied")

        monkeypatch.setattr(scan, "analyze_folder", boom)
        with pytest.raises(SystemExit) as exc_info:
            scan.main([str(base), *no_config])
        assert exc_info.value.code == 1
        assert "Fehler: Verzeichnis nicht lesbar" in capsys.readouterr().err

    def test_invalid_config_exits_1(self, make_tree, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"top_files": "viele"}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            scan.main([str(make_tree({})), "--config", str(config), "--no-progress"])
        assert exc_info.value.code == 1
        assert "top_files" in capsys.readouterr().err

    def test_negative_top_option_exits_1(self, make_tree, no_config):
        with pytest.raises(SystemExit) as exc_info:
            scan.main([str(make_tree({})), "--top-files", "-1", *no_config])
        assert exc_info.value.code == 1


class TestSettingsFromArgs:
    def test_cli_overrides_config(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"top_directories": 3, "top_files": 2}), encoding="utf-8")
        args = scan.build_parser().parse_args([
            "--config", str(config), "--skip-unreadable", "--include-root", "--no-follow-symlinks",
            "--top-files", "9",
        ])
        settings = scan.settings_from_args(args)
        assert settings.top_directories == 3
        assert settings.top_files == 9
        assert settings.on_directory_error is DirectoryErrorPolicy.SKIP_AND_WARN
        assert settings.register_root is True
        assert settings.follow_symlinks is False

    def test_symlinks_followed_unless_disabled(self, tmp_path):
        args = scan.build_parser().parse_args(["--config", str(tmp_path / "missing.json")])
        assert scan.settings_from_args(args).follow_symlinks is True


class TestRunScan:
    def test_returns_result_and_saves(self, make_tree, tmp_path):
        base = make_tree({"sub": {"a": 4}})
        output = tmp_path / "r.json"
        result = scan.run_scan(str(base), str(output))
        assert result.root.total_bytes == 4
        assert str(base.resolve() / "sub") in result.registry
        assert output.exists()