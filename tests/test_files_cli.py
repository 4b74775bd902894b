# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from fnpack_lib.archive import ArchiveEntry, EntryKind
from fnpack_lib.core.config import CFG
from fnpack_lib.files.cli import _select, files


def _make_source(tmp_path: Path) -> Path:
    source = tmp_path / "fn"
    (source / "lib").mkdir(parents=True)
    (source / "lib" / "util.js").write_text("")
    (source / "index.js").write_text("")
    (source / "debug.log").write_text("")
    (source / ".gcloudignore").write_text("*.log\n")
    return source


def test_files_lists_packaged_entries(tmp_path):
    source = _make_source(tmp_path)

    runner = CliRunner()
    with patch("fnpack_lib.files.cli.logger"):
        result = runner.invoke(files, [str(source)])

    assert result.exit_code == 0
    lines = set(result.output.splitlines())
    assert lines == {".gcloudignore", "index.js", "lib", "lib/util.js"}


def test_files_only_skips_directories(tmp_path):
    source = _make_source(tmp_path)

    runner = CliRunner()
    with patch("fnpack_lib.files.cli.logger"):
        result = runner.invoke(files, [str(source), "--files-only"])

    assert result.exit_code == 0
    assert "lib" not in result.output.splitlines()
    assert "lib/util.js" in result.output.splitlines()


def test_files_long_format(tmp_path):
    source = _make_source(tmp_path)

    runner = CliRunner()
    with patch("fnpack_lib.files.cli.logger"):
        result = runner.invoke(files, [str(source), "--long"])

    assert result.exit_code == 0
    assert any(
        line.startswith("[D]") and " lib => " in line
        for line in result.output.splitlines()
    )


def test_files_defaults_to_current_directory(tmp_path, monkeypatch):
    source = _make_source(tmp_path)
    monkeypatch.chdir(source)

    runner = CliRunner()
    with patch("fnpack_lib.files.cli.logger"):
        result = runner.invoke(files, [])

    assert result.exit_code == 0
    assert "index.js" in result.output.splitlines()


def test_files_writes_nothing(tmp_path):
    source = _make_source(tmp_path)
    before = sorted(p.name for p in source.rglob("*"))

    runner = CliRunner()
    with patch("fnpack_lib.files.cli.logger"):
        runner.invoke(files, [str(source)])

    assert sorted(p.name for p in source.rglob("*")) == before


def test_files_missing_source_exits_91(tmp_path):
    runner = CliRunner()
    with patch("fnpack_lib.files.cli.logger") as mock_logger:
        result = runner.invoke(files, [str(tmp_path / "missing")])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()


def test_files_unexpected_error_exits_99():
    packager_mock = MagicMock()
    packager_mock.collectEntries.side_effect = RuntimeError("boom")

    runner = CliRunner()
    with (
        patch("fnpack_lib.files.cli.Packager", return_value=packager_mock),
        patch("fnpack_lib.files.cli.logger") as mock_logger,
    ):
        result = runner.invoke(files, ["src"])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_logger.critical.assert_called_once()


def test_select_keeps_everything_by_default():
    entries = [
        ArchiveEntry("lib", kind=EntryKind.DIRECTORY),
        ArchiveEntry("lib/a.js", kind=EntryKind.FILE),
    ]

    assert _select(entries, False) == entries
    assert _select(entries, True) == [entries[1]]
