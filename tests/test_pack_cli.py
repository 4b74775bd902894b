# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import zipfile
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from fnpack_lib.archive import ArchiveEntry, EntryKind
from fnpack_lib.core.config import CFG
from fnpack_lib.core.error import ArchiveError, DirectoryNotFoundError
from fnpack_lib.pack.cli import _log_entry, pack


def _make_source(tmp_path: Path) -> Path:
    source = tmp_path / "fn"
    (source / "node_modules" / "dep").mkdir(parents=True)
    (source / "node_modules" / "dep" / "a.js").write_text("")
    (source / "index.js").write_text("exports.handler = () => {};")
    (source / ".gcloudignore").write_text("node_modules/\n")
    return source


def test_pack_creates_archive_and_prints_path(tmp_path):
    source = _make_source(tmp_path)
    destination = tmp_path / "out.zip"

    runner = CliRunner()
    with patch("fnpack_lib.pack.cli.logger"):
        result = runner.invoke(pack, [str(source), str(destination)])

    assert result.exit_code == 0
    assert str(destination.resolve()) in result.output
    with zipfile.ZipFile(destination) as zf:
        assert set(zf.namelist()) == {"index.js", ".gcloudignore"}


def test_pack_verbose_logs_every_entry(tmp_path):
    source = _make_source(tmp_path)

    runner = CliRunner()
    with patch("fnpack_lib.pack.cli.logger") as mock_logger:
        result = runner.invoke(
            pack, [str(source), str(tmp_path / "out.zip"), "--verbose"]
        )

    assert result.exit_code == 0
    messages = [c.args[0] for c in mock_logger.info.call_args_list]
    assert any(m.startswith("[F]") and "index.js =>" in m for m in messages)
    assert not any("node_modules" in m for m in messages)


def test_pack_passes_options_to_packager(tmp_path):
    packager_mock = MagicMock()
    packager_mock.pack.return_value = tmp_path / "out.zip"

    runner = CliRunner()
    with (
        patch("fnpack_lib.pack.cli.Packager", return_value=packager_mock) as cls,
        patch("fnpack_lib.pack.cli.logger"),
    ):
        result = runner.invoke(pack, ["src", "out.zip", "-l", "9", "-v"])

    assert result.exit_code == 0
    cls.assert_called_once_with(
        Path("src"), Path("out.zip"), on_entry=_log_entry, compression_level=9
    )
    packager_mock.pack.assert_called_once()


def test_pack_without_verbose_has_no_observer():
    packager_mock = MagicMock()

    runner = CliRunner()
    with (
        patch("fnpack_lib.pack.cli.Packager", return_value=packager_mock) as cls,
        patch("fnpack_lib.pack.cli.logger"),
    ):
        runner.invoke(pack, ["src", "out.zip"])

    assert cls.call_args.kwargs["on_entry"] is None
    assert cls.call_args.kwargs["compression_level"] is None


def test_pack_rejects_invalid_level():
    runner = CliRunner()
    result = runner.invoke(pack, ["src", "out.zip", "--level", "12"])

    assert result.exit_code == 2


def test_pack_missing_source_exits_91(tmp_path):
    runner = CliRunner()
    with patch("fnpack_lib.pack.cli.logger") as mock_logger:
        result = runner.invoke(
            pack, [str(tmp_path / "missing"), str(tmp_path / "out.zip")]
        )

    assert result.exit_code == CFG.exit_codes.default
    error = mock_logger.error.call_args.args[0]
    assert isinstance(error, DirectoryNotFoundError)
    assert not (tmp_path / "out.zip").exists()


def test_pack_archive_error_exits_91():
    packager_mock = MagicMock()
    packager_mock.pack.side_effect = ArchiveError("disk full")

    runner = CliRunner()
    with (
        patch("fnpack_lib.pack.cli.Packager", return_value=packager_mock),
        patch("fnpack_lib.pack.cli.logger") as mock_logger,
    ):
        result = runner.invoke(pack, ["src", "out.zip"])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()


def test_pack_unexpected_error_exits_99():
    packager_mock = MagicMock()
    packager_mock.pack.side_effect = RuntimeError("boom")

    runner = CliRunner()
    with (
        patch("fnpack_lib.pack.cli.Packager", return_value=packager_mock),
        patch("fnpack_lib.pack.cli.logger") as mock_logger,
    ):
        result = runner.invoke(pack, ["src", "out.zip"])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_logger.critical.assert_called_once()


def test_log_entry_formats_entry():
    entry = ArchiveEntry(
        name="index.js", mode=0o644, source_path=Path("/fn/index.js"), kind=EntryKind.FILE
    )

    with patch("fnpack_lib.pack.cli.logger") as mock_logger:
        _log_entry(entry)

    mock_logger.info.assert_called_once_with("[F] (420) index.js => /fn/index.js")
