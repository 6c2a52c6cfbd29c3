from __future__ import annotations

from pathlib import Path

import pytest

from rotalog.retention import ArchiveFile, DeleteFile, KeepFile, RetentionFunc, RetentionPolicy


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    path = tmp_path / "app-20261019080000.log"
    path.write_text("line\n")
    return path


def test_delete_file_removes_the_file(log_file: Path):
    DeleteFile().dispose(log_file)
    assert not log_file.exists()


def test_delete_file_raises_when_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        DeleteFile().dispose(tmp_path / "missing.log")


def test_keep_file_leaves_the_file(log_file: Path):
    KeepFile().dispose(log_file)
    assert log_file.read_text() == "line\n"


def test_archive_file_moves_into_created_directory(log_file: Path, tmp_path: Path):
    archive = tmp_path / "archive" / "old"
    ArchiveFile(archive).dispose(log_file)

    assert not log_file.exists()
    assert (archive / log_file.name).read_text() == "line\n"


def test_retention_func_calls_the_callable(log_file: Path):
    seen: list[Path] = []
    RetentionFunc(seen.append).dispose(log_file)
    assert seen == [log_file]


def test_retention_func_propagates_errors(log_file: Path):
    def refuse(path: Path) -> None:
        raise PermissionError(str(path))

    with pytest.raises(PermissionError):
        RetentionFunc(refuse).dispose(log_file)


def test_all_policies_satisfy_the_protocol(tmp_path: Path):
    for policy in (DeleteFile(), KeepFile(), ArchiveFile(tmp_path), RetentionFunc(print)):
        assert isinstance(policy, RetentionPolicy)
