"""Tests for extract_archive."""

import io
import sys
import tarfile
import zipfile
from pathlib import Path

import pytest

from encore_release.errors import BuildError
from encore_release.fetch import extract_archive


def _write_tar(path: Path, members: dict) -> Path:
    with tarfile.open(path, "w:gz") as tar:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(data))
    return path


def test_extract_tar_gz(tmp_path: Path):
    archive = _write_tar(
        tmp_path / "go.tar.gz", {"encore-go/bin/go": b"#!go", "encore-go/VERSION": b"go1.21"}
    )
    dest = tmp_path / "out"
    extract_archive(archive, dest)
    assert (dest / "encore-go" / "bin" / "go").read_bytes() == b"#!go"
    assert (dest / "encore-go" / "VERSION").read_text() == "go1.21"


def test_extract_zip(tmp_path: Path):
    archive = tmp_path / "go.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("encore-go/bin/go.exe", b"MZ")
    dest = tmp_path / "out"
    extract_archive(archive, dest)
    assert (dest / "encore-go" / "bin" / "go.exe").read_bytes() == b"MZ"


def test_extract_rejects_path_escape(tmp_path: Path):
    archive = _write_tar(tmp_path / "evil.tgz", {"../escaped": b"x"})
    with pytest.raises(BuildError, match="escapes destination"):
        extract_archive(archive, tmp_path / "out")
    assert not (tmp_path / "escaped").exists()


def test_extract_rejects_escaping_symlink(tmp_path: Path):
    archive = tmp_path / "link.tar.gz"
    with tarfile.open(archive, "w:gz") as tar:
        info = tarfile.TarInfo("encore-go/link")
        info.type = tarfile.SYMTYPE
        info.linkname = "../../outside"
        tar.addfile(info)
    with pytest.raises(BuildError, match="escapes destination"):
        extract_archive(archive, tmp_path / "out")


def test_extract_unsupported_format(tmp_path: Path):
    archive = tmp_path / "go.rar"
    archive.write_bytes(b"")
    with pytest.raises(BuildError, match="unsupported archive format"):
        extract_archive(archive, tmp_path / "out")


def test_extract_corrupt_archive(tmp_path: Path):
    archive = tmp_path / "go.tar.gz"
    archive.write_bytes(b"not a tarball")
    with pytest.raises(BuildError) as exc_info:
        extract_archive(archive, tmp_path / "out")
    assert exc_info.value.label == "extract go.tar.gz"


if __name__ == "__main__":
    pytest.main(sys.argv)
