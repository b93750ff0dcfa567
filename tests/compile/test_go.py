"""Tests for compile_go_binary."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from encore_release.compile import compile_go_binary
from encore_release.errors import BuildError


def test_compile_go_binary_command(tmp_path: Path):
    with patch("encore_release.compile.go.run_command", return_value="") as run:
        out = compile_go_binary(
            tmp_path / "bin" / "encore",
            "./cli/cmd/encore",
            ["-X", "'encr.dev/internal/version.Version=1.2.3'"],
            "linux",
            "arm64",
            cwd=tmp_path,
        )

    assert out == tmp_path / "bin" / "encore"
    (cmd,), kwargs = run.call_args
    assert cmd[:3] == ["go", "build", "-trimpath"]
    assert cmd[3:5] == ["-ldflags", "-X 'encr.dev/internal/version.Version=1.2.3'"]
    assert cmd[5:] == ["-o", str((tmp_path / "bin" / "encore").resolve()), "./cli/cmd/encore"]
    assert kwargs["cwd"] == tmp_path
    assert kwargs["env"] == {"GOOS": "linux", "GOARCH": "arm64", "CGO_ENABLED": "0"}


def test_compile_go_binary_without_ldflags(tmp_path: Path):
    with patch("encore_release.compile.go.run_command", return_value="") as run:
        compile_go_binary(tmp_path / "git-remote-encore", "./cli/cmd/git-remote-encore", None,
                          "darwin", "amd64")
    (cmd,), _ = run.call_args
    assert "-ldflags" not in cmd


def test_compile_go_binary_windows_suffix(tmp_path: Path):
    with patch("encore_release.compile.go.run_command", return_value=""):
        out = compile_go_binary(tmp_path / "encore", "./cli/cmd/encore", None, "windows", "amd64")
    assert out.name == "encore.exe"


def test_compile_go_binary_failure(tmp_path: Path):
    with patch(
        "encore_release.compile.go.run_command", side_effect=BuildError("go exited with status 1")
    ):
        with pytest.raises(BuildError):
            compile_go_binary(tmp_path / "encore", "./cli/cmd/encore", None, "linux", "amd64")


if __name__ == "__main__":
    pytest.main(sys.argv)
