"""Tests for compile_rust_binary."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from encore_release.compile import RUST_TARGETS, compile_rust_binary, rust_target
from encore_release.errors import BuildError, ConfigurationError


def _fake_cargo(cargo_dir: Path, triple: str, artifact: str):
    def _run(cmd, *, cwd=None, env=None, log=None):
        out = Path(cwd) / "target" / triple / "release" / artifact
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(b"\x7fELF")
        return ""

    return _run


def test_rust_target():
    assert rust_target("linux", "amd64") == "x86_64-unknown-linux-gnu"
    assert rust_target("darwin", "arm64") == "aarch64-apple-darwin"
    assert len(RUST_TARGETS) == 5
    with pytest.raises(ConfigurationError):
        rust_target("windows", "arm64")


def test_compile_rust_binary_copies_artifact(tmp_path: Path):
    cargo_dir = tmp_path / "tsparser"
    cargo_dir.mkdir()
    out = tmp_path / "dist" / "bin" / "tsparser-encore"
    triple = "x86_64-unknown-linux-gnu"

    with patch(
        "encore_release.compile.rust.run_command",
        side_effect=_fake_cargo(cargo_dir, triple, "tsparser-encore"),
    ) as run:
        result = compile_rust_binary(
            "tsparser-encore", out, cargo_dir, "linux", "amd64", "ENCORE_VERSION=1.2.3"
        )

    assert result == out
    assert out.read_bytes() == b"\x7fELF"
    (cmd,), kwargs = run.call_args
    assert cmd == ["cargo", "build", "--release", "--target", triple]
    assert kwargs["cwd"] == cargo_dir
    assert kwargs["env"] == {"ENCORE_VERSION": "1.2.3"}


def test_compile_rust_binary_missing_artifact(tmp_path: Path):
    with patch("encore_release.compile.rust.run_command", return_value=""):
        with pytest.raises(BuildError, match="cargo did not produce"):
            compile_rust_binary(
                "libencore_js_runtime.so", tmp_path / "out.node", tmp_path, "linux", "amd64"
            )


def test_compile_rust_binary_unknown_platform(tmp_path: Path):
    with patch("encore_release.compile.rust.run_command") as run:
        with pytest.raises(ConfigurationError):
            compile_rust_binary("x", tmp_path / "x", tmp_path, "plan9", "amd64")
    run.assert_not_called()


if __name__ == "__main__":
    pytest.main(sys.argv)
