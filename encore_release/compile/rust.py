"""Rust (cargo) toolchain invoker."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict, Optional, Tuple

from encore_release.errors import BuildError, ConfigurationError
from encore_release.logging import LoggerLike, get_logger

from .utils import PathLike, parse_env_entries, run_command

logger = get_logger("compile.rust")

RUST_TARGETS: Dict[Tuple[str, str], str] = {
    ("darwin", "amd64"): "x86_64-apple-darwin",
    ("darwin", "arm64"): "aarch64-apple-darwin",
    ("linux", "amd64"): "x86_64-unknown-linux-gnu",
    ("linux", "arm64"): "aarch64-unknown-linux-gnu",
    ("windows", "amd64"): "x86_64-pc-windows-msvc",
}
"""Mapping from Go (os, arch) pairs to Rust target triples."""


def rust_target(goos: str, goarch: str) -> str:
    try:
        return RUST_TARGETS[(goos, goarch)]
    except KeyError:
        raise ConfigurationError(f"no rust target for {goos}/{goarch}") from None


def compile_rust_binary(
    artifact_name: str,
    out_path: PathLike,
    cargo_dir: PathLike,
    goos: str,
    goarch: str,
    *env: str,
    log: Optional[LoggerLike] = None,
) -> Path:
    """Cross-compile a cargo project and copy one artifact to ``out_path``.

    Parameters
    ----------
    artifact_name : str
        File name of the artifact cargo produces, e.g. ``libencore_js_runtime.so``.
    out_path : PathLike
        Where the artifact is copied to.
    cargo_dir : PathLike
        The cargo workspace to build in.
    goos : str
        Target OS, in Go naming.
    goarch : str
        Target architecture, in Go naming.
    env : str
        Extra ``KEY=VALUE`` environment entries for the build.
    log : Optional[LoggerLike]
        Logger for command output.

    Returns
    -------
    Path
        The path the artifact was copied to.

    Raises
    ------
    ConfigurationError
        If there is no Rust target for the platform.
    BuildError
        If cargo fails or does not produce the artifact.
    """
    target = rust_target(goos, goarch)
    cargo_dir = Path(cargo_dir)

    run_command(
        ["cargo", "build", "--release", "--target", target],
        cwd=cargo_dir,
        env=parse_env_entries(env),
        log=log or logger,
    )

    built = cargo_dir / "target" / target / "release" / artifact_name
    if not built.is_file():
        raise BuildError(f"cargo did not produce {built}")

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(built, out)
    return out
