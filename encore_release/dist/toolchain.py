"""The external collaborators a distribution build delegates to."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from encore_release.archive import tar_gzip
from encore_release.compile import compile_go_binary, compile_rust_binary
from encore_release.fetch import download_latest_github_release, extract_archive


@dataclass
class Toolchain:
    """Bundle of the compiler invokers, the artifact fetcher and the archiver.

    Each field follows the signature of its default implementation:

    - ``compile_go(out_path, target, linker_flags, goos, goarch, *, cwd, log)``
    - ``compile_rust(artifact_name, out_path, cargo_dir, goos, goarch, *env, log)``
    - ``fetch_release(owner, repo, goos, goarch, *, log) -> Path``
    - ``extract(archive, dest)``
    - ``archive(src_dir, out_file)``
    """

    compile_go: Callable[..., Any] = field(default=compile_go_binary)
    compile_rust: Callable[..., Any] = field(default=compile_rust_binary)
    fetch_release: Callable[..., Path] = field(default=download_latest_github_release)
    extract: Callable[[Path, Path], Any] = field(default=extract_archive)
    archive: Callable[[Path, Path], Any] = field(default=tar_gzip)
