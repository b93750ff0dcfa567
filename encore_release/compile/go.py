"""Go toolchain invoker."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from encore_release.logging import LoggerLike, get_logger

from .utils import PathLike, executable_name, run_command

logger = get_logger("compile.go")


def compile_go_binary(
    out_path: PathLike,
    target: str,
    linker_flags: Optional[Sequence[str]],
    goos: str,
    goarch: str,
    *,
    cwd: Optional[PathLike] = None,
    log: Optional[LoggerLike] = None,
) -> Path:
    """Cross-compile a Go package into a single binary.

    Parameters
    ----------
    out_path : PathLike
        Output path of the binary. ``.exe`` is appended when building for windows.
    target : str
        The Go package to build, e.g. ``./cli/cmd/encore``.
    linker_flags : Optional[Sequence[str]]
        Arguments passed through ``-ldflags``, e.g. ``["-X", "'pkg.Var=value'"]``.
    goos : str
        Target ``GOOS``.
    goarch : str
        Target ``GOARCH``.
    cwd : Optional[PathLike]
        The Go module root to build in.
    log : Optional[LoggerLike]
        Logger for command output.

    Returns
    -------
    Path
        The path of the compiled binary.

    Raises
    ------
    BuildError
        If ``go build`` fails.
    """
    out = Path(out_path)
    out = out.with_name(executable_name(out.name, goos))

    cmd = ["go", "build", "-trimpath"]
    if linker_flags:
        cmd += ["-ldflags", " ".join(linker_flags)]
    cmd += ["-o", str(out.resolve()), target]

    run_command(
        cmd,
        cwd=cwd,
        env={"GOOS": goos, "GOARCH": goarch, "CGO_ENABLED": "0"},
        log=log or logger,
    )
    return out
