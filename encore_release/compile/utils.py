"""Utility functions for invoking toolchains."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from encore_release.errors import BuildError
from encore_release.logging import LoggerLike, get_logger

logger = get_logger("compile")

PathLike = Union[str, Path]


def executable_name(name: str, goos: str) -> str:
    """Return the on-disk name of an executable for ``goos``.

    Examples
    --------
    >>> executable_name("encore", "windows")
    'encore.exe'
    >>> executable_name("encore", "linux")
    'encore'
    """
    if goos == "windows" and not name.endswith(".exe"):
        return name + ".exe"
    return name


def parse_env_entries(entries: Sequence[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` entries into a mapping.

    Raises
    ------
    BuildError
        If an entry has no ``=`` or an empty key.
    """
    env: dict[str, str] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise BuildError(f"invalid environment entry {entry!r}, expected KEY=VALUE")
        env[key] = value
    return env


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[PathLike] = None,
    env: Optional[Mapping[str, str]] = None,
    log: Optional[LoggerLike] = None,
) -> str:
    """Run a command to completion and return its combined stdout/stderr.

    Parameters
    ----------
    cmd : Sequence[str]
        The command and its arguments.
    cwd : Optional[PathLike]
        Working directory for the command.
    env : Optional[Mapping[str, str]]
        Extra environment variables layered on top of the current environment.
    log : Optional[LoggerLike]
        Logger to report the command on. Defaults to the module logger.

    Returns
    -------
    str
        The combined output of the command.

    Raises
    ------
    BuildError
        If the command cannot be started or exits with a non-zero status.
    """
    log = log or logger
    full_env = os.environ.copy()
    if env:
        full_env.update(env)

    log.debug("running %s (cwd=%s)", " ".join(cmd), cwd or ".")
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=str(cwd) if cwd is not None else None,
            env=full_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as e:
        raise BuildError(f"failed to start {cmd[0]}") from e

    if proc.returncode != 0:
        output = (proc.stdout or "").strip()
        raise BuildError(
            f"{cmd[0]} exited with status {proc.returncode}" + (f": {output}" if output else "")
        )
    return proc.stdout or ""
