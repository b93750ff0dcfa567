"""Compiler subsystem package.

This package wraps the toolchains a distribution is built with:
- compile_go_binary: cross-compiles Go commands (encore, git-remote-encore, tsbundler-encore)
- compile_rust_binary: cross-compiles cargo projects (tsparser-encore, the node runtime plugin)
- run_command: the subprocess helper both are built on
"""

from .go import compile_go_binary
from .rust import RUST_TARGETS, compile_rust_binary, rust_target
from .utils import executable_name, parse_env_entries, run_command

__all__ = [
    "RUST_TARGETS",
    "compile_go_binary",
    "compile_rust_binary",
    "executable_name",
    "parse_env_entries",
    "run_command",
    "rust_target",
]
