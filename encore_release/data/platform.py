"""Target platform definitions."""

from __future__ import annotations

from typing import List, Tuple

from pydantic import ValidationError, model_validator

from encore_release.errors import ConfigurationError

from .utils import FrozenModel, NonEmptyString

KNOWN_OS: Tuple[str, ...] = ("darwin", "linux", "windows")
"""Operating systems a distribution can be built for."""


class Platform(FrozenModel):
    """An (OS, architecture) pair, using Go naming (``linux``/``amd64``)."""

    os: NonEmptyString
    """The operating system, e.g. ``darwin``, ``linux`` or ``windows``."""
    arch: NonEmptyString
    """The architecture, e.g. ``amd64`` or ``arm64``."""

    @model_validator(mode="after")
    def _validate_no_separators(self) -> "Platform":
        for value in (self.os, self.arch):
            if "/" in value or "_" in value or any(c.isspace() for c in value):
                raise ValueError(f"Invalid platform component: {value!r}")
        return self

    @classmethod
    def parse(cls, value: str) -> "Platform":
        """Parse ``"os/arch"`` (``"os_arch"`` is accepted as well).

        Raises
        ------
        ConfigurationError
            If the value is not of the form ``os/arch``.
        """
        sep = "/" if "/" in value else "_"
        parts = value.strip().split(sep)
        if len(parts) != 2 or not all(parts):
            raise ConfigurationError(f"invalid platform {value!r}, expected os/arch")
        try:
            return cls(os=parts[0], arch=parts[1])
        except ValidationError as e:
            raise ConfigurationError(f"invalid platform {value!r}") from e

    def __str__(self) -> str:
        return f"{self.os}_{self.arch}"


DEFAULT_PLATFORMS: List[Platform] = [
    Platform(os="darwin", arch="amd64"),
    Platform(os="darwin", arch="arm64"),
    Platform(os="linux", arch="amd64"),
    Platform(os="linux", arch="arm64"),
    Platform(os="windows", arch="amd64"),
]
"""Platforms built when none are requested explicitly."""
