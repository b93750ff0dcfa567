"""Release channel classification for version strings."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from encore_release.errors import ConfigurationError

_VERSION_RE = re.compile(
    r"^v?(?P<core>\d+\.\d+\.\d+)(?:-(?P<pre>[0-9A-Za-z.\-]+))?(?:\+(?P<build>[0-9A-Za-z.\-]+))?$"
)


class ReleaseChannel(str, Enum):
    """The channel a version is released on."""

    GA = "ga"
    """General availability release, e.g. ``v1.2.3``."""
    BETA = "beta"
    """Beta release, e.g. ``v1.2.3-beta.1``."""
    NIGHTLY = "nightly"
    """Nightly build, e.g. ``v1.2.3-nightly.20240101``."""
    DEVBUILD = "devbuild"
    """Development build, e.g. ``v0.0.0-develop+abc123``."""


_BINARY_SUFFIXES = {
    ReleaseChannel.GA: "",
    ReleaseChannel.BETA: "-beta",
    ReleaseChannel.NIGHTLY: "-nightly",
    ReleaseChannel.DEVBUILD: "-develop",
}


def channel_for(version: str) -> Optional[ReleaseChannel]:
    """Classify a version string into its release channel.

    Parameters
    ----------
    version : str
        The version string, with or without a leading ``v``.

    Returns
    -------
    Optional[ReleaseChannel]
        The channel, or None if the version does not belong to any known channel.
    """
    match = _VERSION_RE.match(version.strip())
    if match is None:
        return None

    pre = match.group("pre")
    if pre is None:
        return ReleaseChannel.GA
    if pre.startswith("beta."):
        return ReleaseChannel.BETA
    if pre.startswith("nightly."):
        return ReleaseChannel.NIGHTLY
    if pre.startswith("develop") or pre.startswith("devel"):
        return ReleaseChannel.DEVBUILD
    return None


def binary_suffix(channel: Optional[ReleaseChannel]) -> str:
    """Return the binary name suffix for a channel.

    Raises
    ------
    ConfigurationError
        If the channel is unknown.
    """
    try:
        return _BINARY_SUFFIXES[channel]
    except KeyError:
        raise ConfigurationError(f"unknown version channel: {channel!r}") from None


def suffix_for(version: str) -> str:
    """Return the binary name suffix for ``version``.

    Raises
    ------
    ConfigurationError
        If the version does not belong to a known channel.
    """
    channel = channel_for(version)
    if channel is None:
        raise ConfigurationError(f"unknown version channel for {version}")
    return binary_suffix(channel)


__all__ = ["ReleaseChannel", "binary_suffix", "channel_for", "suffix_for"]
