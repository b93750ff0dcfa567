"""Tests for release channel classification."""

import sys

import pytest

from encore_release.errors import ConfigurationError
from encore_release.version import ReleaseChannel, binary_suffix, channel_for, suffix_for


@pytest.mark.parametrize(
    "version, channel",
    [
        ("1.2.3", ReleaseChannel.GA),
        ("v1.2.3", ReleaseChannel.GA),
        ("v1.46.0", ReleaseChannel.GA),
        ("v1.2.3-beta.1", ReleaseChannel.BETA),
        ("1.2.3-beta.12", ReleaseChannel.BETA),
        ("v1.2.3-nightly.20240101", ReleaseChannel.NIGHTLY),
        ("v0.0.0-develop", ReleaseChannel.DEVBUILD),
        ("v0.0.0-develop+5a1b2c3", ReleaseChannel.DEVBUILD),
        ("v0.0.0-devel", ReleaseChannel.DEVBUILD),
    ],
)
def test_channel_for(version, channel):
    assert channel_for(version) == channel


@pytest.mark.parametrize(
    "version", ["", "latest", "1.2", "v1.2.3-rc.1", "v1.2.3-beta", "1.2.3.4", "vv1.2.3"]
)
def test_channel_for_unknown(version):
    assert channel_for(version) is None


@pytest.mark.parametrize(
    "channel, suffix",
    [
        (ReleaseChannel.GA, ""),
        (ReleaseChannel.BETA, "-beta"),
        (ReleaseChannel.NIGHTLY, "-nightly"),
        (ReleaseChannel.DEVBUILD, "-develop"),
    ],
)
def test_binary_suffix(channel, suffix):
    assert binary_suffix(channel) == suffix


def test_binary_suffix_unknown():
    with pytest.raises(ConfigurationError):
        binary_suffix(None)


def test_suffix_for():
    assert suffix_for("v1.2.3-nightly.20240101") == "-nightly"
    with pytest.raises(ConfigurationError, match="unknown version channel for 1.2.3-rc.1"):
        suffix_for("1.2.3-rc.1")


if __name__ == "__main__":
    pytest.main(sys.argv)
