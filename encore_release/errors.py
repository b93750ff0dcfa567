"""Error types raised by the release tooling."""

from __future__ import annotations


class BuildError(RuntimeError):
    """Raised when a build step or one of its collaborators fails.

    The message is a short static label naming the failing step. The underlying
    failure is attached as ``__cause__`` (``raise BuildError("compile encore") from err``)
    and is included when the error is rendered, so the whole chain reads on one line.
    """

    @property
    def label(self) -> str:
        return super().__str__()

    def __str__(self) -> str:
        label = self.label
        cause = self.__cause__
        if cause is None:
            return label
        if not label:
            return str(cause)
        return f"{label}: {cause}"


class ConfigurationError(BuildError):
    """Raised for invalid release configuration, e.g. an unknown version channel.

    Configuration errors are always fatal and detected before expensive work where possible.
    """


class DistributionError(BuildError):
    """Raised when the distribution for one platform could not be produced."""

    def __init__(self, os: str, arch: str) -> None:
        super().__init__(f"os: {os}, arch: {arch}")
        self.os = os
        self.arch = arch


__all__ = ["BuildError", "ConfigurationError", "DistributionError"]
