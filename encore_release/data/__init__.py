from .platform import DEFAULT_PLATFORMS, KNOWN_OS, Platform
from .request import BuildRequest, ReleaseConfig
from .utils import (
    BaseModelWithDocstrings,
    ExpandedPath,
    FrozenModel,
    NonEmptyString,
    VersionString,
)

__all__ = [
    "BaseModelWithDocstrings",
    "BuildRequest",
    "DEFAULT_PLATFORMS",
    "ExpandedPath",
    "FrozenModel",
    "KNOWN_OS",
    "NonEmptyString",
    "Platform",
    "ReleaseConfig",
    "VersionString",
]
