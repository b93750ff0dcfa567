from encore_release.archive import tar_gzip
from encore_release.data import DEFAULT_PLATFORMS, BuildRequest, Platform, ReleaseConfig
from encore_release.dist import (
    DistBuilder,
    JSPackager,
    ProducerHandle,
    ProducerResult,
    Toolchain,
    run_parallel,
)
from encore_release.errors import BuildError, ConfigurationError, DistributionError
from encore_release.logging import configure_logging, get_logger
from encore_release.release import build_release
from encore_release.version import ReleaseChannel, channel_for

__all__ = [
    # Main entry points
    "DistBuilder",
    "build_release",
    "run_parallel",
    # Configuration
    "BuildRequest",
    "ReleaseConfig",
    "Platform",
    "DEFAULT_PLATFORMS",
    "ReleaseChannel",
    "channel_for",
    # Collaborators
    "JSPackager",
    "ProducerHandle",
    "ProducerResult",
    "Toolchain",
    "tar_gzip",
    # Errors
    "BuildError",
    "ConfigurationError",
    "DistributionError",
    "configure_logging",
    "get_logger",
]
