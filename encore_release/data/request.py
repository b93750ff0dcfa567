"""Strong-typed configuration for release and distribution builds."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal

from pydantic import Field, model_validator

from encore_release.version import channel_for

from .platform import DEFAULT_PLATFORMS, Platform
from .utils import (
    BaseModelWithDocstrings,
    ExpandedPath,
    FrozenModel,
    NonEmptyString,
    VersionString,
)


class BuildRequest(FrozenModel):
    """Configuration for building the distribution of a single platform.

    A request is created once per (OS, architecture) pair and is owned by exactly one
    distribution build. It is never shared across concurrently running builds.
    """

    os: NonEmptyString
    """The OS to build for, e.g. ``linux``."""
    arch: NonEmptyString
    """The architecture to build for, e.g. ``amd64``."""
    tsparser_path: Path
    """Path to the ts-parser source tree, built with the Rust toolchain."""
    dist_build_dir: Path
    """The staging directory the distribution is assembled in."""
    artifacts_tar_file: Path
    """Where the final ``.tar.gz`` of the staging directory is written."""
    version: VersionString
    """The version being built."""
    repo_root: Path = Field(default=Path("."))
    """Root of the product checkout that holds the CLI sources and the runtimes."""

    @property
    def platform(self) -> Platform:
        return Platform(os=self.os, arch=self.arch)

    @classmethod
    def for_platform(
        cls,
        platform: Platform,
        *,
        version: str,
        dist_dir: Path,
        tsparser_path: Path,
        repo_root: Path = Path("."),
    ) -> "BuildRequest":
        """Create the request for ``platform`` using the standard release layout.

        The staging directory is ``dist_dir/dist/<os>_<arch>`` and the archive is
        ``dist_dir/artifacts/encore-<version>-<os>_<arch>.tar.gz``.
        """
        dist_dir = Path(dist_dir)
        return cls(
            os=platform.os,
            arch=platform.arch,
            tsparser_path=tsparser_path,
            dist_build_dir=dist_dir / "dist" / str(platform),
            artifacts_tar_file=dist_dir / "artifacts" / f"encore-{version}-{platform}.tar.gz",
            version=version,
            repo_root=repo_root,
        )


class ReleaseConfig(BaseModelWithDocstrings):
    """Settings for a whole release: one distribution per platform."""

    version: VersionString
    """The version to release. Must belong to a known release channel."""
    dist_dir: ExpandedPath
    """Output directory; staging trees go to ``dist/`` and archives to ``artifacts/``."""
    tsparser_path: ExpandedPath = Field(default=Path("./tsparser"))
    """Path to the ts-parser source tree."""
    repo_root: ExpandedPath = Field(default=Path("."))
    """Root of the product checkout."""
    platforms: List[Platform] = Field(default_factory=lambda: list(DEFAULT_PLATFORMS), min_length=1)
    """The platforms to build distributions for."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    """Log level for the release run."""

    @model_validator(mode="after")
    def _validate_release(self) -> "ReleaseConfig":
        """Reject unknown version channels and duplicate platforms up front.

        Raises
        ------
        ValueError
            If the version has no release channel or a platform is listed twice.
        """
        if channel_for(self.version) is None:
            raise ValueError(f"unknown version channel for {self.version}")
        seen = set()
        for platform in self.platforms:
            key = str(platform)
            if key in seen:
                raise ValueError(f"Duplicate platform '{platform.os}/{platform.arch}'")
            seen.add(key)
        return self

    def build_requests(self) -> List[BuildRequest]:
        return [
            BuildRequest.for_platform(
                platform,
                version=self.version,
                dist_dir=self.dist_dir,
                tsparser_path=self.tsparser_path,
                repo_root=self.repo_root,
            )
            for platform in self.platforms
        ]
