"""Build the distributions of every platform of a release."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from encore_release.data import ReleaseConfig
from encore_release.dist import DistBuilder, JSPackager, ProducerHandle, Toolchain, run_parallel
from encore_release.logging import LoggerLike, get_logger
from encore_release.version import suffix_for

logger = get_logger("release")


def build_release(
    config: ReleaseConfig,
    toolchain: Optional[Toolchain] = None,
    js_runtime: Optional[ProducerHandle] = None,
    log: Optional[LoggerLike] = None,
) -> List[Path]:
    """Build one distribution archive per configured platform.

    The JS runtime is packaged once, in the background, and shared by all platform
    builds. The platform builds run concurrently; if any of them fails the first
    recorded error is raised once all of them have finished.

    Parameters
    ----------
    config : ReleaseConfig
        The release settings.
    toolchain : Optional[Toolchain]
        Collaborators used by every platform build.
    js_runtime : Optional[ProducerHandle]
        Handle of an already started JS build. When None a :class:`JSPackager` is started.
    log : Optional[LoggerLike]
        Base logger.

    Returns
    -------
    List[Path]
        The archives produced, in platform order.

    Raises
    ------
    ConfigurationError
        If the version has no release channel.
    BuildError
        If any platform fails to build.
    """
    log = log or logger
    # Fail on a bad version before starting any build.
    suffix_for(config.version)

    toolchain = toolchain or Toolchain()
    if js_runtime is None:
        js_runtime = JSPackager(config.repo_root, config.version, log=log).start()

    build_requests = config.build_requests()
    builders = [
        DistBuilder(req, js_runtime, toolchain=toolchain, log=log) for req in build_requests
    ]
    log.info(
        "building %d distributions for version %s: %s",
        len(builders),
        config.version,
        ", ".join(f"{r.os}/{r.arch}" for r in build_requests),
    )

    err = run_parallel(*(b.build for b in builders))
    if err is not None:
        raise err

    return [req.artifacts_tar_file for req in build_requests]
