"""Builder for the distribution of a single platform."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List, Optional, Tuple

from encore_release.compile import executable_name
from encore_release.data import BuildRequest
from encore_release.errors import BuildError, ConfigurationError, DistributionError
from encore_release.logging import BuildLogger, LoggerLike, bind, get_logger
from encore_release.version import suffix_for

from .parallel import BuildStep, run_parallel
from .producer import ProducerHandle
from .toolchain import Toolchain

logger = get_logger("DistBuilder")

VERSION_PKG = "encr.dev/internal/version.Version"
CONFIG_DIR_PKG = "encr.dev/internal/conf.defaultConfigDirectory"

NODE_PLUGIN_ARTIFACTS = {
    "darwin": "libencore_js_runtime.dylib",
    "linux": "libencore_js_runtime.so",
    "windows": "encore_js_runtime.dll",
}
"""Name cargo gives the node runtime plugin library on each OS."""

VERSION_CJS_TEMPLATE = """// Code generated by /pkg/make-release. DO NOT EDIT.

/**
 * The version of the runtime this JS bundle was built for
 */
module.exports.version = "{version}";
"""


def node_plugin_artifact(goos: str) -> str:
    """Return the compiled node plugin library name for ``goos``.

    Raises
    ------
    ConfigurationError
        If ``goos`` is not darwin, linux or windows.
    """
    try:
        return NODE_PLUGIN_ARTIFACTS[goos]
    except KeyError:
        raise ConfigurationError(f"unknown OS: {goos}") from None


def _copy_tree(src: Path, dst: Path) -> None:
    if not src.is_dir():
        raise FileNotFoundError(f"no such directory: {src}")
    shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)


class DistBuilder:
    """Builds the distribution of Encore for one (OS, architecture) pair.

    The staging directory is prepared first, then every build step runs concurrently
    and finally the staging directory is archived. Anything that is not specific to a
    platform, such as the JS runtime bundle, is produced elsewhere and consumed through
    a :class:`ProducerHandle`.

    A failed build leaves the partially populated staging directory in place; the next
    build for the same platform removes it before starting.

    Parameters
    ----------
    request : BuildRequest
        What to build and where.
    js_runtime : ProducerHandle
        Handle of the JS packager, which produces the JS runtime files.
    toolchain : Optional[Toolchain]
        The collaborators to build with. Defaults to the real toolchains.
    log : Optional[LoggerLike]
        Base logger. The builder binds the target os and arch to it.
    """

    def __init__(
        self,
        request: BuildRequest,
        js_runtime: ProducerHandle,
        toolchain: Optional[Toolchain] = None,
        log: Optional[LoggerLike] = None,
    ) -> None:
        self.request = request
        self.js_runtime = js_runtime
        self.toolchain = toolchain or Toolchain()
        self.log: BuildLogger = bind(log or logger, os=request.os, arch=request.arch)

    @property
    def dist_dir(self) -> Path:
        return self.request.dist_build_dir

    @property
    def repo_root(self) -> Path:
        return self.request.repo_root

    def _bin(self, name: str) -> Path:
        return self.dist_dir / "bin" / name

    def _version_ldflags(self) -> List[str]:
        return ["-X", f"'{VERSION_PKG}={self.request.version}'"]

    def build_encore_cli(self) -> None:
        self.log.info("building encore binary...")
        try:
            suffix = suffix_for(self.request.version)
        except ConfigurationError as e:
            self.log.error("encore failed to build: %s", e)
            raise

        linker_flags = self._version_ldflags()
        # Non-GA channels get their own config directory.
        if suffix:
            linker_flags += ["-X", f"'{CONFIG_DIR_PKG}=encore{suffix}'"]

        try:
            self.toolchain.compile_go(
                self._bin("encore" + suffix),
                "./cli/cmd/encore",
                linker_flags,
                self.request.os,
                self.request.arch,
                cwd=self.repo_root,
                log=self.log,
            )
        except Exception as e:
            self.log.error("encore failed to build: %s", e)
            raise BuildError("compile encore") from e
        self.log.info("encore built successfully")

    def build_git_hook(self) -> None:
        self.log.info("building git-remote-encore binary...")
        try:
            self.toolchain.compile_go(
                self._bin("git-remote-encore"),
                "./cli/cmd/git-remote-encore",
                None,
                self.request.os,
                self.request.arch,
                cwd=self.repo_root,
                log=self.log,
            )
        except Exception as e:
            self.log.error("git-remote-encore failed to build: %s", e)
            raise BuildError("compile git-remote-encore") from e
        self.log.info("git-remote-encore built successfully")

    def build_ts_bundler(self) -> None:
        self.log.info("building tsbundler binary...")
        try:
            self.toolchain.compile_go(
                self._bin("tsbundler-encore"),
                "./cli/cmd/tsbundler-encore",
                self._version_ldflags(),
                self.request.os,
                self.request.arch,
                cwd=self.repo_root,
                log=self.log,
            )
        except Exception as e:
            self.log.error("tsbundler failed to build: %s", e)
            raise BuildError("compile tsbundler") from e
        self.log.info("tsbundler built successfully")

    def build_ts_parser(self) -> None:
        self.log.info("building ts-parser binary...")
        name = executable_name("tsparser-encore", self.request.os)
        try:
            self.toolchain.compile_rust(
                name,
                self._bin(name),
                self.request.tsparser_path,
                self.request.os,
                self.request.arch,
                f"ENCORE_VERSION={self.request.version}",
                log=self.log,
            )
        except Exception as e:
            self.log.error("ts-parser failed to build: %s", e)
            raise BuildError("compile ts-parser") from e
        self.log.info("ts-parser built successfully")

    def build_node_plugin(self) -> None:
        self.log.info("building node plugin...")
        try:
            artifact = node_plugin_artifact(self.request.os)
        except ConfigurationError as e:
            self.log.error("node plugin failed to build: %s", e)
            raise BuildError("compile node plugin") from e

        jscore = self.repo_root / "runtimes" / "jscore"
        self.log.info("patching jscore/api/version.cjs...")
        try:
            version_file = jscore / "api" / "version.cjs"
            version_file.parent.mkdir(parents=True, exist_ok=True)
            version_file.write_text(VERSION_CJS_TEMPLATE.format(version=self.request.version))
        except OSError as e:
            self.log.error("failed to patch version.cjs: %s", e)
            raise BuildError("write patch version.cjs") from e

        try:
            self.toolchain.compile_rust(
                artifact,
                self._bin("encore-runtime.node"),
                jscore,
                self.request.os,
                self.request.arch,
                f"ENCORE_VERSION={self.request.version}",
                log=self.log,
            )
        except Exception as e:
            self.log.error("node plugin failed to build: %s", e)
            raise BuildError("compile node plugin") from e
        self.log.info("node plugin built successfully")

    def download_encore_go(self) -> None:
        self.log.info("downloading latest encore-go...")
        try:
            archive = self.toolchain.fetch_release(
                "encoredev", "go", self.request.os, self.request.arch, log=self.log
            )
        except Exception as e:
            self.log.error("failed to download encore-go: %s", e)
            raise BuildError("download encore-go") from e

        self.log.info("extracting encore-go...")
        try:
            self.toolchain.extract(archive, self.dist_dir)
        except Exception as e:
            self.log.error("failed to extract encore-go: %s", e)
            raise BuildError("extract encore-go") from e
        self.log.info("encore-go extracted successfully")

    def copy_runtime_for_go(self) -> None:
        self.log.info("copying encore runtime for Go...")
        try:
            _copy_tree(self.repo_root / "runtimes" / "go", self.dist_dir / "runtimes" / "go")
        except OSError as e:
            self.log.error("encore runtime for go failed to be copied: %s", e)
            raise BuildError("cp go runtime") from e
        self.log.info("encore runtime for go copied successfully")

    def copy_runtime_for_js(self) -> None:
        self.log.info("waiting for JS packager to complete...")
        result = self.js_runtime.wait()
        if not result.ok:
            self.log.error("JS packager failed to build")
            raise BuildError("js build failed") from result.error

        self.log.info("copying encore runtime for JS...")
        try:
            _copy_tree(result.output_dir, self.dist_dir / "runtimes" / "js")
        except OSError as e:
            self.log.error("encore runtime for js failed to be copied: %s", e)
            raise BuildError("cp js runtime") from e
        self.log.info("encore runtime for js copied successfully")

    def steps(self) -> Tuple[BuildStep, ...]:
        return (
            self.build_encore_cli,
            self.build_ts_bundler,
            self.build_git_hook,
            self.build_ts_parser,
            self.build_node_plugin,
            self.copy_runtime_for_go,
            self.copy_runtime_for_js,
            self.download_encore_go,
        )

    def _prepare(self) -> None:
        try:
            shutil.rmtree(self.dist_dir)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.log.error("failed to remove existing target dir: %s", e)
            raise BuildError("remove target dir") from e

        dirs = [
            (self.dist_dir, "target dir"),
            (self.dist_dir / "bin", "bin dir"),
            (self.dist_dir / "runtimes", "runtimes dir"),
            (self.dist_dir / "runtimes" / "go", "runtimes/go dir"),
            (self.dist_dir / "runtimes" / "js", "runtimes/js dir"),
        ]
        for path, what in dirs:
            try:
                path.mkdir(mode=0o755, parents=True, exist_ok=True)
            except OSError as e:
                self.log.error("failed to create %s: %s", what, e)
                raise BuildError(f"create {what}") from e

    def build(self) -> None:
        """Build the distribution and archive it.

        Raises
        ------
        ConfigurationError
            If the version has no release channel. Nothing is prepared or compiled.
        BuildError
            If preparing the staging directory fails.
        DistributionError
            If a build step or archiving fails. Its cause is the underlying error.
        """
        try:
            suffix_for(self.request.version)
        except ConfigurationError as e:
            self.log.error("failed to build distribution: %s", e)
            raise

        self.log.info("building distribution...")
        self._prepare()

        err = run_parallel(*self.steps())
        if err is not None:
            self.log.error("failed to build distribution: %s", err)
            raise DistributionError(self.request.os, self.request.arch) from err

        tar_file = self.request.artifacts_tar_file
        self.log.info("creating distribution tar file %s...", tar_file)
        try:
            self.toolchain.archive(self.dist_dir, tar_file)
        except Exception as e:
            self.log.error("failed to tar gzip distribution: %s", e)
            raise DistributionError(self.request.os, self.request.arch) from e
        self.log.info("distribution built successfully: %s", tar_file)
